from flask import Flask, jsonify, render_template, request

from .errors import ParseError
from .pipeline import CleanOptions, clean

app = Flask(__name__)

WEB_OPTIONS = CleanOptions(pretty=True)


@app.route('/', methods=['GET', 'POST'])
def index():
    source_code = ''
    cleaned_code = ''
    error = None
    if request.method == 'POST':
        source_code = request.form.get('source_code', '')
        if source_code:
            try:
                cleaned_code = clean(source_code, WEB_OPTIONS)
            except ParseError as e:
                error = str(e)

    return render_template('index.html', source_code=source_code,
                           cleaned_code=cleaned_code, error=error)


@app.route('/api/clean', methods=['POST'])
def api_clean():
    payload = request.get_json(silent=True) or {}
    source_code = payload.get('code')
    if not isinstance(source_code, str):
        return jsonify(error='expected a JSON object with a "code" string'), 400
    try:
        return jsonify(code=clean(source_code, WEB_OPTIONS))
    except ParseError as e:
        return jsonify(error=str(e), line=e.line, column=e.column), 400


if __name__ == '__main__':
    # Using 0.0.0.0 to make it accessible from outside the container
    app.run(host='0.0.0.0', port=8080, debug=True)
