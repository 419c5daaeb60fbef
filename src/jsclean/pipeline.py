"""
Parse, rewrite and re-emit JavaScript.

``clean()`` runs two walks over the code. Stage A folds literals and
normalizes literals, member access, blocks and statement-level ternaries;
its output is rendered and parsed again so that Stage B (declaration and
comma-expression flattening plus the idiom rewrites) always starts from the
braced shapes Stage A guarantees.
"""

import dataclasses
import logging
from dataclasses import dataclass, field

import escodegen
import esprima
import jsbeautifier
from esprima.error_handler import Error as EsprimaError

from .errors import FormatError, ParseError
from .passes import stage_a, stage_b
from .traverse import traverse

logger = logging.getLogger(__name__)

DEFAULT_RENDER_OPTIONS = {'comment': False}
DEFAULT_STYLE = {'indent_size': 2}


@dataclass
class CleanOptions:
    flatten: bool = True
    pretty: bool = False
    max_rounds: int = 4
    filename: str = 'input.js'
    indent_size: int = 2
    render_options: dict = field(default_factory=lambda: dict(DEFAULT_RENDER_OPTIONS))


def parse(source, filename='input.js'):
    try:
        return esprima.parseScript(source)
    except EsprimaError as e:
        message = getattr(e, 'description', None) or str(e)
        raise ParseError(message, filename, getattr(e, 'lineNumber', None),
                         getattr(e, 'column', None)) from e


def fold_and_normalize(tree):
    return traverse(tree, stage_a())


def flatten(tree):
    return traverse(tree, stage_b())


def render(tree, options=None):
    if options is None:
        options = DEFAULT_RENDER_OPTIONS
    return escodegen.generate(tree, options)


def pretty_print(source, style=None):
    opts = jsbeautifier.default_options()
    for name, value in dict(DEFAULT_STYLE, **(style or {})).items():
        setattr(opts, name, value)
    try:
        return jsbeautifier.beautify(source, opts)
    except Exception as e:
        raise FormatError(f'could not reformat code: {e}') from e


def clean_once(source, options):
    """One Stage A / Stage B round."""
    tree = fold_and_normalize(parse(source, options.filename))
    code = render(tree, options.render_options)
    if options.flatten:
        tree = flatten(parse(code, options.filename))
        code = render(tree, options.render_options)
    return code


def clean(source, options=None):
    if options is None:
        options = CleanOptions()
    code = source
    for round_number in range(1, max(1, options.max_rounds) + 1):
        result = clean_once(code, options)
        if result == code:
            break
        logger.debug('Round %d changed the code', round_number)
        code = result
    else:
        logger.debug('Code still changing after %d rounds', options.max_rounds)

    if options.pretty:
        try:
            code = pretty_print(code, {'indent_size': options.indent_size})
        except FormatError as e:
            logger.warning('%s; returning unformatted output', e)
    return code


def clean_file(path, options=None):
    options = dataclasses.replace(options or CleanOptions(), filename=str(path))
    with open(path, 'r', encoding='utf-8') as f:
        source = f.read()
    return clean(source, options)
