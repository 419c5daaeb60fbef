import logging

import pytest

from jsclean import cli
from tests.support.harness import assert_same_program


@pytest.fixture
def script(tmp_path):
    path = tmp_path / 'input.js'
    path.write_text("var a = 1 + 1, b = obj['key'];", encoding='utf-8')
    return path


def test_writes_to_stdout(script, capsys):
    assert cli.main([str(script)]) == 0
    out = capsys.readouterr().out
    assert out.endswith('\n')
    assert_same_program(out, "var a = 2; var b = obj.key;")


def test_writes_to_output_file(script, tmp_path, capsys):
    target = tmp_path / 'out.js'
    assert cli.main([str(script), '-o', str(target)]) == 0
    assert_same_program(target.read_text(encoding='utf-8'), "var a = 2; var b = obj.key;")
    assert str(target) in capsys.readouterr().out


def test_no_flatten(script, capsys):
    assert cli.main([str(script), '--no-flatten', '--no-beautify']) == 0
    assert_same_program(capsys.readouterr().out, "var a = 2, b = obj.key;")


def test_indent_option(tmp_path, capsys):
    path = tmp_path / 'input.js'
    path.write_text("if (a) b();", encoding='utf-8')
    assert cli.main([str(path), '--indent', '4']) == 0
    assert "\n    b();" in capsys.readouterr().out


def test_missing_file(tmp_path, capsys):
    assert cli.main([str(tmp_path / 'nope.js')]) == 1
    assert 'not found' in capsys.readouterr().err


def test_parse_error(tmp_path, capsys):
    path = tmp_path / 'broken.js'
    path.write_text("var = ;", encoding='utf-8')
    assert cli.main([str(path)]) == 1
    err = capsys.readouterr().err
    assert 'Error parsing JavaScript' in err
    assert 'broken.js:1' in err


def test_verbose_logs_rewrites(script, caplog):
    caplog.set_level(logging.DEBUG)
    assert cli.main([str(script), '-v']) == 0
    assert any(record.name.startswith('jsclean.passes') for record in caplog.records)
