import pytest

from jsclean import clean, fold_and_normalize, parse
from tests.support.harness import assert_cleans_to

FOLD_CASES = [
    ("sum", "x = 1 + 2;", "x = 3;"),
    ("concat-chain", "x = 'a' + 'b' + 'c';", "x = 'abc';"),
    ("leading-constants", "x = 1 + 2 + y;", "x = 3 + y;"),
    ("trailing-constants", "x = y + 1 + 2;", "x = y + 1 + 2;"),
    ("negative", "x = 2 - 5;", "x = -3;"),
    ("negative-zero", "x = 0 * -1;", "x = -0;"),
    ("nan", "x = 0 / 0;", "x = NaN;"),
    ("infinity", "x = 1 / 0;", "x = Infinity;"),
    ("logical", "x = 1 < 2 && 'y';", "x = 'y';"),
    ("null-operand", "x = null + 1;", "x = 1;"),
    ("void-operand", "x = void 0 + 1;", "x = NaN;"),
    ("unary-operand", "x = -1 + 2;", "x = 1;"),
    ("mixed-concat", "x = 1 + 2 + 'px';", "x = '3px';"),
    ("in-is-open", "x = 'a' in 'b';", "x = 'a' in 'b';"),
    ("typeof-is-open", "x = typeof 1 + 'x';", "x = typeof 1 + 'x';"),
    ("not", "x = !(1 < 2);", "x = false;"),
    ("bitwise-not", "x = ~5;", "x = -6;"),
    ("unary-plus", "x = +'5';", "x = 5;"),
    ("double-negation", "x = -(-3);", "x = 3;"),
    ("negated-string", "x = -'abc';", "x = NaN;"),
    ("negative-literal-kept", "x = -1;", "x = -1;"),
    ("void-kept", "x = void 0;", "x = void 0;"),
    ("typeof-kept", "x = typeof 'a';", "x = typeof 'a';"),
]


@pytest.mark.parametrize(
    "source, expected", [case[1:] for case in FOLD_CASES], ids=[case[0] for case in FOLD_CASES]
)
def test_folding(source, expected):
    assert_cleans_to(source, expected)


DEAD_BRANCH_CASES = [
    ("true-test", "if (1 < 2) { a(); b(); } else { c(); }", "a(); b();"),
    ("false-no-else", "x(); if (false) { a(); } y();", "x(); y();"),
    ("false-only-statement", "if (false) { a(); }", ""),
    ("false-with-else", "if (0) a(); else b();", "b();"),
    ("string-test", "if ('yes') { a(); }", "a();"),
    ("unary-test", "if (!0) { a(); }", "a();"),
    ("folded-test", "if (1 + 1 === 2) { a(); }", "a();"),
    ("open-test", "if (x < 2) { a(); }", "if (x < 2) { a(); }"),
    ("nested", "if (y) if (1 > 2) a(); else b();", "if (y) { b(); }"),
    ("loop-body", "while (x) if (false) a();", "while (x) {}"),
    ("label-body", "foo: if (0) a();", "foo: {}"),
    ("label-body-taken", "foo: if (1) a();", "foo: a();"),
    ("lexical-scope-kept", "if (1) { let x = 1; } let x = 2;", "{ let x = 1; } let x = 2;"),
    ("hoisted-var", "if (false) { var v = 1; } f(v);", "var v; f(v);"),
    ("hoisted-function", "if (0) { function g() {} } String(g);", "var g; String(g);"),
    ("hoisted-from-else", "if (1) { a(); } else { var w = 2; }", "var w; a();"),
    ("hoisted-pattern", "if (0) { var {p, q: [r]} = o; }", "var p; var r;"),
    ("hoisted-loop-var", "if (0) { for (var i = 0; i < 1; i++) {} }", "var i;"),
    ("nested-function-scope", "if (0) { f(function () { var inner; }); }", ""),
    ("let-not-redeclared", "let v = 1; if (0) { function v() {} }", "let v = 1;"),
    ("hoisted-in-label", "foo: if (0) { var v = 1; } else b();", "foo: { var v; b(); }"),
]


@pytest.mark.parametrize(
    "source, expected",
    [case[1:] for case in DEAD_BRANCH_CASES],
    ids=[case[0] for case in DEAD_BRANCH_CASES],
)
def test_dead_branch_elimination(source, expected):
    assert_cleans_to(source, expected)


def assignment_value(code):
    tree = fold_and_normalize(parse(code))
    return tree.body[-1].expression.right


@pytest.mark.parametrize(
    "source, raw",
    [
        pytest.param("x = 0x10;", "16", id="hex"),
        pytest.param("x = 0o17;", "15", id="octal"),
        pytest.param("x = 1.50;", "1.5", id="trailing-zero"),
        pytest.param("x = 1e3;", "1000", id="exponent"),
        pytest.param("x = .5;", "0.5", id="leading-dot"),
        pytest.param("x = 1e21;", "1e+21", id="large"),
        pytest.param('x = "a";', "'a'", id="double-quotes"),
        pytest.param('x = "it\'s";', "'it\\'s'", id="inner-quote"),
        pytest.param('x = "\\x41\\u0042";', "'AB'", id="escapes"),
        pytest.param('x = "a\\nb";', "'a\\nb'", id="newline"),
    ],
)
def test_canonical_spelling(source, raw):
    assert assignment_value(source).raw == raw


def test_canonical_literals_are_left_alone():
    tree = parse("x = 10; y = 'a';")
    number, string = tree.body[0].expression.right, tree.body[1].expression.right
    fold_and_normalize(tree)
    assert tree.body[0].expression.right is number
    assert tree.body[1].expression.right is string


def test_directives_keep_their_spelling():
    tree = fold_and_normalize(parse('"use strict"; x = "a";'))
    assert tree.body[0].expression.raw == '"use strict"'
    assert tree.body[1].expression.right.raw == "'a'"


def test_rendered_output_uses_canonical_spelling():
    output = clean('x = 0x10; y = "\\x41\\u0042";')
    assert '0x' not in output
    assert '16' in output
    assert '\\x41' not in output
    assert 'AB' in output


@pytest.mark.parametrize(
    "source, raw, value",
    [("x = 1e21;", "1e+21", 1e21), ("x = 1e23;", "1e+23", 1e23)],
)
def test_large_numbers_keep_their_value(source, raw, value):
    assert assignment_value(source).raw == raw
    assert parse(clean(source)).body[0].expression.right.value == value
