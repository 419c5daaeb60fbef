"""Cleaned programs must compute the same values as the originals under V8."""

import itertools
from textwrap import dedent

import pytest

from jsclean import clean, parse
from tests.support.harness import node_types

py_mini_racer = pytest.importorskip('py_mini_racer')

OPERANDS = ['3', '0', "'5'", "'abc'", "''", 'true', 'null', '2.5']
UNARY_OPERATORS = ['!', '~', '+', '-']
OPERATORS = [
    '+', '-', '*', '/', '%', '**',
    '==', '!=', '===', '!==', '<', '<=', '>', '>=',
    '<<', '>>', '>>>', '&', '|', '^', '&&', '||',
]

# typeof, String() and 1 / v tell apart NaN, -0 and strings that look like numbers.
DESCRIBE = (
    "results.map(function (v) {"
    " return typeof v + ':' + String(v) + ':' + String(1 / v); }).join('|');"
)

PROGRAMS = {
    "sequences": dedent(
        """\
        var out = [];
        function a() { out.push('a'); return 1; }
        function b() { out.push('b'); return 2; }
        var x = (a(), b()), y = x + 1;
        var c = true;
        c ? (a(), b()) : out.push('c');
        for (var i = 0, j = 3; i < j; i++, j--) out.push(i + ':' + j);
        out.push((a(), b)(), y);
        JSON.stringify(out);
        """
    ),
    "branches": dedent(
        """\
        var out = [];
        if (1 < 2) { out.push('then'); } else { out.push('else'); }
        if ('' || 0) out.push('dead'); else out.push('alive');
        while (out.length < 4) out.push(out.length);
        switch (out.length) { case 4: out.push('four'), out.push('!'); }
        JSON.stringify(out);
        """
    ),
    "hoisting": dedent(
        """\
        if (false) { var v = 1; }
        if (0) { function g() { return 1; } }
        if (1) { var kept = 2; } else { var w = 3; }
        JSON.stringify([typeof v, v === undefined, typeof g, kept, w === undefined]);
        """
    ),
    "literals": dedent(
        """\
        var o = {'k': 1, 'a-b': 2};
        var out = [0x1f + 1, 'x' + 1 + 2, 1 + 2 + 'x', 7 % -3, -7 % 3, 2 ** 10,
                   1 / 0, 0 / 0 + '', -0 === 0, 0 * -1, o['k'], o['a-b'],
                   "hello".split('').reverse().join(''), "\\x41\\u0042", 1e21, .5];
        JSON.stringify(out) + String(1 / out[9]);
        """
    ),
}


@pytest.fixture(scope='module')
def run():
    def evaluate(code):
        return py_mini_racer.MiniRacer().eval(code)

    return evaluate


@pytest.mark.parametrize("name", sorted(PROGRAMS))
def test_program_behaves_the_same(run, name):
    source = PROGRAMS[name]
    assert run(clean(source)) == run(source)


def test_folding_matches_v8(run):
    expressions = [
        f"{left} {operator} {right}"
        for left, operator, right in itertools.product(OPERANDS, OPERATORS, OPERANDS)
    ]
    expressions += [
        f"{operator}{operand}" for operator, operand in itertools.product(UNARY_OPERATORS, OPERANDS)
    ]
    source = "var results = [%s];\n%s" % (', '.join(expressions), DESCRIBE)
    cleaned = clean(source)
    remaining = node_types(parse(cleaned).body[0])
    assert 'BinaryExpression' not in remaining
    assert 'LogicalExpression' not in remaining
    assert run(cleaned) == run(source)
