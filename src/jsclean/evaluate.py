"""
JavaScript primitive semantics for closed literal expressions.

Values are represented with plain Python objects: ``float`` for numbers,
``str``, ``bool``, ``None`` for ``null`` and :data:`UNDEFINED`. Only the
operators that are closed over primitives are supported; anything else
raises :class:`NotConstant` so callers can leave the expression alone.
"""

import math
import re


class NotConstant(Exception):
    """The expression cannot be reduced to a primitive value."""


class _Undefined:
    def __repr__(self):
        return 'undefined'

    def __bool__(self):
        return False


UNDEFINED = _Undefined()

# StrWhiteSpaceChar: WhiteSpace and LineTerminator code points.
_JS_WHITESPACE = ('\t\n\v\f\r \xa0\u1680\u2000\u2001\u2002\u2003\u2004\u2005'
                  '\u2006\u2007\u2008\u2009\u200a\u2028\u2029\u202f\u205f\u3000\ufeff')
_DECIMAL_RE = re.compile(r'^[+-]?(?:\d+\.?\d*(?:[eE][+-]?\d+)?|\.\d+(?:[eE][+-]?\d+)?)$')
_RADIX_RE = re.compile(r'^0(?:([xX])([0-9a-fA-F]+)|([oO])([0-7]+)|([bB])([01]+))$')


def js_type(value):
    if value is None:
        return 'null'
    if value is UNDEFINED:
        return 'undefined'
    if isinstance(value, bool):
        return 'boolean'
    if isinstance(value, (int, float)):
        return 'number'
    if isinstance(value, str):
        return 'string'
    raise NotConstant(f'not a primitive: {value!r}')


def truthy(value):
    if isinstance(value, float) and math.isnan(value):
        return False
    return bool(value)


def to_number(value):
    kind = js_type(value)
    if kind == 'number':
        return float(value)
    if kind == 'boolean':
        return 1.0 if value else 0.0
    if kind == 'null':
        return 0.0
    if kind == 'undefined':
        return math.nan
    return _string_to_number(value)


def _string_to_number(text):
    text = text.strip(_JS_WHITESPACE)
    if not text:
        return 0.0
    match = _RADIX_RE.match(text)
    if match:
        if match.group(1):
            return float(int(match.group(2), 16))
        if match.group(3):
            return float(int(match.group(4), 8))
        return float(int(match.group(6), 2))
    if text in ('Infinity', '+Infinity'):
        return math.inf
    if text == '-Infinity':
        return -math.inf
    if _DECIMAL_RE.match(text):
        return float(text)
    return math.nan


def to_string(value):
    kind = js_type(value)
    if kind == 'string':
        return value
    if kind == 'number':
        return number_to_string(value)
    if kind == 'boolean':
        return 'true' if value else 'false'
    return kind


def to_int32(value):
    number = to_number(value)
    if math.isnan(number) or math.isinf(number):
        return 0
    result = int(number) % 2 ** 32
    if result >= 2 ** 31:
        result -= 2 ** 32
    return result


def to_uint32(value):
    return to_int32(value) % 2 ** 32


def number_to_string(value):
    """Number::toString for radix 10, e.g. ``1e21``, ``0.000001``, ``1e-7``."""
    value = float(value)
    if math.isnan(value):
        return 'NaN'
    if value == 0:
        return '0'
    if value < 0:
        return '-' + number_to_string(-value)
    if math.isinf(value):
        return 'Infinity'

    # repr() gives the shortest round-tripping digits; only the layout differs.
    mantissa, _, exponent = repr(value).partition('e')
    int_part, _, frac_part = mantissa.partition('.')
    all_digits = int_part + frac_part
    stripped = all_digits.lstrip('0')
    n = len(int_part) + int(exponent or 0) - (len(all_digits) - len(stripped))
    digits = stripped.rstrip('0')
    k = len(digits)

    if k <= n <= 21:
        return digits + '0' * (n - k)
    if 0 < n <= 21:
        return digits[:n] + '.' + digits[n:]
    if -6 < n <= 0:
        return '0.' + '0' * -n + digits
    e = n - 1
    sign = '+' if e >= 0 else '-'
    if k == 1:
        return f'{digits}e{sign}{abs(e)}'
    return f'{digits[0]}.{digits[1:]}e{sign}{abs(e)}'


def strict_equals(left, right):
    kind = js_type(left)
    if kind != js_type(right):
        return False
    if kind == 'number':
        return float(left) == float(right)
    return left == right


def loose_equals(left, right):
    left_kind, right_kind = js_type(left), js_type(right)
    if left_kind == right_kind:
        return strict_equals(left, right)
    if {left_kind, right_kind} == {'null', 'undefined'}:
        return True
    if left_kind in ('null', 'undefined') or right_kind in ('null', 'undefined'):
        return False
    if left_kind == 'boolean':
        return loose_equals(to_number(left), right)
    if right_kind == 'boolean':
        return loose_equals(left, to_number(right))
    return to_number(left) == to_number(right)


def _compare(left, right, operator):
    if isinstance(left, str) and isinstance(right, str):
        a, b = left.encode('utf-16-be'), right.encode('utf-16-be')
    else:
        a, b = to_number(left), to_number(right)
    if operator == '<':
        return a < b
    if operator == '>':
        return a > b
    if operator == '<=':
        return a <= b
    return a >= b


def _divide(a, b):
    if b == 0:
        if a == 0 or math.isnan(a):
            return math.nan
        return math.copysign(math.inf, math.copysign(1, a) * math.copysign(1, b))
    return a / b


def _remainder(a, b):
    if math.isnan(a) or math.isnan(b) or math.isinf(a) or b == 0:
        return math.nan
    if math.isinf(b):
        return a
    return math.fmod(a, b)


def _is_odd_integer(number):
    return not math.isinf(number) and number == int(number) and int(number) % 2 == 1


def _power(a, b):
    if math.isnan(b):
        return math.nan
    if b == 0:
        return 1.0
    if abs(a) == 1 and math.isinf(b):
        return math.nan
    if a == 0 and b < 0:
        negative = math.copysign(1, a) < 0 and _is_odd_integer(b)
        return -math.inf if negative else math.inf
    try:
        return math.pow(a, b)
    except OverflowError:
        negative = a < 0 and _is_odd_integer(b)
        return -math.inf if negative else math.inf
    except ValueError:
        return math.nan


def _add(left, right):
    if isinstance(left, str) or isinstance(right, str):
        return to_string(left) + to_string(right)
    return to_number(left) + to_number(right)


def _int32(number):
    number %= 2 ** 32
    return float(number - 2 ** 32 if number >= 2 ** 31 else number)


_ARITHMETIC = {
    '-': lambda a, b: a - b,
    '*': lambda a, b: a * b,
    '/': _divide,
    '%': _remainder,
    '**': _power,
}

_BITWISE = {
    '&': lambda a, b: _int32(to_int32(a) & to_int32(b)),
    '|': lambda a, b: _int32(to_int32(a) | to_int32(b)),
    '^': lambda a, b: _int32(to_int32(a) ^ to_int32(b)),
    '<<': lambda a, b: _int32(to_int32(a) << (to_uint32(b) & 31)),
    '>>': lambda a, b: float(to_int32(a) >> (to_uint32(b) & 31)),
    '>>>': lambda a, b: float(to_uint32(a) >> (to_uint32(b) & 31)),
}


def binary_operation(operator, left, right):
    """Apply a binary or logical operator to two primitives."""
    if operator == '+':
        return _add(left, right)
    if operator in _ARITHMETIC:
        return _ARITHMETIC[operator](to_number(left), to_number(right))
    if operator in _BITWISE:
        return _BITWISE[operator](left, right)
    if operator in ('<', '>', '<=', '>='):
        return _compare(left, right, operator)
    if operator == '==':
        return loose_equals(left, right)
    if operator == '!=':
        return not loose_equals(left, right)
    if operator == '===':
        return strict_equals(left, right)
    if operator == '!==':
        return not strict_equals(left, right)
    if operator == '&&':
        return right if truthy(left) else left
    if operator == '||':
        return left if truthy(left) else right
    raise NotConstant(f'operator {operator!r} is not closed over literals')


def unary_operation(operator, operand):
    if operator == '-':
        return -to_number(operand)
    if operator == '+':
        return to_number(operand)
    if operator == '!':
        return not truthy(operand)
    if operator == '~':
        return _int32(~to_int32(operand))
    if operator == 'void':
        return UNDEFINED
    raise NotConstant(f'operator {operator!r} is not closed over literals')
