"""
Helpers over the esprima node model.

esprima's ``esprima.nodes`` classes are used as-is for the tree; this module
adds the kind predicates, child enumeration and constructors the rewrite
passes share.
"""

import math
import re

from esprima import nodes

from .evaluate import UNDEFINED, number_to_string

Node = nodes.Node

# Fields that never hold child nodes.
SKIPPED_FIELDS = ('type', 'loc', 'range', 'parent', 'regex')

# (owner kind, field) pairs whose list elements are statements.
STATEMENT_LISTS = {
    ('Program', 'body'),
    ('BlockStatement', 'body'),
    ('SwitchCase', 'consequent'),
}

_EXPRESSION_TYPES = {
    'Identifier', 'Literal', 'TemplateLiteral', 'Super', 'Import',
}

_IDENTIFIER_RE = re.compile(r'^[A-Za-z_$][A-Za-z0-9_$]*$')


def is_node(value):
    return isinstance(value, Node) and isinstance(getattr(value, 'type', None), str)


def child_fields(node):
    """
    Yield ``(key, value)`` for every field of ``node`` holding a node or a
    list of nodes, in the order esprima assigned them (which is source order
    for all ESTree kinds).
    """
    for key, value in list(vars(node).items()):
        if key in SKIPPED_FIELDS or key.startswith('_'):
            continue
        if is_node(value):
            yield key, value
        elif isinstance(value, list) and all(item is None or is_node(item) for item in value):
            yield key, value


def is_statement(node):
    kind = node.type
    return kind.endswith('Statement') or kind.endswith('Declaration')


def is_expression(node):
    kind = node.type
    return kind.endswith('Expression') or kind in _EXPRESSION_TYPES


def is_primitive_literal(node):
    return node is not None and node.type == 'Literal' and getattr(node, 'regex', None) is None


def is_string_literal(node):
    return is_primitive_literal(node) and isinstance(node.value, str)


def is_numeric_literal(node):
    return (is_primitive_literal(node) and not isinstance(node.value, bool)
            and isinstance(node.value, (int, float)))


def is_identifier(node, name=None):
    if node is None or node.type != 'Identifier':
        return False
    return name is None or node.name == name


def is_directive(node):
    if node is None or node.type != 'ExpressionStatement':
        return False
    return bool(getattr(node, 'directive', None))


def is_identifier_name(text):
    """True for property names that can be written after a dot."""
    return bool(text) and _IDENTIFIER_RE.match(text) is not None


def member_name(node):
    """The property name of ``obj.name`` or ``obj['name']``, else None."""
    if node is None or node.type != 'MemberExpression':
        return None
    prop = node.property
    if not node.computed and is_identifier(prop):
        return prop.name
    if node.computed and is_string_literal(prop):
        return prop.value
    return None


_ESCAPES = {
    '\\': '\\\\',
    "'": "\\'",
    '\b': '\\b',
    '\f': '\\f',
    '\n': '\\n',
    '\r': '\\r',
    '\t': '\\t',
    '\v': '\\v',
    '\u2028': '\\u2028',
    '\u2029': '\\u2029',
}


def quote_string(value):
    """Canonical single-quoted spelling of a string value."""
    out = []
    for index, char in enumerate(value):
        if char in _ESCAPES:
            out.append(_ESCAPES[char])
        elif char == '\0':
            following = value[index + 1:index + 2]
            out.append('\\x00' if following.isdigit() else '\\0')
        elif ord(char) < 0x20 or ord(char) == 0x7f:
            out.append(f'\\x{ord(char):02x}')
        elif 0xd800 <= ord(char) <= 0xdfff:
            out.append(f'\\u{ord(char):04x}')
        else:
            out.append(char)
    return "'" + ''.join(out) + "'"


def _plain_number(value):
    if value == int(value) and abs(value) < 2 ** 53:
        return int(value)
    return value


def number_literal(value):
    """Literal for a non-negative, finite number."""
    return nodes.Literal(_plain_number(value), number_to_string(value))


def string_literal(value):
    return nodes.Literal(value, quote_string(value))


def make_literal(value):
    """
    Build the node for a primitive value.

    Numbers that have no literal spelling become identifiers (``NaN``,
    ``Infinity``) or a unary minus over a literal (negative numbers, ``-0``).
    """
    if value is UNDEFINED:
        return nodes.Identifier('undefined')
    if value is None:
        return nodes.Literal(None, 'null')
    if isinstance(value, bool):
        return nodes.Literal(value, 'true' if value else 'false')
    if isinstance(value, str):
        return string_literal(value)
    value = float(value)
    if math.isnan(value):
        return nodes.Identifier('NaN')
    if math.copysign(1, value) < 0:
        return nodes.UnaryExpression('-', make_literal(-value))
    if math.isinf(value):
        return nodes.Identifier('Infinity')
    return number_literal(value)


def block(statements):
    return nodes.BlockStatement(list(statements))


def expression_statement(expression):
    return nodes.ExpressionStatement(expression)


FUNCTION_TYPES = ('FunctionDeclaration', 'FunctionExpression', 'ArrowFunctionExpression')


def pattern_names(pattern):
    """Identifiers bound by a declaration target such as ``{a, b: [c]}``."""
    names = []
    pending = [pattern]
    while pending:
        node = pending.pop()
        if node is None:
            continue
        if node.type == 'Identifier':
            names.append(node.name)
        elif node.type == 'ObjectPattern':
            pending.extend(reversed(node.properties))
        elif node.type == 'ArrayPattern':
            pending.extend(reversed(node.elements))
        elif node.type == 'Property':
            pending.append(node.value)
        elif node.type == 'RestElement':
            pending.append(node.argument)
        elif node.type == 'AssignmentPattern':
            pending.append(node.left)
    return names


def lexical_names(statements):
    """Names declared with ``let``, ``const`` or ``class`` directly in ``statements``."""
    names = []
    for statement in statements:
        if statement.type == 'ClassDeclaration' and statement.id is not None:
            names.append(statement.id.name)
        elif statement.type == 'VariableDeclaration' and statement.kind != 'var':
            for declarator in statement.declarations:
                names.extend(pattern_names(declarator.id))
    return names


def var_bound_names(node):
    """
    Names that ``node`` binds in the enclosing function scope: ``var``
    declarations anywhere inside it and function declarations nested in its
    blocks. Nested functions and classes are not searched.
    """
    names = []
    pending = [node]
    while pending:
        current = pending.pop()
        if current.type == 'FunctionDeclaration':
            if current.id is not None:
                names.append(current.id.name)
            continue
        if current.type in FUNCTION_TYPES or current.type.startswith('Class'):
            continue
        if current.type == 'VariableDeclaration' and current.kind == 'var':
            for declarator in current.declarations:
                names.extend(pattern_names(declarator.id))
        children = []
        for _, value in child_fields(current):
            if isinstance(value, list):
                children.extend(item for item in value if item is not None)
            else:
                children.append(value)
        pending.extend(reversed(children))
    return list(dict.fromkeys(names))


def var_declaration(names):
    """``var a, b;`` with no initializers."""
    declarators = [nodes.VariableDeclarator(nodes.Identifier(name), None) for name in names]
    return nodes.VariableDeclaration(declarators, 'var')
