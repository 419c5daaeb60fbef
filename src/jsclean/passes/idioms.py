import logging

from esprima import nodes

from ..nodes import is_identifier, is_string_literal, make_literal, member_name
from ..traverse import AstVisitor

logger = logging.getLogger(__name__)


def _method_call(node, name, arity):
    if node is None or node.type != 'CallExpression':
        return None
    if member_name(node.callee) != name or len(node.arguments) != arity:
        return None
    return node


def reversed_string(node):
    """
    Value of ``'abc'.split(sep).reverse().join(sep)`` or None when ``node``
    is not that shape.
    """
    join = _method_call(node, 'join', 1)
    if join is None:
        return None
    reverse = _method_call(join.callee.object, 'reverse', 0)
    if reverse is None:
        return None
    split = _method_call(reverse.callee.object, 'split', 1)
    if split is None:
        return None
    subject, separator = split.callee.object, split.arguments[0]
    joiner = join.arguments[0]
    if not (is_string_literal(subject) and is_string_literal(separator)
            and is_string_literal(joiner)):
        return None
    if separator.value != joiner.value:
        return None
    text, sep = subject.value, separator.value
    if sep:
        return sep.join(reversed(text.split(sep)))
    # split('') works on UTF-16 code units
    if any(ord(char) > 0xffff for char in text):
        return None
    return text[::-1]


class IdiomRewriter(AstVisitor):

    def visit_CallExpression(self, path):
        node = path.node
        if is_identifier(node.callee, 'alert'):
            logger.debug('Rewrote alert() to console.log()')
            console_log = nodes.StaticMemberExpression(nodes.Identifier('console'),
                                                       nodes.Identifier('log'))
            path.replace(nodes.CallExpression(console_log, node.arguments))
            return
        value = reversed_string(node)
        if value is not None:
            logger.debug('Folded reversed string to %r', value)
            path.replace(make_literal(value))
