import logging

from esprima import nodes

from ..nodes import is_identifier_name, is_string_literal
from ..traverse import AstVisitor

logger = logging.getLogger(__name__)


class MemberAccessNormalizer(AstVisitor):
    """
    ``obj['name']`` becomes ``obj.name`` and ``{'name': v}`` becomes
    ``{name: v}`` whenever the string is a plain identifier name.
    """

    def visit_MemberExpression(self, path):
        node = path.node
        if not node.computed or not is_string_literal(node.property):
            return
        name = node.property.value
        if not is_identifier_name(name):
            return
        logger.debug('Rewrote [%r] to .%s', name, name)
        path.replace(nodes.StaticMemberExpression(node.object, nodes.Identifier(name)))

    def visit_Property(self, path):
        node = path.node
        if node.computed or not is_string_literal(node.key):
            return
        if not is_identifier_name(node.key.value):
            return
        path.get('key').replace(nodes.Identifier(node.key.value))
