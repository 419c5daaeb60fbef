import logging

from esprima import nodes

from ..nodes import block, expression_statement
from ..traverse import AstVisitor

logger = logging.getLogger(__name__)


class BlockNormalizer(AstVisitor):
    """Puts braces around loop bodies and ``if``/``else`` branches."""

    def _ensure_block(self, path, key):
        child = path.get(key)
        if child is None or child.is_block():
            return
        child.replace(block([] if child.is_('EmptyStatement') else [child.node]))

    def _loop_body(self, path):
        self._ensure_block(path, 'body')

    visit_WhileStatement = _loop_body
    visit_DoWhileStatement = _loop_body
    visit_ForStatement = _loop_body
    visit_ForInStatement = _loop_body
    visit_ForOfStatement = _loop_body

    def visit_IfStatement(self, path):
        self._ensure_block(path, 'consequent')
        self._ensure_block(path, 'alternate')


class ConditionalElevation(AstVisitor):
    """
    Turns ``test ? (a(), b()) : c();`` used as a statement into
    ``if (test) { a(), b(); } else { c(); }``.
    """

    def visit_ConditionalExpression(self, path):
        node = path.node
        if not (node.consequent.type == 'SequenceExpression'
                or node.alternate.type == 'SequenceExpression'):
            return
        statement = path.parent
        if not statement.is_('ExpressionStatement') or path.key != 'expression':
            return
        logger.debug('Elevated conditional expression to if statement')
        statement.replace(nodes.IfStatement(
            node.test,
            block([expression_statement(node.consequent)]),
            block([expression_statement(node.alternate)]),
        ))
