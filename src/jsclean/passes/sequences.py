import logging

from esprima import nodes

from ..nodes import expression_statement, is_identifier
from ..traverse import AstVisitor

logger = logging.getLogger(__name__)

# (parent kind, field) slots whose child the parent evaluates first and
# unconditionally. Work hoisted out of such a slot still runs in order.
_LEADING_SLOTS = {
    ('ExpressionStatement', 'expression'),
    ('ReturnStatement', 'argument'),
    ('ThrowStatement', 'argument'),
    ('IfStatement', 'test'),
    ('SwitchStatement', 'discriminant'),
    ('ForStatement', 'init'),
    ('VariableDeclaration', 'declarations'),
    ('VariableDeclarator', 'init'),
    ('AssignmentExpression', 'right'),
    ('BinaryExpression', 'left'),
    ('LogicalExpression', 'left'),
    ('ConditionalExpression', 'test'),
    ('MemberExpression', 'object'),
    ('CallExpression', 'callee'),
    ('NewExpression', 'callee'),
    ('UnaryExpression', 'argument'),
}

_HOISTABLE_UNARY = ('-', '+', '!', '~', 'void')


def flat_expressions(node):
    """Operands of a comma expression with nested comma expressions spliced in."""
    flat = []
    pending = [node]
    while pending:
        current = pending.pop()
        if current.type == 'SequenceExpression':
            pending.extend(reversed(current.expressions))
        else:
            flat.append(current)
    return flat


def _leads(parent, child):
    node = parent.node
    if (node.type, child.key) not in _LEADING_SLOTS:
        return False
    if node.type == 'VariableDeclaration':
        return child.index == 0
    if node.type == 'AssignmentExpression':
        return node.operator == '=' and is_identifier(node.left)
    if node.type == 'UnaryExpression':
        return node.operator in _HOISTABLE_UNARY
    if node.type == 'CallExpression' and child.is_('SequenceExpression'):
        # (0, obj.method)() and (0, eval)() must keep their sequence
        last = flat_expressions(child.node)[-1]
        return last.type != 'MemberExpression' and not is_identifier(last, 'eval')
    return True


def hoist_target(path):
    """
    The statement that work in front of ``path`` can be moved ahead of, or
    None when something between them would run earlier or conditionally.
    """
    child = path
    while child.parent is not None:
        parent = child.parent
        if not _leads(parent, child):
            return None
        if parent.is_statement() and parent.in_statement_list:
            return parent
        child = parent
    return None


class SequenceFlattener(AstVisitor):
    """
    Splits ``var a = 1, b = 2;`` into one declaration per variable and
    comma expressions into one statement per operand.
    """

    def visit_VariableDeclaration(self, path):
        node = path.node
        if len(node.declarations) < 2 or not path.in_statement_list:
            return
        logger.debug('Split %s with %d declarators', node.kind, len(node.declarations))
        path.replace_with_many(
            nodes.VariableDeclaration([declarator], node.kind)
            for declarator in node.declarations
        )

    def visit_SequenceExpression(self, path):
        statement = path.parent
        if statement.is_('ExpressionStatement') and path.key == 'expression':
            if statement.in_statement_list:
                statement.replace_with_many(
                    expression_statement(e) for e in flat_expressions(path.node))
            return
        target = hoist_target(path)
        if target is None:
            return
        expressions = flat_expressions(path.node)
        target.insert_before(expression_statement(e) for e in expressions[:-1])
        path.replace(expressions[-1])
