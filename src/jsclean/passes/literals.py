import logging
import math

from ..evaluate import NotConstant, number_to_string, truthy
from ..nodes import (
    FUNCTION_TYPES,
    block,
    is_directive,
    is_numeric_literal,
    is_string_literal,
    lexical_names,
    make_literal,
    number_literal,
    quote_string,
    string_literal,
    var_bound_names,
    var_declaration,
)
from ..traverse import AstVisitor

logger = logging.getLogger(__name__)


def _declares_block_scoped(statements):
    for statement in statements:
        if statement.type in ('ClassDeclaration', 'FunctionDeclaration'):
            return True
        if statement.type == 'VariableDeclaration' and statement.kind != 'var':
            return True
    return False


def _lexically_bound(path):
    """``let``/``const``/``class`` names visible from ``path`` up to its function scope."""
    names = set()
    scope = path.parent
    while scope is not None and scope.type not in FUNCTION_TYPES:
        node = scope.node
        if node.type in ('Program', 'BlockStatement'):
            names.update(lexical_names(node.body))
        elif node.type == 'SwitchStatement':
            for case in node.cases:
                names.update(lexical_names(case.consequent))
        scope = scope.parent
    return names


class LiteralFolder(AstVisitor):
    """
    Folds unary, binary and logical expressions over literals into a single
    literal and drops the dead branch of an ``if`` whose test folds to a
    constant.
    """

    def _fold(self, path):
        try:
            value = path.evaluate()
        except NotConstant:
            return
        logger.debug('Folded %s %r to %r', path.type, path.node.operator, value)
        path.replace(make_literal(value))

    visit_BinaryExpression = _fold
    visit_LogicalExpression = _fold

    def visit_UnaryExpression(self, path):
        node = path.node
        # void 0 and -1 are already as short as they get
        if node.operator == 'void':
            return
        if node.operator == '-' and is_numeric_literal(node.argument):
            return
        self._fold(path)

    def visit_IfStatement(self, path):
        try:
            value = path.get('test').evaluate()
        except NotConstant:
            return
        self._drop_dead_branch(path, truthy(value))

    def _drop_dead_branch(self, path, taken):
        node = path.node
        if taken:
            branch, dead = node.consequent, node.alternate
        else:
            branch, dead = node.alternate, node.consequent
        logger.debug('Removed dead %s branch', 'else' if taken else 'then')

        statements = []
        if dead is not None:
            shadowed = _lexically_bound(path)
            names = [name for name in var_bound_names(dead) if name not in shadowed]
            if names:
                statements.append(var_declaration(names))
        if branch is not None:
            if branch.type == 'BlockStatement' and not _declares_block_scoped(branch.body):
                statements.extend(branch.body)
            else:
                statements.append(branch)

        if path.in_statement_list:
            path.replace_with_many(statements)
        elif len(statements) == 1:
            path.replace(statements[0])
        else:
            path.replace(block(statements))


class LiteralCanonicalizer(AstVisitor):
    """Respells numbers in plain decimal and strings with canonical single quotes."""

    def visit_Literal(self, path):
        node = path.node
        if getattr(node, 'raw', None) is None:
            return
        if is_numeric_literal(node):
            value = float(node.value)
            if math.isinf(value) or node.raw == number_to_string(value):
                return
            path.replace(number_literal(value))
        elif is_string_literal(node):
            if is_directive(path.parent.node) or node.raw == quote_string(node.value):
                return
            path.replace(string_literal(node.value))
