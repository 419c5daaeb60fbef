"""
Mutable cursors into an esprima tree.

A :class:`NodePath` knows the node it points at and the slot that node
occupies in its parent (``key``, plus ``index`` for list fields). Paths that
share a walk share a :class:`PathContext`, which keeps every live list
position in step when statements are spliced in or out.
"""

from .errors import PassInternalError
from .evaluate import NotConstant, binary_operation, unary_operation
from .nodes import (
    STATEMENT_LISTS,
    is_expression,
    is_identifier,
    is_node,
    is_numeric_literal,
    is_primitive_literal,
    is_statement,
    is_string_literal,
)


class PathContext:
    """State shared by the paths of one walk."""

    def __init__(self):
        self.stack = []
        self.visiting = None
        self._markers = {}

    def register(self, container, marker):
        entry = self._markers.setdefault(id(container), (container, {}))
        entry[1][marker] = None

    def unregister(self, container, marker):
        entry = self._markers.get(id(container))
        if entry is None:
            return
        entry[1].pop(marker, None)
        if not entry[1]:
            del self._markers[id(container)]

    def markers(self, container):
        """Live paths and cursors positioned in ``container``."""
        entry = self._markers.get(id(container))
        return list(entry[1]) if entry is not None else []

    def splice(self, container, start, removed, inserted):
        container[start:start + removed] = inserted
        delta = len(inserted) - removed
        if not delta and not removed:
            return
        for marker in self.markers(container):
            marker.shift(start, removed, delta)

    def schedule(self, paths):
        """Queue ``paths`` so the walk visits them next, in order."""
        self.stack.extend(reversed(paths))


def static_value(node):
    """
    Evaluate a literal-only subtree: primitive literals joined by unary,
    binary and logical operators. Raises NotConstant for anything else.
    """
    values = []
    pending = [(node, False)]
    while pending:
        current, ready = pending.pop()
        if current is None:
            raise NotConstant('missing operand')
        if is_primitive_literal(current):
            value = current.value
            if is_numeric_literal(current):
                value = float(value)
            values.append(value)
        elif current.type == 'UnaryExpression':
            if ready:
                values.append(unary_operation(current.operator, values.pop()))
            else:
                pending.append((current, True))
                pending.append((current.argument, False))
        elif current.type in ('BinaryExpression', 'LogicalExpression'):
            if ready:
                right = values.pop()
                left = values.pop()
                values.append(binary_operation(current.operator, left, right))
            else:
                pending.append((current, True))
                pending.append((current.right, False))
                pending.append((current.left, False))
        else:
            raise NotConstant(current.type)
    return values.pop()


class NodePath:

    def __init__(self, node, parent=None, key=None, index=None, context=None):
        if context is None:
            context = parent.context if parent is not None else PathContext()
        self.node = node
        self.parent = parent
        self.key = key
        self.index = index
        self.context = context
        self.removed = False
        self.entered = False
        self._list = None
        if index is not None:
            self._list = self.container
            context.register(self._list, self)

    def __repr__(self):
        slot = self.key if self.index is None else f'{self.key}[{self.index}]'
        return f'<NodePath {self.type} at {slot}>'

    @property
    def type(self):
        return self.node.type

    @property
    def container(self):
        if self.index is None or self.parent is None:
            return None
        return getattr(self.parent.node, self.key, None)

    @property
    def in_statement_list(self):
        return (self.index is not None and self.parent is not None
                and (self.parent.type, self.key) in STATEMENT_LISTS)

    def is_(self, kind):
        return self.node.type == kind

    def is_literal(self):
        return is_primitive_literal(self.node)

    def is_string_literal(self):
        return is_string_literal(self.node)

    def is_numeric_literal(self):
        return is_numeric_literal(self.node)

    def is_block(self):
        return self.node.type == 'BlockStatement'

    def is_identifier(self, name=None):
        return is_identifier(self.node, name)

    def is_statement(self):
        return is_statement(self.node)

    def is_expression(self):
        return is_expression(self.node)

    def get(self, key):
        """Path (or list of paths) for the child field ``key``."""
        value = getattr(self.node, key, None)
        if isinstance(value, list):
            return [NodePath(item, self, key, index) if item is not None else None
                    for index, item in enumerate(value)]
        if is_node(value):
            return NodePath(value, self, key)
        return None

    def find_parent(self, predicate):
        path = self.parent
        while path is not None:
            if predicate(path):
                return path
            path = path.parent
        return None

    def evaluate(self):
        return static_value(self.node)

    def release(self):
        """Stop keeping this path's list index current."""
        if self._list is not None:
            self.context.unregister(self._list, self)
            self._list = None

    def shift(self, start, removed, delta):
        if self.index is not None and self.index >= start + removed:
            self.index += delta

    def _slot_content(self):
        if self.parent is None:
            return self.node
        value = getattr(self.parent.node, self.key, None)
        if self.index is None:
            return value
        if not isinstance(value, list) or self.index >= len(value):
            return None
        return value[self.index]

    def is_stale(self):
        """True once this path or one of its ancestors was replaced or removed."""
        path = self
        while path is not None:
            if path.removed or path._slot_content() is not path.node:
                return True
            path = path.parent
        return False

    def _check_replacement(self, replacements):
        wants_statement = is_statement(self.node)
        for node in replacements:
            if not is_node(node):
                raise PassInternalError(f'{node!r} is not a node')
            if is_statement(node) != wants_statement:
                raise PassInternalError(f'cannot put {node.type} where {self.type} was')

    def _check_statement_list(self):
        if not self.in_statement_list:
            raise PassInternalError(f'{self!r} is not an element of a statement list')

    def replace(self, node):
        if self.parent is None:
            raise PassInternalError('cannot replace the root of the tree')
        self._check_replacement([node])
        if self.index is None:
            setattr(self.parent.node, self.key, node)
        else:
            self.container[self.index] = node
        self.node = node
        # The walk restarts on its own current node; anything else that was
        # already entered has to be queued again.
        if self.entered and self.context.visiting is not self:
            self.context.schedule([self])
        return self

    def _spliced_paths(self, start, nodes):
        paths = [NodePath(node, self.parent, self.key, start + offset, self.context)
                 for offset, node in enumerate(nodes)]
        if self.entered:
            self.context.schedule(paths)
        return paths

    def replace_with_many(self, nodes):
        nodes = list(nodes)
        self._check_statement_list()
        self._check_replacement(nodes)
        container, start = self.container, self.index
        self.removed = True
        self.release()
        self.context.splice(container, start, 1, nodes)
        return self._spliced_paths(start, nodes)

    def insert_before(self, nodes):
        nodes = list(nodes)
        self._check_statement_list()
        self._check_replacement(nodes)
        start = self.index
        self.context.splice(self.container, start, 0, nodes)
        return self._spliced_paths(start, nodes)

    def remove(self):
        self.replace_with_many([])
