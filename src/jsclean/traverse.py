import logging

from .nodes import child_fields
from .path import NodePath, PathContext

logger = logging.getLogger(__name__)


class AstVisitor:
    """
    Base class for rewrite passes.

    Every ``visit_<Kind>(self, path)`` method becomes a callback for nodes of
    that kind when the visitor is added to a :class:`Traversal`. One method can
    serve several kinds by assigning it to several ``visit_`` names.
    """

    def handlers(self):
        for name in dir(self):
            if name.startswith('visit_'):
                yield name[len('visit_'):], getattr(self, name)


class ListCursor:
    """Position of the walk inside a list field; kept current across splices."""

    def __init__(self, parent, key):
        self.parent = parent
        self.key = key
        self.position = 0
        self.container = getattr(parent.node, key)
        parent.context.register(self.container, self)

    def shift(self, start, removed, delta):
        if start < self.position:
            self.position += delta


class _Leave:
    """Stack entry marking the end of a path's subtree."""

    def __init__(self, path):
        self.path = path


class Traversal:
    """
    Depth-first, pre-order walk with a kind-keyed callback table.

    The walk runs off an explicit stack of paths and list cursors, so
    callbacks may replace the current node, replace a statement with several,
    insert statements ahead of the one being walked or replace an ancestor
    without the walk losing its place.
    """

    def __init__(self, visitors=()):
        self.table = {}
        for visitor in visitors:
            self.add_visitor(visitor)

    def on(self, kinds, callback):
        """Register ``callback`` for one kind, a ``'A|B'`` string or an iterable of kinds."""
        if isinstance(kinds, str):
            kinds = kinds.split('|')
        for kind in kinds:
            self.table.setdefault(kind, []).append(callback)
        return callback

    def add_visitor(self, visitor):
        for kind, callback in visitor.handlers():
            self.on(kind, callback)

    def run(self, tree):
        context = PathContext()
        context.schedule([NodePath(tree, context=context)])
        while context.stack:
            entry = context.stack.pop()
            if isinstance(entry, ListCursor):
                self._advance(entry, context)
            elif isinstance(entry, _Leave):
                entry.path.release()
            else:
                self._visit(entry, context)
        return tree

    def _visit(self, path, context):
        if path.is_stale():
            path.release()
            return
        path.entered = True
        fired = []
        node = None
        while path.node is not node:
            node = path.node
            for callback in self.table.get(node.type, ()):
                if callback in fired:
                    continue
                context.visiting = path
                callback(path)
                context.visiting = None
                if path.is_stale():
                    # the rest of a detached subtree is not walked
                    path.release()
                    return
                if path.node is not node:
                    # restart on the replacement without re-running this rule
                    logger.debug('%s replaced by %s', node.type, path.node.type)
                    fired.append(callback)
                    break
        context.stack.append(_Leave(path))
        self._descend(path, context)

    def _descend(self, path, context):
        for key, value in reversed(list(child_fields(path.node))):
            if isinstance(value, list):
                context.stack.append(ListCursor(path, key))
            else:
                context.stack.append(NodePath(value, path, key, context=context))

    def _advance(self, cursor, context):
        parent = cursor.parent
        container = cursor.container
        if (parent.is_stale() or getattr(parent.node, cursor.key, None) is not container
                or cursor.position >= len(container)):
            context.unregister(container, cursor)
            return
        index = cursor.position
        cursor.position += 1
        context.stack.append(cursor)
        if container[index] is not None:
            context.stack.append(NodePath(container[index], parent, cursor.key, index, context))


def traverse(tree, visitors):
    """Run ``visitors`` over ``tree`` in one walk; the tree is changed in place."""
    return Traversal(visitors).run(tree)
