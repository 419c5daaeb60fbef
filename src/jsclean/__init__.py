from .errors import CleanerError, FormatError, ParseError, PassInternalError
from .path import NodePath
from .pipeline import (
    CleanOptions,
    clean,
    clean_file,
    flatten,
    fold_and_normalize,
    parse,
    pretty_print,
    render,
)
from .traverse import AstVisitor, Traversal, traverse

__version__ = '0.1.0'
