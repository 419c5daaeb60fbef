class CleanerError(Exception):
    pass


class ParseError(CleanerError):
    """The input is not valid JavaScript."""

    def __init__(self, message, filename=None, line=None, column=None):
        self.message = message
        self.filename = filename
        self.line = line
        self.column = column
        super().__init__(str(self))

    @property
    def location(self):
        parts = [self.filename or '<input>']
        if self.line is not None:
            parts.append(str(self.line))
            if self.column is not None:
                parts.append(str(self.column))
        return ':'.join(parts)

    def __str__(self):
        return f'{self.location}: {self.message}'


class PassInternalError(CleanerError):
    """A rewrite broke a mutation precondition. Always a bug in the rule."""


class FormatError(CleanerError):
    """The pretty-printer could not reformat the rendered code."""
