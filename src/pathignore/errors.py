"""
Exceptions raised while compiling ignore patterns and loading ignore files
"""

from typing import Optional


class IgnorePatternError(ValueError):
    """Base class for pattern compilation failures"""


class InvalidIndexError(IgnorePatternError):
    """Range parser started outside the pattern text"""


class NotARangeError(IgnorePatternError):
    """Range parser started at a character other than '['"""


class UnclosedRangeError(IgnorePatternError):
    """Bracket expression reached the end of the pattern without ']'"""


class InvalidLineError(IgnorePatternError):
    """
    A pattern line could not be compiled

    The underlying range error is kept on ``cause`` and chained as
    ``__cause__`` by the compiler.
    """

    def __init__(self, line: str, cause: Optional[IgnorePatternError] = None):
        self.line = line
        self.cause = cause
        message = f"Invalid pattern {line!r}"
        if cause is not None:
            message = f"{message}: {cause}"
        super().__init__(message)


class IgnoreFileError(OSError):
    """An ignore file could not be opened or read"""

    def __init__(self, path, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Cannot read ignore file {path}: {reason}")
