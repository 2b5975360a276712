"""
Token model for compiled ignore patterns
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from .char_range import CharacterRange


class TokenKind(Enum):
    CHAR_LITERAL = "char_literal"
    PATH_SEPARATOR = "path_separator"
    QUESTION_MARK = "question_mark"
    ASTERISK = "asterisk"
    CHAR_RANGE = "char_range"
    LEADING_DOUBLE_ASTERISK = "leading_double_asterisk"    # Match in all directories
    MIDDLE_DOUBLE_ASTERISK = "middle_double_asterisk"      # Zero or more directories
    TRAILING_DOUBLE_ASTERISK = "trailing_double_asterisk"  # Everything inside


@dataclass(frozen=True)
class Token:
    """
    One unit of a compiled pattern

    Only CHAR_LITERAL carries ``char`` and only CHAR_RANGE carries
    ``char_range``; every other kind has no payload.
    """
    kind: TokenKind
    char: Optional[str] = None
    char_range: Optional[CharacterRange] = None

    @classmethod
    def literal(cls, char: str) -> "Token":
        return cls(TokenKind.CHAR_LITERAL, char=char)

    @classmethod
    def from_range(cls, char_range: CharacterRange) -> "Token":
        return cls(TokenKind.CHAR_RANGE, char_range=char_range)

    def __repr__(self) -> str:
        if self.kind is TokenKind.CHAR_LITERAL:
            return f"Token.literal({self.char!r})"
        if self.kind is TokenKind.CHAR_RANGE:
            return f"Token.from_range({self.char_range!r})"
        return f"Token({self.kind.name})"


# Payload-free tokens are shared
PATH_SEPARATOR_TOKEN = Token(TokenKind.PATH_SEPARATOR)
QUESTION_MARK_TOKEN = Token(TokenKind.QUESTION_MARK)
ASTERISK_TOKEN = Token(TokenKind.ASTERISK)
LEADING_DOUBLE_ASTERISK_TOKEN = Token(TokenKind.LEADING_DOUBLE_ASTERISK)
MIDDLE_DOUBLE_ASTERISK_TOKEN = Token(TokenKind.MIDDLE_DOUBLE_ASTERISK)
TRAILING_DOUBLE_ASTERISK_TOKEN = Token(TokenKind.TRAILING_DOUBLE_ASTERISK)
