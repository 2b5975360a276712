"""
Gitignore-style path exclusion engine

This package compiles ignore rules into token sequences and matches
candidate paths against them:
- Bracket expressions with glob range rules
- Leading, middle and trailing '**' forms
- Last-match-wins evaluation with '!' re-inclusion
- Hot reloading of an ignore file via watchdog
"""

from .char_range import CharacterRange, parse_char_range
from .compiler import compile_line
from .errors import (
    IgnorePatternError,
    InvalidIndexError,
    NotARangeError,
    UnclosedRangeError,
    InvalidLineError,
    IgnoreFileError,
)
from .ignore_set import IgnoreSet
from .matcher import MatchStrategy, match_tokens
from .tokens import Token, TokenKind
from .watcher import WatchedIgnoreSet

__version__ = "0.1.0"

__all__ = [
    'CharacterRange',
    'parse_char_range',
    'compile_line',
    'IgnorePatternError',
    'InvalidIndexError',
    'NotARangeError',
    'UnclosedRangeError',
    'InvalidLineError',
    'IgnoreFileError',
    'IgnoreSet',
    'MatchStrategy',
    'match_tokens',
    'Token',
    'TokenKind',
    'WatchedIgnoreSet',
]
