"""
Pattern compiler: one raw ignore line -> ordered token sequence
"""

from enum import Enum
from typing import List, Tuple

from .char_range import parse_char_range
from .constants import (
    PATH_SEPARATOR, ESCAPE_CHAR, ASTERISK, QUESTION_MARK, RANGE_OPEN, DOUBLE_ASTERISK,
)
from .errors import IgnorePatternError, InvalidLineError
from .tokens import (
    Token,
    PATH_SEPARATOR_TOKEN,
    QUESTION_MARK_TOKEN,
    ASTERISK_TOKEN,
    LEADING_DOUBLE_ASTERISK_TOKEN,
    MIDDLE_DOUBLE_ASTERISK_TOKEN,
    TRAILING_DOUBLE_ASTERISK_TOKEN,
)

CompiledPattern = Tuple[Token, ...]


class ScanState(Enum):
    NORMAL = "normal"
    ESCAPED = "escaped"


def compile_line(line: str, separator: str = PATH_SEPARATOR) -> CompiledPattern:
    """
    Compile one pattern line into tokens

    The caller strips blank lines, comments and any leading '!' first.

    Args:
        line: Raw pattern text
        separator: Path separator the pattern is written with

    Returns:
        Tuple of tokens in source order

    Raises:
        InvalidLineError: A bracket expression in the line is malformed
    """
    tokens: List[Token] = []

    # "dir/**" -> contents of dir; "**/name" -> name in any directory
    leading_marker = DOUBLE_ASTERISK + separator
    trailing_marker = separator + DOUBLE_ASTERISK
    middle_marker = DOUBLE_ASTERISK + separator

    end = len(line)
    append_trailing = line.endswith(trailing_marker)
    if append_trailing:
        end -= len(trailing_marker)

    i = 0
    if line.startswith(leading_marker):
        tokens.append(LEADING_DOUBLE_ASTERISK_TOKEN)
        i += len(leading_marker)

    region = line[:end]
    state = ScanState.NORMAL
    while i < end:
        char = region[i]

        if state is ScanState.ESCAPED:
            tokens.append(Token.literal(char))
            state = ScanState.NORMAL
            i += 1
            continue

        if char == ESCAPE_CHAR:
            state = ScanState.ESCAPED
            i += 1
            continue

        if char == separator:
            tokens.append(PATH_SEPARATOR_TOKEN)
            if region.startswith(middle_marker, i + 1):
                # "a/**/b": the inner "**" collapses to one token, the
                # following separator is scanned normally
                tokens.append(MIDDLE_DOUBLE_ASTERISK_TOKEN)
                i += len(DOUBLE_ASTERISK)
        elif char == ASTERISK:
            tokens.append(ASTERISK_TOKEN)
        elif char == QUESTION_MARK:
            tokens.append(QUESTION_MARK_TOKEN)
        elif char == RANGE_OPEN:
            try:
                char_range, close_index = parse_char_range(region, i)
            except IgnorePatternError as e:
                raise InvalidLineError(line, e) from e
            tokens.append(Token.from_range(char_range))
            i = close_index
        else:
            tokens.append(Token.literal(char))
        i += 1

    if append_trailing:
        tokens.append(TRAILING_DOUBLE_ASTERISK_TOKEN)

    return tuple(tokens)


def ends_with_dangling_escape(line: str) -> bool:
    """Check for a final unpaired backslash, which the compiler drops silently"""
    trailing_backslashes = len(line) - len(line.rstrip(ESCAPE_CHAR))
    return trailing_backslashes % 2 == 1
