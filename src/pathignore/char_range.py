"""
Bracket expression parsing for glob character ranges
"""

from dataclasses import dataclass
from typing import Tuple

from .constants import ESCAPE_CHAR, RANGE_OPEN, RANGE_CLOSE, RANGE_NEGATE, RANGE_DASH
from .errors import InvalidIndexError, NotARangeError, UnclosedRangeError


@dataclass(frozen=True)
class CharacterRange:
    """One parsed bracket expression"""
    negate: bool = False
    # Inclusive (start, end) pairs in the order they were written
    ranges: Tuple[Tuple[str, str], ...] = ()

    def contains(self, char: str) -> bool:
        """Check whether a single character satisfies this bracket expression"""
        found = any(start <= char <= end for start, end in self.ranges)
        return found != self.negate


def _read_char(text: str, index: int) -> Tuple[str, int]:
    """
    Read one content character, resolving a backslash escape

    Returns:
        Tuple of (character, index of the last consumed position)
    """
    char = text[index]
    if char != ESCAPE_CHAR:
        return char, index
    if index + 1 >= len(text):
        raise UnclosedRangeError(f"Unclosed character range in {text!r}")
    return text[index + 1], index + 1


def parse_char_range(text: str, at_index: int) -> Tuple[CharacterRange, int]:
    """
    Parse the bracket expression that opens at ``text[at_index]``

    Args:
        text: Full pattern text
        at_index: Index of the opening '['

    Returns:
        Tuple of (CharacterRange, index of the closing ']')

    Raises:
        InvalidIndexError: at_index is outside the text
        NotARangeError: text[at_index] is not '['
        UnclosedRangeError: no terminating ']' before the end of the text
    """
    if at_index < 0 or at_index >= len(text):
        raise InvalidIndexError(f"Index {at_index} is outside pattern {text!r}")

    if text[at_index] != RANGE_OPEN:
        raise NotARangeError(f"No '{RANGE_OPEN}' at index {at_index} of {text!r}")

    i = at_index + 1
    negate = i < len(text) and text[i] == RANGE_NEGATE
    if negate:
        i += 1

    # A ']' in this position is a literal member, not the terminator
    first_content = i
    ranges = []

    while i < len(text):
        if text[i] == RANGE_CLOSE and i != first_content:
            return CharacterRange(negate=negate, ranges=tuple(ranges)), i

        start, i = _read_char(text, i)

        # "x-y" is an interval unless the dash is last or closes the expression
        if i + 2 < len(text) and text[i + 1] == RANGE_DASH and text[i + 2] != RANGE_CLOSE:
            end, i = _read_char(text, i + 2)
            ranges.append((start, end))
        else:
            ranges.append((start, start))
        i += 1

    raise UnclosedRangeError(f"Unclosed character range in {text!r}")
