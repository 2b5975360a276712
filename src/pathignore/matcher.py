"""
Path matcher: evaluates a compiled token sequence against a candidate path

Two wildcard strategies are available:

- FIRST_FIT walks tokens left to right. After a '*' it skips forward to the
  first character the next token accepts and never revisits that choice, so
  "*.go" does not match "a.b.go". Double-asterisk tokens still try every
  directory boundary.
- BACKTRACKING retries earlier '*' placements when a later token fails, and
  keeps '*', '?' and bracket ranges inside one path segment, as git does.
"""

import os
from enum import Enum
from typing import Callable, Iterator, Optional, Sequence, Set, Tuple

from .constants import PATH_SEPARATOR, ENV_MATCH_STRATEGY, DEFAULT_MATCH_STRATEGY
from .tokens import Token, TokenKind

# Single-character tokens that stay inside a segment under BACKTRACKING
_SEGMENT_BOUND_KINDS = frozenset({TokenKind.QUESTION_MARK, TokenKind.CHAR_RANGE})


class MatchStrategy(Enum):
    FIRST_FIT = "first_fit"
    BACKTRACKING = "backtracking"

    @classmethod
    def from_name(cls, name: str) -> "MatchStrategy":
        """
        Look up a strategy by its value, case-insensitively

        Raises:
            ValueError: Unknown strategy name
        """
        normalized = name.strip().lower().replace("-", "_")
        for strategy in cls:
            if strategy.value == normalized:
                return strategy
        choices = ", ".join(s.value for s in cls)
        raise ValueError(f"Unknown match strategy {name!r} (expected one of: {choices})")

    @classmethod
    def from_env(cls) -> "MatchStrategy":
        """Strategy named by PATHIGNORE_MATCH_STRATEGY, or the default"""
        return cls.from_name(os.environ.get(ENV_MATCH_STRATEGY, DEFAULT_MATCH_STRATEGY))


def token_accepts(token: Token, char: str, separator: str = PATH_SEPARATOR) -> bool:
    """Single-character predicate of a consuming token"""
    kind = token.kind
    if kind is TokenKind.QUESTION_MARK:
        return True
    if kind is TokenKind.CHAR_LITERAL:
        return char == token.char
    if kind is TokenKind.CHAR_RANGE:
        return token.char_range.contains(char)
    if kind is TokenKind.PATH_SEPARATOR:
        return char == separator
    raise ValueError(f"{kind.name} does not consume a single character")


class _MatchRun:
    """State for matching one token sequence against one path"""

    def __init__(self, tokens: Sequence[Token], path: str, separator: str):
        self.tokens = tokens
        self.path = path
        self.separator = separator
        # (token index, cursor) pairs already known to fail
        self._failed: Set[Tuple[int, int]] = set()

    def segment_starts(self, cursor: int) -> Iterator[int]:
        """Cursor itself, then every position right after a separator"""
        yield cursor
        for position in range(cursor, len(self.path)):
            if self.path[position] == self.separator:
                yield position + 1

    def middle_continuations(self, index: int, cursor: int) -> Iterator[Tuple[int, int]]:
        """
        (token index, cursor) pairs to resume from after a middle '**'

        The token before it has just consumed a separator. Zero directories
        collapse that separator with the following one; otherwise resume on
        the following separator wherever a later separator sits in the path.
        """
        following = index + 1
        if following < len(self.tokens) and self.tokens[following].kind is TokenKind.PATH_SEPARATOR:
            yield following + 1, cursor
            for position in range(cursor, len(self.path)):
                if self.path[position] == self.separator:
                    yield following, position
        else:
            yield following, cursor

    def _memoized(self, step: Callable[[int, int], bool], index: int, cursor: int) -> bool:
        key = (index, cursor)
        if key in self._failed:
            return False
        matched = step(index, cursor)
        if not matched:
            self._failed.add(key)
        return matched

    def first_fit(self, index: int = 0, cursor: int = 0) -> bool:
        # Entries never carry a pending '*', so (index, cursor) decides the result
        return self._memoized(self._first_fit_step, index, cursor)

    def _first_fit_step(self, index: int, cursor: int) -> bool:
        pending_wildcard = False
        path_length = len(self.path)

        while index < len(self.tokens):
            token = self.tokens[index]
            kind = token.kind

            if kind is TokenKind.ASTERISK:
                pending_wildcard = True
                index += 1
                continue

            if kind is TokenKind.TRAILING_DOUBLE_ASTERISK:
                return True

            if kind is TokenKind.LEADING_DOUBLE_ASTERISK:
                return any(self.first_fit(index + 1, start) for start in self.segment_starts(cursor))

            if kind is TokenKind.MIDDLE_DOUBLE_ASTERISK:
                return any(
                    self.first_fit(next_index, next_cursor)
                    for next_index, next_cursor in self.middle_continuations(index, cursor)
                )

            if pending_wildcard:
                found = self._find_forward(token, cursor)
                if found is None:
                    return False
                cursor = found + 1
                pending_wildcard = False
            else:
                if cursor >= path_length:
                    return False
                if not token_accepts(token, self.path[cursor], self.separator):
                    return False
                cursor += 1
            index += 1

        # A '*' with nothing after it takes the rest of the path
        return pending_wildcard or cursor == path_length

    def _find_forward(self, token: Token, cursor: int) -> Optional[int]:
        for position in range(cursor, len(self.path)):
            if token_accepts(token, self.path[position], self.separator):
                return position
        return None

    def backtracking(self, index: int = 0, cursor: int = 0) -> bool:
        return self._memoized(self._backtracking_step, index, cursor)

    def _backtracking_step(self, index: int, cursor: int) -> bool:
        """Consume single-character tokens in a loop; recurse only at wildcards"""
        path_length = len(self.path)

        while index < len(self.tokens):
            token = self.tokens[index]
            kind = token.kind

            if kind is TokenKind.TRAILING_DOUBLE_ASTERISK:
                return True

            if kind is TokenKind.LEADING_DOUBLE_ASTERISK:
                return any(self.backtracking(index + 1, start) for start in self.segment_starts(cursor))

            if kind is TokenKind.MIDDLE_DOUBLE_ASTERISK:
                return any(
                    self.backtracking(next_index, next_cursor)
                    for next_index, next_cursor in self.middle_continuations(index, cursor)
                )

            if kind is TokenKind.ASTERISK:
                # Adjacent '*' match the same runs as one
                while index + 1 < len(self.tokens) and self.tokens[index + 1].kind is TokenKind.ASTERISK:
                    index += 1
                end = cursor
                while True:
                    if self.backtracking(index + 1, end):
                        return True
                    if end >= path_length or self.path[end] == self.separator:
                        return False
                    end += 1

            if cursor >= path_length:
                return False
            char = self.path[cursor]
            if char == self.separator and kind in _SEGMENT_BOUND_KINDS:
                return False
            if not token_accepts(token, char, self.separator):
                return False
            index += 1
            cursor += 1

        return cursor == path_length


def match_tokens(tokens: Sequence[Token], path: str,
                 strategy: MatchStrategy = MatchStrategy.FIRST_FIT,
                 separator: str = PATH_SEPARATOR) -> bool:
    """
    Check whether a compiled pattern consumes the whole path

    Args:
        tokens: Output of compile_line()
        path: Candidate path, relative, using ``separator``
        strategy: Wildcard placement strategy
        separator: Path separator of ``path``

    Returns:
        True if every token matched and no path characters are left over
    """
    run = _MatchRun(tokens, path, separator)
    if strategy is MatchStrategy.BACKTRACKING:
        return run.backtracking()
    return run.first_fit()
