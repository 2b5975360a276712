"""
Ordered ignore rules with last-match-wins, negation-aware evaluation
"""

from functools import partial
from pathlib import Path
from typing import Iterable, Iterator, Optional, Tuple, Union

from .cache import CompileCache
from .compiler import compile_line
from .constants import NEGATION_PREFIX, PATH_SEPARATOR
from .errors import IgnorePatternError
from .file_loader import IgnoreFileLoader, filter_pattern_lines
from .matcher import MatchStrategy, match_tokens
from .utils import get_logger

logger = get_logger(__name__)


class IgnoreSet:
    """
    Immutable, ordered set of ignore rules

    Rules are kept exactly as declared, duplicates included. Queries may run
    from several threads at once; compiled rules are memoized per set.
    """

    def __init__(self, patterns: Iterable[str] = (),
                 strategy: MatchStrategy = MatchStrategy.FIRST_FIT,
                 separator: str = PATH_SEPARATOR):
        """
        Args:
            patterns: Rule lines that already passed the line filter
            strategy: Wildcard placement strategy for every rule
            separator: Path separator used by rules and queried paths
        """
        self._patterns: Tuple[str, ...] = tuple(patterns)
        self._strategy = strategy
        self._separator = separator
        self._compiled = CompileCache(partial(compile_line, separator=separator))

    @classmethod
    def from_lines(cls, lines: Iterable[str],
                   strategy: MatchStrategy = MatchStrategy.FIRST_FIT,
                   separator: str = PATH_SEPARATOR) -> "IgnoreSet":
        """Build a set from raw lines, dropping blanks, space-only lines and comments"""
        return cls(filter_pattern_lines(lines), strategy=strategy, separator=separator)

    @classmethod
    def from_file(cls, path: Union[str, Path],
                  strategy: MatchStrategy = MatchStrategy.FIRST_FIT,
                  separator: str = PATH_SEPARATOR) -> "IgnoreSet":
        """
        Build a set from an ignore file

        Raises:
            IgnoreFileError: The file cannot be opened or read
        """
        info = IgnoreFileLoader(separator=separator).load_file(path)
        return cls(info.patterns, strategy=strategy, separator=separator)

    @property
    def patterns(self) -> Tuple[str, ...]:
        return self._patterns

    @property
    def strategy(self) -> MatchStrategy:
        return self._strategy

    def __len__(self) -> int:
        return len(self._patterns)

    def __iter__(self) -> Iterator[str]:
        return iter(self._patterns)

    def __repr__(self) -> str:
        return f"IgnoreSet({list(self._patterns)!r}, strategy={self._strategy.value})"

    def matches_path(self, path: str) -> bool:
        """
        Check if a path is ignored

        The last declared rule that matches decides; a rule starting with
        '!' re-includes the path. Rules that fail to compile or to match
        never match.

        Args:
            path: Relative path to check

        Returns:
            True if the path should be ignored
        """
        rule = self._deciding_rule(path)
        if rule is None:
            logger.trace(f"Ignore check for {path!r}: no rule matched")
            return False

        ignored = not rule.startswith(NEGATION_PREFIX)
        logger.trace(f"Ignore check for {path!r}: {ignored} (matched: {rule!r})")
        return ignored

    def _deciding_rule(self, path: str) -> Optional[str]:
        for rule in reversed(self._patterns):
            body = rule[len(NEGATION_PREFIX):] if rule.startswith(NEGATION_PREFIX) else rule

            compiled = self._compiled.get(body)
            if isinstance(compiled, IgnorePatternError):
                logger.debug(f"Skipping rule {rule!r}: {compiled}")
                continue

            try:
                matched = match_tokens(compiled, path, self._strategy, self._separator)
            except (ValueError, RecursionError) as e:
                logger.debug(f"Skipping rule {rule!r} for {path!r}: match failed: {e}")
                continue

            if matched:
                return rule
        return None
