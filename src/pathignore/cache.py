"""
Compile cache for ignore patterns
"""

import threading
from typing import Callable, Dict, Union

from .compiler import CompiledPattern
from .errors import IgnorePatternError

CacheEntry = Union[CompiledPattern, IgnorePatternError]


class CompileCache:
    """
    Thread-safe memo of compiled patterns

    Each distinct pattern is compiled at most once: compilation runs while
    the lock is held. Compile failures are cached as well, so a bad rule is
    not re-parsed on every query.
    """

    def __init__(self, compile_fn: Callable[[str], CompiledPattern]):
        self._compile_fn = compile_fn
        self._entries: Dict[str, CacheEntry] = {}
        self._lock = threading.Lock()
        self._hits = 0
        self._misses = 0

    def get(self, pattern: str) -> CacheEntry:
        """
        Get the compiled form of a pattern, compiling on first use

        Returns:
            The token tuple, or the IgnorePatternError the pattern failed with
        """
        with self._lock:
            if pattern in self._entries:
                self._hits += 1
                entry = self._entries[pattern]
            else:
                self._misses += 1
                try:
                    entry = self._compile_fn(pattern)
                except IgnorePatternError as e:
                    entry = e
                self._entries[pattern] = entry
        return entry

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def clear(self):
        """Clear entire cache"""
        with self._lock:
            self._entries.clear()
            self._hits = 0
            self._misses = 0

    def get_stats(self) -> Dict[str, float]:
        """Get cache statistics"""
        with self._lock:
            total = self._hits + self._misses
            hit_rate = (self._hits / total * 100) if total > 0 else 0
            return {
                'size': len(self._entries),
                'hits': self._hits,
                'misses': self._misses,
                'hit_rate': hit_rate
            }
