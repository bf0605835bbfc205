"""Thread-safe LRU cache for parsed message patterns.

Patterns are parsed once and reused: formatting walks the cached tree
instead of re-scanning the raw text on every render.

Architecture:
    - Thread-safe using threading.RLock (reentrant lock)
    - LRU eviction via OrderedDict
    - Keyed by pattern text (parsing is locale-independent)
    - Malformed patterns cache their PatternSyntaxError so a broken catalog
      entry is not re-parsed on every render

Python 3.13+.
"""

from collections import OrderedDict
from threading import RLock

from transrender.constants import DEFAULT_PATTERN_CACHE_SIZE
from transrender.diagnostics import PatternSyntaxError
from transrender.syntax import Pattern, PatternParser

__all__ = ["PatternCache"]

type _CacheValue = Pattern | PatternSyntaxError


class PatternCache:
    """Thread-safe LRU cache of parse results.

    Attributes:
        maxsize: Maximum number of cache entries
        hits: Number of cache hits (for metrics)
        misses: Number of cache misses (for metrics)
    """

    __slots__ = ("_cache", "_hits", "_lock", "_maxsize", "_misses", "_parser")

    def __init__(
        self,
        maxsize: int = DEFAULT_PATTERN_CACHE_SIZE,
        *,
        parser: PatternParser | None = None,
    ) -> None:
        """Initialize pattern cache.

        Args:
            maxsize: Maximum number of entries (default: 1000)
            parser: Parser used on cache misses (keyword-only)
        """
        if maxsize <= 0:
            msg = "maxsize must be positive"
            raise ValueError(msg)

        self._cache: OrderedDict[str, _CacheValue] = OrderedDict()
        self._maxsize = maxsize
        self._lock = RLock()
        self._hits = 0
        self._misses = 0
        self._parser = parser or PatternParser()

    def parse(self, source: str) -> Pattern:
        """Return the parsed pattern for source, parsing on a miss.

        Raises:
            PatternSyntaxError: If the pattern is malformed (cached as well)
        """
        with self._lock:
            if source in self._cache:
                self._cache.move_to_end(source)
                self._hits += 1
                cached = self._cache[source]
            else:
                self._misses += 1
                cached = None

        if cached is None:
            # Parse outside the lock; a concurrent duplicate parse is harmless
            try:
                cached = self._parser.parse(source)
            except PatternSyntaxError as e:
                cached = e
            self._put(source, cached)

        if isinstance(cached, PatternSyntaxError):
            # Raise a new instance each time
            raise PatternSyntaxError(cached.diagnostic or str(cached))
        return cached

    def _put(self, source: str, value: _CacheValue) -> None:
        with self._lock:
            if source in self._cache:
                self._cache.move_to_end(source)
            elif len(self._cache) >= self._maxsize:
                self._cache.popitem(last=False)
            self._cache[source] = value

    def clear(self) -> None:
        """Clear all cached entries and reset metrics."""
        with self._lock:
            self._cache.clear()
            self._hits = 0
            self._misses = 0

    def get_stats(self) -> dict[str, int | float]:
        """Get cache statistics.

        Returns:
            Dict with keys size, maxsize, hits, misses, hit_rate (percentage)
        """
        with self._lock:
            total = self._hits + self._misses
            hit_rate = (self._hits / total * 100) if total > 0 else 0.0
            return {
                "size": len(self._cache),
                "maxsize": self._maxsize,
                "hits": self._hits,
                "misses": self._misses,
                "hit_rate": round(hit_rate, 2),
            }

    def __len__(self) -> int:
        with self._lock:
            return len(self._cache)

    @property
    def maxsize(self) -> int:
        """Maximum cache size."""
        return self._maxsize

    @property
    def hits(self) -> int:
        """Number of cache hits."""
        with self._lock:
            return self._hits

    @property
    def misses(self) -> int:
        """Number of cache misses."""
        with self._lock:
            return self._misses
