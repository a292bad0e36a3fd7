"""In-memory TTL cache for text recommendations.

Entries are keyed by normalized prompt text and go stale after the TTL.
Stale entries are never deleted, only overwritten by the next successful
pipeline run for the same key. The cache is owned by a recommender
instance; nothing is persisted.
"""

import logging
import time
from typing import Callable, NamedTuple, Optional

from ..config import CACHE_TTL_SECONDS
from ..core.models import Recommendation

logger = logging.getLogger(__name__)

CACHE_KEY_PREFIX = "recommendations:"


class CacheEntry(NamedTuple):
    """Recommendations stored for one key, with the time they were stored."""
    timestamp: float
    recommendations: list[Recommendation]


def cache_key(text: str) -> str:
    """Normalize prompt text: lower-case, collapse whitespace, sort words."""
    words = sorted(text.lower().split())
    return CACHE_KEY_PREFIX + " ".join(words)


class RecommendationCache:
    """Recommendation lists keyed by normalized prompt text.

    Args:
        ttl: Seconds an entry stays fresh. Defaults to 5 minutes.
        clock: Callable returning the current time in seconds.
               Defaults to ``time.monotonic``.
    """

    def __init__(
        self,
        ttl: float = CACHE_TTL_SECONDS,
        clock: Optional[Callable[[], float]] = None,
    ) -> None:
        self.ttl = ttl
        self._clock = clock or time.monotonic
        self._entries: dict[str, CacheEntry] = {}

    def get(self, text: str) -> Optional[list[Recommendation]]:
        """Return the cached list for ``text`` if it is still fresh.

        The exact list object that was stored is returned.
        """
        key = cache_key(text)
        entry = self._entries.get(key)
        if entry is None:
            return None
        if self._clock() - entry.timestamp >= self.ttl:
            logger.debug("Cache entry expired: %s", key)
            return None
        logger.debug("Cache hit: %s", key)
        return entry.recommendations

    def put(self, text: str, recommendations: list[Recommendation]) -> None:
        """Store (or overwrite) the recommendations for ``text``."""
        self._entries[cache_key(text)] = CacheEntry(self._clock(), recommendations)

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, text: str) -> bool:
        return self.get(text) is not None
