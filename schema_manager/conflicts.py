"""Detect other active plugins that also emit structured data.

The scan result is cached for an hour so callers can ask on every request.
"""

import logging
import time
from typing import Any, Callable, Iterable, Optional

logger = logging.getLogger(__name__)

CONFLICT_CACHE_TTL_SECONDS = 3600

KNOWN_SCHEMA_PLUGINS: dict[str, str] = {
    "wordpress-seo/wp-seo.php": "Yoast SEO",
    "all-in-one-seo-pack/all_in_one_seo_pack.php": "All in One SEO",
    "schema/schema.php": "Schema",
    "schema-and-structured-data-for-wp/structured-data-for-wp.php": "Schema & Structured Data for WP",
    "wp-seo-structured-data-schema/developer-schema.php": "WP SEO Structured Data Schema",
    "rank-math-seo/rank-math.php": "Rank Math SEO",
    "seo-by-rank-math/rank-math.php": "Rank Math SEO",
}


class TTLCache:
    """Simple in-memory cache whose entries expire after a fixed TTL."""

    def __init__(self, ttl_seconds: float, clock: Callable[[], float] = time.monotonic):
        self._cache: dict[str, tuple[float, Any]] = {}
        self._ttl_seconds = ttl_seconds
        self._clock = clock

    def get(self, key: str) -> Optional[Any]:
        if key in self._cache:
            ts, value = self._cache[key]
            if self._clock() - ts < self._ttl_seconds:
                return value
            del self._cache[key]
        return None

    def set(self, key: str, value: Any) -> None:
        self._cache[key] = (self._clock(), value)

    def delete(self, key: str) -> None:
        self._cache.pop(key, None)


class ConflictDetector:
    """Match active plugin identifiers against known schema emitters.

    Usage::

        detector = ConflictDetector(lambda: config["active_plugins"])
        names = detector.detect()
    """

    CACHE_KEY = "conflict_check"

    def __init__(
        self,
        active_plugins: Callable[[], Iterable[str]],
        known: Optional[dict[str, str]] = None,
        cache: Optional[TTLCache] = None,
    ) -> None:
        self._active_plugins = active_plugins
        self._known = known if known is not None else KNOWN_SCHEMA_PLUGINS
        self._cache = cache or TTLCache(CONFLICT_CACHE_TTL_SECONDS)

    def detect(self) -> list[str]:
        """Names of conflicting plugins, de-duplicated, in first-seen order."""
        cached = self._cache.get(self.CACHE_KEY)
        if cached is not None:
            return list(cached)

        conflicts: list[str] = []
        for plugin in self._active_plugins():
            name = self._known.get(plugin)
            if name and name not in conflicts:
                conflicts.append(name)

        self._cache.set(self.CACHE_KEY, tuple(conflicts))
        if conflicts:
            logger.warning("Other structured-data plugins active: %s", ", ".join(conflicts))
        return conflicts

    def clear(self) -> None:
        self._cache.delete(self.CACHE_KEY)
