import logging
import time
from typing import Callable, Dict, Optional

from bikeplanner.core.config import settings
from bikeplanner.domain.models import Coordinate, GeocodeCacheEntry

logger = logging.getLogger(__name__)


class GeocodeCache:
    """In-memory geocode results keyed by normalized query text.

    Entries expire lazily: an entry older than the TTL is dropped when it is
    read. Nothing else evicts entries.
    """

    def __init__(self, ttl_seconds: int = 3600, *, clock: Callable[[], float] = time.time) -> None:
        self.ttl_ms = int(ttl_seconds * 1000)
        self._clock = clock
        self._entries: Dict[str, GeocodeCacheEntry] = {}

    @staticmethod
    def normalize(text: str) -> str:
        return text.strip().lower()

    def _now_ms(self) -> int:
        return int(self._clock() * 1000)

    def get(self, text: str) -> Optional[GeocodeCacheEntry]:
        key = self.normalize(text)
        entry = self._entries.get(key)
        if entry is None:
            logger.debug("Geocode cache miss: %s", key)
            return None
        if self._now_ms() - entry.resolved_at_ms >= self.ttl_ms:
            logger.debug("Geocode cache expired: %s", key)
            del self._entries[key]
            return None
        logger.debug("Geocode cache hit: %s", key)
        return entry

    def put(self, text: str, coordinate: Coordinate, display_name: str) -> GeocodeCacheEntry:
        entry = GeocodeCacheEntry(
            coordinate=coordinate,
            display_name=display_name,
            resolved_at_ms=self._now_ms(),
        )
        self._entries[self.normalize(text)] = entry
        return entry

    def clear(self) -> None:
        self._entries.clear()

    def __contains__(self, text: str) -> bool:
        return self.normalize(text) in self._entries

    def __len__(self) -> int:
        return len(self._entries)


geocode_cache = GeocodeCache(settings.GEOCODING_CACHE_TTL_SECONDS)
