import asyncio
import logging
from typing import List, Optional

from bikeplanner.core.config import settings
from bikeplanner.domain.exceptions import ProviderUnavailable
from bikeplanner.domain.models import AutocompleteSuggestion, Coordinate
from bikeplanner.services.cache import GeocodeCache, geocode_cache
from bikeplanner.services.nominatim_client import NominatimClient, nominatim_client
from bikeplanner.services.rate_limiter import RateLimiter, rate_limiter

logger = logging.getLogger(__name__)


class AutocompleteSuggester:
    """Place suggestions for partially typed input.

    ``suggest`` never raises; provider trouble yields an empty list.
    ``submit`` is the keystroke entry point: each call cancels the pending
    fetch and schedules a new one after ``debounce_seconds`` of quiet.
    """

    def __init__(
        self,
        provider: Optional[NominatimClient] = None,
        limiter: Optional[RateLimiter] = None,
        cache: Optional[GeocodeCache] = None,
        *,
        min_chars: int = 3,
        limit: int = 5,
        debounce_seconds: float = 0.5,
    ) -> None:
        self.provider = provider if provider is not None else nominatim_client
        self.rate_limiter = limiter if limiter is not None else rate_limiter
        self.cache = cache if cache is not None else geocode_cache
        self.min_chars = min_chars
        self.limit = limit
        self.debounce_seconds = debounce_seconds
        self._pending: Optional[asyncio.Task] = None

    async def suggest(self, text: str) -> List[AutocompleteSuggestion]:
        query = text.strip()
        if len(query) < self.min_chars:
            return []

        try:
            await self.rate_limiter.acquire()
            places = await self.provider.search(query, limit=self.limit)
        except ProviderUnavailable as exc:
            logger.warning("Autocomplete provider failed for %r: %s", query, exc.message)
            return []
        except Exception as exc:
            logger.warning("Unexpected autocomplete failure for %r: %s", query, exc)
            return []

        return [
            AutocompleteSuggestion(
                display_name=place.display_name,
                coordinate=place.coordinate,
                provider_id=place.place_id,
                place_kind=place.place_type,
            )
            for place in places
        ]

    def submit(self, text: str) -> "asyncio.Task[List[AutocompleteSuggestion]]":
        """Debounced ``suggest``. Superseded tasks end up cancelled."""
        self.cancel()
        task = asyncio.get_running_loop().create_task(self._debounced(text))
        self._pending = task
        return task

    def cancel(self) -> None:
        if self._pending is not None and not self._pending.done():
            self._pending.cancel()
        self._pending = None

    async def _debounced(self, text: str) -> List[AutocompleteSuggestion]:
        if len(text.strip()) < self.min_chars:
            return []
        await asyncio.sleep(self.debounce_seconds)
        return await self.suggest(text)

    def select(self, suggestion: AutocompleteSuggestion) -> Coordinate:
        self.cache.put(suggestion.display_name, suggestion.coordinate, suggestion.display_name)
        logger.info("Selected suggestion %s → %s", suggestion.display_name, suggestion.coordinate.as_tuple())
        return suggestion.coordinate


autocomplete_suggester = AutocompleteSuggester(
    min_chars=settings.AUTOCOMPLETE_MIN_CHARS,
    limit=settings.AUTOCOMPLETE_LIMIT,
    debounce_seconds=settings.AUTOCOMPLETE_DEBOUNCE_SECONDS,
)
