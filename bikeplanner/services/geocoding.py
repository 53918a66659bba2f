import logging
import re
from typing import Optional

from bikeplanner.core.config import settings
from bikeplanner.domain.exceptions import (
    InvalidCoordinateLiteral,
    ProviderUnavailable,
    UnresolvableLocation,
)
from bikeplanner.domain.models import Coordinate, LocationSource, ResolvedLocation
from bikeplanner.services.cache import GeocodeCache, geocode_cache
from bikeplanner.services.gazetteer import StaticGazetteer, gazetteer
from bikeplanner.services.nominatim_client import NominatimClient, ProviderPlace, nominatim_client
from bikeplanner.services.rate_limiter import RateLimiter, rate_limiter

logger = logging.getLogger(__name__)

COORDINATE_LITERAL = re.compile(r"^([+-]?\d+(?:\.\d*)?)\s*,\s*([+-]?\d+(?:\.\d*)?)$")


def parse_coordinate_literal(text: str) -> Coordinate:
    """Parse ``"52.52, 13.405"`` style input into a Coordinate."""
    match = COORDINATE_LITERAL.match(text.strip())
    if not match:
        raise InvalidCoordinateLiteral(text)
    lat, lon = float(match.group(1)), float(match.group(2))
    if not -90 <= lat <= 90:
        raise InvalidCoordinateLiteral(text, "latitude out of range")
    if not -180 <= lon <= 180:
        raise InvalidCoordinateLiteral(text, "longitude out of range")
    return Coordinate(lat, lon)


class GeocodingResolver:
    """Resolves free text to a coordinate.

    Tiers are tried in order: inline ``lat, lon`` literal, cache, the
    rate-limited provider, then the static gazetteer. Provider failures are
    logged and fall through; only running out of tiers raises.
    """

    def __init__(
        self,
        provider: Optional[NominatimClient] = None,
        cache: Optional[GeocodeCache] = None,
        limiter: Optional[RateLimiter] = None,
        fallback: Optional[StaticGazetteer] = None,
        *,
        cache_gazetteer_hits: Optional[bool] = None,
    ) -> None:
        self.provider = provider if provider is not None else nominatim_client
        self.cache = cache if cache is not None else geocode_cache
        self.rate_limiter = limiter if limiter is not None else rate_limiter
        self.gazetteer = fallback if fallback is not None else gazetteer
        self.cache_gazetteer_hits = (
            settings.CACHE_GAZETTEER_HITS if cache_gazetteer_hits is None else cache_gazetteer_hits
        )

    async def resolve(self, text: str) -> Coordinate:
        location = await self.resolve_location(text)
        return location.coordinate

    async def resolve_location(self, text: str) -> ResolvedLocation:
        try:
            coordinate = parse_coordinate_literal(text)
        except InvalidCoordinateLiteral as exc:
            logger.debug("%s", exc.message)
        else:
            return ResolvedLocation(coordinate, text.strip(), LocationSource.LITERAL)

        query = self.cache.normalize(text)
        if not query:
            logger.warning("Empty location provided")
            raise UnresolvableLocation(text)

        cached = self.cache.get(query)
        if cached is not None:
            return ResolvedLocation(cached.coordinate, cached.display_name, LocationSource.CACHE)

        try:
            place = await self._search_provider(query)
        except ProviderUnavailable as exc:
            logger.warning("Geocoding provider failed for %r: %s", text, exc.message)
            place = None

        if place is not None:
            self.cache.put(query, place.coordinate, place.display_name)
            logger.info("✓ Geocoded: %s → %s", text, place.coordinate.as_tuple())
            return ResolvedLocation(place.coordinate, place.display_name, LocationSource.PROVIDER)

        match = self.gazetteer.lookup(query)
        if match is None:
            logger.warning("No gazetteer entry for %r", text)
            raise UnresolvableLocation(text)

        if self.cache_gazetteer_hits:
            self.cache.put(query, match.coordinate, match.display_name)
        logger.info("Resolved %r from offline gazetteer (%s)", text, match.display_name)
        return ResolvedLocation(match.coordinate, match.display_name, LocationSource.GAZETTEER)

    async def _search_provider(self, query: str) -> Optional[ProviderPlace]:
        await self.rate_limiter.acquire()
        places = await self.provider.search(query, limit=1)
        if not places:
            logger.info("Geocoding provider returned no results for %r", query)
            return None
        return places[0]


geocoding_resolver = GeocodingResolver()
