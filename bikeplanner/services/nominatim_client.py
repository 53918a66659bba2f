import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

import httpx

from bikeplanner.core.config import settings
from bikeplanner.domain.exceptions import ProviderUnavailable
from bikeplanner.domain.models import Coordinate

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ProviderPlace:
    coordinate: Coordinate
    display_name: str
    place_id: str
    place_type: str
    importance: float = 0.0


class NominatimClient:
    """Text search against an OpenStreetMap Nominatim instance"""

    def __init__(
        self,
        base_url: Optional[str] = None,
        *,
        user_agent: Optional[str] = None,
        country_codes: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.base_url = base_url or settings.NOMINATIM_URL
        self.user_agent = user_agent or settings.NOMINATIM_USER_AGENT
        self.country_codes = (
            settings.GEOCODING_COUNTRY_CODES if country_codes is None else country_codes
        )
        self._timeout = httpx.Timeout(timeout or settings.REQUEST_TIMEOUT)
        self._transport = transport

    async def search(self, query: str, limit: int = 1) -> List[ProviderPlace]:
        """Search places matching ``query``.

        Raises ProviderUnavailable on network errors, non-2xx responses and
        payloads that are not a JSON list.
        """
        params: Dict[str, Any] = {
            "format": "json",
            "q": query,
            "limit": limit,
            "addressdetails": 1,
        }
        if self.country_codes:
            params["countrycodes"] = self.country_codes

        try:
            async with httpx.AsyncClient(
                timeout=self._timeout,
                transport=self._transport,
                headers={"User-Agent": self.user_agent},
            ) as client:
                response = await client.get(self.base_url, params=params)
                response.raise_for_status()
                payload = response.json()
        except httpx.HTTPStatusError as exc:
            raise ProviderUnavailable(
                f"Nominatim returned HTTP {exc.response.status_code}"
            ) from exc
        except httpx.HTTPError as exc:
            raise ProviderUnavailable(f"Nominatim request failed: {exc}") from exc
        except ValueError as exc:
            raise ProviderUnavailable("Nominatim returned malformed JSON") from exc

        if not isinstance(payload, list):
            raise ProviderUnavailable("Nominatim returned an unexpected payload")

        places = []
        for item in payload:
            place = self.parse_place(item)
            if place is not None:
                places.append(place)
        return places

    @staticmethod
    def parse_place(item: Any) -> Optional[ProviderPlace]:
        try:
            coordinate = Coordinate(float(item["lat"]), float(item["lon"]))
            return ProviderPlace(
                coordinate=coordinate,
                display_name=str(item.get("display_name") or ""),
                place_id=str(item.get("place_id", "")),
                place_type=str(item.get("type") or ""),
                importance=float(item.get("importance") or 0.0),
            )
        except (KeyError, TypeError, ValueError, AttributeError):
            logger.debug("Skipping malformed Nominatim result: %r", item)
            return None


nominatim_client = NominatimClient()
