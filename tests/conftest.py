import os

os.environ.setdefault("NOMINATIM_USER_AGENT", "bikeplanner-tests/1.0")
os.environ.setdefault("DIRECT_ROUTE_DELAY_SECONDS", "0")
os.environ.setdefault("REALISTIC_ROUTE_DELAY_SECONDS", "0")
os.environ.setdefault("AUTOCOMPLETE_DEBOUNCE_SECONDS", "0.01")

from typing import List, Optional

import pytest

from bikeplanner.domain.models import Coordinate
from bikeplanner.services.cache import GeocodeCache
from bikeplanner.services.gazetteer import StaticGazetteer
from bikeplanner.services.nominatim_client import ProviderPlace
from bikeplanner.services.rate_limiter import RateLimiter


class FakeClock:
    def __init__(self, start: float = 1_700_000_000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class StubProvider:
    """Records searches and answers with canned places or an error."""

    def __init__(self, places: Optional[List[ProviderPlace]] = None, error: Optional[Exception] = None) -> None:
        self.places = list(places or [])
        self.error = error
        self.calls: List[tuple] = []

    async def search(self, query: str, limit: int = 1) -> List[ProviderPlace]:
        self.calls.append((query, limit))
        if self.error is not None:
            raise self.error
        return self.places[:limit]


def make_place(lat: float, lon: float, name: str = "Berlin, Deutschland", place_id: str = "1") -> ProviderPlace:
    return ProviderPlace(
        coordinate=Coordinate(lat, lon),
        display_name=name,
        place_id=place_id,
        place_type="city",
        importance=0.8,
    )


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def fake_sleep(clock: FakeClock):
    calls: List[float] = []

    async def sleep(seconds: float) -> None:
        calls.append(seconds)
        clock.advance(seconds)

    sleep.calls = calls
    return sleep


@pytest.fixture
def limiter(clock: FakeClock, fake_sleep) -> RateLimiter:
    return RateLimiter(1.0, clock=clock, sleep=fake_sleep)


@pytest.fixture
def cache(clock: FakeClock) -> GeocodeCache:
    return GeocodeCache(3600, clock=clock)


@pytest.fixture
def offline_gazetteer() -> StaticGazetteer:
    return StaticGazetteer()


@pytest.fixture
def berlin_place() -> ProviderPlace:
    return make_place(52.5170365, 13.3888599, "Berlin, Deutschland", "240109189")
