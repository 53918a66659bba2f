import random
from types import SimpleNamespace

import pytest

from bikeplanner.domain.estimates import Difficulty
from bikeplanner.domain.geodesy import destination_point, haversine_km
from bikeplanner.domain.models import Coordinate, DistanceZone, RouteKind, RouteOptions
from bikeplanner.domain.synthesis import RouteSynthesizer

ORIGIN = Coordinate(52.0302, 8.5325)


@pytest.fixture
def synthesizer() -> RouteSynthesizer:
    return RouteSynthesizer(random.Random(1234))


@pytest.mark.asyncio
async def test_one_zone_with_both_kinds_yields_sixteen_routes(synthesizer: RouteSynthesizer) -> None:
    routes = await synthesizer.synthesize(ORIGIN, [DistanceZone(10)], RouteOptions())

    direct = [route for route in routes if route.kind is RouteKind.DIRECT]
    realistic = [route for route in routes if route.kind is RouteKind.REALISTIC]
    assert len(routes) == 16
    assert len(direct) == 8
    assert len(realistic) == 8
    assert {route.bearing_degrees for route in direct} == {0, 45, 90, 135, 180, 225, 270, 315}
    assert len({route.id for route in routes}) == 16


@pytest.mark.asyncio
async def test_disabled_zones_and_options_are_respected(synthesizer: RouteSynthesizer) -> None:
    zones = [DistanceZone(10), DistanceZone(25, enabled=False), DistanceZone(50)]

    routes = await synthesizer.synthesize(ORIGIN, zones, RouteOptions(include_realistic=False))

    assert len(routes) == 16
    assert all(route.kind is RouteKind.DIRECT for route in routes)
    assert {route.requested_distance_km for route in routes} == {10, 50}


@pytest.mark.asyncio
async def test_duplicate_zone_distances_keep_ids_unique(synthesizer: RouteSynthesizer) -> None:
    routes = await synthesizer.synthesize(ORIGIN, [DistanceZone(10), DistanceZone(10)], RouteOptions())

    assert len({route.id for route in routes}) == len(routes) == 32


def test_direct_routes_run_from_origin_to_projected_destination(synthesizer: RouteSynthesizer) -> None:
    for route in synthesizer.direct_routes(ORIGIN, 25):
        assert len(route.coordinates) == 2
        assert route.start == ORIGIN
        assert route.end == destination_point(ORIGIN, 25, route.bearing_degrees)
        assert route.distance_km == route.requested_distance_km == 25
        assert 0 <= route.elevation_meters < 200


def test_direct_route_difficulty_depends_on_distance_only() -> None:
    for seed in range(20):
        synthesizer = RouteSynthesizer(random.Random(seed))
        assert {r.difficulty for r in synthesizer.direct_routes(ORIGIN, 10)} == {Difficulty.EASY}
        assert {r.difficulty for r in synthesizer.direct_routes(ORIGIN, 20)} == {Difficulty.MEDIUM}
        assert {r.difficulty for r in synthesizer.direct_routes(ORIGIN, 40)} == {Difficulty.HARD}


def test_direct_route_time_uses_25_kmh(synthesizer: RouteSynthesizer) -> None:
    assert synthesizer.direct_routes(ORIGIN, 10)[0].estimated_time == "24 min"
    assert synthesizer.direct_routes(ORIGIN, 50)[0].estimated_time == "2h 0m"


def test_realistic_routes_start_at_origin_and_end_at_great_circle_destination(
    synthesizer: RouteSynthesizer,
) -> None:
    for route in synthesizer.realistic_routes(ORIGIN, 25):
        assert route.start == ORIGIN
        assert route.end == destination_point(ORIGIN, 25, route.bearing_degrees)
        assert 21 <= len(route.coordinates) <= 35


def test_realistic_distance_inflation_stays_within_detour_bounds() -> None:
    synthesizer = RouteSynthesizer(random.Random(99))
    for _ in range(50):
        for route in synthesizer.realistic_routes(ORIGIN, 20):
            assert 1.3 * 20 <= route.distance_km < 1.8 * 20


def test_realistic_elevation_is_five_to_twenty_metres_per_km() -> None:
    synthesizer = RouteSynthesizer(random.Random(5))
    for _ in range(20):
        for route in synthesizer.realistic_routes(ORIGIN, 30):
            climb = route.elevation_meters / route.distance_km
            assert 5 <= climb < 20


def test_realistic_jitter_is_bounded_by_route_amplitude(synthesizer: RouteSynthesizer) -> None:
    for bearing in (0, 90, 200):
        path = synthesizer.realistic_path(ORIGIN, 30, bearing)
        end = path[-1]
        steps = len(path) - 1
        for step, point in enumerate(path[1:-1], start=1):
            progress = step / steps
            expected_lat = ORIGIN.lat + (end.lat - ORIGIN.lat) * progress
            expected_lon = ORIGIN.lon + (end.lon - ORIGIN.lon) * progress
            assert abs(point.lat - expected_lat) <= 0.025
            assert abs(point.lon - expected_lon) <= 0.025


def test_realistic_difficulty_follows_its_own_distance_and_elevation() -> None:
    synthesizer = RouteSynthesizer(random.Random(3))
    for route in synthesizer.realistic_routes(ORIGIN, 25):
        climb = route.elevation_meters / route.distance_km
        if route.distance_km < 20 and climb < 10:
            expected = Difficulty.EASY
        elif route.distance_km < 40 and climb < 20:
            expected = Difficulty.MEDIUM
        else:
            expected = Difficulty.HARD
        assert route.difficulty is expected


def test_fixed_seed_reproduces_exact_coordinates() -> None:
    first = RouteSynthesizer(random.Random(42)).realistic_routes(ORIGIN, 10)
    second = RouteSynthesizer(random.Random(42)).realistic_routes(ORIGIN, 10)

    assert [route.coordinates for route in first] == [route.coordinates for route in second]
    assert [route.distance_km for route in first] == [route.distance_km for route in second]
    assert [route.elevation_meters for route in first] == [route.elevation_meters for route in second]


def test_fixed_seed_matches_documented_draw_order() -> None:
    rng = random.Random(8)
    steps = 20 + int(rng.random() * 15)
    variation = 0.02 + rng.random() * 0.03
    for _ in range(2 * (steps - 1)):
        rng.random()
    expected_distance = 10 * (1.3 + rng.random() * 0.5)
    expected_elevation = expected_distance * (5 + rng.random() * 15)

    route = RouteSynthesizer(random.Random(8)).realistic_routes(ORIGIN, 10)[0]

    assert len(route.coordinates) == steps + 1
    assert variation < 0.05
    assert route.distance_km == pytest.approx(expected_distance)
    assert route.elevation_meters == pytest.approx(expected_elevation)


def test_realistic_paths_stay_near_the_zone_radius(synthesizer: RouteSynthesizer) -> None:
    for route in synthesizer.realistic_routes(ORIGIN, 50):
        assert haversine_km(route.start, route.end) == pytest.approx(50, rel=1e-6)


def test_bearings_follow_number_of_points() -> None:
    synthesizer = RouteSynthesizer(random.Random(0), num_points=6)

    routes = synthesizer.direct_routes(ORIGIN, 10)

    assert [route.bearing_degrees for route in routes] == [0, 60, 120, 180, 240, 300]


def test_route_names_include_direction() -> None:
    routes = RouteSynthesizer(random.Random(0)).direct_routes(ORIGIN, 10)

    assert routes[0].name == "Direct 10 km N (0°)"
    assert routes[2].name == "Direct 10 km E (90°)"
    assert routes[2].direction == "E"


@pytest.mark.asyncio
async def test_processing_delays_are_awaited(monkeypatch) -> None:
    from bikeplanner.domain import synthesis as synthesis_module

    delays = []

    async def fake_sleep(seconds: float) -> None:
        delays.append(seconds)

    monkeypatch.setattr(synthesis_module, "asyncio", SimpleNamespace(sleep=fake_sleep))
    synthesizer = RouteSynthesizer(random.Random(0), direct_delay=0.8, realistic_delay=1.2)

    await synthesizer.synthesize(ORIGIN, [DistanceZone(10)], RouteOptions())

    assert delays == [0.8, 1.2]


@pytest.mark.parametrize("origin, bearing", [(Coordinate(0.0, 179.95), 90), (Coordinate(0.0, -179.95), 270)])
def test_realistic_path_crossing_antimeridian_stays_local(origin: Coordinate, bearing: float) -> None:
    path = RouteSynthesizer(random.Random(21)).realistic_path(origin, 50, bearing)

    assert path[-1] == destination_point(origin, 50, bearing)
    assert max(haversine_km(origin, point) for point in path) < 60
    assert all(-180.0 <= point.lon <= 180.0 for point in path)
    for previous, current in zip(path, path[1:]):
        assert haversine_km(previous, current) < 10
