from __future__ import annotations

import math
from enum import Enum

DIRECT_SPEED_KMH = 25.0
REALISTIC_SPEED_KMH = 18.0

COMPASS_DIRECTIONS = ("N", "NE", "E", "SE", "S", "SW", "W", "NW")


class Difficulty(str, Enum):
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def hours_from_distance(distance_km: float, speed_kmh: float) -> float:
    if distance_km <= 0:
        return 0.0
    return distance_km / speed_kmh


def format_duration(hours: float) -> str:
    """Render a riding time as ``"42 min"`` below one hour, ``"1h 5m"`` above."""
    if hours < 1:
        return f"{_round_half_up(hours * 60)} min"
    whole_hours = int(math.floor(hours))
    minutes = _round_half_up((hours - whole_hours) * 60)
    if minutes == 60:
        whole_hours += 1
        minutes = 0
    return f"{whole_hours}h {minutes}m"


def estimate_riding_time(distance_km: float, speed_kmh: float) -> str:
    return format_duration(hours_from_distance(distance_km, speed_kmh))


def direct_difficulty(distance_km: float) -> Difficulty:
    if distance_km < 15:
        return Difficulty.EASY
    if distance_km < 35:
        return Difficulty.MEDIUM
    return Difficulty.HARD


def elevation_per_km(distance_km: float, elevation_m: float) -> float:
    if distance_km <= 0:
        return 0.0
    return elevation_m / distance_km


def realistic_difficulty(distance_km: float, elevation_m: float) -> Difficulty:
    climb = elevation_per_km(distance_km, elevation_m)
    if distance_km < 20 and climb < 10:
        return Difficulty.EASY
    if distance_km < 40 and climb < 20:
        return Difficulty.MEDIUM
    return Difficulty.HARD


def direction_name(bearing_degrees: float) -> str:
    index = _round_half_up((bearing_degrees % 360) / 45) % len(COMPASS_DIRECTIONS)
    return COMPASS_DIRECTIONS[index]
