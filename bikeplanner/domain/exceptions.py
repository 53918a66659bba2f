from __future__ import annotations


class BikePlannerError(Exception):
    def __init__(self, message: str, status_code: int = 500) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.message = message


class InvalidCoordinateLiteral(BikePlannerError):
    """Raised for text that is not a usable ``lat, lon`` literal."""

    def __init__(self, text: str, reason: str = "not a coordinate literal") -> None:
        super().__init__(f"Invalid coordinate literal {text!r}: {reason}", status_code=400)
        self.text = text
        self.reason = reason


class ProviderUnavailable(BikePlannerError):
    def __init__(self, message: str, status_code: int = 503) -> None:
        super().__init__(message, status_code=status_code)


class UnresolvableLocation(BikePlannerError):
    def __init__(self, query: str) -> None:
        super().__init__(
            f'Location "{query}" could not be found. '
            "Check the spelling or try a different place name.",
            status_code=404,
        )
        self.query = query


class MissingOrigin(BikePlannerError):
    def __init__(self) -> None:
        super().__init__(
            "Enter a start location or provide GPS coordinates", status_code=400
        )


class InvalidDistanceZone(BikePlannerError):
    def __init__(self, distance_km: float, max_distance_km: float) -> None:
        super().__init__(
            f"Zone distance must be greater than 0 and at most {max_distance_km:g} km, "
            f"got {distance_km:g}",
            status_code=422,
        )
        self.distance_km = distance_km
