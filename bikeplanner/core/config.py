from typing import List

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_ignore_empty=True,
        extra="ignore",
    )

    PROJECT_NAME: str = "Bike Route Planner API"
    VERSION: str = "1.0.0"
    API_V1_STR: str = "/api/v1"

    ENVIRONMENT: str = "development"
    LOG_LEVEL: str = "INFO"

    CORS_ORIGINS: List[str] = ["http://localhost:5173", "http://localhost:3000"]

    NOMINATIM_URL: str = "https://nominatim.openstreetmap.org/search"
    NOMINATIM_USER_AGENT: str = "BikeRoutePlanner/1.0"
    GEOCODING_COUNTRY_CODES: str = "de"
    REQUEST_TIMEOUT: float = 10.0

    RATE_LIMIT_INTERVAL_SECONDS: float = 1.0
    GEOCODING_CACHE_TTL_SECONDS: int = 3600
    CACHE_GAZETTEER_HITS: bool = False

    AUTOCOMPLETE_MIN_CHARS: int = 3
    AUTOCOMPLETE_DEBOUNCE_SECONDS: float = 0.5
    AUTOCOMPLETE_LIMIT: int = 5

    ROUTES_PER_ZONE: int = 8
    DIRECT_ROUTE_DELAY_SECONDS: float = 0.8
    REALISTIC_ROUTE_DELAY_SECONDS: float = 1.2

    @field_validator("CORS_ORIGINS", mode="before")
    @classmethod
    def assemble_cors_origins(cls, v: str | List[str]) -> List[str]:
        if isinstance(v, str) and not v.startswith("["):
            return [i.strip() for i in v.split(",")]
        elif isinstance(v, (list, str)):
            return v
        raise ValueError(v)


settings = Settings()
