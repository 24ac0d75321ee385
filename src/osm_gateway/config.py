import os
from dataclasses import dataclass, field
from functools import lru_cache

import redis.asyncio as redis
from dotenv import load_dotenv

load_dotenv()

CACHE_BACKENDS = ("file", "redis")


def _csv(name: str, default: str) -> frozenset[str]:
    raw = os.getenv(name, default)
    return frozenset(v.strip() for v in raw.split(",") if v.strip())


@dataclass(frozen=True)
class Settings:
    """Application settings loaded from environment variables."""

    # OpenStreetMap
    osm_api: str = os.getenv("OSM_API", "https://api.openstreetmap.org/api/0.6")
    osm_interpreter: str = os.getenv("OSM_INTERPRETER", "https://overpass-api.de/api/interpreter")
    upstream_timeout: float = float(os.getenv("UPSTREAM_TIMEOUT", "30"))

    # Cache
    cache_backend: str = os.getenv("CACHE_BACKEND", "file").lower()
    cache_dir: str = os.getenv("CACHE_DIR", os.path.join(os.getcwd(), "cache"))
    cache_key_prefix: str = os.getenv("CACHE_KEY_PREFIX", "osm_gateway")

    # Redis (only used when CACHE_BACKEND=redis)
    redis_url: str = os.getenv("REDIS_URL", "redis://localhost:6379")
    redis_password: str | None = os.getenv("REDIS_PASSWORD")

    # POI categories
    tourism_values: frozenset[str] = field(
        default_factory=lambda: _csv("TOURISM_VALUES", "museum,attraction")
    )
    historic_values: frozenset[str] = field(
        default_factory=lambda: _csv(
            "HISTORIC_VALUES",
            "castle,monument,memorial,ruins,archaeological_site,fort",
        )
    )

    # API
    api_host: str = os.getenv("API_HOST", "0.0.0.0")
    api_port: int = int(os.getenv("API_PORT", "8000"))
    api_reload: bool = os.getenv("API_RELOAD", "false").lower() == "true"
    log_level: str = os.getenv("LOG_LEVEL", "INFO").upper()

    @property
    def uses_redis(self) -> bool:
        """Check if the cache is backed by Redis instead of local files."""
        return self.cache_backend == "redis"

    def __post_init__(self) -> None:
        """Validate settings after initialization."""
        if self.cache_backend not in CACHE_BACKENDS:
            raise ValueError(
                f"CACHE_BACKEND must be one of {list(CACHE_BACKENDS)}, got {self.cache_backend!r}"
            )

        if self.upstream_timeout <= 0:
            raise ValueError("UPSTREAM_TIMEOUT must be a positive number of seconds")


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


# Global settings instance
settings = get_settings()


def get_redis_client() -> redis.Redis:
    """Create an async Redis client instance."""
    return redis.from_url(
        settings.redis_url,
        password=settings.redis_password,
        encoding="utf-8",
        decode_responses=True,
    )
