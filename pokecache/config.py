from functools import lru_cache
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Runtime configuration, read from the environment or a local .env file."""

    model_config = SettingsConfigDict(
        env_prefix="POKEAPI_", env_file=".env", env_file_encoding="utf-8"
    )

    # PokeAPI
    base_url: str = "https://pokeapi.co/api/v2"
    max_pokemon: int = Field(default=1025, gt=0)
    request_timeout: float = 5.0
    max_concurrent_requests: int = Field(default=20, gt=0)

    # Cache (Redis). No expiry unless a TTL is set.
    redis_url: str = Field(default="redis://localhost:6379", validation_alias="REDIS_URL")
    cache_ttl: Optional[int] = None

    # Cache warmer schedule, in milliseconds
    sync_initial_delay_ms: int = 5000
    sync_fixed_delay_ms: int = 3_600_000
    sync_politeness_delay_ms: int = 100
    sync_start_id: int = Field(default=1, gt=0)
    sync_end_id: int = Field(default=50, gt=0)

    log_level: str = "INFO"


@lru_cache
def get_settings() -> Settings:
    return Settings()
