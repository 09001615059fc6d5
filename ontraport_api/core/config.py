"""Client configuration using Pydantic Settings."""

from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Client settings loaded from ONTRAPORT_* environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="ONTRAPORT_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Credentials - empty string means not configured
    app_id: str = ""
    api_key: str = ""

    # Transport
    base_url: str = "https://api.ontraport.com/1"
    request_timeout: float = 30.0  # seconds
    max_retries: int = 3

    # Redis cache for schema lookups, disabled when unset
    redis_url: Optional[str] = None
    cache_ttl: int = 3600  # 1 hour

    debug: bool = False

    @property
    def has_credentials(self) -> bool:
        return bool(self.app_id and self.api_key)


# Create settings instance
settings = Settings()
