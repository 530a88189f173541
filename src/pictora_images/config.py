"""Configuration management using pydantic-settings.

Loads from environment variables and .env file.
"""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables and .env file.

    Attributes:
        cache_max_entries: Maximum number of images held in memory.
        cache_max_cost_bytes: Maximum estimated decoded size of all cached images.
        cache_max_age_seconds: Entries idle for longer than this are swept.
        cache_sweep_interval_seconds: How often the janitor sweeps old entries.
        fetch_timeout: HTTP timeout for image fetching in seconds.
        image_max_dimension: Optional maximum width or height after decoding.
        coalesce_fetches: Share one in-flight fetch per URL across consumers.
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        log_json: Output logs in JSON format for production.

    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Image cache
    cache_max_entries: int = 100
    cache_max_cost_bytes: int = 1024 * 1024 * 1000  # ~1 GB of decoded pixels
    cache_max_age_seconds: float = 1800.0
    cache_sweep_interval_seconds: float = 300.0

    # Fetching
    fetch_timeout: int = 30
    image_max_dimension: int | None = None
    coalesce_fetches: bool = False

    # Logging
    log_level: str = "INFO"
    log_json: bool = False


# Global settings instance
settings = Settings()
