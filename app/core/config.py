# app/core/config.py
# -----------------------------------------------------------------------------
# Global settings (pydantic-settings v2)
# - reads the .env file and OS environment into a Settings object
# - upstream endpoints, search radius/limits and timeouts live here
# -----------------------------------------------------------------------------
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # basics
    APP_NAME: str = "Midpoint"
    ENV: str = "dev"
    DATABASE_URL: str = "sqlite+aiosqlite:///./midpoint.db"

    # upstream services
    POSTCODES_API_URL: str = "https://api.postcodes.io"
    OVERPASS_API_URL: str = "https://overpass-api.de/api/interpreter"
    HTTP_TIMEOUT_S: float = 25.0

    # venue search
    VENUE_SEARCH_RADIUS_M: int = 10_000
    VENUE_RESULT_LIMIT: int = 20
    MOCK_JITTER_DEG: float = 0.01

    # logging
    LOG_DIR: str = "logs"
    LOG_LEVEL: str = "INFO"

    model_config = SettingsConfigDict(
        env_file=".env", extra="ignore"  # ignore unrelated keys in .env
    )


settings = Settings()
