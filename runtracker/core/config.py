from functools import lru_cache
from typing import List

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # App
    APP_ENV: str = "development"
    APP_NAME: str = "Machine Run-Time Tracker"
    APP_VERSION: str = "1.0.0"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    # Database
    DATABASE_URL: str = "sqlite+aiosqlite:///./runtracker.db"

    # CORS
    CORS_ORIGINS: str = "http://localhost:5173"

    # Sync client
    API_BASE_URL: str = "http://localhost:3001"
    API_TIMEOUT_SECONDS: float = 5.0
    SYNC_INTERVAL_SECONDS: float = 5.0
    DISPLAY_TICK_SECONDS: float = 1.0

    # Fleet
    FLEET_SIZE: int = 50
    TARGET_HOURS: int = 80

    # Seeded on first boot
    ADMIN_USERNAME: str = "admin"
    ADMIN_PASSWORD: str = "admin123"

    @property
    def cors_origins_list(self) -> List[str]:
        return [origin.strip() for origin in self.CORS_ORIGINS.split(",")]

    @property
    def target_time_ms(self) -> int:
        return self.TARGET_HOURS * 60 * 60 * 1000


@lru_cache()
def get_settings() -> Settings:
    return Settings()
