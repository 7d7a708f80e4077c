from pydantic_settings import BaseSettings
from functools import lru_cache


class Settings(BaseSettings):
    # Logging
    LOG_LEVEL: str = "WARNING"
    LOG_JSON: bool = False  # True for machine-readable JSON lines, False for colored console output

    # Messages
    LOCALE: str = "en"  # Message catalog used when a failure is rendered without an explicit catalog

    class Config:
        env_prefix = "FLAGSPEC_"
        env_file = ".env"
        extra = "ignore"


@lru_cache
def get_settings() -> Settings:
    return Settings()


settings = get_settings()
