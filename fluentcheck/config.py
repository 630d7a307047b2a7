"""Library configuration via environment variables."""

from pydantic_settings import BaseSettings
from functools import lru_cache


class Settings(BaseSettings):
    """Library settings loaded from environment variables (prefix FLUENTCHECK_)."""

    # Messages
    DEFAULT_CULTURE: str = "en"

    # Rule evaluation: "stop" halts a check chain at its first failure, "continue" runs every check
    CASCADE_MODE: str = "stop"

    # Logging
    DEBUG: bool = False
    LOG_LEVEL: str = "info"

    model_config = {"env_prefix": "FLUENTCHECK_", "env_file": ".env", "env_file_encoding": "utf-8"}


@lru_cache
def get_settings() -> Settings:
    return Settings()
