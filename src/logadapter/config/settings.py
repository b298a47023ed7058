from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from pathlib import Path
from typing import Literal
from functools import lru_cache
from ..validators.config_validators import to_level_name, to_lowercase


class Settings(BaseSettings):
    """
    Logging settings loaded from the environment (or a .env file).
    """

    # Environment
    ENV: Literal["development", "testing", "staging", "production"] = "development"

    # Service identity, stamped into serviceContext of JSON logs.
    # Unset means no serviceContext; the host service names itself.
    SERVICE_NAME: str | None = None
    SERVICE_VERSION: str | None = None

    # Logging
    LOG_LEVEL: Literal["TRACE", "DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL", "PANIC"] = "INFO"
    LOG_FORMAT: Literal["json", "text"] = "json"
    LOG_TO_STDOUT: bool = True
    LOG_DIR: Path = Path("logs")
    LOG_MAX_BYTES: int = 10_000_000  # 10 MB
    LOG_BACKUP_COUNT: int = 5

    # --- Validators ---
    @field_validator("LOG_LEVEL", mode="before")
    @classmethod
    def normalize_log_level(cls, v: str | int | None) -> str | None:
        """
        Accept aliases and any case ("warn", "Fatal", "debug") and map them to
        the canonical logging level name before the Literal check runs.
        """
        return to_level_name(v)

    @field_validator("LOG_FORMAT", mode="before")
    @classmethod
    def normalize_log_format(cls, v: str | None) -> str | None:
        """
        Normalize the LOG_FORMAT environment variable value to lowercase.
        """
        return to_lowercase(v)

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )


# get_settings() takes no arguments and always returns the same settings from the environment,
# so it is cached; call get_settings.cache_clear() in tests after changing the environment.
@lru_cache()
def get_settings() -> Settings:
    return Settings()
