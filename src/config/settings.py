from dataclasses import dataclass
from typing import Optional

from pydantic import ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    # Telegram Bot API
    TELEGRAM_API_KEY: str
    TELEGRAM_API_BASE_URL: str = "https://api.telegram.org"
    SEND_TIMEOUT_SECONDS: Optional[float] = None  # None = wait for Telegram indefinitely

    # HTTP listener
    HOST: str = "0.0.0.0"
    PORT: int = 8080

    LOG_LEVEL: str = "INFO"

    @field_validator("TELEGRAM_API_KEY")
    @classmethod
    def _token_not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("No $TELEGRAM_API_KEY found.")
        return value

    @field_validator("LOG_LEVEL")
    @classmethod
    def _known_log_level(cls, value: str) -> str:
        level = value.strip().upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"LOG_LEVEL must be one of {', '.join(LOG_LEVELS)}")
        return level


@dataclass(frozen=True)
class StartupResult:
    """
    Outcome of the startup configuration step.
    Exactly one of settings/error is set.
    """
    settings: Optional[Settings] = None
    error: Optional[str] = None

    @property
    def ready(self) -> bool:
        return self.settings is not None


def initialize_settings(env_file: Optional[str] = ".env") -> StartupResult:
    """
    Loads Settings from the environment. Must run before any request is served;
    a missing bot token yields a failed result instead of raising.
    """
    try:
        settings = Settings(_env_file=env_file)
    except ValidationError as e:
        # Only loc/msg: the raw input may be the token itself
        problems = "; ".join(
            f"{'.'.join(str(part) for part in err['loc'])}: {err['msg']}"
            for err in e.errors()
        )
        return StartupResult(error=f"Invalid configuration: {problems}")
    return StartupResult(settings=settings)
