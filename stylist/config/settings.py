"""Settings loader for the wardrobe stylist."""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path

DEFAULT_BASE_URL = "https://generativelanguage.googleapis.com/v1beta/openai"
DEFAULT_MODEL = "gemini-2.5-flash"


class StylistError(RuntimeError):
    """Base class for errors surfaced to the user."""


class ConfigurationError(StylistError):
    """Raised when a required setting is missing."""

    def __init__(self, message: str, variable: str) -> None:
        self.variable = variable
        super().__init__(message)


def _load_env_file(path: str = ".env") -> None:
    """Populate environment variables from a .env file if present."""

    env_path = Path(path)
    if not env_path.exists():
        return

    for line in env_path.read_text(encoding="utf-8").splitlines():
        stripped = line.strip()
        if not stripped or stripped.startswith("#") or "=" not in stripped:
            continue
        key, value = stripped.split("=", 1)
        os.environ.setdefault(key.strip(), value.strip())


def _optional_float(raw: str | None) -> float | None:
    if raw is None or not raw.strip():
        return None
    return float(raw)


def _optional_int(raw: str | None) -> int | None:
    if raw is None or not raw.strip():
        return None
    return int(raw)


@dataclass(slots=True, frozen=True)
class StylistSettings:
    """Settings required by the stylist client and the bot."""

    api_key: str = ""
    bot_token: str = ""
    base_url: str = DEFAULT_BASE_URL
    model: str = DEFAULT_MODEL
    health_path: str = "/models"
    temperature: float = 0.7
    top_p: float = 1.0
    request_timeout: float | None = None
    owner_chat_id: int | None = None
    log_level: str = "INFO"

    def require_api_key(self) -> str:
        """Return the service credential or raise ``ConfigurationError``."""

        if not self.api_key:
            raise ConfigurationError(
                "The styling service API key is missing. Set the API_KEY environment variable to continue.",
                variable="API_KEY",
            )
        return self.api_key

    def require_bot_token(self) -> str:
        """Return the Telegram token or raise ``ConfigurationError``."""

        if not self.bot_token:
            raise ConfigurationError("TELEGRAM_BOT_TOKEN is not configured.", variable="TELEGRAM_BOT_TOKEN")
        return self.bot_token


def _build_settings() -> StylistSettings:
    _load_env_file()
    return StylistSettings(
        api_key=os.getenv("API_KEY", ""),
        bot_token=os.getenv("TELEGRAM_BOT_TOKEN", ""),
        base_url=os.getenv("STYLIST_BASE_URL", DEFAULT_BASE_URL),
        model=os.getenv("STYLIST_MODEL", DEFAULT_MODEL),
        health_path=os.getenv("STYLIST_HEALTH_PATH", "/models"),
        temperature=float(os.getenv("STYLIST_TEMPERATURE", "0.7")),
        top_p=float(os.getenv("STYLIST_TOP_P", "1.0")),
        request_timeout=_optional_float(os.getenv("STYLIST_REQUEST_TIMEOUT")),
        owner_chat_id=_optional_int(os.getenv("STYLIST_OWNER_CHAT_ID")),
        log_level=os.getenv("LOG_LEVEL", "INFO"),
    )


@lru_cache(maxsize=1)
def get_settings() -> StylistSettings:
    """Return cached settings instance."""

    return _build_settings()
