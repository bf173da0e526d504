"""Tests for environment-driven settings."""

from __future__ import annotations

from pathlib import Path

import pytest

from stylist.config.settings import DEFAULT_MODEL, ConfigurationError, StylistSettings, get_settings


@pytest.fixture
def clean_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> pytest.MonkeyPatch:
    monkeypatch.chdir(tmp_path)
    for name in (
        "API_KEY",
        "TELEGRAM_BOT_TOKEN",
        "STYLIST_MODEL",
        "STYLIST_REQUEST_TIMEOUT",
        "STYLIST_OWNER_CHAT_ID",
    ):
        # setenv first so values loaded from .env files are undone on teardown
        monkeypatch.setenv(name, "")
        monkeypatch.delenv(name)
    return monkeypatch


def test_defaults_without_environment(clean_env: pytest.MonkeyPatch) -> None:
    settings = get_settings()

    assert settings.api_key == ""
    assert settings.model == DEFAULT_MODEL
    assert settings.request_timeout is None
    assert settings.owner_chat_id is None
    with pytest.raises(ConfigurationError):
        settings.require_api_key()


def test_reads_environment(clean_env: pytest.MonkeyPatch) -> None:
    clean_env.setenv("API_KEY", "secret")
    clean_env.setenv("STYLIST_REQUEST_TIMEOUT", "45")
    clean_env.setenv("STYLIST_OWNER_CHAT_ID", "1234")

    settings = get_settings()

    assert settings.require_api_key() == "secret"
    assert settings.request_timeout == 45.0
    assert settings.owner_chat_id == 1234


def test_env_file_does_not_override_environment(clean_env: pytest.MonkeyPatch, tmp_path: Path) -> None:
    (tmp_path / ".env").write_text("# local\nAPI_KEY=from-file\nTELEGRAM_BOT_TOKEN=token\n", encoding="utf-8")
    clean_env.setenv("API_KEY", "from-env")

    settings = get_settings()

    assert settings.api_key == "from-env"
    assert settings.bot_token == "token"


def test_require_bot_token() -> None:
    with pytest.raises(ConfigurationError) as excinfo:
        StylistSettings().require_bot_token()

    assert excinfo.value.variable == "TELEGRAM_BOT_TOKEN"
