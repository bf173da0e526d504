"""Tests for the styling service connectivity check."""

from __future__ import annotations

import pytest
import pytest_mock

from stylist.config.settings import ConfigurationError
from stylist.integrations.checks import check_stylist_service


@pytest.fixture(autouse=True)
def _setup_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("API_KEY", "test-key")
    monkeypatch.setenv("STYLIST_BASE_URL", "https://stylist.test/v1")


@pytest.mark.asyncio
async def test_check_stylist_service_success(mocker: pytest_mock.MockerFixture) -> None:
    client_mock = mocker.patch("stylist.integrations.checks.StylistClient", autospec=True)
    instance = client_mock.return_value
    instance.ping = mocker.AsyncMock(return_value=True)
    instance.close = mocker.AsyncMock(return_value=None)

    result = await check_stylist_service()

    assert result.success
    instance.ping.assert_awaited_once()
    instance.close.assert_awaited_once()


@pytest.mark.asyncio
async def test_check_stylist_service_non_success(mocker: pytest_mock.MockerFixture) -> None:
    client_mock = mocker.patch("stylist.integrations.checks.StylistClient", autospec=True)
    instance = client_mock.return_value
    instance.ping = mocker.AsyncMock(return_value=False)
    instance.close = mocker.AsyncMock(return_value=None)

    result = await check_stylist_service()

    assert not result.success
    assert "non-success" in result.message.lower()


@pytest.mark.asyncio
async def test_check_reports_missing_configuration(mocker: pytest_mock.MockerFixture) -> None:
    mocker.patch(
        "stylist.integrations.checks.StylistClient",
        side_effect=ConfigurationError("API key missing", variable="API_KEY"),
    )

    result = await check_stylist_service()

    assert not result.success
    assert result.message == "API key missing"
