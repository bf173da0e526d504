"""Connectivity check for the styling service."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Awaitable, Callable

from stylist.api.stylist_client import StylistClient
from stylist.config.settings import StylistError, get_settings


@dataclass(slots=True)
class IntegrationCheckResult:
    """Structured result describing the integration check outcome."""

    name: str
    success: bool
    message: str


async def _run_check(
    name: str,
    factory: Callable[[], Awaitable[bool]],
    success_message: str,
) -> IntegrationCheckResult:
    try:
        result = await factory()
    except StylistError as exc:
        return IntegrationCheckResult(name=name, success=False, message=str(exc))

    if result:
        return IntegrationCheckResult(name=name, success=True, message=success_message)
    return IntegrationCheckResult(
        name=name,
        success=False,
        message="Service responded with non-success status.",
    )


async def check_stylist_service() -> IntegrationCheckResult:
    """Ping the styling service and return the result."""

    async def _ping() -> bool:
        client = StylistClient(get_settings())
        try:
            return await client.ping()
        finally:
            await client.close()

    return await _run_check(
        name="Styling service",
        factory=_ping,
        success_message="Styling service is reachable.",
    )


async def run_all_checks() -> list[IntegrationCheckResult]:
    """Execute all integration checks."""

    return [await check_stylist_service()]
