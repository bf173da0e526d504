"""Integration check helpers."""

from .checks import (
    IntegrationCheckResult,
    check_stylist_service,
    run_all_checks,
)

__all__ = [
    "IntegrationCheckResult",
    "check_stylist_service",
    "run_all_checks",
]
