"""Logging configuration module."""

from __future__ import annotations

import logging

from stylist.config.settings import get_settings

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"


def configure_logging(level: str | None = None) -> None:
    """Configure root logger according to project conventions."""

    desired = (level or get_settings().log_level).upper()
    logging.basicConfig(
        level=getattr(logging, desired, logging.INFO),
        format=LOG_FORMAT,
    )
    # httpx logs every request line at INFO
    logging.getLogger("httpx").setLevel(logging.WARNING)
