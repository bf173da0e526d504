"""Shared fixtures for the stylist test-suite."""

from __future__ import annotations

from io import BytesIO
from typing import Callable

import pytest
from PIL import Image

from stylist.config.settings import get_settings


def _make_image(image_format: str = "PNG", color: str = "teal", size: tuple[int, int] = (8, 8)) -> bytes:
    buffer = BytesIO()
    Image.new("RGB", size, color=color).save(buffer, format=image_format)
    return buffer.getvalue()


@pytest.fixture
def make_image() -> Callable[..., bytes]:
    return _make_image


@pytest.fixture
def png_bytes() -> bytes:
    return _make_image("PNG")


@pytest.fixture(autouse=True)
def _clear_settings_cache() -> None:
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
