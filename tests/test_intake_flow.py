"""Tests for the add-item state machine."""

from __future__ import annotations

import pytest

from stylist.bot_service.state_machine import IntakeFlow, IntakeState
from stylist.imgproc import MAX_IMAGE_BYTES, InvalidImage, PayloadTooLarge
from stylist.storage import ClothingCategory, WardrobeCatalog


def test_photo_then_category_adds_item(png_bytes: bytes) -> None:
    catalog = WardrobeCatalog()
    flow = IntakeFlow(catalog)
    flow.open()

    flow.attach_photo(png_bytes)
    assert flow.state is IntakeState.AWAITING_CATEGORY

    item = flow.choose_category(ClothingCategory.BOTTOMS)

    assert catalog.items == (item,)
    assert item.category is ClothingCategory.BOTTOMS
    assert flow.state is IntakeState.IDLE
    assert flow.pending_image is None


def test_oversized_photo_keeps_flow_open() -> None:
    catalog = WardrobeCatalog()
    flow = IntakeFlow(catalog)
    flow.open()

    with pytest.raises(PayloadTooLarge):
        flow.attach_photo(b"\x00" * (MAX_IMAGE_BYTES + 1))

    assert flow.state is IntakeState.AWAITING_PHOTO
    assert flow.error == "Image size cannot exceed 4MB."
    assert len(catalog) == 0


def test_error_cleared_by_next_good_photo(png_bytes: bytes) -> None:
    flow = IntakeFlow(WardrobeCatalog())
    with pytest.raises(InvalidImage):
        flow.attach_photo(b"text")

    flow.attach_photo(png_bytes)

    assert flow.error is None


def test_category_without_photo_is_rejected() -> None:
    flow = IntakeFlow(WardrobeCatalog())
    flow.open()

    with pytest.raises(InvalidImage):
        flow.choose_category(ClothingCategory.TOPS)


def test_close_discards_pending_photo(png_bytes: bytes) -> None:
    catalog = WardrobeCatalog()
    flow = IntakeFlow(catalog)
    flow.attach_photo(png_bytes)

    flow.close()

    assert not flow.is_open
    assert flow.pending_image is None
    assert len(catalog) == 0
