"""Finite state machine behind the add-item flow."""

from __future__ import annotations

import logging
from enum import Enum

from stylist.imgproc.encode import InvalidImage, PayloadTooLarge, check_size, detect_mime_type
from stylist.storage.catalog import ClothingCategory, ClothingItem, WardrobeCatalog

logger = logging.getLogger(__name__)


class IntakeState(str, Enum):
    """Stages of adding one clothing item."""

    IDLE = "idle"
    AWAITING_PHOTO = "awaiting_photo"
    AWAITING_CATEGORY = "awaiting_category"


class IntakeFlow:
    """Holds the photo pending categorisation and the inline intake error.

    The flow is opened by ``/add`` or a photo, receives one image, then a
    category, and closes after the item lands in the catalog.
    """

    def __init__(self, catalog: WardrobeCatalog) -> None:
        self._catalog = catalog
        self.state = IntakeState.IDLE
        self.pending_image: bytes | None = None
        self.error: str | None = None

    @property
    def is_open(self) -> bool:
        return self.state is not IntakeState.IDLE

    def open(self) -> None:
        self.state = IntakeState.AWAITING_PHOTO
        self.pending_image = None
        self.error = None

    def close(self) -> None:
        self.state = IntakeState.IDLE
        self.pending_image = None
        self.error = None

    def reject(self, error: str) -> None:
        """Keep the flow open waiting for another photo and remember ``error``."""

        self.state = IntakeState.AWAITING_PHOTO
        self.pending_image = None
        self.error = error

    def attach_photo(self, data: bytes) -> None:
        """Store a validated photo and move on to category selection."""

        if not self.is_open:
            self.open()
        try:
            check_size(len(data))
            if not data:
                raise InvalidImage("Please select an image to save.")
            detect_mime_type(data)
        except (PayloadTooLarge, InvalidImage) as exc:
            self.reject(str(exc))
            raise
        self.pending_image = data
        self.error = None
        self.state = IntakeState.AWAITING_CATEGORY

    def choose_category(self, category: ClothingCategory) -> ClothingItem:
        """Save the pending photo under ``category`` and close the flow."""

        if self.state is not IntakeState.AWAITING_CATEGORY or self.pending_image is None:
            raise InvalidImage("Please select an image to save.")
        try:
            item = self._catalog.add_item(category, self.pending_image)
        except (PayloadTooLarge, InvalidImage) as exc:
            self.reject(str(exc))
            raise
        self.close()
        return item
