"""In-memory wardrobe catalog and selection set."""

from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Iterable

from stylist.imgproc.encode import InlineImage, InvalidImage, PayloadTooLarge, encode_image
from stylist.metrics.prometheus_exporter import catalog_items, intake_rejections_total

logger = logging.getLogger(__name__)


class ClothingCategory(str, Enum):
    """Closed set of wardrobe categories, in display order."""

    TOPS = "Tops"
    BOTTOMS = "Bottoms"
    SHOES = "Shoes"

    @classmethod
    def parse(cls, raw: str) -> "ClothingCategory":
        """Return the category named by ``raw`` (case-insensitive)."""

        normalized = raw.strip().lower()
        for category in cls:
            if category.value.lower() == normalized:
                return category
        raise ValueError(f"Unknown clothing category: {raw!r}")


@dataclass(slots=True, frozen=True)
class ClothingItem:
    """A single catalogued garment photo."""

    id: str
    category: ClothingCategory
    image: InlineImage

    @property
    def image_data_url(self) -> str:
        return self.image.data_url

    @property
    def mime_type(self) -> str:
        return self.image.mime_type

    @property
    def image_bytes(self) -> bytes:
        return self.image.to_bytes()


def _new_item_id() -> str:
    return f"item-{uuid.uuid4().hex}"


class WardrobeCatalog:
    """Append-only list of clothing items plus the current selection.

    The selection is kept as an insertion-ordered set of item ids and only ever
    contains ids of items present in the catalog.
    """

    def __init__(self, id_factory: Callable[[], str] = _new_item_id) -> None:
        self._id_factory = id_factory
        self._items: list[ClothingItem] = []
        self._by_id: dict[str, ClothingItem] = {}
        self._selection: dict[str, None] = {}

    def __len__(self) -> int:
        return len(self._items)

    @property
    def items(self) -> tuple[ClothingItem, ...]:
        return tuple(self._items)

    def get(self, item_id: str) -> ClothingItem | None:
        return self._by_id.get(item_id)

    def add_item(self, category: ClothingCategory, image: bytes) -> ClothingItem:
        """Validate ``image`` and append a new item under ``category``.

        Raises ``PayloadTooLarge`` or ``InvalidImage`` and leaves the catalog
        untouched when the image is rejected.
        """

        category = ClothingCategory(category)
        try:
            inline = encode_image(image)
        except PayloadTooLarge:
            intake_rejections_total.labels(reason="too_large").inc()
            logger.info("Rejected %d byte image: over the intake limit", len(image))
            raise
        except InvalidImage:
            intake_rejections_total.labels(reason="invalid").inc()
            logger.info("Rejected unreadable %d byte upload", len(image))
            raise

        item = ClothingItem(id=self._unique_id(), category=category, image=inline)
        self._items.append(item)
        self._by_id[item.id] = item
        catalog_items.set(len(self._items))
        logger.info("Added %s item %s (%s)", category.value, item.id, inline.mime_type)
        return item

    def _unique_id(self) -> str:
        item_id = self._id_factory()
        while item_id in self._by_id:
            item_id = self._id_factory()
        return item_id

    def toggle(self, item_id: str) -> bool:
        """Flip selection membership of ``item_id``; return whether it is now selected."""

        if item_id not in self._by_id:
            logger.warning("Ignoring selection toggle for unknown item %s", item_id)
            return False
        if item_id in self._selection:
            del self._selection[item_id]
            return False
        self._selection[item_id] = None
        return True

    def is_selected(self, item_id: str) -> bool:
        return item_id in self._selection

    @property
    def selected_ids(self) -> tuple[str, ...]:
        return tuple(self._selection)

    def selected_items(self) -> list[ClothingItem]:
        """Return selected items in the order they were selected."""

        return [self._by_id[item_id] for item_id in self._selection]

    def grouped(self) -> list[tuple[ClothingCategory, list[ClothingItem]]]:
        """Partition the catalog by category, preserving insertion order."""

        return list(group_by_category(self._items).items())


def group_by_category(items: Iterable[ClothingItem]) -> dict[ClothingCategory, list[ClothingItem]]:
    """Group arbitrary items by category; every category is present."""

    groups: dict[ClothingCategory, list[ClothingItem]] = {category: [] for category in ClothingCategory}
    for item in items:
        groups[item.category].append(item)
    return groups
