"""In-memory session storage."""

from .catalog import ClothingCategory, ClothingItem, WardrobeCatalog, group_by_category

__all__ = ["ClothingCategory", "ClothingItem", "WardrobeCatalog", "group_by_category"]
