"""Wardrobe catalog with AI outfit suggestions."""

__version__ = "0.1.0"
