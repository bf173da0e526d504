"""Configuration helpers."""

from .settings import ConfigurationError, StylistError, StylistSettings, get_settings

__all__ = ["ConfigurationError", "StylistError", "StylistSettings", "get_settings"]
