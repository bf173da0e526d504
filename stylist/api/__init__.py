"""Styling service client."""

from .stylist_client import FailureKind, ServiceFailure, StylistClient

__all__ = ["FailureKind", "ServiceFailure", "StylistClient"]
