"""Prometheus exporter helpers."""

from __future__ import annotations

from prometheus_client import Counter, Gauge


suggestion_requests_total = Counter(
    "stylist_suggestion_requests_total",
    "Suggestion requests by outcome.",
    ["outcome"],
)

intake_rejections_total = Counter(
    "stylist_intake_rejections_total",
    "Clothing images rejected at intake.",
    ["reason"],
)

catalog_items = Gauge(
    "stylist_catalog_items",
    "Number of clothing items in the current session catalog.",
)
