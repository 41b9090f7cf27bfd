"""Prometheus exporter helpers."""

from __future__ import annotations

from prometheus_client import Counter


gallery_uploads_total = Counter(
    "gallery_uploads_total",
    "Image uploads processed, by outcome.",
    ["outcome"],
)

gallery_image_fetch_total = Counter(
    "gallery_image_fetch_total",
    "Single-image lookups, by outcome.",
    ["outcome"],
)
