"""Persistence for gallery images."""

from .repository import DEFAULT_LATEST_COUNT, ImageStore, ImageSummary, StoredImage

__all__ = ["DEFAULT_LATEST_COUNT", "ImageStore", "ImageSummary", "StoredImage"]
