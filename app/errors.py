"""Exceptions raised by the gallery storage and image processing layers."""

from __future__ import annotations


class GalleryError(RuntimeError):
    """Base class for failures that abort an upload or read request."""


class DecodeError(GalleryError):
    """Raised when uploaded bytes are not a recognisable image."""


class InvalidDimensionsError(GalleryError):
    """Raised when the resize target is not a pair of positive integers."""

    def __init__(self, width: object, height: object) -> None:
        self.width = width
        self.height = height
        super().__init__(f"Invalid target dimensions {width}x{height}.")


class DuplicateIdError(GalleryError):
    """Raised when an insert collides with an existing image id."""

    def __init__(self, image_id: str) -> None:
        self.image_id = image_id
        super().__init__(f"Image with id {image_id!r} already exists.")


class StoreUnavailable(GalleryError):
    """Raised when the backing database cannot be reached or written."""
