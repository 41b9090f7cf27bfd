"""Helpers for producing test images in memory."""

from __future__ import annotations

from io import BytesIO

from PIL import Image

_COLORS = {"RGB": (200, 120, 40), "RGBA": (200, 120, 40, 128), "L": 128, "P": 3}


def make_image_bytes(
    image_format: str = "PNG",
    size: tuple[int, int] = (800, 600),
    mode: str = "RGB",
) -> bytes:
    """Encode a solid-colour image in ``image_format``."""

    buffer = BytesIO()
    Image.new(mode, size, _COLORS[mode]).save(buffer, format=image_format)
    return buffer.getvalue()


def image_size(data: bytes) -> tuple[int, int]:
    with Image.open(BytesIO(data)) as img:
        return img.size
