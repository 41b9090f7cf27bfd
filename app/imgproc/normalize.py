"""Image normalisation helpers."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from io import BytesIO

from PIL import Image, UnidentifiedImageError

from app.errors import DecodeError, InvalidDimensionsError

logger = logging.getLogger(__name__)

OUTPUT_FORMAT = "JPEG"
OUTPUT_CONTENT_TYPE = "image/jpeg"
DEFAULT_JPEG_QUALITY = 75


@dataclass(frozen=True, slots=True)
class NormalizedImage:
    """Encoded image ready to be persisted."""

    data: bytes
    content_type: str
    width: int
    height: int

    def as_pair(self) -> tuple[bytes, str]:
        """Return ``(data, content_type)``."""

        return self.data, self.content_type


class ImageNormalizer:
    """Decodes uploads, stretches them to a fixed size and re-encodes as JPEG.

    The aspect ratio of the source is not preserved: the output always has
    exactly the requested width and height.
    """

    content_type = OUTPUT_CONTENT_TYPE

    def __init__(self, quality: int = DEFAULT_JPEG_QUALITY) -> None:
        self._quality = quality

    def normalize(self, image_bytes: bytes, target_width: int, target_height: int) -> NormalizedImage:
        """Return processed image bytes ready for storage."""

        self._check_dimensions(target_width, target_height)

        try:
            with Image.open(BytesIO(image_bytes)) as img:
                img.seek(0)
                img.load()
                rgb = img.convert("RGB")
        except (
            UnidentifiedImageError,
            Image.DecompressionBombError,
            OSError,
            SyntaxError,
            EOFError,
            ValueError,
        ) as exc:
            raise DecodeError("Uploaded data is not a supported image.") from exc

        resized = rgb.resize((target_width, target_height), Image.Resampling.BICUBIC)
        buffer = BytesIO()
        resized.save(buffer, format=OUTPUT_FORMAT, quality=self._quality)
        data = buffer.getvalue()
        logger.debug(
            "Normalised %d input bytes to %dx%d %s (%d bytes)",
            len(image_bytes),
            target_width,
            target_height,
            OUTPUT_FORMAT,
            len(data),
        )
        return NormalizedImage(
            data=data,
            content_type=OUTPUT_CONTENT_TYPE,
            width=target_width,
            height=target_height,
        )

    @staticmethod
    def _check_dimensions(width: object, height: object) -> None:
        for value in (width, height):
            if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
                raise InvalidDimensionsError(width, height)
