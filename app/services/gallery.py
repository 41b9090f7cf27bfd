"""Business logic for uploading and browsing gallery images."""

from __future__ import annotations

import asyncio
import logging
import uuid

from app.errors import GalleryError
from app.imgproc.normalize import ImageNormalizer
from app.metrics.prometheus_exporter import gallery_image_fetch_total, gallery_uploads_total
from app.storage import ImageStore, ImageSummary, StoredImage

logger = logging.getLogger(__name__)


class GalleryService:
    """Facade over image normalisation and storage."""

    def __init__(
        self,
        store: ImageStore,
        normalizer: ImageNormalizer,
        *,
        width: int,
        height: int,
        latest_count: int = 5,
    ) -> None:
        self._store = store
        self._normalizer = normalizer
        self._width = width
        self._height = height
        self._latest_count = latest_count

    async def upload(self, title: str, image_bytes: bytes) -> str:
        """Normalise and persist an upload, returning the new image id."""

        title = (title or "").strip()
        if not title:
            raise ValueError("Title must not be empty.")

        image_id = str(uuid.uuid4())
        try:
            normalized = await asyncio.to_thread(
                self._normalizer.normalize,
                image_bytes,
                self._width,
                self._height,
            )
            await self._store.save(image_id, title, normalized.data, normalized.content_type)
        except GalleryError as exc:
            gallery_uploads_total.labels(outcome=type(exc).__name__).inc()
            logger.warning("Upload of %r failed: %s", title, exc)
            raise

        gallery_uploads_total.labels(outcome="stored").inc()
        logger.info("Uploaded image %s titled %r", image_id, title)
        return image_id

    async def latest(self, count: int | None = None) -> list[ImageSummary]:
        """Return the most recent images for the home page."""

        return await self._store.get_latest(self._latest_count if count is None else count)

    async def fetch(self, image_id: str) -> StoredImage | None:
        """Return a single image or ``None``."""

        image = await self._store.get_by_id(image_id)
        gallery_image_fetch_total.labels(outcome="hit" if image else "miss").inc()
        return image
