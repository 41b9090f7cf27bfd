"""SQLite-backed persistence for uploaded images."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from sqlalchemy import inspect, select
from sqlalchemy.engine import Connection
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine

from app.db.models import ImageRecord
from app.db.session import create_session_factory, init_db
from app.errors import DuplicateIdError, StoreUnavailable

logger = logging.getLogger(__name__)

DEFAULT_LATEST_COUNT = 5


def _existing_columns(sync_conn: Connection) -> set[str]:
    return {column["name"] for column in inspect(sync_conn).get_columns(ImageRecord.__tablename__)}


@dataclass(frozen=True, slots=True)
class ImageSummary:
    """Listing row: identifier and title only."""

    id: str
    title: str


@dataclass(frozen=True, slots=True)
class StoredImage:
    """Full image record as persisted."""

    id: str
    title: str
    image_data: bytes
    content_type: str


class ImageStore:
    """Inserts and queries image records.

    Records are never updated or deleted. Every call opens its own session,
    so a store instance can be shared between concurrent requests.
    """

    def __init__(self, engine: AsyncEngine) -> None:
        self._engine = engine
        self._sessions = create_session_factory(engine)

    async def ensure_schema(self) -> None:
        """Create the ``Images`` table if it is missing and check its columns."""

        try:
            await init_db(self._engine)
            async with self._engine.connect() as conn:
                columns = await conn.run_sync(_existing_columns)
        except SQLAlchemyError as exc:
            raise StoreUnavailable("Could not create the image table.") from exc

        missing = sorted({column.name for column in ImageRecord.__table__.columns} - columns)
        if missing:
            raise StoreUnavailable(
                f"Existing {ImageRecord.__tablename__} table lacks columns: {', '.join(missing)}.",
            )

    async def save(self, image_id: str, title: str, image_bytes: bytes, content_type: str) -> None:
        """Insert a new record and commit it before returning."""

        if not image_id:
            raise ValueError("Image id must not be empty.")
        if not title:
            raise ValueError("Image title must not be empty.")
        if not image_bytes:
            raise ValueError("Image data must not be empty.")
        if not content_type:
            raise ValueError("Content type must not be empty.")

        record = ImageRecord(
            id=image_id,
            title=title,
            image_data=image_bytes,
            content_type=content_type,
        )
        try:
            async with self._sessions() as session:
                session.add(record)
                await session.commit()
        except IntegrityError as exc:
            raise DuplicateIdError(image_id) from exc
        except SQLAlchemyError as exc:
            raise StoreUnavailable(f"Could not save image {image_id!r}.") from exc
        logger.info("Stored image %s (%d bytes, %s)", image_id, len(image_bytes), content_type)

    async def get_latest(self, count: int = DEFAULT_LATEST_COUNT) -> list[ImageSummary]:
        """Return up to ``count`` newest records without their image data."""

        if count < 0:
            raise ValueError("Count must not be negative.")
        if count == 0:
            return []

        stmt = (
            select(ImageRecord.id, ImageRecord.title)
            .order_by(ImageRecord.created_at.desc(), ImageRecord.id.desc())
            .limit(count)
        )
        try:
            async with self._sessions() as session:
                result = await session.execute(stmt)
                rows = result.all()
        except SQLAlchemyError as exc:
            raise StoreUnavailable("Could not list images.") from exc
        return [ImageSummary(id=image_id, title=title) for image_id, title in rows]

    async def get_by_id(self, image_id: str) -> StoredImage | None:
        """Return the stored image or ``None`` when the id is unknown."""

        stmt = select(ImageRecord).where(ImageRecord.id == image_id)
        try:
            async with self._sessions() as session:
                result = await session.execute(stmt)
                record = result.scalar_one_or_none()
        except SQLAlchemyError as exc:
            raise StoreUnavailable(f"Could not load image {image_id!r}.") from exc

        if record is None:
            return None
        return StoredImage(
            id=record.id,
            title=record.title,
            image_data=record.image_data,
            content_type=record.content_type,
        )
