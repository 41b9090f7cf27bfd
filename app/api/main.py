"""FastAPI entrypoint and HTTP routes."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from pathlib import Path
from typing import AsyncIterator

from fastapi import Depends, FastAPI, File, Form, HTTPException, Request, UploadFile, status
from fastapi.responses import HTMLResponse, PlainTextResponse, RedirectResponse, Response
from fastapi.staticfiles import StaticFiles
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest

from app.api.antiforgery import COOKIE_NAME, Antiforgery, AntiforgeryDependency
from app.config.settings import Settings, get_settings
from app.db.session import create_engine
from app.errors import GalleryError
from app.imgproc.normalize import ImageNormalizer
from app.monitoring.logging import configure_logging
from app.services.gallery import GalleryService
from app.storage import ImageStore
from app.web.templating import PageRenderer

logger = logging.getLogger(__name__)

STATIC_DIR = Path(__file__).resolve().parent.parent / "web" / "static"


def get_gallery(request: Request) -> GalleryService:
    """Return the gallery service wired up during application startup."""

    return request.app.state.gallery


def create_app(settings: Settings | None = None) -> FastAPI:
    """Initialise the FastAPI application."""

    settings = settings or get_settings()
    configure_logging(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        engine = create_engine(settings.database_url)
        try:
            store = ImageStore(engine)
            await store.ensure_schema()
            app.state.gallery = GalleryService(
                store,
                ImageNormalizer(quality=settings.jpeg_quality),
                width=settings.image_width,
                height=settings.image_height,
                latest_count=settings.latest_count,
            )
            logger.info("Gallery ready, database %s", engine.url.render_as_string(hide_password=True))
            yield
        finally:
            await engine.dispose()

    app = FastAPI(
        title="Image Gallery",
        version="0.1.0",
        docs_url="/docs" if settings.environment != "prod" else None,
        redoc_url="/redoc" if settings.environment != "prod" else None,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.antiforgery = Antiforgery(settings.antiforgery_secret)
    app.state.renderer = PageRenderer()
    app.mount("/static", StaticFiles(directory=STATIC_DIR), name="static")

    @app.exception_handler(GalleryError)
    async def handle_gallery_error(request: Request, exc: GalleryError) -> PlainTextResponse:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc)
        return PlainTextResponse(
            "Internal Server Error",
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )

    @app.get("/", response_class=HTMLResponse, tags=["gallery"])
    async def home(request: Request, gallery: GalleryService = Depends(get_gallery)) -> HTMLResponse:
        """Render the upload form and the latest images."""

        cookie_token = request.cookies.get(COOKIE_NAME)
        tokens = request.app.state.antiforgery.issue(cookie_token)
        images = await gallery.latest()
        html = request.app.state.renderer.render(
            "home.html",
            {
                "images": images,
                "token_field": tokens.form_field_name,
                "token_value": tokens.request_token,
            },
        )
        response = HTMLResponse(html)
        if tokens.cookie_token != cookie_token:
            request.app.state.antiforgery.store(response, tokens)
        return response

    @app.post("/upload", tags=["gallery"], dependencies=[AntiforgeryDependency])
    async def upload(
        title: str = Form(...),
        file: UploadFile = File(...),
        gallery: GalleryService = Depends(get_gallery),
    ) -> RedirectResponse:
        """Store an uploaded image and return to the home page."""

        data = await file.read(settings.max_upload_bytes + 1)
        if len(data) > settings.max_upload_bytes:
            raise HTTPException(
                status_code=status.HTTP_413_CONTENT_TOO_LARGE,
                detail="Uploaded file is too large.",
            )
        try:
            await gallery.upload(title, data)
        except ValueError as exc:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
        return RedirectResponse("/", status_code=status.HTTP_303_SEE_OTHER)

    @app.get("/picture/{image_id}", tags=["gallery"])
    async def picture(image_id: str, gallery: GalleryService = Depends(get_gallery)) -> Response:
        """Return the stored image bytes."""

        image = await gallery.fetch(image_id)
        if image is None:
            return Response(status_code=status.HTTP_404_NOT_FOUND)
        return Response(content=image.image_data, media_type=image.content_type)

    @app.get("/health", tags=["system"])
    async def health_check() -> dict[str, str]:
        """Simple health endpoint used for readiness probes."""

        return {"status": "ok"}

    @app.get("/metrics", tags=["system"])
    async def metrics() -> Response:
        """Prometheus scrape endpoint."""

        return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)

    return app


app = create_app()
