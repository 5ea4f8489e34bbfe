import logging
import time
import uuid
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from app import __version__
from app.api import create_api_router
from app.core.config import Settings, get_settings
from app.core.container import ApplicationContainer
from app.core.logging import request_id_ctx, setup_logging
from app.infrastructure.storage import BlobStore
from app.interfaces.http.errors import register_exception_handlers

logger = logging.getLogger(__name__)


def create_app(settings: Optional[Settings] = None, *, blob_store: Optional[BlobStore] = None) -> FastAPI:
    settings = settings or get_settings()
    setup_logging(settings)
    container = ApplicationContainer.build(settings, blob_store=blob_store)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        await container.init_infrastructure()
        logger.info("%s %s started (%s)", settings.project_name, __version__, settings.environment)
        yield
        await container.dispose()

    app = FastAPI(
        title=settings.project_name,
        description="Personal audio library: upload, list, play and delete audio files",
        version=__version__,
        lifespan=lifespan,
        debug=settings.debug and not settings.is_production,
    )
    app.state.container = container

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        request_id = request.headers.get("x-request-id") or uuid.uuid4().hex
        token = request_id_ctx.set(request_id)
        start_time = time.perf_counter()
        try:
            response = await call_next(request)
            elapsed_ms = (time.perf_counter() - start_time) * 1000
            logger.info(
                "%s %s -> %d (%.2fms)",
                request.method,
                request.url.path,
                response.status_code,
                elapsed_ms,
            )
            response.headers["X-Request-ID"] = request_id
            return response
        finally:
            request_id_ctx.reset(token)

    register_exception_handlers(app, settings)
    app.include_router(create_api_router(settings.api_prefix))

    @app.get("/health", tags=["health"])
    async def health():
        return {"status": "ok"}

    return app


app = create_app()
