"""Application entry point and FastAPI app factory."""

from __future__ import annotations

import logging

import uvicorn
from fastapi import FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, Response
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest

from .config.settings import settings
from .controllers import documents, songs, suno
from .logging_config import configure_logging
from .middleware import StructuredLoggingMiddleware, TelemetryMiddleware
from .services.storage import get_storage

logger = logging.getLogger(__name__)


def _register_service_routes(app: FastAPI) -> None:
    @app.get("/", include_in_schema=False)
    async def root() -> dict[str, str]:
        return {
            "message": f"Welcome to {settings.app_name}",
            "version": settings.app_version,
            "status": "operational",
        }

    @app.get("/health", include_in_schema=False)
    async def health_check() -> dict[str, str]:
        """Liveness plus the storage backend in use (``memory`` or ``sqlalchemy``)."""

        return {
            "status": "healthy",
            "service": settings.app_name,
            "version": settings.app_version,
            "storage": get_storage().backend_name,
        }

    @app.get("/metrics", include_in_schema=False)
    async def metrics() -> Response:
        return Response(generate_latest(), media_type=CONTENT_TYPE_LATEST)


def _register_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(HTTPException)
    async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
        return JSONResponse(
            status_code=exc.status_code,
            content={"detail": exc.detail},
            headers=exc.headers,
        )

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return JSONResponse(
            status_code=500,
            content={"detail": "Internal server error"},
        )


def create_app() -> FastAPI:
    """Build the EduSong API: lesson documents, song generation, and the Suno webhook."""

    configure_logging(settings)

    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        debug=settings.debug,
        description="Turns lesson material into culturally grounded songs for primary classrooms",
    )

    app.add_middleware(TelemetryMiddleware)
    app.add_middleware(StructuredLoggingMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=settings.cors_allow_credentials,
        allow_methods=settings.cors_allow_methods,
        allow_headers=settings.cors_allow_headers,
    )

    for module in (documents, songs, suno):
        app.include_router(module.router)
    _register_service_routes(app)
    _register_error_handlers(app)

    @app.on_event("startup")
    async def open_storage() -> None:
        storage = get_storage()
        await storage.initialize()
        logger.info(
            "%s %s started with %s storage",
            settings.app_name,
            settings.app_version,
            storage.backend_name,
        )

    @app.on_event("shutdown")
    async def close_storage() -> None:
        await get_storage().close()

    return app


app = create_app()


if __name__ == "__main__":
    uvicorn.run(
        "app.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
    )
