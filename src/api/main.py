"""FastAPI application entry point."""
from contextlib import asynccontextmanager
from collections.abc import AsyncGenerator

import structlog
from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from src.api.routes import health, owners, properties
from src.api.schemas.api_response import error_result
from src.config import settings
from src.domain.exceptions import InvalidArgumentError, NotFoundError, StoreError
from src.infrastructure.database.connection import init_schema
from src.logging_config import configure_logging

logger = structlog.get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    configure_logging()
    logger.info("catalog_starting")
    if settings.create_schema_on_startup:
        await init_schema()
    yield
    logger.info("catalog_stopping")


def _error_response(status_code: int, message: str, errors: list[str] | None = None) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=error_result(message, errors).model_dump(mode="json"),
    )


async def _not_found_handler(request: Request, exc: NotFoundError) -> JSONResponse:
    return _error_response(status.HTTP_404_NOT_FOUND, f"{exc.entity} not found", [str(exc)])


async def _invalid_argument_handler(request: Request, exc: InvalidArgumentError) -> JSONResponse:
    return _error_response(status.HTTP_400_BAD_REQUEST, "Invalid request", [str(exc)])


async def _store_error_handler(request: Request, exc: StoreError) -> JSONResponse:
    # Driver detail is logged at the repository boundary, never returned
    logger.warning("store_error_response", path=request.url.path, error_type=type(exc).__name__)
    return _error_response(status.HTTP_503_SERVICE_UNAVAILABLE, "The catalog store is temporarily unavailable")


async def _unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("unhandled_error", path=request.url.path)
    return _error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, "An unexpected error occurred")


def create_app() -> FastAPI:
    app = FastAPI(
        title="Property Catalog",
        description="Real-estate listing catalog: filtered, paged queries and CRUD over properties, owners, images and sale traces.",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_allow_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(NotFoundError, _not_found_handler)
    app.add_exception_handler(InvalidArgumentError, _invalid_argument_handler)
    app.add_exception_handler(StoreError, _store_error_handler)
    app.add_exception_handler(Exception, _unhandled_error_handler)

    app.include_router(health.router)
    app.include_router(properties.router)
    app.include_router(owners.router)

    return app


app = create_app()
