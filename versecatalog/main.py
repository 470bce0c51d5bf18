from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

from fastapi import FastAPI, HTTPException
from fastapi.exceptions import RequestValidationError

from versecatalog.config import AppConfig, load_config
from versecatalog.http.problem import (
    handle_catalog_error,
    handle_http_exception,
    handle_request_validation_error,
    handle_unexpected_error,
)
from versecatalog.http.request_id import RequestIdMiddleware
from versecatalog.logging_setup import configure_logging
from versecatalog.logic.backend import ResourceBackend
from versecatalog.logic.errors import CatalogError
from versecatalog.logic.http_backend import HttpResourceBackend
from versecatalog.logic.inmemory_backend import InMemoryBackend
from versecatalog.logic.operation_guard import OperationGuard
from versecatalog.middleware.cors import apply_cors
from versecatalog.routes import api_router
from versecatalog.routes.test_support import router as test_support_router

logger = logging.getLogger(__name__)


def build_backend(config: AppConfig) -> ResourceBackend:
    """Return the backend selected by ``config.backend.mode``."""
    if config.backend.mode == "http":
        logger.info(
            "backend=http base_url=%s api_prefix=%s timeout=%s",
            config.backend.base_url,
            config.backend.api_prefix,
            config.backend.timeout_seconds,
        )
        return HttpResourceBackend(config.backend)
    logger.info("backend=memory")
    return InMemoryBackend()


def create_app(
    backend: Optional[ResourceBackend] = None,
    config: Optional[AppConfig] = None,
) -> FastAPI:
    """Build the FastAPI application.

    ``backend`` overrides the configured one; tests pass an
    ``InMemoryBackend`` they have already seeded.
    """
    config = config or load_config()
    # Configure global logging before app instantiation so all modules emit
    configure_logging(config.log_level)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        yield
        closer = getattr(app.state.backend, "aclose", None)
        if closer is not None:
            await closer()

    app = FastAPI(title="Verse Catalog", lifespan=lifespan)
    app.state.config = config
    app.state.backend = backend if backend is not None else build_backend(config)
    app.state.guard = OperationGuard()

    app.add_exception_handler(CatalogError, handle_catalog_error)
    app.add_exception_handler(HTTPException, handle_http_exception)
    app.add_exception_handler(RequestValidationError, handle_request_validation_error)
    app.add_exception_handler(Exception, handle_unexpected_error)
    app.add_middleware(RequestIdMiddleware)
    apply_cors(app, origins=config.cors_origins)

    # Routers
    app.include_router(api_router, prefix="/api/v1")
    # Test-support routes sit outside the API prefix
    app.include_router(test_support_router)

    # Health endpoint sits outside the API prefix
    @app.get("/health")
    def health() -> dict:
        return {"status": "ok", "backend": config.backend.mode if backend is None else type(backend).__name__}

    return app

