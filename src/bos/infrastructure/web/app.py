"""FastAPI application factory.

Run with ``bos serve`` or
``uvicorn --factory bos.infrastructure.web.app:create_app``.
"""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError

from bos.domain.exceptions import ConflictError
from bos.infrastructure.bootstrap import Container, default_container
from bos.infrastructure.web.book_routes import author_router, book_router
from bos.infrastructure.web.order_routes import order_router
from bos.infrastructure.web.responses import error_response

logger = logging.getLogger(__name__)


def _field_errors(exc: RequestValidationError) -> list[str]:
    errors = []
    for error in exc.errors():
        location = [str(part) for part in error.get("loc", ()) if part != "body"]
        field = ".".join(location) or "body"
        errors.append(f"{field} {error.get('msg', 'incorrect input data')}")
    return errors


def create_app(container: Container | None = None) -> FastAPI:
    container = container or default_container()
    container.init_schema()

    app = FastAPI(
        title="BOS - Bookstore Order System",
        description="Catalog, order placement and order lifecycle",
        version="1.0.0",
    )
    app.state.container = container

    app.include_router(order_router)
    app.include_router(book_router)
    app.include_router(author_router)

    @app.exception_handler(RequestValidationError)
    async def handle_validation_error(request: Request, exc: RequestValidationError):
        return error_response(400, _field_errors(exc))

    @app.exception_handler(ConflictError)
    async def handle_conflict(request: Request, exc: ConflictError):
        logger.warning("%s %s -> 409: %s", request.method, request.url.path, exc)
        return error_response(409, str(exc))

    @app.exception_handler(Exception)
    async def handle_unexpected(request: Request, exc: Exception):
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return error_response(500, "Internal server error")

    @app.get("/health")
    def health_check():
        return {"status": "healthy"}

    logger.info("Application ready")
    return app
