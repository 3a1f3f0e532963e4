"""Domain errors and the exception handlers that turn them into JSON responses.

Every failure response carries at least an ``error`` message.
"""
import logging
from typing import Any, Dict

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException

logger = logging.getLogger(__name__)


class InventoryError(Exception):
    """Base class for errors raised by the inventory services."""


class NotFoundError(InventoryError):
    def __init__(self, entity: str, key: str, **extra: Any):
        self.entity = entity
        self.key = key
        self.extra = extra
        super().__init__(f"{entity} not found")


class PartialWriteError(InventoryError):
    """Raised when a transaction persisted fewer rows than it was asked to."""

    def __init__(self, expected: int, actual: int):
        self.expected = expected
        self.actual = actual
        super().__init__(f"Expected {expected} inventory codes, found {actual}")


def _store_error_body(exc: SQLAlchemyError) -> Dict[str, Any]:
    orig = getattr(exc, "orig", None)
    body: Dict[str, Any] = {"error": str(orig) if orig is not None else str(exc)}
    # psycopg2 exposes PostgreSQL diagnostics on `diag`
    diag = getattr(orig, "diag", None)
    if diag is not None:
        detail = getattr(diag, "message_detail", None)
        hint = getattr(diag, "message_hint", None)
        if detail:
            body["detail"] = detail
        if hint:
            body["hint"] = hint
    return body


def setup_exception_handlers(app: FastAPI) -> None:

    @app.exception_handler(HTTPException)
    async def http_exception_handler(request: Request, exc: HTTPException):
        if isinstance(exc.detail, dict) and "error" in exc.detail:
            content = exc.detail
        else:
            content = {"error": str(exc.detail)}
        return JSONResponse(status_code=exc.status_code, content=content, headers=exc.headers)

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"error": "Invalid request", "details": jsonable_encoder(exc.errors())},
        )

    @app.exception_handler(NotFoundError)
    async def not_found_handler(request: Request, exc: NotFoundError):
        return JSONResponse(
            status_code=status.HTTP_404_NOT_FOUND,
            content={"error": str(exc), **exc.extra},
        )

    @app.exception_handler(InventoryError)
    async def inventory_error_handler(request: Request, exc: InventoryError):
        logger.error("%s %s failed: %s", request.method, request.url.path, exc)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": str(exc)},
        )

    @app.exception_handler(SQLAlchemyError)
    async def store_error_handler(request: Request, exc: SQLAlchemyError):
        logger.exception("Store error during %s %s", request.method, request.url.path)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=_store_error_body(exc),
        )
