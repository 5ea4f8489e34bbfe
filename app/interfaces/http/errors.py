"""Exception handlers mapping the error taxonomy onto JSON responses.

Every failure body carries a short ``error`` string. Outside production,
unexpected failures also expose the exception message and a traceback.
"""
from __future__ import annotations

import logging
import traceback
from typing import Any

from botocore.exceptions import BotoCoreError, ClientError
from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError, NoResultFound
from sqlalchemy.orm.exc import StaleDataError
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.core.config import Settings
from app.core.errors import AppError
from app.infrastructure.database import is_unique_violation

logger = logging.getLogger(__name__)


def _context(request: Request) -> dict[str, Any]:
    return {
        "method": request.method,
        "path": request.url.path,
        "account_id": getattr(request.state, "account_id", None),
    }


def _body(error: str, message: str | None = None, details: Any = None) -> dict[str, Any]:
    body: dict[str, Any] = {"error": error}
    if message and message != error:
        body["message"] = message
    if details is not None:
        body["details"] = details
    return body


def register_exception_handlers(app: FastAPI, settings: Settings) -> None:
    def _diagnostics(exc: Exception) -> dict[str, Any]:
        if settings.is_production:
            return {}
        return {
            "details": str(exc),
            "stack": "".join(traceback.format_exception(type(exc), exc, exc.__traceback__)),
        }

    @app.exception_handler(AppError)
    async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
        if exc.status_code >= 500:
            logger.error("%s: %s %s", exc.error, exc.message, _context(request), exc_info=exc)
            body = _body(exc.error, details=exc.details)
            body.update(_diagnostics(exc))
        else:
            logger.info("%s (%d): %s %s", exc.error, exc.status_code, exc.message, _context(request))
            body = _body(exc.error, exc.message, exc.details)
        return JSONResponse(status_code=exc.status_code, content=jsonable_encoder(body))

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        details = [
            {"field": ".".join(str(part) for part in err.get("loc", ())), "msg": err.get("msg")}
            for err in exc.errors()
        ]
        logger.info("Validation failed %s: %s", _context(request), details)
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=jsonable_encoder(_body("Validation Error", details=details)),
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        return JSONResponse(
            status_code=exc.status_code,
            content=_body(str(exc.detail)),
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(IntegrityError)
    async def integrity_error_handler(request: Request, exc: IntegrityError) -> JSONResponse:
        if is_unique_violation(exc):
            logger.info("Unique constraint violated %s", _context(request))
            return JSONResponse(
                status_code=status.HTTP_409_CONFLICT,
                content=_body("Duplicate Entry", details="A record with this value already exists"),
            )
        logger.error("Integrity constraint failed %s", _context(request), exc_info=exc)
        body = _body("Internal Server Error")
        body.update(_diagnostics(exc))
        return JSONResponse(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content=body)

    @app.exception_handler(NoResultFound)
    @app.exception_handler(StaleDataError)
    async def missing_row_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.info("Record vanished during request %s", _context(request))
        return JSONResponse(
            status_code=status.HTTP_404_NOT_FOUND,
            content=_body("Not Found", details="The requested resource was not found"),
        )

    @app.exception_handler(BotoCoreError)
    @app.exception_handler(ClientError)
    async def storage_error_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.error("Storage backend failure %s", _context(request), exc_info=exc)
        body = _body("Storage Error", details="Failed to process file storage operation")
        body.update({k: v for k, v in _diagnostics(exc).items() if k == "stack"})
        return JSONResponse(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content=body)

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.error("Unhandled exception %s", _context(request), exc_info=exc)
        body = _body("Internal Server Error")
        body.update(_diagnostics(exc))
        return JSONResponse(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content=body)


__all__ = ["register_exception_handlers"]
