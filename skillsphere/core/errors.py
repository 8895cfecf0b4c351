from __future__ import annotations

import logging
from typing import Any

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from skillsphere.parsing.extract import (
    DocumentExtractionError,
    ExtractionUnavailable,
    UnsupportedDocumentType,
)
from skillsphere.store.records import CircleFull, CircleNotFound, ProjectNotFound

logger = logging.getLogger(__name__)


def error_response(status_code: int, message: str, headers: dict[str, str] | None = None) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message}, headers=headers)


def _field_name(loc: tuple[Any, ...] | list[Any]) -> str:
    parts = [str(part) for part in loc if part not in {"body", "query", "path", "form"}]
    return ".".join(parts)


def validation_message(errors: list[dict[str, Any]]) -> str:
    if not errors:
        return "Invalid request."
    first = errors[0]
    field = _field_name(first.get("loc") or ())
    if first.get("type") == "missing":
        if not field:
            return "Request body is required."
        return f"Missing required field: {field}"
    if first.get("type") == "json_invalid":
        return "Request body must be valid JSON."
    message = str(first.get("msg") or "invalid value")
    if not field:
        return f"Invalid request: {message}"
    return f"Invalid value for {field}: {message}"


async def _http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    _ = request
    detail = exc.detail if isinstance(exc.detail, str) else "Request failed."
    return error_response(exc.status_code, detail, headers=getattr(exc, "headers", None))


async def _validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    message = validation_message(list(exc.errors()))
    logger.info("request_validation_failed path=%s error=%s", request.url.path, message)
    return error_response(status.HTTP_400_BAD_REQUEST, message)


async def _not_found_handler(request: Request, exc: Exception) -> JSONResponse:
    _ = request
    return error_response(status.HTTP_404_NOT_FOUND, str(exc))


async def _circle_full_handler(request: Request, exc: CircleFull) -> JSONResponse:
    _ = request
    return error_response(status.HTTP_400_BAD_REQUEST, str(exc))


async def _unsupported_document_handler(request: Request, exc: UnsupportedDocumentType) -> JSONResponse:
    _ = request
    return error_response(status.HTTP_415_UNSUPPORTED_MEDIA_TYPE, str(exc))


async def _extraction_failed_handler(request: Request, exc: DocumentExtractionError) -> JSONResponse:
    logger.warning("document_extraction_failed path=%s: %s", request.url.path, exc)
    return error_response(status.HTTP_422_UNPROCESSABLE_ENTITY, str(exc))


async def _extraction_unavailable_handler(request: Request, exc: ExtractionUnavailable) -> JSONResponse:
    logger.error("document_extraction_unavailable path=%s: %s", request.url.path, exc)
    return error_response(status.HTTP_503_SERVICE_UNAVAILABLE, str(exc))


async def _unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("unhandled_error path=%s: %s", request.url.path, exc)
    return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error")


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(StarletteHTTPException, _http_exception_handler)
    app.add_exception_handler(RequestValidationError, _validation_exception_handler)
    app.add_exception_handler(ProjectNotFound, _not_found_handler)
    app.add_exception_handler(CircleNotFound, _not_found_handler)
    app.add_exception_handler(CircleFull, _circle_full_handler)
    app.add_exception_handler(UnsupportedDocumentType, _unsupported_document_handler)
    app.add_exception_handler(DocumentExtractionError, _extraction_failed_handler)
    app.add_exception_handler(ExtractionUnavailable, _extraction_unavailable_handler)
    app.add_exception_handler(Exception, _unhandled_exception_handler)
