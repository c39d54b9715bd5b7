"""Error envelope and exception handlers."""

from __future__ import annotations

from typing import Any, Dict, Optional, Tuple, Type

import structlog
from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import ValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from ..services.documents import (
    ChargeNotFoundError,
    DocumentNotFoundError,
    LastLineItemError,
    LineItemNotFoundError,
)

logger = structlog.get_logger(__name__)


class APIError(Exception):
    """Base API error with error envelope"""

    def __init__(
        self,
        code: str,
        message: str,
        status_code: int = 400,
        details: Optional[Dict[str, Any]] = None
    ):
        self.code = code
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        super().__init__(message)


DOMAIN_ERRORS: Dict[Type[Exception], Tuple[str, int, str]] = {
    DocumentNotFoundError: ("DOCUMENT_NOT_FOUND", status.HTTP_404_NOT_FOUND, "Document not found"),
    LineItemNotFoundError: ("LINE_ITEM_NOT_FOUND", status.HTTP_404_NOT_FOUND, "Line item not found"),
    ChargeNotFoundError: ("CHARGE_NOT_FOUND", status.HTTP_404_NOT_FOUND, "Additional charge not found"),
    LastLineItemError: (
        "LAST_LINE_ITEM",
        status.HTTP_409_CONFLICT,
        "A document must keep at least one line item",
    ),
}


def _request_id(request: Request) -> str:
    return getattr(request.state, "request_id", "unknown")


def create_error_response(
    code: str,
    message: str,
    request_id: str,
    details: Optional[Dict[str, Any]] = None,
    status_code: int = 400
) -> JSONResponse:
    """Create standardized error response"""
    return JSONResponse(
        status_code=status_code,
        content={
            "error": {
                "code": code,
                "message": message,
                "request_id": request_id,
                "details": details or {}
            }
        }
    )


async def api_error_handler(request: Request, exc: APIError) -> JSONResponse:
    request_id = _request_id(request)
    logger.warning(
        "api_error",
        code=exc.code,
        message=exc.message,
        request_id=request_id,
        path=request.url.path
    )
    return create_error_response(
        code=exc.code,
        message=exc.message,
        request_id=request_id,
        details=exc.details,
        status_code=exc.status_code
    )


def _error_details(exc: Exception) -> Dict[str, Any]:
    if isinstance(exc, DocumentNotFoundError):
        return {"kind": exc.kind.value, "id": exc.document_id}
    return {"id": exc.args[0] if exc.args else None}


async def domain_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """Map document lifecycle errors onto the envelope."""
    code, status_code, message = DOMAIN_ERRORS[type(exc)]
    request_id = _request_id(request)
    logger.info("domain_error", code=code, detail=str(exc), request_id=request_id, path=request.url.path)
    return create_error_response(
        code=code,
        message=message,
        request_id=request_id,
        details=_error_details(exc),
        status_code=status_code,
    )


async def validation_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle request and payload validation errors"""
    request_id = _request_id(request)
    errors = exc.errors(include_url=False) if isinstance(exc, ValidationError) else exc.errors()

    logger.warning(
        "validation_error",
        error_count=len(errors),
        request_id=request_id,
        path=request.url.path
    )

    return create_error_response(
        code="VALIDATION_ERROR",
        message="Request validation failed",
        request_id=request_id,
        details={"errors": jsonable_errors(errors)},
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY
    )


def jsonable_errors(errors: Any) -> Any:
    # pydantic puts the raw exception in ctx for custom validators.
    cleaned = []
    for error in errors:
        error = dict(error)
        if "ctx" in error:
            error["ctx"] = {key: str(value) for key, value in error["ctx"].items()}
        cleaned.append(error)
    return cleaned


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Handle HTTP exceptions"""
    request_id = _request_id(request)

    logger.warning(
        "http_exception",
        status_code=exc.status_code,
        detail=exc.detail,
        request_id=request_id,
        path=request.url.path
    )

    return create_error_response(
        code="HTTP_ERROR",
        message=str(exc.detail),
        request_id=request_id,
        status_code=exc.status_code
    )


async def general_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle unexpected exceptions"""
    request_id = _request_id(request)

    logger.error(
        "unhandled_exception",
        exc_info=exc,
        request_id=request_id,
        path=request.url.path
    )

    return create_error_response(
        code="INTERNAL_ERROR",
        message="An internal error occurred",
        request_id=request_id,
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR
    )
