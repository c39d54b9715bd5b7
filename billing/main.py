"""FastAPI application factory."""

from __future__ import annotations

from fastapi import Depends, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from pydantic import ValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from .api.errors import (
    DOMAIN_ERRORS,
    APIError,
    api_error_handler,
    domain_error_handler,
    general_exception_handler,
    http_exception_handler,
    validation_error_handler,
)
from .api.middleware import LoggingMiddleware, RequestIDMiddleware
from .api.v1.router import create_v1_router
from .core.config import get_settings
from .core.logging import setup_logging
from .core.security import enforce_api_key
from .lifecycles import lifespan


def create_app() -> FastAPI:
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_json)

    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        lifespan=lifespan,
        dependencies=[Depends(enforce_api_key)],
    )

    app.add_middleware(LoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"]
    )

    app.add_exception_handler(APIError, api_error_handler)
    for error_type in DOMAIN_ERRORS:
        app.add_exception_handler(error_type, domain_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(ValidationError, validation_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, general_exception_handler)

    @app.get("/", include_in_schema=False)
    async def root(request: Request) -> dict:
        base_url = str(request.base_url).rstrip("/")
        return {
            "status": "available",
            "service": settings.app_name,
            "version": settings.app_version,
            "links": {
                "docs": f"{base_url}/docs",
                "health": f"{base_url}/v1/health",
                "invoices": f"{base_url}/v1/invoices",
                "quotations": f"{base_url}/v1/quotations",
            },
        }

    app.include_router(create_v1_router())
    return app
