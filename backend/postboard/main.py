"""
Postboard API: FastAPI Application Factory
===========================================

What:  Creates and configures the FastAPI application instance.
How:   create_app() wires middleware, exception handlers and routers, all
       mounted under settings.api_prefix.
Who:   uvicorn (`python -m postboard` or `uvicorn postboard.main:app`) and tests.

Application Architecture:
    ┌──────────────────────────────────────────────────────┐
    │                    FastAPI App                       │
    │                                                      │
    │  Middleware Chain:                                   │
    │  ┌──────────┐ ┌──────────────┐ ┌──────────────────┐  │
    │  │  Req ID  │→│ Access log   │→│  CORS            │  │
    │  └──────────┘ └──────────────┘ └──────────────────┘  │
    │                                                      │
    │  Routes (under /v1):                                 │
    │  ┌────────┐ ┌────────┐ ┌────────┐ ┌──────────┐       │
    │  │   /    │ │ /users │ │ /posts │ │ /_health │       │
    │  └────────┘ └────────┘ └────────┘ └──────────┘       │
    │                                                      │
    │  Exception Handlers:                                 │
    │  ┌────────────────────────────────────────────────┐  │
    │  │ Validation→400 │ PostboardError→own status     │  │
    │  │ HTTPException→own status │ Exception→500       │  │
    │  └────────────────────────────────────────────────┘  │
    └──────────────────────────────────────────────────────┘

Error body:
    {"error": "<status title>", "message": "...", "details": [...]?}
    Unmatched routes add "path"; 500s outside production add "stack".
"""

import logging
import sys
import traceback
from contextlib import asynccontextmanager
from http import HTTPStatus
from typing import Any, AsyncGenerator, Dict, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import ValidationError as PydanticValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from postboard import __version__
from postboard.config import settings
from postboard.exceptions import PostboardError, ValidationError
from postboard.middleware.logging import RequestLoggingMiddleware
from postboard.middleware.request_id import REQUEST_ID_HEADER, RequestIDMiddleware, request_id_var
from postboard.routes import health, index, posts, users
from postboard.schemas.common import validation_details

logger = logging.getLogger(__name__)


def setup_logging() -> None:
    """
    Configure the root logger once for the whole process.

    Format: %(asctime)s [%(levelname)s] %(name)s: %(message)s
    """
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )
    # The access middleware already logs every request
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.WARNING)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    setup_logging()
    logger.info("Postboard API starting up (environment=%s)", settings.environment)

    try:
        settings.validate_required_for_production()
    except ValueError as e:
        logger.error("Configuration error: %s", e)
        raise

    logger.info("Server ready at http://%s:%d%s", settings.host, settings.port, settings.api_prefix)
    logger.info("API docs: %s/docs", settings.api_prefix)

    yield

    logger.info("Postboard API shutting down.")


def _error_body(
    status_code: int,
    message: str,
    details: Optional[list] = None,
    error: Optional[str] = None,
    **extra: Any,
) -> Dict[str, Any]:
    body: Dict[str, Any] = {"error": error or HTTPStatus(status_code).phrase, "message": message}
    if details:
        body["details"] = details
    body.update(extra)
    return body


def register_exception_handlers(app: FastAPI) -> None:
    """
    Map exceptions to status codes and the shared error body.

    Handler hierarchy:
        RequestValidationError / pydantic ValidationError → 400 with details
        ValidationError (app)                             → 400 with details
        PostboardError subclasses                         → their status_code
        Starlette HTTPException                           → its status (404 adds path)
        Exception (fallback)                              → 500, stack outside production
    """

    def _validation_response(details: list) -> JSONResponse:
        logger.warning(
            "[%s] Validation error: %s",
            request_id_var.get(""),
            ", ".join(d["path"] or "<root>" for d in details),
        )
        return JSONResponse(
            status_code=400,
            content=_error_body(400, "Invalid request data", details, error=ValidationError.error),
        )

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation_error(request: Request, exc: RequestValidationError):
        return _validation_response(validation_details(exc.errors()))

    @app.exception_handler(PydanticValidationError)
    async def handle_pydantic_validation_error(request: Request, exc: PydanticValidationError):
        return _validation_response(validation_details(exc.errors()))

    @app.exception_handler(ValidationError)
    async def handle_validation_error(request: Request, exc: ValidationError):
        return _validation_response(exc.details)

    @app.exception_handler(PostboardError)
    async def handle_postboard_error(request: Request, exc: PostboardError):
        logger.warning(
            "[%s] %s: %s | Context: %s",
            request_id_var.get(""),
            type(exc).__name__,
            exc.message,
            exc.context,
        )
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": exc.error, "message": exc.message},
        )

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_exception(request: Request, exc: StarletteHTTPException):
        rid = request_id_var.get("")
        if exc.status_code == 404:
            logger.warning("[%s] Route not found: %s %s", rid, request.method, request.url.path)
            body = _error_body(404, "Route not found", path=request.url.path)
        else:
            logger.warning("[%s] HTTP %d: %s", rid, exc.status_code, exc.detail)
            body = _error_body(exc.status_code, str(exc.detail))
        return JSONResponse(status_code=exc.status_code, content=body, headers=exc.headers)

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        rid = request_id_var.get("")
        logger.error("[%s] Unexpected error: %s", rid, exc, exc_info=exc)

        extra = {}
        if not settings.is_production:
            extra["stack"] = "".join(
                traceback.format_exception(type(exc), exc, exc.__traceback__)
            )
        return JSONResponse(
            status_code=500,
            content=_error_body(500, "An unexpected error occurred", **extra),
        )


def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.

    Returns: a fresh app; tests build their own and override dependencies on it.
    """
    prefix = settings.api_prefix
    app = FastAPI(
        title="Postboard API",
        description="Users and posts with token-protected profile reads.",
        version=__version__,
        docs_url=f"{prefix}/docs",
        redoc_url=f"{prefix}/redoc",
        openapi_url=f"{prefix}/openapi.json",
        lifespan=lifespan,
    )

    # Starlette runs the last-added middleware first
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=[REQUEST_ID_HEADER],
    )
    app.add_middleware(RequestLoggingMiddleware, skip_paths=(f"{prefix}{health.HEALTH_PATH}",))
    app.add_middleware(RequestIDMiddleware)

    register_exception_handlers(app)

    app.include_router(index.router, prefix=prefix)
    app.include_router(users.router, prefix=prefix)
    app.include_router(posts.router, prefix=prefix)
    app.include_router(health.router, prefix=prefix)

    return app


app = create_app()
