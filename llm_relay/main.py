"""
LLM Relay FastAPI Application

This is the main FastAPI application factory.
It sets up the app, middleware, error handlers, static files and routes.
"""

import logging
from pathlib import Path
from typing import Optional

import httpx
from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exception_handlers import http_exception_handler, request_validation_exception_handler
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException

from .config import Settings, get_settings
from .exceptions import NotFoundError, UpstreamError
from .middleware.request_logging import RequestLoggingMiddleware
from .services import ContextStore, RelayService
from .utils.relay_logger import RelayLogger
from .web.routes import router as api_router

logger = logging.getLogger(__name__)


def create_app(
    settings: Optional[Settings] = None,
    context_store: Optional[ContextStore] = None,
    relay_logger: Optional[RelayLogger] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> FastAPI:
    """
    Build a fully wired relay application

    Args:
        settings: Configuration, defaults to the environment
        context_store: Store for dog context records, a fresh one by default
        relay_logger: Request logger, built from settings.log_file by default
        transport: httpx transport for upstream calls (tests inject fakes)
    """
    settings = settings or get_settings()
    relay_logger = relay_logger or RelayLogger(settings.log_file)

    app = FastAPI(
        title="LLM Relay API",
        version="0.1.0",
        description="Relays chat completions to OpenAI or Anthropic and stores per-session dog context"
    )

    app.state.settings = settings
    app.state.relay_logger = relay_logger
    app.state.context_store = context_store if context_store is not None else ContextStore()
    app.state.relay_service = RelayService(settings, relay_logger, transport=transport)

    # Request logging runs inside CORS so preflight responses are logged too
    app.add_middleware(RequestLoggingMiddleware, relay_logger=relay_logger, debug=settings.debug)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(UpstreamError)
    async def upstream_error_handler(request: Request, exc: UpstreamError):
        return JSONResponse(
            status_code=500,
            content={"error": "Failed to process request", "details": exc.details}
        )

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        """An unparseable relay body fails like any other relay request"""
        if request.url.path == "/api/llm":
            return JSONResponse(
                status_code=500,
                content={"error": "Failed to process request", "details": jsonable_encoder(exc.errors())}
            )
        return await request_validation_exception_handler(request, exc)

    @app.exception_handler(NotFoundError)
    async def not_found_error_handler(request: Request, exc: NotFoundError):
        return JSONResponse(status_code=404, content={"error": exc.message})

    @app.exception_handler(StarletteHTTPException)
    async def endpoint_not_found_handler(request: Request, exc: StarletteHTTPException):
        """Any unmatched method/path answers 404 Endpoint not found"""
        if exc.status_code in (404, 405):
            relay_logger.log_not_found(
                request.method,
                str(request.url),
                getattr(request.state, "request_id", None)
            )
            return JSONResponse(status_code=404, content={"error": "Endpoint not found"})
        return await http_exception_handler(request, exc)

    # Include API routes
    app.include_router(api_router)

    # Static files setup; the root mount goes last so API routes win
    static_dir = Path(settings.static_dir)
    assets_dir = static_dir / "assets"
    if assets_dir.is_dir():
        app.mount("/assets", StaticFiles(directory=assets_dir), name="assets")
    if static_dir.is_dir():
        app.mount("/", StaticFiles(directory=static_dir), name="static")
    else:
        logger.warning(f"Static directory {static_dir} not found; static files disabled")

    relay_logger.info(
        "SERVER",
        "Application configured",
        provider=app.state.relay_service.kind.value,
        log_file=settings.log_file,
    )
    return app
