"""
Request logging middleware

Logs a start line for each request and, once the response is ready, a
completion line with status and elapsed time.
"""

import time
import uuid
import logging
from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import JSONResponse
from starlette.types import ASGIApp
from ..utils.relay_logger import RelayLogger

logger = logging.getLogger(__name__)


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Middleware to log every request/response with duration"""

    def __init__(self, app: ASGIApp, relay_logger: RelayLogger, debug: bool = False):
        super().__init__(app)
        self.relay_logger = relay_logger
        self.debug = debug

    async def dispatch(self, request: Request, call_next):
        request.state.start_time = time.perf_counter()
        request.state.request_id = str(uuid.uuid4())[:8]

        method = request.method
        url = str(request.url)

        self.relay_logger.log_request_start(request.state.request_id, method, url, request.headers)

        if self.debug:
            logger.debug(f"Calling next middleware/route for {request.url.path} [{request.state.request_id}]")

        try:
            response = await call_next(request)
        except Exception as e:
            self.relay_logger.log_response_error(request.state.request_id, method, url, e)
            logger.exception(f"Unhandled exception for {request.url.path}")
            return JSONResponse(
                status_code=500,
                content={"error": "Internal server error", "path": str(request.url.path)}
            )

        total_time_ms = (time.perf_counter() - request.state.start_time) * 1000
        if self.debug:
            logger.debug(f"Got response for {request.url.path} in {total_time_ms:.3f}ms")
        self.relay_logger.log_request_finish(
            request.state.request_id, method, url, response.status_code, total_time_ms
        )
        return response
