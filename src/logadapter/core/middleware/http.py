# src/logadapter/core/middleware/http.py
"""
Request-logging middleware for FastAPI / Starlette.

For every request the middleware:

1. Reads `X-Request-ID`, or generates a UUID4 when the header is absent.
2. Derives a per-request logger, `logger.with_values("request_id", rid)`, and
   stores it on `request.state.logger`. Handlers fetch it with
   `get_request_logger(request)` so their own lines carry the same id.
   Adapter loggers are immutable, so the derived logger belongs to this
   request only and nothing has to be reset afterwards.
3. Calls the downstream app and times it.
4. Consults the resolved MiddlewareOptions:
     - `filter_http(request)` False: nothing is logged for this request
       (health checks by default).
     - downstream raised: `error_handler(request, exc, "<METHOD> <path>")`
       decides whether the error was already reported; if not, one ERROR line
       is written. The exception is always re-raised.
5. Sets `X-Request-ID` on the response.

Register it early, before routers that log:

    app.add_middleware(RequestLoggingMiddleware, logger=adapter, options=build_options())
"""

import time
import uuid

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.types import ASGIApp

from logadapter.core.logging.adapter import Logger
from logadapter.core.logging.levels import Level
from .options import MiddlewareOptions, build_options

REQUEST_ID_HEADER = "X-Request-ID"


def get_request_logger(request: Request, default: Logger | None = None) -> Logger | None:
    """Return the per-request logger set by RequestLoggingMiddleware, or `default`."""
    return getattr(request.state, "logger", default)


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """
    Starlette / FastAPI middleware writing one key/value log line per request.

    Args:
        app: the wrapped ASGI app.
        logger: adapter the per-request loggers are derived from.
        options: resolved MiddlewareOptions; defaults to build_options().
    """

    def __init__(self, app: ASGIApp, logger: Logger, options: MiddlewareOptions | None = None):
        super().__init__(app)
        self.logger = logger
        self.options = options if options is not None else build_options()

    async def dispatch(self, request: Request, call_next):
        rid = request.headers.get(REQUEST_ID_HEADER) or str(uuid.uuid4())
        request_logger = self.logger.with_values("request_id", rid)
        request.state.logger = request_logger

        method = f"{request.method} {request.url.path}"
        start = time.perf_counter()
        try:
            response = await call_next(request)
        except Exception as exc:
            duration_ms = round((time.perf_counter() - start) * 1000, 3)
            # Filtered requests never reach the error handler.
            if self.options.filter_http(request) and not self.options.error_handler(request, exc, method):
                request_logger.log(
                    "msg", "request failed",
                    "http.method", request.method,
                    "http.path", request.url.path,
                    "duration_ms", duration_ms,
                    "error", str(exc),
                    "error_type", type(exc).__name__,
                    severity=Level.ERROR,
                )
            raise

        duration_ms = round((time.perf_counter() - start) * 1000, 3)
        if self.options.filter_http(request):
            request_logger.log(
                "msg", "finished call",
                "http.method", request.method,
                "http.path", request.url.path,
                "http.status", response.status_code,
                "duration_ms", duration_ms,
                severity=Level.ERROR if response.status_code >= 500 else Level.INFO,
            )

        response.headers[REQUEST_ID_HEADER] = rid
        return response


__all__ = ["RequestLoggingMiddleware", "get_request_logger", "REQUEST_ID_HEADER"]
