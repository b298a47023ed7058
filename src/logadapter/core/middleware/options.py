# src/logadapter/core/middleware/options.py
"""
Options for request-logging middleware.

A middleware instance is configured once, at setup time, with three hooks:

  - filter_rpc(context, full_method, error) -> bool
        log this RPC call? (False suppresses it)
  - filter_http(request) -> bool
        log this HTTP request?
  - error_handler(context, error, method) -> bool
        True when the error was already reported, so the middleware's own
        error logging is skipped.

Callers override only the hooks they care about:

    options = build_options(
        with_http_filter(lambda request: request.url.path != "/metrics"),
        with_error_handler(report_to_sentry),
    )

build_options starts from a fresh default MiddlewareOptions on every call and
applies the mutators in order; later mutators win. The result is frozen and
can be shared between requests and threads.

The defaults keep health checks and gRPC reflection out of the logs and let
every error through to the middleware's generic error logging.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from starlette.requests import Request

HEALTH_RPC_PREFIX = "/grpc.health"
REFLECTION_RPC_PREFIX = "/grpc.reflection"
HEALTH_HTTP_PREFIX = "/health"

# Logging filters
FilterRPC = Callable[[Any, str, BaseException | None], bool]
FilterHTTP = Callable[[Request], bool]
# ErrorHandler should return True if the error provided has already been logged
ErrorHandler = Callable[[Any, BaseException, str], bool]


def default_filter_rpc(context: Any, full_method: str, error: BaseException | None) -> bool:
    """Skip gRPC health checks and server reflection; log everything else."""
    if full_method.startswith(HEALTH_RPC_PREFIX):
        return False
    if full_method.startswith(REFLECTION_RPC_PREFIX):
        return False
    return True


def default_filter_http(request: Request) -> bool:
    """Skip /health (and anything below it); log everything else."""
    return not request.url.path.startswith(HEALTH_HTTP_PREFIX)


def default_error_handler(context: Any, error: BaseException, method: str) -> bool:
    return False


class MiddlewareOptions(BaseModel):
    """Resolved, read-only hook set consulted by the middleware on every call."""

    model_config = ConfigDict(frozen=True)

    filter_rpc: FilterRPC = Field(default=default_filter_rpc)
    filter_http: FilterHTTP = Field(default=default_filter_http)
    error_handler: ErrorHandler = Field(default=default_error_handler)


MiddlewareOption = Callable[[MiddlewareOptions], MiddlewareOptions]


def build_options(*opts: MiddlewareOption) -> MiddlewareOptions:
    """
    Resolve middleware options from the defaults plus `opts`, applied in order.

    Mutator output is not validated; whatever callable a mutator installs is used.
    """
    resolved = MiddlewareOptions()
    for opt in opts:
        resolved = opt(resolved)
    return resolved


# WithRPCFilter-style mutators. model_copy skips validation and leaves the input untouched.

def with_rpc_filter(f: FilterRPC) -> MiddlewareOption:
    """Provide the filter deciding whether an individual RPC call is logged."""
    def apply(o: MiddlewareOptions) -> MiddlewareOptions:
        return o.model_copy(update={"filter_rpc": f})
    return apply


def with_http_filter(f: FilterHTTP) -> MiddlewareOption:
    """Provide the filter deciding whether an individual HTTP request is logged."""
    def apply(o: MiddlewareOptions) -> MiddlewareOptions:
        return o.model_copy(update={"filter_http": f})
    return apply


def with_error_handler(h: ErrorHandler) -> MiddlewareOption:
    def apply(o: MiddlewareOptions) -> MiddlewareOptions:
        return o.model_copy(update={"error_handler": h})
    return apply


__all__ = [
    "FilterRPC",
    "FilterHTTP",
    "ErrorHandler",
    "MiddlewareOptions",
    "MiddlewareOption",
    "build_options",
    "with_rpc_filter",
    "with_http_filter",
    "with_error_handler",
    "default_filter_rpc",
    "default_filter_http",
    "default_error_handler",
]
