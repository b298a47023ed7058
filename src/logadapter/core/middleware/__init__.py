# src/logadapter/core/middleware/
# ├─ __init__.py            # public API
# ├─ options.py             # MiddlewareOptions, build_options, with_* mutators, default filters
# ├─ http.py                # RequestLoggingMiddleware (Starlette)
# └─ rpc.py                 # log_rpc_call for RPC interceptors


from .options import (
    MiddlewareOptions,
    build_options,
    with_rpc_filter,
    with_http_filter,
    with_error_handler,
    default_filter_rpc,
    default_filter_http,
    default_error_handler,
)
from .http import RequestLoggingMiddleware, get_request_logger
from .rpc import log_rpc_call

__all__ = [
    "MiddlewareOptions", "build_options",
    "with_rpc_filter", "with_http_filter", "with_error_handler",
    "default_filter_rpc", "default_filter_http", "default_error_handler",
    "RequestLoggingMiddleware", "get_request_logger", "log_rpc_call",
]
