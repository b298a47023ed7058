# src/logadapter/core/middleware/rpc.py
"""
Framework-agnostic RPC call logging.

RPC servers differ in how interceptors are wired, so this module stops at the
decision and the log line: an interceptor calls `log_rpc_call` once a call has
finished, with whatever context object its framework hands it.

    def intercept(context, full_method, handler, request):
        start = time.perf_counter()
        error = None
        try:
            return handler(request, context)
        except Exception as exc:
            error = exc
            raise
        finally:
            log_rpc_call(logger, options, context, full_method, error,
                         duration_ms=(time.perf_counter() - start) * 1000)
"""

from typing import Any

from logadapter.core.logging.adapter import Logger
from logadapter.core.logging.levels import Level
from .options import MiddlewareOptions


def split_full_method(full_method: str) -> tuple[str, str]:
    """
    "/pkg.Service/Method" -> ("pkg.Service", "Method").
    Malformed names come back as ("unknown", <input without leading slash>).
    """
    name = full_method.lstrip("/")
    service, sep, method = name.rpartition("/")
    if not sep or not service:
        return "unknown", name
    return service, method


def log_rpc_call(
    logger: Logger,
    options: MiddlewareOptions,
    context: Any,
    full_method: str,
    error: BaseException | None = None,
    duration_ms: float | None = None,
) -> bool:
    """
    Log one finished RPC call if the options allow it.

    Returns True when a line was written. An error the error_handler reports
    as already handled still counts as a finished call but is logged at INFO
    without the error fields.
    """
    if not options.filter_rpc(context, full_method, error):
        return False

    service, method = split_full_method(full_method)
    keyvals: list[Any] = [
        "msg", "finished call",
        "rpc.service", service,
        "rpc.method", method,
    ]
    if duration_ms is not None:
        keyvals += ["duration_ms", round(duration_ms, 3)]

    severity = Level.INFO
    if error is not None and not options.error_handler(context, error, full_method):
        keyvals += ["error", str(error), "error_type", type(error).__name__]
        severity = Level.ERROR

    logger.log(*keyvals, severity=severity)
    return True


__all__ = ["log_rpc_call", "split_full_method"]
