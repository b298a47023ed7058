"""
Key/value structured logging on top of the stdlib `logging` module, plus
filter and error-handler hooks for request-logging middleware.

    from logadapter import Level, new_stackdriver_logger

    log = new_stackdriver_logger(sys.stdout, service="billing")
    log.log("msg", "invoice sent", "invoice_id", 42)
    log.log("msg", "upstream timed out", "severity", Level.ERROR)
"""

from .core.logging import Level, Logger, MISSING_VALUE, new_stackdriver_logger, with_values
from .core.middleware import MiddlewareOptions, build_options
from .exceptions import CopyError, LogAdapterError

__all__ = [
    "Level",
    "Logger",
    "MISSING_VALUE",
    "new_stackdriver_logger",
    "with_values",
    "MiddlewareOptions",
    "build_options",
    "CopyError",
    "LogAdapterError",
]
