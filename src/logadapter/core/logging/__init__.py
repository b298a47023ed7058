# src/logadapter/core/logging/
# ├─ __init__.py            # public API
# ├─ levels.py              # Level enum + parse_level
# ├─ adapter.py             # Logger (key/value adapter), new_stackdriver_logger, with_values
# ├─ formatters.py          # StackdriverFormatter, ColorFormatter
# ├─ filters.py             # RedactFilter
# ├─ handlers.py            # dictConfig handler factories (console/file)
# └─ builder.py             # make_dict_config(settings), setup_logging(settings), new_logger_from_settings


from .levels import Level, parse_level
from .adapter import Logger, MISSING_VALUE, new_stackdriver_logger, with_values
from .formatters import StackdriverFormatter, ColorFormatter
from .filters import RedactFilter
from .builder import setup_logging, make_dict_config, new_logger_from_settings

__all__ = [
    "Level", "parse_level",
    "Logger", "MISSING_VALUE", "new_stackdriver_logger", "with_values",
    "StackdriverFormatter", "ColorFormatter", "RedactFilter",
    "setup_logging", "make_dict_config", "new_logger_from_settings",
]
