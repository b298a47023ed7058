
# logadapter/
# │
# ├── exceptions/
# │   ├── __init__.py
# │   └── base.py          # LogAdapterError, CopyError

from .base import LogAdapterError, CopyError

__all__ = ["LogAdapterError", "CopyError"]
