"""
lazycell

Thread-safe lazily loaded values with optional preloading and TTL expiration.
"""

from .core.context import (
    LoadContext,
    background,
    with_cancel,
    with_deadline,
    with_timeout,
    with_value,
)
from .domain.interfaces import Lazy, LazyFunc
from .domain.value_objects import TTL, CellMetrics, CellOptions
from .exceptions import (
    LazyCellException,
    InvalidTTLException,
    InvalidLoaderException,
    ContextCancelledException,
    DeadlineExceededException,
)
from .services.factory import (
    with_loader,
    with_loader_ttl,
    preloaded,
    preloaded_ttl,
    static,
    new_cell,
    lazy_func_for,
)
from .services.loader_cell import LoaderCell
from .services.static_cell import StaticCell

__version__ = "0.1.0"

__all__ = [
    "Lazy",
    "LazyFunc",
    "LoaderCell",
    "StaticCell",
    "TTL",
    "CellMetrics",
    "CellOptions",
    "LoadContext",
    "background",
    "with_cancel",
    "with_deadline",
    "with_timeout",
    "with_value",
    "with_loader",
    "with_loader_ttl",
    "preloaded",
    "preloaded_ttl",
    "static",
    "new_cell",
    "lazy_func_for",
    "LazyCellException",
    "InvalidTTLException",
    "InvalidLoaderException",
    "ContextCancelledException",
    "DeadlineExceededException",
]
