"""
Loader Cell

The deferred cache cell: holds one value produced by a loader, caches it,
optionally expires it after a TTL, and serializes all access behind one lock.

The lock is held for the whole loader call. Concurrent callers therefore
queue up behind the first one and share its result, so at most one load per
cell is ever in flight. A slow loader blocks every caller of that cell.
"""

import threading
import time
from dataclasses import replace
from typing import Any, Callable, Optional, Tuple

import structlog

from ..core.context import LoadContext, background
from ..core.telemetry import load_span
from ..domain.interfaces import Lazy, LazyFunc, T
from ..domain.value_objects import TTL, CellMetrics
from ..exceptions import InvalidLoaderException

logger = structlog.get_logger(__name__)

_UNSET: Any = object()


class LoaderCell(Lazy[T]):
    """
    Lazy value backed by a loader function.

    Args:
        loader: Called as ``loader(ctx, *args)`` to produce the value
        args: Fixed positional arguments forwarded to every loader call
        ttl: Expiration after each load, None to cache until clear()
        preload: Initial value; when given the cell starts loaded
        clock: Monotonic time source
        name: Label used in logs and spans
    """

    def __init__(
        self,
        loader: LazyFunc[T],
        args: Tuple[Any, ...] = (),
        ttl: Optional[TTL] = None,
        preload: Any = _UNSET,
        clock: Callable[[], float] = time.monotonic,
        name: Optional[str] = None,
    ):
        if not callable(loader):
            raise InvalidLoaderException(loader)

        self._loader = loader
        self._args = tuple(args)
        self._with_ttl = ttl is not None
        self._ttl = ttl if ttl is not None else TTL(0)
        self._clock = clock
        self._name = name or getattr(loader, "__qualname__", type(loader).__name__)
        self._lock = threading.Lock()
        self._metrics = CellMetrics()

        self._value: Optional[T] = None
        self._loaded = False
        self._last_load: Optional[float] = None

        if preload is not _UNSET:
            self._value = preload
            self._loaded = True
            self._last_load = clock()

    def value(self, *contexts: LoadContext) -> T:
        """
        Return the cached value, loading it if absent or expired.

        Raises:
            Exception: Whatever the loader raised, unchanged
        """
        with self._lock:
            needs_refresh = self._expired()

            if self._loaded and not needs_refresh:
                self._metrics.hits += 1
                return self._value

            ctx = contexts[0] if contexts else background()
            self._load(ctx, expired=needs_refresh)
            return self._value

    def _expired(self) -> bool:
        # caller holds self._lock
        return (
            self._with_ttl
            and self._last_load is not None
            and self._ttl.is_expired(self._clock() - self._last_load)
        )

    def _load(self, ctx: LoadContext, expired: bool) -> None:
        # caller holds self._lock
        started = self._clock()
        self._metrics.loads += 1
        # stays unloaded unless the loader returns, even on KeyboardInterrupt
        self._loaded = False

        try:
            with load_span(
                "lazycell.load",
                attributes={
                    "lazycell.cell": self._name,
                    "lazycell.args_count": len(self._args),
                    "lazycell.expired": expired,
                },
            ):
                try:
                    result = self._loader(ctx, *self._args)
                except Exception as e:
                    self._value = None
                    self._metrics.load_failures += 1
                    logger.warning(
                        "Loader failed",
                        cell=self._name,
                        error=str(e),
                        error_type=type(e).__name__,
                    )
                    raise

            self._value = result
            self._loaded = True
            logger.debug("Loaded value", cell=self._name, expired=expired)
        finally:
            now = self._clock()
            self._last_load = now
            self._metrics.last_load_duration = now - started

    def clear(self) -> None:
        """Mark the cell unloaded and forget when it last loaded."""
        with self._lock:
            self._loaded = False
            self._last_load = None
            self._metrics.clears += 1
        logger.debug("Cleared value", cell=self._name)

    @property
    def loaded(self) -> bool:
        """Check if the cell holds a successfully loaded value that has not expired."""
        with self._lock:
            return self._loaded and not self._expired()

    @property
    def ttl(self) -> Optional[TTL]:
        """TTL of the cell, None when expiration is disabled."""
        return self._ttl if self._with_ttl else None

    @property
    def metrics(self) -> CellMetrics:
        """Snapshot of the cell's counters."""
        with self._lock:
            return replace(self._metrics)

    def __repr__(self) -> str:
        return (
            f"LoaderCell(name={self._name!r}, loaded={self._loaded}, "
            f"ttl={self.ttl})"
        )
