"""
Load Contexts

Cancellation contexts handed to loaders. A context carries an optional
deadline, a cancellation signal and request-scoped values down a parent
chain. Cells only transport contexts; honouring them is up to the loader,
typically by calling ``ctx.raise_if_done()`` or ``ctx.wait(...)``.

Contexts are safe to share between threads. Deadlines are expressed on the
``time.monotonic()`` clock.
"""

import threading
import time
import weakref
from datetime import timedelta
from typing import Any, Callable, Optional, Tuple, Union

from ..exceptions import (
    ContextCancelledException,
    DeadlineExceededException,
    LazyCellException,
)

CancelFunc = Callable[[], None]


class LoadContext:
    """
    Base load context.

    Without a parent it is never cancelled, has no deadline and holds no
    values; with a parent it delegates every query upwards.
    """

    def __init__(self, parent: Optional["LoadContext"] = None):
        self._parent = parent

    def deadline(self) -> Optional[float]:
        """Monotonic time at which the context expires, if any."""
        if self._parent is None:
            return None
        return self._parent.deadline()

    def err(self) -> Optional[LazyCellException]:
        """Why the context is done, or None while it is still live."""
        if self._parent is None:
            return None
        return self._parent.err()

    def done(self) -> bool:
        """Check if the context is cancelled or past its deadline."""
        return self.err() is not None

    def value(self, key: Any, default: Any = None) -> Any:
        """Look up a value stored on this context or one of its ancestors."""
        if self._parent is None:
            return default
        return self._parent.value(key, default)

    def wait(self, timeout: Optional[float] = None) -> bool:
        """
        Block until the context is done or ``timeout`` seconds have passed.

        Args:
            timeout: Maximum seconds to wait, None to wait indefinitely

        Returns:
            True if the context is done
        """
        if self._parent is None:
            # never done: just sleep out the timeout
            threading.Event().wait(timeout)
            return False
        return self._parent.wait(timeout)

    def raise_if_done(self) -> None:
        """Raise the context error if the context is done."""
        err = self.err()
        if err is not None:
            raise err

    def _attach(self, child: "_CancelContext") -> None:
        if self._parent is not None:
            self._parent._attach(child)

    def _detach(self, child: "_CancelContext") -> None:
        if self._parent is not None:
            self._parent._detach(child)


class _BackgroundContext(LoadContext):
    def __repr__(self) -> str:
        return "LoadContext.background"


class _CancelContext(LoadContext):
    """Context with its own cancellation signal and optional deadline."""

    def __init__(self, parent: LoadContext, deadline: Optional[float] = None):
        super().__init__(parent)
        self._lock = threading.Lock()
        self._event = threading.Event()
        self._err: Optional[LazyCellException] = None
        # weak so children whose cancel function was dropped can be collected
        self._children: "weakref.WeakSet[_CancelContext]" = weakref.WeakSet()

        parent_deadline = parent.deadline()
        if deadline is None or (
            parent_deadline is not None and parent_deadline < deadline
        ):
            deadline = parent_deadline
        self._deadline = deadline

        parent._attach(self)

    def deadline(self) -> Optional[float]:
        return self._deadline

    def err(self) -> Optional[LazyCellException]:
        with self._lock:
            if self._err is not None:
                return self._err

        if self._deadline is not None and time.monotonic() >= self._deadline:
            self.cancel(DeadlineExceededException(self._deadline))
            with self._lock:
                return self._err

        return None

    def wait(self, timeout: Optional[float] = None) -> bool:
        give_up = None if timeout is None else time.monotonic() + timeout

        while not self.done():
            now = time.monotonic()
            if give_up is not None and now >= give_up:
                return False

            limits = [t for t in (give_up, self._deadline) if t is not None]
            self._event.wait(min(limits) - now if limits else None)

        return True

    def cancel(self, err: Optional[LazyCellException] = None) -> None:
        """Cancel this context and every context derived from it. Idempotent."""
        with self._lock:
            if self._err is not None:
                return
            self._err = err or ContextCancelledException()
            self._event.set()
            children = list(self._children)
            self._children.clear()

        for child in children:
            child.cancel(self._err)

        if self._parent is not None:
            self._parent._detach(self)

    def _attach(self, child: "_CancelContext") -> None:
        with self._lock:
            err = self._err
            if err is None:
                self._children.add(child)
        if err is not None:
            child.cancel(err)

    def _detach(self, child: "_CancelContext") -> None:
        with self._lock:
            self._children.discard(child)


class _ValueContext(LoadContext):
    """Context carrying one key/value pair."""

    def __init__(self, parent: LoadContext, key: Any, val: Any):
        super().__init__(parent)
        self._key = key
        self._val = val

    def value(self, key: Any, default: Any = None) -> Any:
        if key == self._key:
            return self._val
        return super().value(key, default)


_BACKGROUND = _BackgroundContext()


def background() -> LoadContext:
    """Return the shared root context: never cancelled, no deadline, no values."""
    return _BACKGROUND


def with_cancel(parent: LoadContext) -> Tuple[LoadContext, CancelFunc]:
    """
    Derive a cancellable context.

    Args:
        parent: Parent context; cancelling it also cancels the child

    Returns:
        The child context and a function that cancels it

    Call the cancel function once the context is no longer needed; a
    forgotten child is only released when it is garbage collected.
    """
    ctx = _CancelContext(parent)
    return ctx, ctx.cancel


def with_deadline(
    parent: LoadContext, deadline: float
) -> Tuple[LoadContext, CancelFunc]:
    """
    Derive a context that expires at ``deadline`` (``time.monotonic()`` clock).

    The effective deadline is the earlier of ``deadline`` and the parent's.
    As with with_cancel, call the returned cancel function when done.
    """
    ctx = _CancelContext(parent, deadline=deadline)
    return ctx, ctx.cancel


def with_timeout(
    parent: LoadContext, timeout: Union[float, timedelta]
) -> Tuple[LoadContext, CancelFunc]:
    """Derive a context that expires ``timeout`` seconds from now."""
    if isinstance(timeout, timedelta):
        timeout = timeout.total_seconds()
    return with_deadline(parent, time.monotonic() + timeout)


def with_value(parent: LoadContext, key: Any, value: Any) -> LoadContext:
    """Derive a context that carries ``value`` under ``key``."""
    return _ValueContext(parent, key, value)
