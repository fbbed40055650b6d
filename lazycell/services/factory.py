"""
Cell Constructors

Public entry points for building lazy values. Every constructor returns a
``Lazy[T]``; the concrete classes stay an implementation detail.
"""

from typing import Any

from ..core.context import LoadContext
from ..domain.interfaces import Lazy, LazyFunc, T
from ..domain.value_objects import TTL, TTLLike, CellOptions
from .loader_cell import LoaderCell
from .static_cell import StaticCell


def with_loader(loader: LazyFunc[T], *args: Any) -> Lazy[T]:
    """
    Create a lazy value loaded on first use and cached until clear().

    Args:
        loader: Called as ``loader(ctx, *args)``
        *args: Forwarded to the loader on each invocation

    Example:
        >>> greeting = with_loader(lambda ctx, name: "hello " + name, "world")
        >>> greeting.value()
        'hello world'
    """
    return LoaderCell(loader, args)


def with_loader_ttl(loader: LazyFunc[T], ttl: TTLLike, *args: Any) -> Lazy[T]:
    """
    Like with_loader, but the cached value expires ``ttl`` after each load.

    Args:
        loader: Called as ``loader(ctx, *args)``
        ttl: TTL, timedelta or seconds
        *args: Forwarded to the loader on each invocation

    Raises:
        InvalidTTLException: If ttl is negative or not a duration
    """
    return LoaderCell(loader, args, ttl=TTL.from_value(ttl))


def preloaded(value: T, loader: LazyFunc[T], *args: Any) -> Lazy[T]:
    """
    Create a lazy value that starts out holding ``value``.

    The loader only runs after clear().
    """
    return LoaderCell(loader, args, preload=value)


def preloaded_ttl(
    value: T, loader: LazyFunc[T], ttl: TTLLike, *args: Any
) -> Lazy[T]:
    """Like preloaded, but ``value`` and later loads expire after ``ttl``."""
    return LoaderCell(loader, args, ttl=TTL.from_value(ttl), preload=value)


def static(value: T) -> Lazy[T]:
    """Create a lazy value that always returns ``value`` and never loads."""
    return StaticCell(value)


def new_cell(loader: LazyFunc[T], options: CellOptions) -> Lazy[T]:
    """
    Create a loader cell from a full set of construction options.

    Args:
        loader: Called as ``loader(ctx, *options.loader_args)``
        options: TTL, preload and argument settings
    """
    kwargs = {}
    if options.with_ttl:
        kwargs["ttl"] = options.ttl
    if options.has_preload:
        kwargs["preload"] = options.preload_value
    return LoaderCell(loader, options.loader_args, **kwargs)


def lazy_func_for(value: T) -> LazyFunc[T]:
    """Wrap a bare value into a loader that ignores its context and arguments."""

    def loader(ctx: LoadContext, *args: Any) -> T:
        return value

    return loader
