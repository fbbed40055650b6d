"""
Static Cell

Lazy value that always returns the same object and never loads.
"""

from ..core.context import LoadContext
from ..domain.interfaces import Lazy, T


class StaticCell(Lazy[T]):
    """Fixed value behind the Lazy interface; clear() is a no-op."""

    def __init__(self, value: T):
        self._value = value

    def value(self, *contexts: LoadContext) -> T:
        return self._value

    def clear(self) -> None:
        pass

    def __repr__(self) -> str:
        return f"StaticCell({self._value!r})"
