"""
Lazy Value Interfaces

Abstract contract shared by every lazily produced value.
"""

from abc import ABC, abstractmethod
from typing import Callable, Generic, TypeVar

from ..core.context import LoadContext

T = TypeVar("T")

# loader(ctx, *args) -> T; failures are raised, not returned
LazyFunc = Callable[..., T]


class Lazy(ABC, Generic[T]):
    """
    A value of type T produced on demand.

    Implementations must be safe to use from several threads at once.
    """

    @abstractmethod
    def value(self, *contexts: LoadContext) -> T:
        """
        Return the value, loading it first if needed.

        Only the first context is used; when none is given the background
        context is passed to the loader. Loader exceptions propagate as is.
        """
        pass

    @abstractmethod
    def clear(self) -> None:
        """Forget the current value so the next value() call loads again."""
        pass
