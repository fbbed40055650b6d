"""
lazycell Exceptions

Exceptions raised by the library itself. Loader failures are never wrapped:
whatever a loader raises reaches the caller of ``value()`` unchanged.
"""

from typing import Optional, Any, Dict


class LazyCellException(Exception):
    """Base exception for errors produced by lazycell itself."""

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.error_code = error_code
        self.details = details or {}
        super().__init__(self.message)


class InvalidTTLException(LazyCellException, ValueError):
    """Raised when a TTL cannot be turned into a non-negative duration."""

    def __init__(self, value: Any, reason: str = "TTL must be a non-negative duration"):
        super().__init__(
            message=f"{reason}: {value!r}",
            error_code="INVALID_TTL",
            details={"value": repr(value)},
        )


class InvalidLoaderException(LazyCellException, TypeError):
    """Raised when a cell is constructed with a loader that is not callable."""

    def __init__(self, loader: Any):
        super().__init__(
            message=f"Loader must be callable, got {type(loader).__name__}",
            error_code="INVALID_LOADER",
            details={"loader_type": type(loader).__name__},
        )


class ContextCancelledException(LazyCellException):
    """Reported by a load context after its cancel function was called."""

    def __init__(self, message: str = "Load context cancelled"):
        super().__init__(message=message, error_code="CONTEXT_CANCELLED")


class DeadlineExceededException(LazyCellException):
    """Reported by a load context once its deadline has passed."""

    def __init__(self, deadline: Optional[float] = None):
        details = {}
        if deadline is not None:
            details["deadline"] = deadline

        super().__init__(
            message="Load context deadline exceeded",
            error_code="DEADLINE_EXCEEDED",
            details=details,
        )
