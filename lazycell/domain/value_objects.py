"""
Cell Value Objects

Immutable value objects and models describing how a cell is configured
and how it has behaved so far.
"""

import math
from dataclasses import dataclass
from datetime import timedelta
from typing import Any, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..exceptions import InvalidTTLException

TTLLike = Union["TTL", timedelta, int, float]


@dataclass(frozen=True)
class TTL:
    """
    Time To Live value object for cell expiration.

    Zero is a valid TTL: a TTL-enabled cell with a zero TTL reloads on any
    call made after a measurable amount of time.
    """

    seconds: float

    def __post_init__(self) -> None:
        """Validate TTL value."""
        if isinstance(self.seconds, bool) or not isinstance(self.seconds, (int, float)):
            raise InvalidTTLException(self.seconds, "TTL must be a number of seconds")
        if math.isnan(self.seconds):
            raise InvalidTTLException(self.seconds, "TTL must not be NaN")
        if self.seconds < 0:
            raise InvalidTTLException(self.seconds)

    @classmethod
    def from_value(cls, value: TTLLike) -> "TTL":
        """Create TTL from a TTL, a timedelta or a number of seconds."""
        if isinstance(value, TTL):
            return value
        if isinstance(value, timedelta):
            return cls(value.total_seconds())
        return cls(value)

    @classmethod
    def milliseconds(cls, milliseconds: float) -> "TTL":
        """Create TTL from milliseconds."""
        return cls(milliseconds / 1000.0)

    @classmethod
    def minutes(cls, minutes: float) -> "TTL":
        """Create TTL from minutes."""
        return cls(minutes * 60)

    @classmethod
    def hours(cls, hours: float) -> "TTL":
        """Create TTL from hours."""
        return cls(hours * 3600)

    def as_timedelta(self) -> timedelta:
        return timedelta(seconds=self.seconds)

    def is_expired(self, elapsed: float) -> bool:
        """Check whether ``elapsed`` seconds since a load exceed this TTL."""
        return elapsed > self.seconds

    def __str__(self) -> str:
        return f"{self.seconds}s"


class CellOptions(BaseModel):
    """
    Construction contract for a loader cell.

    ``preload_value`` only takes effect when it is set explicitly, so
    ``None`` can itself be preloaded.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    with_ttl: bool = Field(default=False, description="Enable TTL expiration")
    ttl: TTL = Field(default=TTL(0), description="Time to live after a load")
    preload_value: Any = Field(
        default=None, description="Initial value served without loading"
    )
    loader_args: Tuple[Any, ...] = Field(
        default=(), description="Arguments forwarded to every loader call"
    )

    @field_validator("ttl", mode="before")
    @classmethod
    def validate_ttl(cls, v):
        """Accept timedeltas and plain seconds as well as TTL objects."""
        return TTL.from_value(v)

    @property
    def has_preload(self) -> bool:
        """Check if a preload value was supplied."""
        return "preload_value" in self.model_fields_set


@dataclass
class CellMetrics:
    """Counters describing a cell's activity."""

    loads: int = 0
    load_failures: int = 0
    hits: int = 0
    clears: int = 0
    last_load_duration: Optional[float] = None

    @property
    def hit_rate(self) -> float:
        """Share of value() calls served without loading."""
        total = self.loads + self.hits
        if total == 0:
            return 0.0
        return self.hits / total
