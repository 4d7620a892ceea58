"""Explicit result type for lookups that may come back empty."""

from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class Outcome(Generic[T]):
    """Either a found value or a missing result with the reason it is missing.

    The reason is for logs only; callers outside the service collapse a
    missing outcome into ``None`` or an empty list.
    """

    value: T | None = None
    reason: str | None = None

    @classmethod
    def found(cls, value: T) -> "Outcome[T]":
        return cls(value=value)

    @classmethod
    def missing(cls, reason: str) -> "Outcome[T]":
        return cls(reason=reason)

    @property
    def ok(self) -> bool:
        """Return True when the outcome carries a value."""
        return self.reason is None

    def unwrap_or(self, default: T) -> T:
        """Return the value, or ``default`` when missing."""
        if self.ok and self.value is not None:
            return self.value
        return default
