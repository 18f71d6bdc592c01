"""
Errors Module
Failure taxonomy and the result value returned by host lookups
"""

from dataclasses import dataclass
from typing import Generic, Optional, TypeVar

T = TypeVar('T')


class TrackerError(Exception):
    """Base class for cursor tracker failures."""


class NotCalibrated(TrackerError):
    """Mapping was attempted before a calibration was captured."""


class LayerUnresolvable(TrackerError):
    """The configured scene, source or scene item could not be found."""


class PointerUnavailable(TrackerError):
    """The mouse position could not be read."""


class InvalidConfig(TrackerError, ValueError):
    """A tracking setting is outside its allowed range."""


@dataclass(frozen=True)
class Lookup(Generic[T]):
    """
    Outcome of a host lookup.

    Exactly one of ``value`` and ``error`` is meaningful: a failed lookup
    carries the error instead of raising it, so a tick can log and move on.
    """

    value: Optional[T] = None
    error: Optional[TrackerError] = None

    @classmethod
    def success(cls, value: T) -> 'Lookup[T]':
        return cls(value=value)

    @classmethod
    def failure(cls, error: TrackerError) -> 'Lookup[T]':
        return cls(error=error)

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> T:
        """Return the value, raising the stored error on failure."""
        if self.error is not None:
            raise self.error
        return self.value
