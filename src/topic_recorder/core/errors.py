"""Recorder errors and structured outcomes.

Lifecycle and naming problems raise one of the ``RecorderError`` subclasses
below. Name warnings and I/O failures are not exceptions: they are recorded
as ``NameWarning`` / ``IOFailure`` entries that callers can inspect.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


class RecorderError(Exception):
    """Base class for recorder lifecycle and naming errors."""


class AlreadyInitializedError(RecorderError):
    """A process-wide recorder already exists."""

    def __init__(self, path: Optional[str] = None) -> None:
        self.path = path
        msg = "recorder already initialized"
        if path:
            msg += f" (writing to {path})"
        super().__init__(msg)


class InvalidPhaseError(RecorderError):
    """An operation was called in the wrong lifecycle phase."""

    def __init__(self, operation: str, phase) -> None:
        self.operation = operation
        self.phase = phase
        super().__init__(f"{operation}() not allowed in phase {phase.value!r}")


class DuplicateNameError(RecorderError):
    """A topic or value with this name is already registered."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"name already registered: {name!r}")


class UnknownTopicError(RecorderError):
    """Data was published to a name that is not a subscribed topic."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"no subscribed topic named {name!r}")


class UninitializedValueError(RecorderError):
    """A queried topic was read before its first refresh."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"topic {name!r} has not been refreshed yet")


@dataclass(frozen=True)
class NameWarning:
    """A registered name contains a character outside the allowed set."""

    name: str
    character: str


@dataclass(frozen=True)
class IOFailure:
    """An open/write/close on the output stream failed and was not retried."""

    operation: str  # "open", "write" or "close"
    path: str
    error: OSError
