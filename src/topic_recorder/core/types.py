"""Core types for topic recording."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional

# Value logged by a DEFAULT-mode subscribed topic that received nothing this cycle
DEFAULT_DATA = str(-1.0)


class Phase(Enum):
    """Lifecycle phase of a recorder. Transitions once, REGISTERING -> LOGGING."""

    REGISTERING = "registering"
    LOGGING = "logging"


class InferMode(Enum):
    """What a subscribed topic logs when nothing was published this cycle."""

    DEFAULT = "default"  # log DEFAULT_DATA
    LAST = "last"  # carry the previous value forward


@dataclass(frozen=True)
class Published:
    """A published-data buffer entry: either absent or holding a value."""

    value: Optional[str] = None
    present: bool = False

    @classmethod
    def absent(cls) -> Published:
        """Nothing published this cycle."""
        return cls()

    @classmethod
    def of(cls, value: str) -> Published:
        """A value published this cycle."""
        return cls(value=value, present=True)

    def or_else(self, fallback: str) -> str:
        return self.value if self.present else fallback
