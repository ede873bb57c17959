"""Topic variants: queried, subscribed and constant values.

The set of variants is closed. Code that needs to treat topics generically
goes through ``topic_name``/``topic_value`` rather than a shared base class.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Optional, Union

from topic_recorder.core.errors import UninitializedValueError
from topic_recorder.core.types import DEFAULT_DATA, InferMode, Published

_NAME_PUNCTUATION = frozenset(" _/")


class QueriedTopic:
    """
    Topic that pulls its value from a producer once per cycle.

    Usage:
        topic = QueriedTopic("battery/volts", lambda: read_volts())
        topic.refresh_value()
        topic.value  # -> "12.1"
    """

    def __init__(self, name: str, producer: Callable[[], str]) -> None:
        self.name = name
        self._producer = producer
        self._value = ""
        self._refreshed = False

    def refresh_value(self) -> None:
        """Call the producer and cache its result as text. Producer errors propagate."""
        self._value = str(self._producer())
        self._refreshed = True

    @property
    def value(self) -> str:
        if not self._refreshed:
            raise UninitializedValueError(self.name)
        return self._value

    @property
    def is_refreshed(self) -> bool:
        return self._refreshed


class SubscribedTopic:
    """Topic whose value is pushed between cycles."""

    def __init__(self, name: str, infer_mode: InferMode = InferMode.DEFAULT) -> None:
        self.name = name
        self.infer_mode = infer_mode
        self.value = DEFAULT_DATA

    def handle_published_data(self, published: Published) -> None:
        """Resolve this cycle's value from the buffer entry."""
        if self.infer_mode is InferMode.DEFAULT:
            self.value = published.or_else(DEFAULT_DATA)
        elif self.infer_mode is InferMode.LAST:
            if published.present:
                self.value = published.value


@dataclass(frozen=True)
class ValueTopic:
    """Named constant, fixed at registration."""

    name: str
    value: str


Topic = Union[QueriedTopic, SubscribedTopic, ValueTopic]


def topic_name(topic: Topic) -> str:
    return topic.name


def topic_value(topic: Topic) -> str:
    """Current textual value of any topic variant."""
    if isinstance(topic, (QueriedTopic, SubscribedTopic, ValueTopic)):
        return topic.value
    raise TypeError(f"not a topic: {topic!r}")


def invalid_name_character(name: str) -> Optional[str]:
    """Return the first character not allowed in a topic name, or None."""
    for c in name:
        if c.isalnum() or c in _NAME_PUNCTUATION:
            continue
        return c
    return None


def is_valid_name(name: str) -> bool:
    """Names may hold letters, digits, space, underscore and forward slash."""
    return invalid_name_character(name) is None
