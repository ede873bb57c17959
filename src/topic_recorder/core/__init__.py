"""Core types for topic recording."""

from topic_recorder.core.errors import (
    AlreadyInitializedError,
    DuplicateNameError,
    InvalidPhaseError,
    IOFailure,
    NameWarning,
    RecorderError,
    UninitializedValueError,
    UnknownTopicError,
)
from topic_recorder.core.topics import (
    QueriedTopic,
    SubscribedTopic,
    Topic,
    ValueTopic,
    is_valid_name,
    topic_name,
    topic_value,
)
from topic_recorder.core.types import DEFAULT_DATA, InferMode, Phase, Published

__all__ = [
    "AlreadyInitializedError",
    "DEFAULT_DATA",
    "DuplicateNameError",
    "IOFailure",
    "InferMode",
    "InvalidPhaseError",
    "NameWarning",
    "Phase",
    "Published",
    "QueriedTopic",
    "RecorderError",
    "SubscribedTopic",
    "Topic",
    "UninitializedValueError",
    "UnknownTopicError",
    "ValueTopic",
    "is_valid_name",
    "topic_name",
    "topic_value",
]
