"""topic_recorder - Per-cycle telemetry recording to CSV."""

from topic_recorder.bridge import PubSubBridge
from topic_recorder.config import RecorderConfig, load_recorder_config
from topic_recorder.coordinator import LogCoordinator
from topic_recorder.core import (
    DEFAULT_DATA,
    AlreadyInitializedError,
    DuplicateNameError,
    InferMode,
    InvalidPhaseError,
    IOFailure,
    NameWarning,
    Phase,
    RecorderError,
    UninitializedValueError,
    UnknownTopicError,
)
from topic_recorder.formatting import (
    escape_field,
    format_numeric,
    join_fields,
    make_numeric_formatter,
)
from topic_recorder.session import (
    get_recorder,
    initialize,
    initialize_from_config,
    shutdown,
)
from topic_recorder.writer import IOErrorPolicy, RecordWriter

__all__ = [
    "AlreadyInitializedError",
    "DEFAULT_DATA",
    "DuplicateNameError",
    "IOErrorPolicy",
    "IOFailure",
    "InferMode",
    "InvalidPhaseError",
    "LogCoordinator",
    "NameWarning",
    "Phase",
    "PubSubBridge",
    "RecordWriter",
    "RecorderConfig",
    "RecorderError",
    "UninitializedValueError",
    "UnknownTopicError",
    "escape_field",
    "format_numeric",
    "get_recorder",
    "initialize",
    "initialize_from_config",
    "join_fields",
    "load_recorder_config",
    "make_numeric_formatter",
    "shutdown",
]
