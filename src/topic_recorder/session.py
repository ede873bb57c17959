"""Process-wide recorder for applications that want a single log per run."""

from __future__ import annotations

import atexit
import logging
from pathlib import Path
from typing import Optional, Union

from topic_recorder.config import RecorderConfig
from topic_recorder.coordinator import LogCoordinator
from topic_recorder.core.errors import AlreadyInitializedError
from topic_recorder.formatting import make_numeric_formatter
from topic_recorder.writer import RecordWriter

logger = logging.getLogger(__name__)

_active: Optional[LogCoordinator] = None
_exit_hook_registered = False


def initialize(
    path: Union[str, Path],
    compressed: bool = False,
    config: Optional[RecorderConfig] = None,
) -> LogCoordinator:
    """
    Open the record file and create the process-wide recorder.

    Args:
        path: Destination file. ".gz" is appended when compressed.
        compressed: Gzip the output.
        config: Remaining settings (encoding, I/O error policy, digits).
            Its ``path`` and ``compressed`` are ignored in favour of the
            arguments.

    Raises:
        AlreadyInitializedError: A recorder already exists in this process.
    """
    global _active
    if _active is not None:
        raise AlreadyInitializedError(_active.writer.path)

    config = config or RecorderConfig.defaults()
    writer = RecordWriter.open(
        path,
        compressed=compressed,
        encoding=config.encoding,
        on_io_error=config.on_io_error,
    )
    _active = LogCoordinator(
        writer, numeric_formatter=make_numeric_formatter(config.significant_digits)
    )
    _register_exit_hook()
    return _active


def initialize_from_config(config: RecorderConfig) -> LogCoordinator:
    """``initialize()`` with path and compression taken from ``config``."""
    return initialize(config.path, compressed=config.compressed, config=config)


def get_recorder() -> Optional[LogCoordinator]:
    """The process-wide recorder, or None before ``initialize()``."""
    return _active


def shutdown() -> None:
    """
    Flush and close the process-wide recorder's file.

    The recorder stays registered: ``initialize()`` still refuses a second
    instance for the rest of the process.
    """
    if _active is not None:
        _active.close()


def _register_exit_hook() -> None:
    global _exit_hook_registered
    if not _exit_hook_registered:
        atexit.register(shutdown)
        _exit_hook_registered = True
