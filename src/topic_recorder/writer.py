"""Line writer for record files, plain text or gzip-compressed."""

from __future__ import annotations

import gzip
import logging
import os
from enum import Enum
from pathlib import Path
from typing import List, Optional, TextIO, Union

from topic_recorder.core.errors import IOFailure

logger = logging.getLogger(__name__)

GZIP_SUFFIX = ".gz"


class IOErrorPolicy(Enum):
    """What the writer does when opening or writing the file fails."""

    LOG = "log"  # log and record the failure, keep going
    RAISE = "raise"  # record the failure, then re-raise


class RecordWriter:
    """
    Writes one line per call and flushes it straight away.

    With ``compressed=True`` the file gets a ``.gz`` suffix and every flush
    is a gzip sync flush, so a partially written file still decodes up to
    the last line.

    I/O errors follow ``on_io_error``. Under ``IOErrorPolicy.LOG`` the error is
    logged, kept in ``failures`` and the call returns normally; the line is
    lost and never retried. Characters the encoding cannot represent are
    written as "?".

    Usage:
        writer = RecordWriter.open("run.csv", compressed=True)
        writer.write_line("a,b")
        writer.close()
    """

    def __init__(
        self,
        path: Union[str, Path],
        stream: Optional[TextIO],
        compressed: bool = False,
        on_io_error: IOErrorPolicy = IOErrorPolicy.LOG,
    ) -> None:
        self._path = str(path)
        self._stream = stream
        self._compressed = compressed
        self._policy = on_io_error
        self._lines_written = 0
        self._failures: List[IOFailure] = []

    @classmethod
    def open(
        cls,
        path: Union[str, Path],
        compressed: bool = False,
        encoding: str = "utf-8",
        on_io_error: IOErrorPolicy = IOErrorPolicy.LOG,
    ) -> RecordWriter:
        """Create or truncate the destination file and return a writer for it."""
        dest = f"{path}{GZIP_SUFFIX}" if compressed else str(path)
        writer = cls(dest, None, compressed=compressed, on_io_error=on_io_error)
        try:
            if compressed:
                # GzipFile.flush() defaults to Z_SYNC_FLUSH
                stream = gzip.open(dest, "wt", encoding=encoding, errors="replace", newline="")
            else:
                stream = open(dest, "w", encoding=encoding, errors="replace", newline="")
        except OSError as e:
            writer._fail("open", e)
            return writer
        writer._stream = stream
        logger.info("Opened record file %s (compressed=%s)", dest, compressed)
        return writer

    @property
    def path(self) -> str:
        """Destination path, including the ``.gz`` suffix when compressed."""
        return self._path

    @property
    def compressed(self) -> bool:
        return self._compressed

    @property
    def is_open(self) -> bool:
        return self._stream is not None and not self._stream.closed

    @property
    def lines_written(self) -> int:
        return self._lines_written

    @property
    def failures(self) -> List[IOFailure]:
        """I/O failures seen so far, oldest first."""
        return list(self._failures)

    def write_line(self, line: str) -> bool:
        """
        Append ``line`` plus the platform line separator and flush.

        Returns:
            True if the line reached the stream, False if it was dropped.
        """
        if not self.is_open:
            self._fail("write", OSError(f"record file is not open: {self._path}"))
            return False
        try:
            self._stream.write(line + os.linesep)
            self._stream.flush()
        except OSError as e:
            self._fail("write", e)
            return False
        self._lines_written += 1
        return True

    def close(self) -> None:
        """Flush and close the file. Safe to call more than once."""
        if not self.is_open:
            return
        try:
            self._stream.close()
        except OSError as e:
            self._fail("close", e)
            return
        logger.info("Closed record file %s (%d lines)", self._path, self._lines_written)

    def _fail(self, operation: str, error: OSError) -> None:
        self._failures.append(IOFailure(operation=operation, path=self._path, error=error))
        logger.error("Record file %s failed for %s", operation, self._path, exc_info=error)
        if self._policy is IOErrorPolicy.RAISE:
            raise error

    def __enter__(self) -> RecordWriter:
        return self

    def __exit__(self, *args) -> None:
        self.close()
