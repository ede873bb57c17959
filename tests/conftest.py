"""Shared fixtures for recorder tests."""

from __future__ import annotations

import os
from pathlib import Path
from typing import List

import pytest

from topic_recorder import session
from topic_recorder.coordinator import LogCoordinator
from topic_recorder.writer import RecordWriter


def read_lines(path) -> List[str]:
    """Lines of a record file, split on the platform separator."""
    with open(path, newline="") as f:
        content = f.read()
    assert content.endswith(os.linesep) or content == ""
    return content.split(os.linesep)[:-1]


@pytest.fixture(autouse=True)
def fresh_session(monkeypatch):
    """Each test starts without a process-wide recorder."""
    monkeypatch.setattr(session, "_active", None)
    yield
    if session._active is not None:
        session._active.close()


@pytest.fixture
def csv_path(tmp_path) -> Path:
    return tmp_path / "run.csv"


@pytest.fixture
def recorder(csv_path):
    coordinator = LogCoordinator(RecordWriter.open(csv_path))
    yield coordinator
    coordinator.close()
