"""Tests for topic variants and name validation."""

from __future__ import annotations

import pytest

from topic_recorder.core import (
    DEFAULT_DATA,
    InferMode,
    Published,
    QueriedTopic,
    SubscribedTopic,
    UninitializedValueError,
    ValueTopic,
    is_valid_name,
    topic_name,
    topic_value,
)


class TestQueriedTopic:
    def test_value_before_refresh_raises(self):
        topic = QueriedTopic("temp", lambda: "98.6")
        with pytest.raises(UninitializedValueError) as exc:
            topic.value
        assert exc.value.name == "temp"
        assert not topic.is_refreshed

    def test_refresh_caches_producer_result(self):
        readings = iter(["1", "2"])
        topic = QueriedTopic("temp", lambda: next(readings))
        topic.refresh_value()
        assert topic.value == "1"
        assert topic.value == "1"  # reading does not call the producer
        topic.refresh_value()
        assert topic.value == "2"

    def test_producer_returning_none_counts_as_refreshed(self):
        topic = QueriedTopic("temp", lambda: None)
        topic.refresh_value()
        assert topic.is_refreshed
        assert topic.value == "None"

    def test_non_string_result_stored_as_text(self):
        topic = QueriedTopic("count", lambda: 7)
        topic.refresh_value()
        assert topic.value == "7"

    def test_producer_errors_propagate(self):
        def broken():
            raise RuntimeError("sensor offline")

        topic = QueriedTopic("temp", broken)
        with pytest.raises(RuntimeError, match="sensor offline"):
            topic.refresh_value()


class TestSubscribedTopic:
    def test_starts_at_default_data(self):
        assert SubscribedTopic("cmd").value == DEFAULT_DATA == "-1.0"

    def test_default_mode_resets_when_silent(self):
        topic = SubscribedTopic("cmd", InferMode.DEFAULT)
        topic.handle_published_data(Published.of("fwd"))
        assert topic.value == "fwd"
        topic.handle_published_data(Published.absent())
        assert topic.value == DEFAULT_DATA

    def test_last_mode_keeps_previous_when_silent(self):
        topic = SubscribedTopic("cmd", InferMode.LAST)
        topic.handle_published_data(Published.absent())
        assert topic.value == DEFAULT_DATA
        topic.handle_published_data(Published.of("fwd"))
        topic.handle_published_data(Published.absent())
        assert topic.value == "fwd"

    def test_published_empty_string_is_present(self):
        topic = SubscribedTopic("cmd", InferMode.DEFAULT)
        topic.handle_published_data(Published.of(""))
        assert topic.value == ""


class TestDispatch:
    def test_name_and_value_for_every_variant(self):
        queried = QueriedTopic("q", lambda: "1")
        queried.refresh_value()
        topics = [queried, SubscribedTopic("s"), ValueTopic("v", "robot1")]
        assert [topic_name(t) for t in topics] == ["q", "s", "v"]
        assert [topic_value(t) for t in topics] == ["1", "-1.0", "robot1"]

    def test_non_topic_rejected(self):
        with pytest.raises(TypeError):
            topic_value("not a topic")


class TestNameValidation:
    @pytest.mark.parametrize("name", ["temp", "drive/left speed", "arm_2", "Température"])
    def test_valid(self, name):
        assert is_valid_name(name)

    @pytest.mark.parametrize("name", ["a-b", "x.y", "cmd,1", "speed(m/s)"])
    def test_invalid(self, name):
        assert not is_valid_name(name)
