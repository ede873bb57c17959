"""Log coordinator: topic registry, lifecycle phases and the per-cycle update."""

from __future__ import annotations

import logging
from numbers import Real
from typing import Callable, Dict, List, Optional, Union

from topic_recorder.core.errors import (
    DuplicateNameError,
    InvalidPhaseError,
    IOFailure,
    NameWarning,
    UnknownTopicError,
)
from topic_recorder.core.topics import (
    QueriedTopic,
    SubscribedTopic,
    Topic,
    ValueTopic,
    invalid_name_character,
    topic_name,
    topic_value,
)
from topic_recorder.core.types import InferMode, Phase, Published
from topic_recorder.formatting import NumericFormatter, format_numeric, join_fields
from topic_recorder.writer import RecordWriter

logger = logging.getLogger(__name__)


class LogCoordinator:
    """
    Owns the registered topics and drives each logging cycle.

    Two phases, one transition:
    - REGISTERING: topics and constant values may be declared
    - LOGGING: data may be published, topics updated and records written

    ``finish_initialization()`` moves from the first to the second and writes
    the header. Calls in the wrong phase raise ``InvalidPhaseError`` without
    changing any state.

    Not thread-safe: publish calls must not run concurrently with
    ``update_topics()``.

    Usage:
        log = LogCoordinator(RecordWriter.open("run.csv"))
        log.register_queried_topic("temp", read_temp)
        log.register_subscribed_topic("cmd", InferMode.LAST)
        log.finish_initialization()

        while running:
            log.publish_string("cmd", "fwd")  # from any subsystem, any time
            log.update_topics()
            log.log()
    """

    def __init__(
        self,
        writer: RecordWriter,
        numeric_formatter: NumericFormatter = format_numeric,
    ) -> None:
        self._writer = writer
        self._format_numeric = numeric_formatter
        self._phase = Phase.REGISTERING

        # Everything registered, for name uniqueness
        self._namespace: List[Topic] = []
        # Column sources, in registration order
        self._topics: List[Topic] = []
        self._published: Dict[str, Published] = {}
        self._name_warnings: List[NameWarning] = []
        self._header: Optional[str] = None

    # --- Registration phase ---

    def register_queried_topic(self, name: str, producer: Callable[[], str]) -> QueriedTopic:
        """Register a topic whose value is pulled from ``producer`` every cycle."""
        self._check_registration(name)
        topic = QueriedTopic(name, producer)
        self._namespace.append(topic)
        self._topics.append(topic)
        return topic

    def register_queried_numeric(self, name: str, producer: Callable[[], float]) -> QueriedTopic:
        """
        Register a queried topic whose producer returns a number.

        The coordinator's numeric formatter is looked up on every refresh, so
        ``set_numeric_formatter()`` affects this topic from the next cycle on.
        """
        return self.register_queried_topic(name, lambda: self._format_numeric(producer()))

    def register_subscribed_topic(
        self, name: str, infer_mode: InferMode = InferMode.DEFAULT
    ) -> SubscribedTopic:
        """Register a topic that receives values through ``publish_*``."""
        self._check_registration(name)
        topic = SubscribedTopic(name, infer_mode)
        self._published[name] = Published.absent()
        self._namespace.append(topic)
        self._topics.append(topic)
        return topic

    def register_constant_value(self, name: str, value: str, column: bool = False) -> ValueTopic:
        """
        Register a named constant.

        Args:
            name: Unique name, shares the namespace with topics.
            value: Fixed text.
            column: If True, also log the value as a column in every record.
                Otherwise it is metadata only (see ``constants``).
        """
        self._check_registration(name)
        topic = ValueTopic(name, value)
        self._namespace.append(topic)
        if column:
            self._topics.append(topic)
        return topic

    def finish_initialization(self) -> None:
        """Freeze the topic set, write the header line and start logging."""
        self._require_phase(Phase.REGISTERING, "finish_initialization")
        header = join_fields(topic_name(t) for t in self._topics)
        # Under IOErrorPolicy.RAISE a failed header leaves registration open
        self._writer.write_line(header)
        self._header = header
        self._phase = Phase.LOGGING
        logger.info(
            "Registration closed: %d columns, %d names", len(self._topics), len(self._namespace)
        )

    # --- Logging phase ---

    def publish_string(self, name: str, value: str) -> None:
        """Store ``value`` for subscribed topic ``name``. Last publish in a cycle wins."""
        self._require_phase(Phase.LOGGING, "publish_string")
        self._receive(name, value)

    def publish_numeric(self, name: str, value: float) -> None:
        """Format ``value`` with the numeric formatter and publish it."""
        self._require_phase(Phase.LOGGING, "publish_numeric")
        self._receive(name, self._format_numeric(value))

    def publish(self, name: str, value: Union[str, float]) -> None:
        """Publish a string as-is or a number through the numeric formatter."""
        if isinstance(value, Real) and not isinstance(value, bool):
            self.publish_numeric(name, value)
        else:
            self.publish_string(name, str(value))

    def update_topics(self) -> None:
        """
        Bring every topic up to date for this cycle.

        Queried topics call their producers, subscribed topics resolve from
        the published-data buffer, then the buffer is cleared. Call once per
        cycle before ``log()``.
        """
        self._require_phase(Phase.LOGGING, "update_topics")

        for topic in self._topics:
            if isinstance(topic, QueriedTopic):
                topic.refresh_value()

        for topic in self._topics:
            if isinstance(topic, SubscribedTopic):
                topic.handle_published_data(self._published[topic.name])

        for name in self._published:
            self._published[name] = Published.absent()

    def log(self) -> bool:
        """
        Write one record with every topic's current value.

        Returns:
            True if the line was written, False if an I/O failure dropped it.
        """
        self._require_phase(Phase.LOGGING, "log")
        line = join_fields(topic_value(t) for t in self._topics)
        return self._writer.write_line(line)

    def cycle(self) -> bool:
        """``update_topics()`` followed by ``log()``."""
        self.update_topics()
        return self.log()

    # --- Configuration ---

    def set_numeric_formatter(self, formatter: NumericFormatter) -> None:
        """Replace the number-to-text function. Applies to future output only."""
        self._format_numeric = formatter

    # --- Introspection ---

    @property
    def phase(self) -> Phase:
        return self._phase

    @property
    def is_registering(self) -> bool:
        return self._phase is Phase.REGISTERING

    @property
    def names(self) -> List[str]:
        """Every registered name, topics and constants, in registration order."""
        return [topic_name(t) for t in self._namespace]

    @property
    def topic_names(self) -> List[str]:
        """Column names, in record order."""
        return [topic_name(t) for t in self._topics]

    @property
    def constants(self) -> Dict[str, str]:
        return {t.name: t.value for t in self._namespace if isinstance(t, ValueTopic)}

    @property
    def header(self) -> Optional[str]:
        """Header line, once registration is finished."""
        return self._header

    def is_subscribed(self, name: str) -> bool:
        """True if ``name`` is a registered subscribed topic."""
        return name in self._published

    @property
    def name_warnings(self) -> List[NameWarning]:
        return list(self._name_warnings)

    @property
    def io_failures(self) -> List[IOFailure]:
        return self._writer.failures

    @property
    def writer(self) -> RecordWriter:
        return self._writer

    def current_values(self) -> Dict[str, str]:
        """Current value per column, as the next ``log()`` would write it."""
        return {topic_name(t): topic_value(t) for t in self._topics}

    # --- Shutdown ---

    def close(self) -> None:
        """Flush and close the record file."""
        self._writer.close()

    def __enter__(self) -> LogCoordinator:
        return self

    def __exit__(self, *args) -> None:
        self.close()

    # --- Internal ---

    def _require_phase(self, phase: Phase, operation: str) -> None:
        if self._phase is not phase:
            raise InvalidPhaseError(operation, self._phase)

    def _check_registration(self, name: str) -> None:
        self._require_phase(Phase.REGISTERING, "register")
        if not name:
            raise ValueError("topic name must not be empty")
        if any(topic_name(t) == name for t in self._namespace):
            raise DuplicateNameError(name)
        bad = invalid_name_character(name)
        if bad is not None:
            # Lenient: the name is still registered
            self._name_warnings.append(NameWarning(name=name, character=bad))
            logger.warning("Invalid character %r in name %r", bad, name)

    def _receive(self, name: str, value: str) -> None:
        if name not in self._published:
            raise UnknownTopicError(name)
        self._published[name] = Published.of(value)
