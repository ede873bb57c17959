"""Forward pypubsub messages into subscribed topics."""

from __future__ import annotations

import logging
from typing import Dict, List

from pubsub import pub

from topic_recorder.coordinator import LogCoordinator
from topic_recorder.core.errors import UnknownTopicError

logger = logging.getLogger(__name__)


class PubSubBridge:
    """
    Feeds pypubsub messages into a coordinator's subscribed topics.

    Each bound pubsub topic must be sent with a ``value`` keyword; topics
    already defined with other message data (e.g. ``obs=``) cannot be bound
    and ``bind()`` raises ValueError for them. Strings are published as-is,
    numbers go through the coordinator's numeric formatter.
    Messages that arrive before ``finish_initialization()`` are dropped.

    pypubsub delivers on the sender's thread, so sends must be serialized
    with the logging cycle like any other publish call.

    Usage:
        bridge = PubSubBridge(log)
        bridge.bind("robot/status", "robot.status")
        log.finish_initialization()

        pub.sendMessage("robot.status", value="moving")
        log.cycle()  # record holds "moving"

        bridge.unbind_all()
    """

    def __init__(self, coordinator: LogCoordinator) -> None:
        self._coordinator = coordinator
        # pubsub topic name -> recorder topic name
        self._bindings: Dict[str, str] = {}

    def bind(self, name: str, pubsub_topic: str) -> None:
        """
        Forward messages on ``pubsub_topic`` to subscribed topic ``name``.

        Raises:
            UnknownTopicError: ``name`` is not a registered subscribed topic.
            ValueError: ``pubsub_topic`` is already bound, or its messages do
                not carry a ``value`` keyword.
        """
        if not self._coordinator.is_subscribed(name):
            raise UnknownTopicError(name)
        if pubsub_topic in self._bindings:
            raise ValueError(
                f"pubsub topic {pubsub_topic!r} already bound to {self._bindings[pubsub_topic]!r}"
            )
        try:
            pub.subscribe(self._on_message, pubsub_topic)
        except pub.ListenerMismatchError as e:
            raise ValueError(
                f"pubsub topic {pubsub_topic!r} does not send a 'value' keyword: {e}"
            ) from e
        self._bindings[pubsub_topic] = name
        logger.debug("Bound pubsub topic %s -> %s", pubsub_topic, name)

    def unbind(self, pubsub_topic: str) -> None:
        """Stop forwarding ``pubsub_topic``. Unknown topics are ignored."""
        if self._bindings.pop(pubsub_topic, None) is not None:
            pub.unsubscribe(self._on_message, pubsub_topic)

    def unbind_all(self) -> None:
        """Unsubscribe from all topics. Call on shutdown."""
        for pubsub_topic in list(self._bindings):
            self.unbind(pubsub_topic)

    @property
    def bindings(self) -> Dict[str, str]:
        return dict(self._bindings)

    @property
    def bound_topics(self) -> List[str]:
        return list(self._bindings)

    def _on_message(self, value, topic=pub.AUTO_TOPIC) -> None:
        """Handle an incoming pubsub message."""
        name = self._bindings.get(topic.getName())
        if name is None:
            # Subtopic of a bound topic
            logger.debug("No binding for pubsub topic %s", topic.getName())
            return
        if self._coordinator.is_registering:
            logger.debug("Dropped %s: registration not finished", name)
            return
        self._coordinator.publish(name, value)
