import logging
from enum import IntEnum
from typing import List, NamedTuple, Optional

from path_display.errors import ConfigError, TransportUnavailable
from path_display.messages import PATH_MESSAGE_TYPE


class HistoryPolicy(IntEnum):
    KEEP_LAST = 0
    KEEP_ALL = 1


class ReliabilityPolicy(IntEnum):
    RELIABLE = 0
    BEST_EFFORT = 1


class DurabilityPolicy(IntEnum):
    VOLATILE = 0
    TRANSIENT_LOCAL = 1


class QosSettings(NamedTuple):
    depth: int = 10
    history: HistoryPolicy = HistoryPolicy.KEEP_LAST
    reliability: ReliabilityPolicy = ReliabilityPolicy.RELIABLE
    durability: DurabilityPolicy = DurabilityPolicy.VOLATILE

    @classmethod
    def from_ints(cls, depth, history, reliability, durability):
        try:
            return cls(
                depth=int(depth),
                history=HistoryPolicy(int(history)),
                reliability=ReliabilityPolicy(int(reliability)),
                durability=DurabilityPolicy(int(durability)),
            )
        except ValueError as e:
            raise ConfigError(f"Invalid QoS setting: {e}") from e


class TopicListing(NamedTuple):
    topics: List[str]
    current_index: Optional[int]


class Transport:
    """Message transport used by the subscription controller."""

    def subscribe(self, topic, qos, callback):
        raise NotImplementedError

    def unsubscribe(self, handle):
        raise NotImplementedError

    def topic_names_and_types(self):
        raise NotImplementedError


class SubscriptionController:
    """Owns the path subscription and rebuilds it when topic or QoS change.

    ``on_reset`` runs between tearing down the old subscription and creating
    the new one. The caller is expected to hold the display lock so the whole
    sequence looks atomic to the render tick.
    """

    def __init__(self, transport, on_message, on_reset, logger=None,
                 topic='', qos=None, message_type=PATH_MESSAGE_TYPE):
        self.transport = transport
        self.on_message = on_message
        self.on_reset = on_reset
        self.logger = logger or logging.getLogger(__name__)
        self.topic = topic
        self.qos = qos or QosSettings()
        self.message_type = message_type
        self.handle = None

    @property
    def active(self):
        return self.handle is not None

    def subscribe(self):
        if not self.topic:
            return False
        if self.transport is None:
            self.logger.warning(f"No transport available, not subscribing to '{self.topic}'.")
            return False
        try:
            self.handle = self.transport.subscribe(self.topic, self.qos, self.on_message)
        except TransportUnavailable as e:
            self.handle = None
            self.logger.warning(f"Could not subscribe to '{self.topic}': {e}")
            return False
        self.logger.info(f"Subscribed to '{self.topic}' (depth={self.qos.depth}, "
                         f"history={self.qos.history.name}, reliability={self.qos.reliability.name}, "
                         f"durability={self.qos.durability.name}).")
        return True

    def unsubscribe(self):
        if self.handle is None:
            return
        handle, self.handle = self.handle, None
        try:
            self.transport.unsubscribe(handle)
        except TransportUnavailable as e:
            self.logger.warning(f"Could not cleanly unsubscribe from '{self.topic}': {e}")

    def resubscribe(self):
        self.unsubscribe()
        self.on_reset()
        return self.subscribe()

    def set_topic(self, name):
        self.topic = name
        return self.resubscribe()

    def update_qos(self, depth, history, reliability, durability):
        self.qos = QosSettings.from_ints(depth, history, reliability, durability)
        return self.resubscribe()

    def list_candidate_topics(self):
        if self.transport is None:
            return TopicListing([], None)
        try:
            names_and_types = self.transport.topic_names_and_types()
        except TransportUnavailable as e:
            self.logger.warning(f"Topic discovery unavailable: {e}")
            return TopicListing([], None)

        topics = []
        current_index = None
        for name, types in names_and_types:
            if self.message_type not in types:
                continue
            if name == self.topic:
                current_index = len(topics)
            topics.append(name)
        return TopicListing(topics, current_index)
