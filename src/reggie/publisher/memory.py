from __future__ import annotations

import itertools
import queue
import threading
import time
from typing import Any, Dict, Mapping, Optional

from reggie.utils.logger_util import get_logger

from .base import TopicPublisher

logger = get_logger(__name__)


class Channel:
    def __init__(self, maxsize: int = 1000):
        self.q: queue.Queue = queue.Queue(maxsize=maxsize)
        self.maxsize = int(maxsize)
        self.published = 0
        self.dropped = 0
        self.created_at = time.time()
        self._lock = threading.Lock()

    @property
    def depth(self) -> int:
        return self.q.qsize()

    def put(self, item: Any) -> bool:
        """Enqueue without blocking. A full channel evicts its oldest item.

        Returns False when an item had to be dropped to make room.
        """
        evicted = False
        with self._lock:
            while True:
                try:
                    self.q.put_nowait(item)
                    break
                except queue.Full:
                    try:
                        self.q.get_nowait()
                    except queue.Empty:
                        continue
                    self.dropped += 1
                    evicted = True
            self.published += 1
        return not evicted


class MessageBus:
    """In-process stand-in for Pub/Sub: one bounded channel per topic.

    Thread-safe, since publishes arrive from the request thread pool.
    """

    def __init__(self, default_maxsize: int = 1000):
        self.channels: Dict[str, Channel] = {}
        self.default_maxsize = int(default_maxsize)
        self._lock = threading.Lock()

    def register_channel(self, topic: str, maxsize: int | None = None) -> Channel:
        with self._lock:
            ch = self.channels.get(topic)
            if ch is None:
                ch = Channel(maxsize=self.default_maxsize if maxsize is None else int(maxsize))
                self.channels[topic] = ch
            return ch

    def subscribe(self, topic: str) -> queue.Queue:
        return self.register_channel(topic).q

    def publish(self, topic: str, item: Any) -> bool:
        return self.register_channel(topic).put(item)

    def metrics(self) -> Dict[str, Dict[str, int]]:
        """Per-topic depth / published / dropped counters."""
        with self._lock:
            channels = list(self.channels.items())
        return {
            name: {"queue_depth": ch.depth, "published": ch.published, "dropped": ch.dropped, "maxsize": ch.maxsize}
            for name, ch in channels
        }


class InMemoryTopicPublisher(TopicPublisher):
    """Publisher for local development and tests; messages land on a MessageBus."""

    def __init__(self, bus: Optional[MessageBus] = None, **kwargs):
        super().__init__(**kwargs)
        self.bus = bus or MessageBus()
        self._ids = itertools.count(1)
        self.handles_created = 0

    def _create_handle(self, topic: str) -> str:
        self.bus.register_channel(topic)
        self.handles_created += 1
        return topic

    def _send(self, handle: str, data: bytes, attributes: Mapping[str, str]) -> str:
        message_id = str(next(self._ids))
        if not self.bus.publish(handle, {"message_id": message_id, "data": data, "attributes": dict(attributes)}):
            logger.debug("channel %s full, oldest message dropped", handle)
        return message_id
