from __future__ import annotations

import threading
from typing import Any, Dict, List, Mapping, Optional

from reggie.exceptions import PublishError
from reggie.utils.logger_util import get_logger

logger = get_logger(__name__)


class TopicPublisher:
    """Publishes raw bytes to named topics through cached per-topic handles.

    Subclasses supply ``_create_handle``, ``_send`` and ``_close_handle``.
    The cache guarantees a single handle per topic: creation happens under a
    lock, so concurrent first use of a topic still creates exactly one.
    """

    def __init__(self, publish_timeout: float = 30.0):
        self.publish_timeout = float(publish_timeout)
        self._handles: Dict[str, Any] = {}
        self._lock = threading.Lock()

    def _create_handle(self, topic: str) -> Any:
        raise NotImplementedError

    def _send(self, handle: Any, data: bytes, attributes: Mapping[str, str]) -> str:
        raise NotImplementedError

    def _close_handle(self, topic: str, handle: Any) -> None:
        pass

    def get_or_create(self, topic: str) -> Any:
        handle = self._handles.get(topic)
        if handle is not None:
            return handle
        with self._lock:
            handle = self._handles.get(topic)
            if handle is None:
                try:
                    handle = self._create_handle(topic)
                except Exception as e:
                    logger.error("failed to create publisher for topic %s", topic, exc_info=True)
                    raise PublishError(f"Failed to create publisher for topic: {topic}") from e
                self._handles[topic] = handle
                logger.info("created publisher for topic %s", topic)
        return handle

    def publish(self, topic: str, data: bytes, attributes: Optional[Mapping[str, str]] = None) -> str:
        handle = self.get_or_create(topic)
        try:
            message_id = self._send(handle, data, dict(attributes or {}))
        except Exception as e:
            logger.error("publish to %s failed", topic, exc_info=True)
            raise PublishError(f"Failed to publish message to topic: {topic}") from e
        logger.info("published message %s to %s (%d bytes)", message_id, topic, len(data))
        return message_id

    def topics(self) -> List[str]:
        return sorted(self._handles)

    def shutdown(self) -> None:
        with self._lock:
            handles = list(self._handles.items())
            self._handles.clear()
        for topic, handle in handles:
            try:
                self._close_handle(topic, handle)
            except Exception:
                # keep closing the remaining handles
                logger.warning("failed to shut down publisher for %s", topic, exc_info=True)
        if handles:
            logger.info("shut down %d topic publisher(s)", len(handles))
