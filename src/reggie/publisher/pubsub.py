from __future__ import annotations

from typing import Mapping

from google.cloud import pubsub_v1

from reggie.utils.logger_util import get_logger

from .base import TopicPublisher

logger = get_logger(__name__)


class _TopicHandle:
    def __init__(self, client: pubsub_v1.PublisherClient, topic_path: str):
        self.client = client
        self.topic_path = topic_path


class PubSubTopicPublisher(TopicPublisher):
    """Google Cloud Pub/Sub transport with one batching client per topic.

    Honours ``PUBSUB_EMULATOR_HOST`` through the client library.
    """

    def __init__(self, project_id: str, **kwargs):
        super().__init__(**kwargs)
        self.project_id = project_id

    def _create_handle(self, topic: str) -> _TopicHandle:
        client = pubsub_v1.PublisherClient()
        return _TopicHandle(client, client.topic_path(self.project_id, topic))

    def _send(self, handle: _TopicHandle, data: bytes, attributes: Mapping[str, str]) -> str:
        future = handle.client.publish(handle.topic_path, data, **attributes)
        return future.result(timeout=self.publish_timeout)

    def _close_handle(self, topic: str, handle: _TopicHandle) -> None:
        logger.debug("flushing publisher for %s", handle.topic_path)
        # stop() flushes pending batches before returning
        handle.client.stop()
