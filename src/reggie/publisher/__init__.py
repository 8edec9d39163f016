from .base import TopicPublisher
from .memory import Channel, InMemoryTopicPublisher, MessageBus


def create_publisher(name: str, project_id: str = "local-project", publish_timeout: float = 30.0) -> TopicPublisher:
    """Pick a transport by name: ``pubsub`` or ``memory``."""
    key = (name or "").strip().lower()
    if key == "memory":
        return InMemoryTopicPublisher(publish_timeout=publish_timeout)
    if key == "pubsub":
        # imported lazily so the memory transport works without GCP credentials
        from .pubsub import PubSubTopicPublisher

        return PubSubTopicPublisher(project_id, publish_timeout=publish_timeout)
    raise ValueError(f"unknown publisher backend: {name!r}")


__all__ = ["TopicPublisher", "InMemoryTopicPublisher", "MessageBus", "Channel", "create_publisher"]
