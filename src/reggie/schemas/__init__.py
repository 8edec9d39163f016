"""Request and document models exchanged over the REST surface.

Field names are snake_case in Python and camelCase on the wire; every model
accepts either on input and serializes by alias.
"""

from .publish import PublishRequest, PubSubPayload
from .documents import MessageSample, Scenario, ScenarioMessage

__all__ = ["PublishRequest", "PubSubPayload", "MessageSample", "Scenario", "ScenarioMessage"]
