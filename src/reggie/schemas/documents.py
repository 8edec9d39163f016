from __future__ import annotations

from typing import List

from pydantic import BaseModel, ConfigDict, Field

from .publish import PublishRequest, PubSubPayload

MAX_COLUMN = 30


class ScenarioMessage(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(..., min_length=1)
    # playback slot
    column: int = Field(..., ge=1, le=MAX_COLUMN)
    payload: PubSubPayload


class Scenario(BaseModel):
    """A named, ordered set of messages replayed column by column."""

    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(..., min_length=1)
    name: str
    description: str = ""
    messages: List[ScenarioMessage] = Field(default_factory=list)


class MessageSample(PublishRequest):
    """A saved publish request, shared between all users."""

    message_id: str = Field(..., alias="messageId", min_length=1)
