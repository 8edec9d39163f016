from __future__ import annotations

from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field


class PublishRequest(BaseModel):
    """Request to publish a message to Pub/Sub."""

    model_config = ConfigDict(populate_by_name=True)

    class_name: str = Field(..., alias="className", min_length=1, description="Registered message class name", examples=["OrderCreated"])
    topic: str = Field(..., min_length=1, description="Pub/Sub topic name", examples=["orders-topic"])
    attributes: Optional[Dict[str, str]] = Field(None, description="Optional message attributes")
    # left untyped: the registry decides whether the shape is acceptable
    message: Any = Field(..., description="Message payload (validated against className)")


class PubSubPayload(BaseModel):
    """Publish payload embedded in a scenario message."""

    model_config = ConfigDict(populate_by_name=True)

    class_name: str = Field(..., alias="className")
    topic: str
    attributes: Dict[str, str] = Field(default_factory=dict)
    message: Dict[str, Any] = Field(default_factory=dict)
