from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class OrderCreated(BaseModel):
    """Emitted when a customer places an order."""

    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    order_id: str = Field(..., alias="orderId")
    customer_id: str = Field(..., alias="customerId")
    amount: float
