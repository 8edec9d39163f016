import pytest
from pydantic import BaseModel

from reggie.exceptions import MessageDeserializationError, UnknownMessageTypeError
from reggie.messages import OrderCreated
from reggie.registry import MessageRegistry, build_registry, load_model


class ShipmentDispatched(BaseModel):
    shipment_id: str
    carrier: str = "ups"


def test_register_and_deserialize():
    reg = MessageRegistry()
    reg.register("ShipmentDispatched", ShipmentDispatched)
    msg = reg.deserialize("ShipmentDispatched", {"shipment_id": "s-1"})
    assert isinstance(msg, ShipmentDispatched)
    assert msg.carrier == "ups"
    assert "ShipmentDispatched" in reg
    assert reg.get("Missing") is None


def test_duplicate_name_rejected():
    reg = MessageRegistry()
    reg.register("X", ShipmentDispatched)
    with pytest.raises(ValueError):
        reg.register("X", OrderCreated)
    assert reg.get("X") is ShipmentDispatched


def test_non_model_rejected():
    reg = MessageRegistry()
    with pytest.raises(ValueError):
        reg.register("Plain", dict)
    with pytest.raises(ValueError):
        reg.register("", ShipmentDispatched)


def test_unknown_type():
    reg = MessageRegistry()
    with pytest.raises(UnknownMessageTypeError) as ei:
        reg.deserialize("Ghost", {})
    assert str(ei.value) == "Unknown message type: Ghost"


def test_decode_error_carries_details():
    reg = build_registry()
    with pytest.raises(MessageDeserializationError) as ei:
        reg.deserialize("OrderCreated", {"orderId": "1", "customerId": "2", "amount": "lots"})
    assert ei.value.class_name == "OrderCreated"
    assert ei.value.details[0]["loc"] == ("amount",)


def test_order_created_accepts_field_names_and_aliases():
    reg = build_registry()
    a = reg.deserialize("OrderCreated", {"orderId": "1", "customerId": "2", "amount": 1})
    b = reg.deserialize("OrderCreated", {"order_id": "1", "customer_id": "2", "amount": 1})
    assert a == b
    assert a.model_dump(by_alias=True) == {"orderId": "1", "customerId": "2", "amount": 1.0}


def test_build_registry_with_extra_types():
    reg = build_registry([f"Shipment={__name__}:ShipmentDispatched"])
    assert reg.names() == ["OrderCreated", "Shipment"]
    assert reg.describe("Shipment") == {"shipment_id": "str", "carrier": "str"}


def test_build_registry_bad_entries():
    with pytest.raises(ValueError):
        build_registry(["NoEquals"])
    with pytest.raises(ValueError):
        load_model("no_colon_here")
    with pytest.raises(ImportError):
        load_model("reggie.does_not_exist:Thing")
