"""Built-in message types known to every Reggie instance."""

from .orders import OrderCreated

BUILTIN_MESSAGE_TYPES = {
    "OrderCreated": OrderCreated,
}

__all__ = ["OrderCreated", "BUILTIN_MESSAGE_TYPES"]
