from __future__ import annotations

import importlib
from typing import Any, Dict, Iterable, List, Optional, Type

from pydantic import BaseModel, ValidationError

from reggie.exceptions import MessageDeserializationError, UnknownMessageTypeError
from reggie.messages import BUILTIN_MESSAGE_TYPES
from reggie.utils.logger_util import get_logger

logger = get_logger(__name__)


class MessageRegistry:
    """Name -> pydantic model mapping used to validate publish payloads.

    The registry is append-only: it is filled once at startup and only read
    afterwards, so lookups take no lock.
    """

    def __init__(self):
        self._types: Dict[str, Type[BaseModel]] = {}

    def register(self, name: str, model: Type[BaseModel]) -> None:
        if not name:
            raise ValueError("message type name must be non-empty")
        if not (isinstance(model, type) and issubclass(model, BaseModel)):
            raise ValueError(f"message type {name!r} must be a pydantic model class")
        if name in self._types:
            raise ValueError(f"message type {name!r} is already registered")
        self._types[name] = model
        logger.info("registered message type %s -> %s.%s", name, model.__module__, model.__qualname__)

    def get(self, name: str) -> Optional[Type[BaseModel]]:
        return self._types.get(name)

    def names(self) -> List[str]:
        return sorted(self._types)

    def __contains__(self, name: object) -> bool:
        return name in self._types

    def __len__(self) -> int:
        return len(self._types)

    def deserialize(self, name: str, payload: Any) -> BaseModel:
        model = self._types.get(name)
        if model is None:
            raise UnknownMessageTypeError(name)
        logger.debug("deserializing %s payload: %s", name, payload)
        if not isinstance(payload, dict):
            raise MessageDeserializationError(
                name, [{"type": "object_type", "loc": [], "msg": "message must be a JSON object"}]
            )
        try:
            return model.model_validate(payload)
        except ValidationError as e:
            raise MessageDeserializationError(
                name, e.errors(include_url=False, include_context=False, include_input=False)
            ) from e

    def describe(self, name: str) -> Dict[str, str]:
        """Return ``{serialized field name: type name}`` for a registered type."""
        model = self._types.get(name)
        if model is None:
            raise UnknownMessageTypeError(name)
        out: Dict[str, str] = {}
        for field_name, info in model.model_fields.items():
            key = info.alias or field_name
            ann = info.annotation
            out[key] = getattr(ann, "__name__", None) or str(ann)
        return out


def load_model(path: str) -> Type[BaseModel]:
    """Import ``package.module:ClassName``."""
    module_name, sep, attr = path.partition(":")
    if not sep or not module_name or not attr:
        raise ValueError(f"expected 'module:Class', got {path!r}")
    module = importlib.import_module(module_name)
    obj = module
    for part in attr.split("."):
        obj = getattr(obj, part)
    return obj


def build_registry(extra: Iterable[str] = ()) -> MessageRegistry:
    """Registry with the built-in types plus ``Name=module:Class`` entries."""
    registry = MessageRegistry()
    for name, model in BUILTIN_MESSAGE_TYPES.items():
        registry.register(name, model)
    for entry in extra:
        name, sep, path = entry.partition("=")
        if not sep:
            raise ValueError(f"expected 'Name=module:Class', got {entry!r}")
        registry.register(name.strip(), load_model(path.strip()))
    return registry
