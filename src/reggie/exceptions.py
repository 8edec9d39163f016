from typing import Any, Dict, List, Optional


class ReggieError(Exception):
    """Base class for errors surfaced to API callers."""


class UnknownMessageTypeError(ReggieError):
    def __init__(self, class_name: str):
        self.class_name = class_name
        super().__init__(f"Unknown message type: {class_name}")


class MessageDeserializationError(ReggieError):
    def __init__(self, class_name: str, details: Optional[List[Dict[str, Any]]] = None):
        self.class_name = class_name
        self.details = details or []
        super().__init__(f"Failed to deserialize message as {class_name}")


class PublishError(ReggieError):
    """Transport failure while creating a topic handle or sending."""


class StorageError(ReggieError):
    """Blob storage failure."""


class BlobNotFoundError(StorageError):
    def __init__(self, blob_name: str):
        self.blob_name = blob_name
        super().__init__(f"Blob not found: {blob_name}")


class InvalidKeyError(ReggieError):
    """An id that cannot be turned into a blob key."""
