from .blobs import BlobStore, GCSBlobStore, InMemoryBlobStore
from .documents import DocumentStore, message_sample_key, scenario_key


def create_blob_store(name: str, bucket: str = "reggie", project_id: str | None = None) -> BlobStore:
    """Pick a blob backend by name: ``gcs`` or ``memory``."""
    key = (name or "").strip().lower()
    if key == "memory":
        return InMemoryBlobStore()
    if key == "gcs":
        return GCSBlobStore(bucket, project_id=project_id)
    raise ValueError(f"unknown storage backend: {name!r}")


__all__ = [
    "BlobStore",
    "GCSBlobStore",
    "InMemoryBlobStore",
    "DocumentStore",
    "create_blob_store",
    "scenario_key",
    "message_sample_key",
]
