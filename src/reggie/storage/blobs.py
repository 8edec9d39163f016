from __future__ import annotations

import threading
from typing import Dict, List, Protocol

from google.api_core.exceptions import NotFound
from google.cloud import storage

from reggie.utils.logger_util import get_logger

logger = get_logger(__name__)


class BlobStore(Protocol):
    """Minimal object-storage interface used by the document store.

    Implementations provide:
      write(name, data, content_type) -> None   (overwrites)
      read(name) -> bytes                       (KeyError if missing)
      list(prefix) -> sorted blob names starting with prefix
      list_prefixes(delimiter) -> sorted top-level "directories", with delimiter
      delete(name) -> bool                      (False if missing)
    """


class InMemoryBlobStore:
    """Dict-backed blob store for local dev and tests. Not durable."""

    def __init__(self):
        self._blobs: Dict[str, bytes] = {}
        self.content_types: Dict[str, str] = {}
        self._lock = threading.Lock()

    def write(self, name: str, data: bytes, content_type: str = "application/octet-stream") -> None:
        with self._lock:
            self._blobs[name] = bytes(data)
            self.content_types[name] = content_type

    def read(self, name: str) -> bytes:
        with self._lock:
            return self._blobs[name]

    def list(self, prefix: str = "") -> List[str]:
        with self._lock:
            return sorted(n for n in self._blobs if n.startswith(prefix))

    def list_prefixes(self, delimiter: str = "/") -> List[str]:
        with self._lock:
            names = list(self._blobs)
        out = set()
        for n in names:
            head, sep, _ = n.partition(delimiter)
            if sep:
                out.add(head + sep)
        return sorted(out)

    def delete(self, name: str) -> bool:
        with self._lock:
            self.content_types.pop(name, None)
            return self._blobs.pop(name, None) is not None


class GCSBlobStore:
    """Google Cloud Storage backed blob store over a single bucket.

    ``STORAGE_EMULATOR_HOST`` is picked up by the client library.
    """

    def __init__(self, bucket_name: str, project_id: str | None = None, client=None):
        if client is None:
            client = storage.Client(project=project_id)
        self.client = client
        self.bucket_name = bucket_name
        self.bucket = client.bucket(bucket_name)

    def write(self, name: str, data: bytes, content_type: str = "application/octet-stream") -> None:
        self.bucket.blob(name).upload_from_string(data, content_type=content_type)

    def read(self, name: str) -> bytes:
        try:
            return self.bucket.blob(name).download_as_bytes()
        except NotFound as e:
            raise KeyError(name) from e

    def list(self, prefix: str = "") -> List[str]:
        return sorted(b.name for b in self.client.list_blobs(self.bucket_name, prefix=prefix))

    def list_prefixes(self, delimiter: str = "/") -> List[str]:
        it = self.client.list_blobs(self.bucket_name, delimiter=delimiter)
        # prefixes are only populated once the pages have been consumed
        for _ in it:
            pass
        return sorted(it.prefixes)

    def delete(self, name: str) -> bool:
        try:
            self.bucket.blob(name).delete()
        except NotFound:
            return False
        return True
