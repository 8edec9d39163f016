from unittest.mock import MagicMock

import pytest
from google.api_core.exceptions import NotFound

from reggie.storage import GCSBlobStore, InMemoryBlobStore, create_blob_store


def test_in_memory_roundtrip_and_prefix_listing():
    blobs = InMemoryBlobStore()
    blobs.write("alice/scenarios/a.json", b"{}", "application/json")
    blobs.write("alice/scenarios/b.json", b"{}", "application/json")
    blobs.write("alicia/scenarios/c.json", b"{}", "application/json")
    blobs.write("message-samples/s.json", b"{}", "application/json")

    assert blobs.list("alice/scenarios/") == ["alice/scenarios/a.json", "alice/scenarios/b.json"]
    assert blobs.list_prefixes("/") == ["alice/", "alicia/", "message-samples/"]
    assert blobs.read("alice/scenarios/a.json") == b"{}"
    assert blobs.content_types["alice/scenarios/a.json"] == "application/json"


def test_in_memory_delete():
    blobs = InMemoryBlobStore()
    blobs.write("x.json", b"1")
    assert blobs.delete("x.json") is True
    assert blobs.delete("x.json") is False
    with pytest.raises(KeyError):
        blobs.read("x.json")


def _gcs(client=None):
    client = client or MagicMock()
    return GCSBlobStore("bucket", client=client), client


def test_gcs_write_uploads_with_content_type():
    store, client = _gcs()
    store.write("k.json", b"{}", "application/json")
    client.bucket.assert_called_once_with("bucket")
    blob = client.bucket.return_value.blob
    blob.assert_called_with("k.json")
    blob.return_value.upload_from_string.assert_called_once_with(b"{}", content_type="application/json")


def test_gcs_read_missing_raises_key_error():
    store, client = _gcs()
    client.bucket.return_value.blob.return_value.download_as_bytes.side_effect = NotFound("gone")
    with pytest.raises(KeyError):
        store.read("k.json")


def test_gcs_delete_missing_returns_false():
    store, client = _gcs()
    client.bucket.return_value.blob.return_value.delete.side_effect = NotFound("gone")
    assert store.delete("k.json") is False


def test_gcs_list_and_prefixes():
    store, client = _gcs()
    b1, b2 = MagicMock(), MagicMock()
    b1.name, b2.name = "u/scenarios/b.json", "u/scenarios/a.json"

    class _Iter:
        prefixes = {"u/", "message-samples/"}

        def __iter__(self):
            return iter([])

    client.list_blobs.side_effect = [[b1, b2], _Iter()]
    assert store.list("u/scenarios/") == ["u/scenarios/a.json", "u/scenarios/b.json"]
    client.list_blobs.assert_called_with("bucket", prefix="u/scenarios/")
    assert store.list_prefixes("/") == ["message-samples/", "u/"]


def test_factory():
    assert isinstance(create_blob_store("memory"), InMemoryBlobStore)
    with pytest.raises(ValueError):
        create_blob_store("s3")
