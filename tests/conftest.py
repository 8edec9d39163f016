import os

import pytest
from fastapi.testclient import TestClient

# tests/conftest.py

# in-process backends; must be set before reggie.main builds its globals
os.environ["REGGIE_PUBLISHER"] = "memory"
os.environ["REGGIE_STORAGE"] = "memory"
os.environ.setdefault("REGGIE_LOG_LEVEL", "WARNING")

import reggie.main as main_mod
from reggie.publisher import InMemoryTopicPublisher
from reggie.storage import DocumentStore, InMemoryBlobStore


@pytest.fixture(scope="session")
def app():
    """FastAPI app instance."""
    return main_mod.app


@pytest.fixture
def client(app) -> TestClient:
    """TestClient for the FastAPI app."""
    return TestClient(app)


@pytest.fixture(autouse=True)
def fresh_backends(monkeypatch):
    """Give every test an empty publisher and blob store."""
    publisher = InMemoryTopicPublisher()
    store = DocumentStore(InMemoryBlobStore())
    monkeypatch.setattr(main_mod, "publisher", publisher)
    monkeypatch.setattr(main_mod, "store", store)
    yield


@pytest.fixture
def publisher():
    return main_mod.publisher


@pytest.fixture
def store():
    return main_mod.store


@pytest.fixture
def order_message():
    return {"orderId": "123", "customerId": "456", "amount": 99.99}
