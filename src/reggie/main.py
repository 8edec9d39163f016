import asyncio
import os
from contextlib import asynccontextmanager
from typing import List

import uvicorn
from fastapi import FastAPI, Request, Response
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from reggie.config import load_settings
from reggie.exceptions import (
    BlobNotFoundError,
    InvalidKeyError,
    MessageDeserializationError,
    PublishError,
    StorageError,
    UnknownMessageTypeError,
)
from reggie.publisher import InMemoryTopicPublisher, create_publisher
from reggie.registry import build_registry
from reggie.schemas import MessageSample, PublishRequest, Scenario
from reggie.storage import DocumentStore, create_blob_store
from reggie.utils.logger_util import get_logger

logger = get_logger(__name__)

settings = load_settings()
registry = build_registry(settings.message_types)
publisher = create_publisher(
    settings.publisher_backend,
    project_id=settings.project_id,
    publish_timeout=settings.publish_timeout_sec,
)
store = DocumentStore(
    create_blob_store(settings.storage_backend, bucket=settings.storage_bucket, project_id=settings.project_id)
)
logger.info("message types: %s", ", ".join(registry.names()))


@asynccontextmanager
async def lifespan(app: FastAPI):
    yield
    # flush pending batches before the process exits
    await asyncio.to_thread(publisher.shutdown)


app = FastAPI(
    title="Reggie API",
    description="Sidecar service for publishing messages to Google Cloud Pub/Sub",
    version="0.0.1",
    lifespan=lifespan,
)


@app.exception_handler(UnknownMessageTypeError)
async def _unknown_type(request: Request, exc: UnknownMessageTypeError):
    logger.info("rejected publish: %s", exc)
    return JSONResponse({"error": str(exc)}, status_code=400)


@app.exception_handler(MessageDeserializationError)
async def _bad_message(request: Request, exc: MessageDeserializationError):
    logger.info("rejected publish: %s (%d problems)", exc, len(exc.details))
    return JSONResponse({"error": str(exc), "details": exc.details}, status_code=400)


@app.exception_handler(InvalidKeyError)
async def _bad_key(request: Request, exc: InvalidKeyError):
    return JSONResponse({"error": str(exc)}, status_code=400)


@app.exception_handler(BlobNotFoundError)
async def _not_found(request: Request, exc: BlobNotFoundError):
    return JSONResponse({"error": str(exc)}, status_code=404)


@app.exception_handler(PublishError)
async def _publish_failed(request: Request, exc: PublishError):
    return JSONResponse({"error": str(exc)}, status_code=500)


@app.exception_handler(StorageError)
async def _storage_failed(request: Request, exc: StorageError):
    return JSONResponse({"error": str(exc)}, status_code=500)


@app.get("/health")
async def health():
    return {"status": "ok"}


@app.get("/message-types")
async def list_message_types():
    return {"types": {name: registry.describe(name) for name in registry.names()}}


@app.post("/publish")
async def publish(req: PublishRequest):
    # validation happens before any transport work
    message = registry.deserialize(req.class_name, req.message)
    body = message.model_dump_json(by_alias=True)
    message_id = await asyncio.to_thread(publisher.publish, req.topic, body.encode("utf-8"), req.attributes)
    return JSONResponse({
        "messageId": message_id,
        "payload": message.model_dump(mode="json", by_alias=True),
        req.class_name: registry.describe(req.class_name),
    })


@app.get("/users", response_model=List[str])
async def list_users():
    return await asyncio.to_thread(store.list_user_ids)


@app.get("/users/{user_id}/scenarios", response_model=List[Scenario])
async def list_user_scenarios(user_id: str):
    return await asyncio.to_thread(store.list_scenarios, user_id)


@app.put("/users/{user_id}/scenarios", response_model=Scenario)
async def upsert_user_scenario(user_id: str, scenario: Scenario):
    return await asyncio.to_thread(store.upsert_scenario, user_id, scenario)


@app.get("/users/{user_id}/scenarios/{scenario_id}", response_model=Scenario)
async def get_user_scenario(user_id: str, scenario_id: str):
    return await asyncio.to_thread(store.get_scenario, user_id, scenario_id)


@app.delete("/users/{user_id}/scenarios/{scenario_id}", status_code=204)
async def delete_user_scenario(user_id: str, scenario_id: str):
    await asyncio.to_thread(store.delete_scenario, user_id, scenario_id)
    return Response(status_code=204)


@app.get("/message-samples", response_model=List[MessageSample])
async def list_message_samples():
    return await asyncio.to_thread(store.list_message_samples)


@app.put("/message-samples", response_model=MessageSample)
async def upsert_message_sample(sample: MessageSample):
    return await asyncio.to_thread(store.upsert_message_sample, sample)


@app.get("/message-samples/{message_id}", response_model=MessageSample)
async def get_message_sample(message_id: str):
    return await asyncio.to_thread(store.get_message_sample, message_id)


@app.delete("/message-samples/{message_id}", status_code=204)
async def delete_message_sample(message_id: str):
    await asyncio.to_thread(store.delete_message_sample, message_id)
    return Response(status_code=204)


@app.get("/admin/publishers")
async def admin_list_publishers():
    # NOTE: In prod protect with auth
    out = {"backend": settings.publisher_backend, "topics": publisher.topics()}
    if isinstance(publisher, InMemoryTopicPublisher):
        out["metrics"] = publisher.bus.metrics()
    return out


def mount_ui(target: FastAPI, static_dir) -> bool:
    """Serve a built UI at "/" with index.html as the root document.

    Must run after the API routes are declared so they take precedence.
    """
    if not static_dir or not os.path.isdir(static_dir):
        return False
    target.mount("/", StaticFiles(directory=static_dir, html=True), name="ui")
    logger.info("serving UI from %s", static_dir)
    return True


mount_ui(app, settings.static_dir)


if __name__ == "__main__":
    uvicorn.run("reggie.main:app", host="0.0.0.0", port=8000, reload=True)
