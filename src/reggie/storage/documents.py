from __future__ import annotations

from typing import List, Type, TypeVar

from pydantic import BaseModel, ValidationError

from reggie.exceptions import BlobNotFoundError, InvalidKeyError, StorageError
from reggie.schemas import MessageSample, Scenario
from reggie.utils.logger_util import get_logger

from .blobs import BlobStore

logger = get_logger(__name__)

SCENARIOS_SEGMENT = "/scenarios/"
MESSAGE_SAMPLES_PREFIX = "message-samples/"
JSON_SUFFIX = ".json"
JSON_CONTENT_TYPE = "application/json"

M = TypeVar("M", bound=BaseModel)


def _check_id(kind: str, value: str) -> str:
    if not value or not value.strip():
        raise InvalidKeyError(f"{kind} must be non-empty")
    if "/" in value:
        raise InvalidKeyError(f"{kind} must not contain '/': {value!r}")
    return value


def scenario_key(user_id: str, scenario_id: str) -> str:
    _check_id("user id", user_id)
    if user_id + "/" == MESSAGE_SAMPLES_PREFIX:
        raise InvalidKeyError(f"user id {user_id!r} is reserved")
    return user_id + SCENARIOS_SEGMENT + _check_id("scenario id", scenario_id) + JSON_SUFFIX


def message_sample_key(message_id: str) -> str:
    return MESSAGE_SAMPLES_PREFIX + _check_id("message id", message_id) + JSON_SUFFIX


class DocumentStore:
    """Scenarios and message samples stored as JSON blobs.

    Layout::

        <userId>/scenarios/<scenarioId>.json
        message-samples/<messageId>.json

    Blob keys come straight from caller-supplied ids; writes overwrite.
    """

    def __init__(self, blobs: BlobStore):
        self.blobs = blobs

    # scenarios (per user)

    def upsert_scenario(self, user_id: str, scenario: Scenario) -> Scenario:
        self._write(scenario_key(user_id, scenario.id), scenario)
        return scenario

    def list_scenarios(self, user_id: str) -> List[Scenario]:
        _check_id("user id", user_id)
        return self._read_all(user_id + SCENARIOS_SEGMENT, Scenario)

    def get_scenario(self, user_id: str, scenario_id: str) -> Scenario:
        return self._read(scenario_key(user_id, scenario_id), Scenario)

    def delete_scenario(self, user_id: str, scenario_id: str) -> None:
        self._delete(scenario_key(user_id, scenario_id))

    def list_user_ids(self) -> List[str]:
        try:
            prefixes = self.blobs.list_prefixes("/")
        except Exception as e:
            logger.error("listing user ids failed", exc_info=True)
            raise StorageError("Failed to list user IDs from Cloud Storage") from e
        return [p[:-1] for p in prefixes if p != MESSAGE_SAMPLES_PREFIX]

    # message samples (shared)

    def upsert_message_sample(self, sample: MessageSample) -> MessageSample:
        self._write(message_sample_key(sample.message_id), sample)
        return sample

    def list_message_samples(self) -> List[MessageSample]:
        return self._read_all(MESSAGE_SAMPLES_PREFIX, MessageSample)

    def get_message_sample(self, message_id: str) -> MessageSample:
        return self._read(message_sample_key(message_id), MessageSample)

    def delete_message_sample(self, message_id: str) -> None:
        self._delete(message_sample_key(message_id))

    # blob helpers

    def _write(self, name: str, doc: BaseModel) -> None:
        try:
            data = doc.model_dump_json(by_alias=True).encode("utf-8")
            self.blobs.write(name, data, JSON_CONTENT_TYPE)
        except Exception as e:
            logger.error("write to %s failed", name, exc_info=True)
            raise StorageError(f"Failed to write to Cloud Storage: {name}") from e
        logger.info("stored %s (%d bytes)", name, len(data))

    def _read(self, name: str, model: Type[M]) -> M:
        try:
            raw = self.blobs.read(name)
        except KeyError:
            raise BlobNotFoundError(name) from None
        except Exception as e:
            logger.error("read of %s failed", name, exc_info=True)
            raise StorageError(f"Failed to read from Cloud Storage: {name}") from e
        try:
            return model.model_validate_json(raw)
        except ValidationError as e:
            raise StorageError(f"Stored document is not a valid {model.__name__}: {name}") from e

    def _read_all(self, prefix: str, model: Type[M]) -> List[M]:
        results: List[M] = []
        try:
            for name in self.blobs.list(prefix):
                if not name.endswith(JSON_SUFFIX):
                    continue
                results.append(model.model_validate_json(self.blobs.read(name)))
        except Exception as e:
            logger.error("read of prefix %s failed", prefix, exc_info=True)
            raise StorageError(f"Failed to read from Cloud Storage with prefix: {prefix}") from e
        return results

    def _delete(self, name: str) -> None:
        try:
            deleted = self.blobs.delete(name)
        except Exception as e:
            logger.error("delete of %s failed", name, exc_info=True)
            raise StorageError(f"Failed to delete from Cloud Storage: {name}") from e
        if not deleted:
            raise BlobNotFoundError(name)
        logger.info("deleted %s", name)
