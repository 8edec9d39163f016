"""Replay a stored scenario against a running Reggie instance.

Messages are grouped by column and columns are played in ascending order.
Every message of a column is sent, then playback pauses before the next
column starts. The first column with a failed publish ends the run.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

import time

import httpx

from reggie.schemas import Scenario, ScenarioMessage
from reggie.schemas.documents import MAX_COLUMN
from reggie.utils.logger_util import get_logger

logger = get_logger(__name__)

# pause after each column, matching the UI player
COLUMN_DELAY_SEC = 0.75


@dataclass
class MessageResult:
    status: str  # success|error
    status_code: int = 0
    response_body: Any = None
    error_body: Optional[str] = None


@dataclass
class PlaybackResult:
    status: str = "idle"  # idle|completed|error
    completed_columns: int = 0
    results: Dict[str, MessageResult] = field(default_factory=dict)
    errors: List[str] = field(default_factory=list)


def _send(client: httpx.Client, msg: ScenarioMessage) -> MessageResult:
    body = msg.payload.model_dump(mode="json", by_alias=True)
    try:
        r = client.post("/publish", json=body)
    except httpx.HTTPError as e:
        return MessageResult(status="error", error_body=str(e))
    if r.is_success:
        try:
            payload = r.json()
        except ValueError:
            payload = None
        return MessageResult(status="success", status_code=r.status_code, response_body=payload)
    return MessageResult(status="error", status_code=r.status_code, error_body=r.text)


def play_scenario(
    client: httpx.Client,
    scenario: Scenario,
    start_column: int = 1,
    max_column: int = MAX_COLUMN,
    column_delay: float = COLUMN_DELAY_SEC,
) -> PlaybackResult:
    """Publish ``scenario`` column by column through ``client``.

    ``client`` must have its base_url pointed at the service. Pass
    ``start_column`` to resume after a previously completed column.
    Each completed column is followed by a ``column_delay`` second pause,
    so columns behave as time slots; pass 0 to play back to back.
    """
    out = PlaybackResult(status="completed", completed_columns=max(start_column - 1, 0))
    for col in range(start_column, max_column + 1):
        column_messages = [m for m in scenario.messages if m.column == col]
        if not column_messages:
            continue
        logger.info("scenario %s: playing column %d (%d messages)", scenario.id, col, len(column_messages))
        failed = []
        for m in column_messages:
            res = _send(client, m)
            out.results[m.id] = res
            if res.status != "success":
                failed.append(m)
        if failed:
            out.status = "error"
            out.errors = [f"Failed to send {m.payload.class_name}" for m in failed]
            logger.warning("scenario %s stopped at column %d: %s", scenario.id, col, out.errors)
            return out
        out.completed_columns = col
        if column_delay > 0:
            time.sleep(column_delay)
    return out
