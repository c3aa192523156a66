"""Replay log of one match, kept in memory and optionally saved as JSON lines."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from time import time
from typing import Any, Iterator

from .encoding import canonical_json, to_plain


class EventType(str, Enum):
    MATCH_START = "match_start"
    CLAIM = "claim"
    REJECTED = "rejected"
    SOURCE_ERROR = "source_error"
    FINISH = "finish"


def _now_ms() -> int:
    return int(time() * 1000)


@dataclass(frozen=True)
class MatchEvent:
    kind: EventType
    turn: int
    payload: dict[str, Any]
    timestamp_ms: int = field(default_factory=_now_ms)


class MatchLog:
    """Ordered events for a single game id.

    Each saved line is one event: ``{"game_id", "kind", "turn", "ts", ...payload}``.
    """

    def __init__(self, game_id: str):
        self.game_id = game_id
        self.events: list[MatchEvent] = []

    def record(self, kind: EventType, turn: int, **payload: Any) -> MatchEvent:
        event = MatchEvent(kind=kind, turn=turn, payload=to_plain(payload))
        self.events.append(event)
        return event

    def of_type(self, kind: EventType) -> list[MatchEvent]:
        return [event for event in self.events if event.kind is kind]

    def save(self, path: str | Path) -> Path:
        output_path = Path(path)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        with output_path.open("w", encoding="utf-8") as handle:
            for event in self.events:
                line = {"game_id": self.game_id, "kind": event.kind, "turn": event.turn, "ts": event.timestamp_ms}
                line.update(event.payload)
                handle.write(canonical_json(line) + "\n")
        return output_path

    @classmethod
    def load(cls, path: str | Path) -> MatchLog:
        log: MatchLog | None = None
        with Path(path).open("r", encoding="utf-8") as handle:
            for raw in handle:
                if not raw.strip():
                    continue
                data = json.loads(raw)
                if log is None:
                    log = cls(str(data["game_id"]))
                kind = EventType(data.pop("kind"))
                turn = int(data.pop("turn"))
                timestamp_ms = int(data.pop("ts"))
                data.pop("game_id")
                log.events.append(MatchEvent(kind=kind, turn=turn, payload=data, timestamp_ms=timestamp_ms))
        if log is None:
            raise ValueError(f"Replay log {str(path)!r} is empty.")
        return log

    def __len__(self) -> int:
        return len(self.events)

    def __iter__(self) -> Iterator[MatchEvent]:
        return iter(self.events)
