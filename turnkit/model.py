"""Base records shared by every game: moves, states and observations."""

from __future__ import annotations

from abc import ABC
from dataclasses import dataclass, fields, is_dataclass
from typing import Any, ClassVar, Mapping, Self

from .encoding import fingerprint, to_plain


class Move(ABC):
    """A typed command produced from player input."""

    move_type: ClassVar[str] = "Move"

    def to_dict(self) -> dict[str, Any]:
        """Return the move as a JSON payload tagged with its ``type``."""
        if is_dataclass(self):
            payload = {field.name: to_plain(getattr(self, field.name)) for field in fields(self)}
        else:
            payload = {key: to_plain(value) for key, value in vars(self).items() if not key.startswith("_")}
        payload["type"] = self.move_type
        return payload

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Self:
        kwargs = {key: value for key, value in data.items() if key not in {"type", "move_type"}}
        return cls(**kwargs)  # type: ignore[misc, call-arg]


@dataclass(frozen=True)
class State:
    """Immutable game snapshot; applying a move yields a new one."""

    def to_dict(self) -> dict[str, Any]:
        return to_plain(self)

    def state_digest(self) -> str:
        """Return the fingerprint recorded next to each turn in the replay log."""
        return fingerprint(self)


@dataclass(frozen=True)
class Observation:
    """What one seat is shown before it is asked for a move."""

    def to_dict(self) -> dict[str, Any]:
        return to_plain(self)
