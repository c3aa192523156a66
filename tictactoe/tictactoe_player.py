"""A seat in the game: display name plus the cells it has claimed."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from .move_set import MoveSet


@dataclass
class Player:
    """Owns exactly one :class:`MoveSet` for the whole game."""

    player_id: str
    name: str
    move_set: MoveSet = field(default_factory=MoveSet)

    @property
    def cells(self) -> frozenset[int]:
        return self.move_set.values()

    def record_move(self, cell: int) -> None:
        self.move_set.insert(cell)

    def has_won(self) -> bool:
        return self.move_set.has_won()

    def copy(self) -> Player:
        return Player(player_id=self.player_id, name=self.name, move_set=self.move_set.copy())

    def to_dict(self) -> dict[str, Any]:
        return {"player_id": self.player_id, "name": self.name, "move_set": self.move_set.to_dict()}
