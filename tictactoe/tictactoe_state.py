"""State and enums for progression tic-tac-toe."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any

from turnkit.model import State

from .tictactoe_player import Player

DEFAULT_BOARD_SIZE = 3
DEFAULT_PLAYER_COUNT = 2


class Phase(str, Enum):
    """Persisted phases. Validation, application and the win/draw checks
    all happen inside a single ``apply_move`` call."""

    AWAITING_MOVE = "AWAITING_MOVE"
    WON = "WON"
    DRAW = "DRAW"


def player_id_for(index: int) -> str:
    """Return the seat ID for a 0-based seat index."""
    return f"P{index + 1}"


@dataclass(frozen=True)
class TicTacToeState(State):
    """Immutable snapshot of one game.

    ``board`` maps every cell index ``1..board_size**2`` to the ID of the
    player that claimed it, or ``None``.
    """

    board_size: int
    board: dict[int, str | None]
    players: tuple[Player, ...]
    current_index: int = 0
    phase: Phase = Phase.AWAITING_MOVE
    winner: str | None = None
    turn_index: int = 0
    last_move: dict[str, Any] | None = None

    @property
    def cell_count(self) -> int:
        return self.board_size * self.board_size

    @property
    def active_player(self) -> Player:
        return self.players[self.current_index]

    def is_claimed(self, cell: int) -> bool:
        return self.board.get(cell) is not None

    def unclaimed_cells(self) -> list[int]:
        return [cell for cell, owner in sorted(self.board.items()) if owner is None]

    def is_full(self) -> bool:
        return all(owner is not None for owner in self.board.values())

    def player(self, player_id: str) -> Player:
        for player in self.players:
            if player.player_id == player_id:
                return player
        raise ValueError(f"Unknown player_id: {player_id!r}")


def empty_board(board_size: int) -> dict[int, str | None]:
    return {cell: None for cell in range(1, board_size * board_size + 1)}
