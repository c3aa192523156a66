"""Observation model for progression tic-tac-toe (fully observable)."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from turnkit.model import Observation

from .tictactoe_state import Phase


@dataclass(frozen=True)
class TicTacToeObservation(Observation):
    player_id: str
    player_name: str
    board_size: int
    board: dict[int, str | None]
    own_cells: tuple[int, ...]
    current_player: str
    phase: Phase
    turn_index: int
    winner: str | None
    last_move: dict[str, Any] | None
