"""Progression tic-tac-toe rules.

Players claim numbered cells in turn. A player wins when their move set
holds a node whose two children are the same distance away from it; the
cell index itself is the compared value, so the win is numeric rather than
a row, column or diagonal. A full board without a win is a draw.
"""

from __future__ import annotations

from dataclasses import replace
from typing import Any, Mapping, Sequence

from turnkit.errors import CellAlreadyClaimedError, CellOutOfRangeError, IllegalMoveError, MatchConfigurationError
from turnkit.game import Game
from turnkit.result import MatchResult

from .tictactoe_moves import ClaimCell, move_from_dict
from .tictactoe_observation import TicTacToeObservation
from .tictactoe_player import Player
from .tictactoe_state import (
    DEFAULT_BOARD_SIZE,
    DEFAULT_PLAYER_COUNT,
    Phase,
    TicTacToeState,
    empty_board,
    player_id_for,
)

MAX_BOARD_SIZE = 9


class TicTacToeGame(Game[TicTacToeState, ClaimCell, TicTacToeObservation]):
    """N-player claim-a-cell game on a ``board_size`` x ``board_size`` grid."""

    game_name = "progression_tictactoe"

    def __init__(self, default_config: dict[str, Any] | None = None):
        self.default_config = default_config or {}

    def new_game(self, config: dict[str, Any] | None = None) -> TicTacToeState:
        """Create the initial state.

        Config keys: ``board_size`` (default 3), ``player_count`` (default 2)
        and ``player_names`` (defaults to ``Player 1``, ``Player 2``, ...).
        """
        cfg = dict(self.default_config)
        cfg.update(config or {})
        board_size = int(cfg.get("board_size", DEFAULT_BOARD_SIZE))
        if board_size < 1 or board_size > MAX_BOARD_SIZE:
            raise MatchConfigurationError(f"board_size must be between 1 and {MAX_BOARD_SIZE}.")

        names = list(cfg.get("player_names") or [])
        player_count = int(cfg.get("player_count", len(names) or DEFAULT_PLAYER_COUNT))
        if player_count < 2:
            raise MatchConfigurationError("player_count must be >= 2.")
        if player_count > board_size * board_size:
            raise MatchConfigurationError("player_count cannot exceed the number of cells.")
        if len(names) > player_count:
            raise MatchConfigurationError(f"Received {len(names)} player names for {player_count} players.")
        names.extend(f"Player {index + 1}" for index in range(len(names), player_count))

        players = tuple(
            Player(player_id=player_id_for(index), name=str(name)) for index, name in enumerate(names)
        )
        return TicTacToeState(
            board_size=board_size,
            board=empty_board(board_size),
            players=players,
        )

    def seat_count(self, config: dict[str, Any] | None = None) -> int:
        cfg = dict(self.default_config)
        cfg.update(config or {})
        return int(cfg.get("player_count", len(cfg.get("player_names") or []) or DEFAULT_PLAYER_COUNT))

    def player_ids(self, state: TicTacToeState) -> Sequence[str]:
        return tuple(player.player_id for player in state.players)

    def player_name(self, state: TicTacToeState, player_id: str) -> str:
        return state.player(player_id).name

    def current_player(self, state: TicTacToeState) -> str:
        return state.active_player.player_id

    def legal_moves(self, state: TicTacToeState, player_id: str) -> list[ClaimCell]:
        """Return a claim for every open cell when it is the seat's turn."""
        if self.is_terminal(state) or player_id != self.current_player(state):
            return []
        return [ClaimCell(cell=cell) for cell in state.unclaimed_cells()]

    def validate_move(self, state: TicTacToeState, player_id: str, move: ClaimCell) -> None:
        """Reject moves out of turn, outside the board, or onto a claimed cell."""
        if self.is_terminal(state):
            raise IllegalMoveError(player_id, move, "Game is already over.")
        if player_id != self.current_player(state):
            raise IllegalMoveError(player_id, move, f"It is not {player_id}'s turn.")
        if not isinstance(move, ClaimCell):
            raise IllegalMoveError(player_id, move, "Expected a ClaimCell move.")
        if move.cell < 1 or move.cell > state.cell_count:
            raise CellOutOfRangeError(
                player_id,
                move,
                f"Position {move.cell} is out of range. Select a position between 1 and {state.cell_count}.",
            )
        if state.is_claimed(move.cell):
            raise CellAlreadyClaimedError(
                player_id,
                move,
                f"Position {move.cell} is not available. Select a different position.",
            )

    def apply_move(self, state: TicTacToeState, player_id: str, move: ClaimCell) -> TicTacToeState:
        """Claim the cell, record it for the player, then check win and draw."""
        self.validate_move(state, player_id, move)

        board = dict(state.board)
        board[move.cell] = player_id

        mover = state.active_player.copy()
        mover.record_move(move.cell)
        players = list(state.players)
        players[state.current_index] = mover

        next_state = replace(
            state,
            board=board,
            players=tuple(players),
            turn_index=state.turn_index + 1,
            last_move={"player_id": player_id, **move.to_dict()},
        )

        if mover.has_won():
            return replace(next_state, phase=Phase.WON, winner=player_id)
        if next_state.is_full():
            return replace(next_state, phase=Phase.DRAW)
        return replace(next_state, current_index=(state.current_index + 1) % len(players))

    def is_terminal(self, state: TicTacToeState) -> bool:
        return state.phase is not Phase.AWAITING_MOVE

    def outcome(self, state: TicTacToeState) -> MatchResult:
        """Build the structured result for a finished game."""
        if not self.is_terminal(state):
            raise ValueError(f"Game is still awaiting a move after {state.turn_index} turns.")

        stats: dict[str, Any] = {
            "board_size": state.board_size,
            "claimed_cells": {player.player_id: sorted(player.cells) for player in state.players},
            "tree_heights": {player.player_id: player.move_set.height() for player in state.players},
        }
        if state.winner is None:
            return MatchResult.draw(turns=state.turn_index, stats=stats)

        winner = state.player(state.winner)
        stats["winning_triple"] = list(winner.move_set.winning_triple() or ())
        return MatchResult.win(winner.player_id, winner.name, turns=state.turn_index, stats=stats)

    def turn_summary(self, state: TicTacToeState, player_id: str) -> dict[str, Any]:
        """The mover's claimed cells and tree shape after their move."""
        player = state.player(player_id)
        triple = player.move_set.winning_triple()
        return {
            "cells": sorted(player.cells),
            "tree": player.move_set.shape(),
            "winning_triple": list(triple) if triple is not None else None,
        }

    def observation(self, state: TicTacToeState, player_id: str) -> TicTacToeObservation:
        player = state.player(player_id)
        return TicTacToeObservation(
            player_id=player_id,
            player_name=player.name,
            board_size=state.board_size,
            board=dict(state.board),
            own_cells=tuple(sorted(player.cells)),
            current_player=self.current_player(state),
            phase=state.phase,
            turn_index=state.turn_index,
            winner=state.winner,
            last_move=state.last_move,
        )

    def render(self, state: TicTacToeState, player_id: str | None = None) -> str:
        """Draw the grid: open cells show their index, claimed cells their owner.

        With ``player_id``, that player's move-set tree is appended below.
        """
        width = max(len(str(state.cell_count)), *(len(pid) for pid in self.player_ids(state)))
        rows = []
        for row in range(state.board_size):
            cells = []
            for column in range(state.board_size):
                cell = row * state.board_size + column + 1
                owner = state.board[cell]
                cells.append((owner or str(cell)).center(width))
            rows.append(" | ".join(cells))
        separator = "\n" + "-+-".join("-" * width for _ in range(state.board_size)) + "\n"
        grid = separator.join(rows)
        if player_id is None:
            return grid
        player = state.player(player_id)
        tree = player.move_set.render() or "(empty)"
        return f"{grid}\n\n{player.name}'s moves:\n{tree}"

    def move_from_input(self, value: int) -> ClaimCell:
        return ClaimCell(cell=value)

    def parse_move(self, data: Mapping[str, Any]) -> ClaimCell:
        return move_from_dict(data)
