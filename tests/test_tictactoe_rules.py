"""Rule-level tests for claiming cells, turn order, wins and draws."""

from __future__ import annotations

import pytest

from tictactoe.tictactoe_game import TicTacToeGame
from tictactoe.tictactoe_moves import ClaimCell
from tictactoe.tictactoe_state import Phase, TicTacToeState
from turnkit.errors import (
    CellAlreadyClaimedError,
    CellOutOfRangeError,
    IllegalMoveError,
    MatchConfigurationError,
)
from turnkit.result import Outcome

DRAW_SEQUENCE = (1, 3, 2, 4, 6, 8, 5, 9, 7)


def _play(game: TicTacToeGame, state: TicTacToeState, cells: tuple[int, ...]) -> TicTacToeState:
    for cell in cells:
        state = game.apply_move(state, game.current_player(state), ClaimCell(cell=cell))
    return state


def _new_state(game: TicTacToeGame, **config: object) -> TicTacToeState:
    cfg = {"player_names": ["Alice", "Bob"]}
    cfg.update(config)
    return game.new_game(config=cfg)


def test_new_game_starts_with_empty_board_and_first_player() -> None:
    game = TicTacToeGame()
    state = _new_state(game)

    assert state.board == {cell: None for cell in range(1, 10)}
    assert game.player_ids(state) == ("P1", "P2")
    assert game.current_player(state) == "P1"
    assert game.player_name(state, "P2") == "Bob"
    assert state.phase is Phase.AWAITING_MOVE
    assert len(game.legal_moves(state, "P1")) == 9
    assert game.legal_moves(state, "P2") == []


def test_claiming_one_two_three_wins() -> None:
    game = TicTacToeGame()
    state = _play(game, _new_state(game), (1, 5, 2, 9, 3))

    assert game.is_terminal(state)
    assert state.phase is Phase.WON
    assert state.winner == "P1"

    result = game.outcome(state)
    assert result.outcome is Outcome.WIN
    assert result.winner_name == "Alice"
    assert result.message == "Alice has won"
    assert result.stats["winning_triple"] == [1, 2, 3]


def test_win_is_checked_immediately_after_the_move() -> None:
    game = TicTacToeGame()
    state = _play(game, _new_state(game), (1, 5, 2, 9, 3))

    # P2 never gets another turn and the board still has open cells
    assert state.turn_index == 5
    assert not state.is_full()
    assert game.legal_moves(state, "P2") == []


def test_full_board_without_win_is_a_draw() -> None:
    game = TicTacToeGame()
    state = _new_state(game)

    for cell in DRAW_SEQUENCE[:-1]:
        state = game.apply_move(state, game.current_player(state), ClaimCell(cell=cell))
        assert not game.is_terminal(state)
    state = game.apply_move(state, game.current_player(state), ClaimCell(cell=DRAW_SEQUENCE[-1]))

    assert state.phase is Phase.DRAW
    assert state.winner is None
    assert state.is_full()
    result = game.outcome(state)
    assert result.outcome is Outcome.DRAW
    assert result.message == "Game over. No one won."
    assert result.stats["claimed_cells"] == {"P1": [1, 2, 5, 6, 7], "P2": [3, 4, 8, 9]}


def test_claimed_cell_is_rejected_without_advancing_turn() -> None:
    game = TicTacToeGame()
    state = _play(game, _new_state(game), (5,))

    with pytest.raises(CellAlreadyClaimedError) as excinfo:
        game.validate_move(state, "P2", ClaimCell(cell=5))
    assert excinfo.value.reason == "Position 5 is not available. Select a different position."

    legal, reason = game.is_legal(state, "P2", ClaimCell(cell=5))
    assert legal is False
    assert reason is not None
    assert game.current_player(state) == "P2"
    assert state.board[5] == "P1"


@pytest.mark.parametrize("cell", [0, -3, 10])
def test_out_of_range_cell_is_rejected(cell: int) -> None:
    game = TicTacToeGame()
    state = _new_state(game)

    with pytest.raises(CellOutOfRangeError):
        game.apply_move(state, "P1", ClaimCell(cell=cell))
    assert game.current_player(state) == "P1"
    assert all(owner is None for owner in state.board.values())


def test_moving_out_of_turn_is_illegal() -> None:
    game = TicTacToeGame()
    state = _new_state(game)

    with pytest.raises(IllegalMoveError):
        game.apply_move(state, "P2", ClaimCell(cell=1))


def test_claimed_cells_are_never_reassigned() -> None:
    game = TicTacToeGame()
    state = _new_state(game)
    owners: dict[int, str] = {}

    for cell in DRAW_SEQUENCE:
        mover = game.current_player(state)
        state = game.apply_move(state, mover, ClaimCell(cell=cell))
        owners[cell] = mover
        for claimed, owner in owners.items():
            assert state.board[claimed] == owner


def test_apply_move_leaves_previous_state_untouched() -> None:
    game = TicTacToeGame()
    before = _play(game, _new_state(game), (1, 4))
    after = game.apply_move(before, "P1", ClaimCell(cell=2))

    assert before.player("P1").cells == frozenset({1})
    assert before.board[2] is None
    assert after.player("P1").cells == frozenset({1, 2})
    assert before.state_digest() != after.state_digest()


def test_three_players_rotate_in_seat_order() -> None:
    game = TicTacToeGame()
    state = game.new_game(config={"player_count": 3})

    seen = []
    for cell in (1, 5, 9, 2):
        seen.append(game.current_player(state))
        state = game.apply_move(state, game.current_player(state), ClaimCell(cell=cell))

    assert seen == ["P1", "P2", "P3", "P1"]
    assert game.player_name(state, "P3") == "Player 3"


def test_small_board_draw() -> None:
    game = TicTacToeGame()
    state = _play(game, _new_state(game, board_size=2), (1, 2, 3, 4))

    assert state.phase is Phase.DRAW


def test_invalid_configuration_is_rejected() -> None:
    game = TicTacToeGame()

    with pytest.raises(MatchConfigurationError):
        game.new_game(config={"board_size": 0})
    with pytest.raises(MatchConfigurationError):
        game.new_game(config={"player_count": 1})
    with pytest.raises(MatchConfigurationError):
        game.new_game(config={"board_size": 1, "player_count": 2})


def test_observation_render_and_parse() -> None:
    game = TicTacToeGame()
    state = _play(game, _new_state(game), (1, 5))

    observation = game.observation(state, "P1")
    assert observation.own_cells == (1,)
    assert observation.current_player == "P1"
    assert observation.to_dict()["board"]["5"] == "P2"

    board = game.render(state)
    assert "P1" in board and "P2" in board and "9" in board
    assert "Alice's moves:" in game.render(state, "P1")

    assert game.parse_move({"type": "ClaimCell", "cell": 4}) == ClaimCell(cell=4)
    assert game.parse_move({"position": 7}) == ClaimCell(cell=7)
    with pytest.raises(ValueError):
        game.parse_move({"type": "Resign"})


def test_outcome_of_unfinished_game_is_an_error() -> None:
    game = TicTacToeGame()
    state = _play(game, _new_state(game), (1, 5))

    with pytest.raises(ValueError):
        game.outcome(state)


def test_draw_result_has_no_winner_or_triple() -> None:
    game = TicTacToeGame()
    result = game.outcome(_play(game, _new_state(game), DRAW_SEQUENCE))

    assert result.winner is None
    assert result.winner_name is None
    assert "winning_triple" not in result.stats


def test_turn_summary_describes_the_mover_tree() -> None:
    game = TicTacToeGame()

    state = _play(game, _new_state(game), (2, 5, 1))
    assert game.turn_summary(state, "P1") == {
        "cells": [1, 2],
        "tree": (1, None, (2, None, None)),
        "winning_triple": None,
    }

    state = _play(game, state, (9, 3))
    summary = game.turn_summary(state, "P1")
    assert summary["cells"] == [1, 2, 3]
    assert summary["winning_triple"] is None
    assert summary["tree"] == (3, (1, None, (2, None, None)), None)
