"""Smoke tests for the match runner driven through scripted and console I/O."""

from __future__ import annotations

import pytest

from tictactoe.tictactoe_game import TicTacToeGame
from turnkit.adapters import ConsoleIO, ScriptedIO
from turnkit.errors import MatchConfigurationError, MoveSourceError
from turnkit.events import EventType, MatchLog
from turnkit.result import Outcome
from turnkit.runner import MatchRunner, RunnerConfig

DRAW_SEQUENCE = [1, 3, 2, 4, 6, 8, 5, 9, 7]


def test_scripted_win_reports_winner_by_name() -> None:
    io = ScriptedIO(names=["Alice", "Bob"], moves=[1, 5, 2, 9, 3])
    run = MatchRunner().run_match(game=TicTacToeGame(), io=io)

    assert run.result.winner == "P1"
    assert run.result.winner_name == "Alice"
    assert run.result.outcome is Outcome.WIN
    assert run.result.turns == 5
    assert io.messages == ["Alice has won"]
    assert io.requests == ["Alice", "Bob", "Alice", "Bob", "Alice"]
    assert run.events[0].kind is EventType.MATCH_START
    assert run.events[-1].kind is EventType.FINISH
    assert run.result.event_count == len(run.events)


def test_scripted_full_board_is_a_draw() -> None:
    io = ScriptedIO(names=["Alice", "Bob"], moves=DRAW_SEQUENCE)
    run = MatchRunner().run_match(game=TicTacToeGame(), io=io)

    assert run.result.winner is None
    assert run.result.is_draw
    assert io.messages[-1] == "Game over. No one won."
    assert len(run.log.of_type(EventType.CLAIM)) == 9
    assert io.remaining_moves == 0


def test_rejected_moves_are_announced_and_requested_again() -> None:
    io = ScriptedIO(names=["Alice", "Bob"], moves=[1, 1, 5, 0, 10, 2, 9, 3])
    run = MatchRunner().run_match(game=TicTacToeGame(), io=io)

    assert run.result.winner == "P1"
    assert io.requests == ["Alice", "Bob", "Bob", "Alice", "Alice", "Alice", "Bob", "Alice"]
    assert io.messages == [
        "Position 1 is not available. Select a different position.",
        "Position 0 is out of range. Select a position between 1 and 9.",
        "Position 10 is out of range. Select a position between 1 and 9.",
        "Alice has won",
    ]
    assert run.result.stats["rejected_moves"] == {"P1": 2, "P2": 1}

    rejected = run.log.of_type(EventType.REJECTED)
    assert [event.payload["error"]["type"] for event in rejected] == [
        "CellAlreadyClaimedError",
        "CellOutOfRangeError",
        "CellOutOfRangeError",
    ]
    assert run.final_state.board[1] == "P1"
    assert run.final_state.board[5] == "P2"


def test_malformed_scripted_entries_are_skipped() -> None:
    io = ScriptedIO(names=["Alice", "Bob"], moves=[1, "abc", " 5 ", 2, 9, 3])
    run = MatchRunner().run_match(game=TicTacToeGame(), io=io)

    assert run.result.winner == "P1"
    assert io.messages[0] == "Ignoring malformed position 'abc'."


def test_exhausted_script_ends_match_without_winner() -> None:
    io = ScriptedIO(names=["Alice", "Bob"], moves=[1])
    run = MatchRunner().run_match(game=TicTacToeGame(), io=io)

    assert run.result.outcome is Outcome.SOURCE_ERROR
    assert run.result.winner is None
    assert run.result.turns == 1
    assert len(run.log.of_type(EventType.SOURCE_ERROR)) == 1


def test_rejection_limit_ends_match() -> None:
    io = ScriptedIO(names=["Alice", "Bob"], moves=[1, 1, 1])
    run = MatchRunner(RunnerConfig(max_rejections=2)).run_match(game=TicTacToeGame(), io=io)

    assert run.result.outcome is Outcome.REJECTION_LIMIT
    assert io.messages[-1] == "Bob reached 2 rejected moves in one turn."
    assert run.result.winner is None
    assert io.remaining_moves == 0


def test_invalid_rejection_limit_is_a_configuration_error() -> None:
    with pytest.raises(MatchConfigurationError):
        MatchRunner(RunnerConfig(max_rejections=0))


def test_event_log_is_written_as_jsonl(tmp_path) -> None:
    io = ScriptedIO(names=["Alice", "Bob"], moves=[1, 5, 2, 9, 3])
    runner = MatchRunner(RunnerConfig(event_log_dir=tmp_path))
    run = runner.run_match(game=TicTacToeGame(), io=io, game_id="logged-match")

    assert run.result.log_path == str(tmp_path / "logged-match.jsonl")
    log = MatchLog.load(run.result.log_path)
    assert log.game_id == "logged-match"
    assert len(log) == len(run.events)
    assert [event.kind for event in log] == [event.kind for event in run.events]
    assert log.events[0].payload["players"] == {"P1": "Alice", "P2": "Bob"}
    assert log.events[-1].payload["result"]["winner"] == "P1"
    assert log.events[-1].payload["result"]["outcome"] == "win"


def test_board_and_tree_are_announced_when_enabled() -> None:
    io = ScriptedIO(names=["Alice", "Bob"], moves=[1, 5, 2, 9, 3])
    MatchRunner(RunnerConfig(show_board=True, show_tree=True)).run_match(game=TicTacToeGame(), io=io)

    # initial board, one board per move, final announcement
    assert len(io.messages) == 7
    assert "Alice's moves:" in io.messages[-2]
    assert io.messages[-2].endswith("+- 2\n   +- 1\n   +- 3")


def test_console_io_reprompts_on_non_integer_input() -> None:
    answers = iter(["Alice", "", "x", "1", "5", "2", "9", "3"])
    prompts: list[str] = []
    output: list[str] = []

    def fake_input(prompt: str) -> str:
        prompts.append(prompt)
        return next(answers)

    io = ConsoleIO(input_fn=fake_input, output_fn=output.append)
    run = MatchRunner().run_match(game=TicTacToeGame(), io=io)

    assert run.result.winner_name == "Alice"
    assert prompts[:4] == [
        "Enter player 1 name: ",
        "Enter player 2 name: ",
        "Alice, select a position: ",
        "Alice, select a position: ",
    ]
    assert "Expected an integer position." in output
    assert output[-1] == "Alice has won"
    assert run.final_state.player("P2").name == "Player 2"


def test_console_io_closed_input_raises_move_source_error() -> None:
    def closed(prompt: str) -> str:
        raise EOFError

    io = ConsoleIO(input_fn=closed, output_fn=lambda message: None)
    with pytest.raises(MoveSourceError):
        io.request_move("Alice")


def test_claim_events_record_the_mover_tree() -> None:
    io = ScriptedIO(names=["Alice", "Bob"], moves=[1, 5, 2, 9, 3])
    run = MatchRunner().run_match(game=TicTacToeGame(), io=io)

    claims = run.log.of_type(EventType.CLAIM)
    assert [event.turn for event in claims] == [1, 2, 3, 4, 5]
    assert [event.payload["player_id"] for event in claims] == ["P1", "P2", "P1", "P2", "P1"]
    assert claims[2].payload["cells"] == [1, 2]
    assert claims[2].payload["winning_triple"] is None
    assert claims[-1].payload["tree"] == [2, [1, None, None], [3, None, None]]
    assert claims[-1].payload["winning_triple"] == [1, 2, 3]
    assert claims[-1].payload["state_digest"] == run.result.final_state_digest


def test_source_error_result_is_announced_and_logged() -> None:
    io = ScriptedIO(names=["Alice", "Bob"], moves=[1])
    run = MatchRunner().run_match(game=TicTacToeGame(), io=io)

    assert io.messages == ["No scripted moves left for Bob."]
    assert run.result.message == "No scripted moves left for Bob."
    finish = run.log.of_type(EventType.FINISH)
    assert len(finish) == 1
    assert finish[0].payload["result"]["outcome"] == "source_error"
