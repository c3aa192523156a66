"""Command-line entrypoint for a local progression tic-tac-toe session."""

from __future__ import annotations

import argparse
from pathlib import Path
from typing import Sequence

from .adapters import ConsoleIO, ScriptedIO
from .boundary import GameIO
from .config import MatchSettings
from .errors import MoveSourceError, TurnkitError
from .runner import MatchRunner
from .encoding import canonical_json


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Play progression tic-tac-toe in the terminal.")
    parser.add_argument("--board-size", type=int, default=None)
    parser.add_argument("--players", type=int, default=None, dest="player_count")
    parser.add_argument("--max-rejections", type=int, default=None)
    parser.add_argument("--log-dir", type=str, default=None, dest="event_log_dir")
    parser.add_argument("--script", type=str, default=None, help="JSON file with 'players' and 'moves'.")
    parser.add_argument("--show-tree", action="store_true", default=None)
    parser.add_argument("--quiet", action="store_true", help="Do not print the board after each move.")
    parser.add_argument("--output", type=str, default=None, help="Write the match result JSON here.")
    return parser


def main(argv: Sequence[str] | None = None, io: GameIO | None = None) -> int:
    """Run one match; returns a process exit code."""
    from tictactoe.tictactoe_game import TicTacToeGame

    args = build_parser().parse_args(argv)
    try:
        settings = MatchSettings.from_env(
            board_size=args.board_size,
            player_count=args.player_count,
            max_rejections=args.max_rejections,
            event_log_dir=args.event_log_dir,
            show_tree=args.show_tree,
            show_board=False if args.quiet else None,
        )
        if io is None:
            io = ScriptedIO.from_file(args.script, echo=True) if args.script else ConsoleIO()
        run = MatchRunner(settings.runner_config()).run_match(
            game=TicTacToeGame(),
            io=io,
            game_config=settings.game_config(),
        )
    except MoveSourceError as exc:
        print(f"Input ended before the match could start: {exc}")
        return 1
    except TurnkitError as exc:
        print(f"error: {exc}")
        return 2

    if args.output:
        output_path = Path(args.output)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(canonical_json(run.result, indent=2), encoding="utf-8")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
