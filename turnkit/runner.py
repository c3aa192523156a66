"""Interactive match runner: asks the I/O boundary for moves until the game ends."""

from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass
from pathlib import Path
from time import perf_counter
from typing import Any
from uuid import uuid4

from .boundary import GameIO
from .errors import IllegalMoveError, MatchConfigurationError, MoveSourceError
from .events import EventType, MatchEvent, MatchLog
from .game import Game
from .result import MatchResult, Outcome


@dataclass(frozen=True)
class RunnerConfig:
    """Runtime configuration for match execution.

    ``max_rejections`` bounds how many rejected moves a single turn may see
    before the match is abandoned; ``None`` keeps asking forever.
    """

    max_rejections: int | None = None
    show_board: bool = False
    show_tree: bool = False
    event_log_dir: str | Path | None = None


@dataclass(frozen=True)
class MatchRun:
    """Complete execution artifact for one match."""

    result: MatchResult
    log: MatchLog
    final_state: Any

    @property
    def events(self) -> list[MatchEvent]:
        return self.log.events


class MatchRunner:
    """Drives one game through a :class:`GameIO`, one move at a time.

    Moves the rules reject are announced and requested again from the same
    player; they never end the turn or escape the request loop.
    """

    def __init__(self, config: RunnerConfig | None = None):
        self.config = config or RunnerConfig()
        if self.config.max_rejections is not None and self.config.max_rejections < 1:
            raise MatchConfigurationError("max_rejections must be >= 1 when set.")

    def run_match(
        self,
        game: Game[Any, Any, Any],
        io: GameIO,
        game_config: dict[str, Any] | None = None,
        *,
        game_id: str | None = None,
        log_path: str | Path | None = None,
    ) -> MatchRun:
        """Collect player names, play to a terminal state and return the run."""
        config = dict(game_config or {})
        log = MatchLog(game_id or f"{game.game_name}-{uuid4().hex[:8]}")

        seats = game.seat_count(config)
        config["player_names"] = [io.request_player_name(index) for index in range(1, seats + 1)]
        state = game.new_game(config=config)

        log.record(
            EventType.MATCH_START,
            0,
            config=config,
            players={player_id: game.player_name(state, player_id) for player_id in game.player_ids(state)},
            state_digest=state.state_digest(),
        )
        if self.config.show_board:
            io.announce(game.render(state))

        rejection_counts: dict[str, int] = defaultdict(int)
        wait_ms: dict[str, float] = defaultdict(float)
        turn = 0

        while not game.is_terminal(state):
            player_id = game.current_player(state)
            player_name = game.player_name(state, player_id)
            rejections = 0

            while True:
                start = perf_counter()
                try:
                    raw = io.request_move(player_name)
                except MoveSourceError as exc:
                    log.record(EventType.SOURCE_ERROR, turn, player_id=player_id, error=exc.to_dict())
                    result = MatchResult.abandoned(Outcome.SOURCE_ERROR, str(exc), turns=turn)
                    return self._finish(io, result, log, state, log_path, rejection_counts, wait_ms)
                wait_ms[player_id] += (perf_counter() - start) * 1000.0

                move = game.move_from_input(raw)
                try:
                    game.validate_move(state, player_id, move)
                except IllegalMoveError as exc:
                    rejections += 1
                    rejection_counts[player_id] += 1
                    log.record(
                        EventType.REJECTED,
                        turn,
                        player_id=player_id,
                        move=move.to_dict(),
                        error=exc.to_dict(),
                        attempt=rejections,
                    )
                    io.announce(exc.reason or str(exc))
                    if self.config.max_rejections is not None and rejections >= self.config.max_rejections:
                        result = MatchResult.abandoned(
                            Outcome.REJECTION_LIMIT,
                            f"{player_name} reached {rejections} rejected moves in one turn.",
                            turns=turn,
                        )
                        return self._finish(io, result, log, state, log_path, rejection_counts, wait_ms)
                    continue
                break

            state = game.apply_move(state, player_id, move)
            turn += 1
            log.record(
                EventType.CLAIM,
                turn,
                player_id=player_id,
                move=move.to_dict(),
                rejections=rejections,
                state_digest=state.state_digest(),
                **game.turn_summary(state, player_id),
            )
            if self.config.show_board:
                io.announce(game.render(state, player_id if self.config.show_tree else None))

        return self._finish(io, game.outcome(state), log, state, log_path, rejection_counts, wait_ms)

    def _finish(
        self,
        io: GameIO,
        result: MatchResult,
        log: MatchLog,
        state: Any,
        log_path: str | Path | None,
        rejection_counts: dict[str, int],
        wait_ms: dict[str, float],
    ) -> MatchRun:
        stats = dict(result.stats)
        stats["rejected_moves"] = dict(rejection_counts)
        stats["wait_ms"] = {player_id: round(total, 3) for player_id, total in wait_ms.items()}
        result = result.with_run_details(
            game_id=log.game_id,
            stats=stats,
            final_state_digest=state.state_digest(),
        )
        log.record(EventType.FINISH, result.turns, result=result.to_dict())

        resolved_log_path = self._resolve_log_path(log_path=log_path, game_id=log.game_id)
        if resolved_log_path is not None:
            log.save(resolved_log_path)
        result = result.with_run_details(
            event_count=len(log),
            log_path=str(resolved_log_path) if resolved_log_path is not None else None,
        )

        io.announce(result.message)
        return MatchRun(result=result, log=log, final_state=state)

    def _resolve_log_path(self, *, log_path: str | Path | None, game_id: str) -> Path | None:
        if log_path is not None:
            return Path(log_path)
        if self.config.event_log_dir is None:
            return None
        return Path(self.config.event_log_dir) / f"{game_id}.jsonl"
