"""How a match ended: a rules outcome (win or draw) or an abandoned session."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Mapping, Self

from .encoding import to_plain


class Outcome(str, Enum):
    WIN = "win"
    DRAW = "draw"
    # the session stopped before the rules decided anything
    SOURCE_ERROR = "source_error"
    REJECTION_LIMIT = "rejection_limit"

    @property
    def decided_by_rules(self) -> bool:
        return self in (Outcome.WIN, Outcome.DRAW)


@dataclass(frozen=True)
class MatchResult:
    """Final record of one match.

    ``message`` is what gets announced to the players when the match ends.
    ``winner`` is set exactly when the outcome is a win.
    """

    outcome: Outcome
    message: str
    winner: str | None = None
    winner_name: str | None = None
    turns: int = 0
    stats: dict[str, Any] = field(default_factory=dict)
    game_id: str = ""
    final_state_digest: str | None = None
    event_count: int = 0
    log_path: str | None = None

    def __post_init__(self) -> None:
        if (self.outcome is Outcome.WIN) != (self.winner is not None):
            raise ValueError(f"A {self.outcome.value} result cannot have winner={self.winner!r}.")

    @classmethod
    def win(cls, winner: str, winner_name: str, *, turns: int, stats: Mapping[str, Any] | None = None) -> Self:
        return cls(
            outcome=Outcome.WIN,
            message=f"{winner_name} has won",
            winner=winner,
            winner_name=winner_name,
            turns=turns,
            stats=dict(stats or {}),
        )

    @classmethod
    def draw(cls, *, turns: int, stats: Mapping[str, Any] | None = None) -> Self:
        return cls(outcome=Outcome.DRAW, message="Game over. No one won.", turns=turns, stats=dict(stats or {}))

    @classmethod
    def abandoned(cls, outcome: Outcome, message: str, *, turns: int) -> Self:
        """Result for a session the runner had to stop."""
        if outcome.decided_by_rules:
            raise ValueError(f"{outcome.value} is decided by the rules, not by abandoning the match.")
        return cls(outcome=outcome, message=message, turns=turns)

    @property
    def is_draw(self) -> bool:
        return self.outcome is Outcome.DRAW

    def with_run_details(self, **changes: Any) -> Self:
        """Fill in runner-owned fields (game id, digest, log path, counts)."""
        return replace(self, **changes)

    def to_dict(self) -> dict[str, Any]:
        return to_plain(self)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Self:
        values = dict(data)
        values["outcome"] = Outcome(str(values["outcome"]))
        return cls(**values)
