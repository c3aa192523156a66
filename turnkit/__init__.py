"""Turn engine exports: rules interface, I/O boundary and match runner."""

from .boundary import GameIO
from .errors import (
    CellAlreadyClaimedError,
    CellOutOfRangeError,
    IllegalMoveError,
    MatchConfigurationError,
    MoveSourceError,
    TurnkitError,
)
from .events import EventType, MatchEvent, MatchLog
from .game import Game, PlayerId
from .model import Move, Observation, State
from .result import MatchResult, Outcome
from .runner import MatchRun, MatchRunner, RunnerConfig

__all__ = [
    "CellAlreadyClaimedError",
    "CellOutOfRangeError",
    "EventType",
    "Game",
    "GameIO",
    "IllegalMoveError",
    "MatchConfigurationError",
    "MatchEvent",
    "MatchLog",
    "MatchResult",
    "MatchRun",
    "MatchRunner",
    "Move",
    "MoveSourceError",
    "Observation",
    "Outcome",
    "PlayerId",
    "RunnerConfig",
    "State",
    "TurnkitError",
]
