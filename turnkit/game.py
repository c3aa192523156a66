"""Rules interface every turn-based game implements for the runner."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Generic, Mapping, Sequence, TypeVar

from .errors import IllegalMoveError
from .model import Move, Observation
from .result import MatchResult

PlayerId = str
StateT = TypeVar("StateT")
MoveT = TypeVar("MoveT", bound=Move)
ObservationT = TypeVar("ObservationT", bound=Observation)


class Game(ABC, Generic[StateT, MoveT, ObservationT]):
    """Abstract rules object. States are immutable; rules are stateless."""

    game_name: str = "game"

    @abstractmethod
    def new_game(self, config: dict[str, Any] | None = None) -> StateT:
        """Create a fresh state for a match."""

    @abstractmethod
    def seat_count(self, config: dict[str, Any] | None = None) -> int:
        """Return how many seats a match with this config needs."""

    @abstractmethod
    def player_ids(self, state: StateT) -> Sequence[PlayerId]:
        """Return seat IDs in turn order."""

    @abstractmethod
    def player_name(self, state: StateT, player_id: PlayerId) -> str:
        """Return the display name for a seat."""

    @abstractmethod
    def current_player(self, state: StateT) -> PlayerId:
        """Return the seat whose turn it is."""

    @abstractmethod
    def legal_moves(self, state: StateT, player_id: PlayerId) -> Sequence[MoveT]:
        """Return every move the seat may currently make."""

    @abstractmethod
    def validate_move(self, state: StateT, player_id: PlayerId, move: MoveT) -> None:
        """Raise an :class:`IllegalMoveError` subclass when the move is rejected."""

    @abstractmethod
    def apply_move(self, state: StateT, player_id: PlayerId, move: MoveT) -> StateT:
        """Apply a legal move and return the next state."""

    @abstractmethod
    def is_terminal(self, state: StateT) -> bool:
        """Return whether the state is terminal."""

    @abstractmethod
    def outcome(self, state: StateT) -> MatchResult:
        """Return a structured result; raise ``ValueError`` before the game ends."""

    @abstractmethod
    def observation(self, state: StateT, player_id: PlayerId) -> ObservationT:
        """Return the seat's view of the state."""

    @abstractmethod
    def render(self, state: StateT, player_id: PlayerId | None = None) -> str:
        """Render the state as text."""

    @abstractmethod
    def move_from_input(self, value: int) -> MoveT:
        """Turn the integer read by the I/O boundary into a move."""

    def turn_summary(self, state: StateT, player_id: PlayerId) -> dict[str, Any]:
        """Extra facts about the seat that just moved, kept in the replay log."""
        return {}

    def is_legal(self, state: StateT, player_id: PlayerId, move: MoveT) -> tuple[bool, str | None]:
        """Return whether a move is legal and the reason when it is not."""
        try:
            self.validate_move(state, player_id, move)
        except IllegalMoveError as exc:
            return False, exc.reason
        return True, None

    def parse_move(self, data: Mapping[str, Any]) -> MoveT:
        """Parse a serialized move payload."""
        raise NotImplementedError(f"{self.__class__.__name__} does not implement parse_move().")
