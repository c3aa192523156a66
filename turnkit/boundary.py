"""The I/O boundary between the runner and whoever supplies moves."""

from __future__ import annotations

from abc import ABC, abstractmethod


class GameIO(ABC):
    """Source of names and moves, and sink for announcements.

    Implementations own malformed-input handling: ``request_move`` only ever
    returns an ``int``. Range and availability checks belong to the game.
    """

    @abstractmethod
    def request_player_name(self, index: int) -> str:
        """Return the display name for the 1-based seat ``index``."""

    @abstractmethod
    def request_move(self, player_name: str) -> int:
        """Block until a syntactically valid cell index is available."""

    @abstractmethod
    def announce(self, message: str) -> None:
        """Deliver a message to the players."""
