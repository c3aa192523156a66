"""Structured exceptions used across the turn engine."""

from __future__ import annotations

from typing import Any


class TurnkitError(Exception):
    """Base class for engine-level exceptions."""

    def to_dict(self) -> dict[str, Any]:
        """Return a JSON-serializable error payload."""
        return {"type": self.__class__.__name__, "message": str(self)}


class MatchConfigurationError(TurnkitError):
    """Raised when a match is configured incorrectly."""


class IllegalMoveError(TurnkitError):
    """Raised when a player proposes a move the rules reject."""

    def __init__(self, player_id: str, move: Any, reason: str | None = None):
        self.player_id = player_id
        self.move = move
        self.reason = reason
        message = f"Illegal move by {player_id}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        payload = super().to_dict()
        payload.update({"player_id": self.player_id, "move": getattr(self.move, "to_dict", lambda: self.move)()})
        if self.reason is not None:
            payload["reason"] = self.reason
        return payload


class CellOutOfRangeError(IllegalMoveError):
    """Raised when the requested cell index is outside the board."""


class CellAlreadyClaimedError(IllegalMoveError):
    """Raised when the requested cell already has an owner."""


class MoveSourceError(TurnkitError):
    """Raised when the I/O boundary cannot produce a move or name."""

    def __init__(self, player_id: str, message: str):
        self.player_id = player_id
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        payload = super().to_dict()
        payload["player_id"] = self.player_id
        return payload
