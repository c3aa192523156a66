"""Pre-recorded I/O boundary for tests and replayed sessions."""

from __future__ import annotations

import json
from collections import deque
from pathlib import Path
from typing import Any, Iterable, Self

from ..boundary import GameIO
from ..errors import MatchConfigurationError, MoveSourceError


class ScriptedIO(GameIO):
    """Feeds names and moves from sequences and records announcements.

    Moves are consumed in order regardless of which player asks, matching a
    transcript of one shared console. Entries that are not integers are
    treated as malformed input: they are skipped and reported.
    """

    def __init__(self, names: Iterable[str], moves: Iterable[int | str], *, echo: bool = False):
        self._names = list(names)
        self._moves: deque[int | str] = deque(moves)
        self._echo = echo
        self.messages: list[str] = []
        self.requests: list[str] = []

    @classmethod
    def from_file(cls, path: str | Path, *, echo: bool = False) -> Self:
        """Load ``{"players": [...], "moves": [...]}`` from a JSON file."""
        try:
            data: Any = json.loads(Path(path).read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as exc:
            raise MatchConfigurationError(f"Cannot read script {str(path)!r}: {exc}") from exc
        if not isinstance(data, dict) or not isinstance(data.get("moves"), list):
            raise MatchConfigurationError("Script must be an object with a 'moves' list.")
        players = data.get("players", [])
        if not isinstance(players, list):
            raise MatchConfigurationError("Script 'players' must be a list of names.")
        return cls(names=[str(name) for name in players], moves=data["moves"], echo=echo)

    @property
    def remaining_moves(self) -> int:
        return len(self._moves)

    def request_player_name(self, index: int) -> str:
        if index - 1 < len(self._names):
            return self._names[index - 1]
        return f"Player {index}"

    def request_move(self, player_name: str) -> int:
        self.requests.append(player_name)
        while self._moves:
            raw = self._moves.popleft()
            if isinstance(raw, bool):
                self.announce(f"Ignoring malformed position {raw!r}.")
                continue
            if isinstance(raw, int):
                return raw
            try:
                return int(str(raw).strip())
            except ValueError:
                self.announce(f"Ignoring malformed position {raw!r}.")
        raise MoveSourceError(player_name, f"No scripted moves left for {player_name}.")

    def announce(self, message: str) -> None:
        self.messages.append(message)
        if self._echo:
            print(message)
