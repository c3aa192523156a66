"""Terminal-backed I/O boundary."""

from __future__ import annotations

from typing import Callable

from ..boundary import GameIO
from ..errors import MoveSourceError


class ConsoleIO(GameIO):
    """Prompts on stdin/stdout, re-asking until an integer is typed."""

    def __init__(
        self,
        input_fn: Callable[[str], str] = input,
        output_fn: Callable[[str], None] = print,
    ):
        self._input = input_fn
        self._output = output_fn

    def request_player_name(self, index: int) -> str:
        name = self._read(f"Enter player {index} name: ", owner=f"seat-{index}").strip()
        return name or f"Player {index}"

    def request_move(self, player_name: str) -> int:
        while True:
            raw = self._read(f"{player_name}, select a position: ", owner=player_name).strip()
            try:
                return int(raw)
            except ValueError:
                self._output("Expected an integer position.")

    def announce(self, message: str) -> None:
        self._output(message)

    def _read(self, prompt: str, *, owner: str) -> str:
        try:
            return self._input(prompt)
        except EOFError as exc:
            raise MoveSourceError(owner, "Input stream closed.") from exc
