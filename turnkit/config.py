"""Validated match settings, loaded from ``TICTACTOE_*`` variables, ``.env`` and CLI flags."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Self

from pydantic import Field, ValidationError, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .errors import MatchConfigurationError
from .runner import RunnerConfig


class MatchSettings(BaseSettings):
    """
    Everything needed to set up one local match.

    Environment variables (prefix: TICTACTOE_):
        TICTACTOE_BOARD_SIZE     - cells per side, 1..9 (default: 3)
        TICTACTOE_PLAYER_COUNT   - seats at the table (default: 2)
        TICTACTOE_MAX_REJECTIONS - rejected moves allowed per turn (default: unlimited)
        TICTACTOE_EVENT_LOG_DIR  - directory for JSONL replay logs
        TICTACTOE_SHOW_BOARD     - print the board after each move (default: true)
        TICTACTOE_SHOW_TREE      - print the mover's move-set tree too (default: false)
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        env_prefix="TICTACTOE_",
    )

    board_size: int = Field(default=3, ge=1, le=9)
    player_count: int = Field(default=2, ge=2)
    max_rejections: int | None = Field(default=None, ge=1)
    event_log_dir: Path | None = None
    show_board: bool = True
    show_tree: bool = False

    @model_validator(mode="after")
    def _players_fit_board(self) -> Self:
        if self.player_count > self.board_size * self.board_size:
            raise ValueError("player_count cannot exceed the number of cells on the board.")
        return self

    @classmethod
    def from_env(cls, *, env_file: str | Path | None = ".env", **overrides: Any) -> Self:
        """Read the environment and ``env_file``, then apply non-``None`` overrides."""
        values = {key: value for key, value in overrides.items() if value is not None}
        try:
            return cls(_env_file=env_file, **values)
        except ValidationError as exc:
            raise MatchConfigurationError(str(exc)) from exc

    def game_config(self) -> dict[str, Any]:
        return {"board_size": self.board_size, "player_count": self.player_count}

    def runner_config(self) -> RunnerConfig:
        return RunnerConfig(
            max_rejections=self.max_rejections,
            show_board=self.show_board,
            show_tree=self.show_tree,
            event_log_dir=self.event_log_dir,
        )
