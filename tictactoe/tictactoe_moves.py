"""Move definitions for progression tic-tac-toe."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

from turnkit.model import Move

CLAIM_CELL = "ClaimCell"


@dataclass(frozen=True)
class ClaimCell(Move):
    """Claim the 1-based cell ``cell``. Range is checked by the game."""

    cell: int
    move_type = CLAIM_CELL

    def __post_init__(self) -> None:
        if isinstance(self.cell, bool) or not isinstance(self.cell, int):
            raise ValueError("ClaimCell.cell must be an integer.")


def move_from_dict(data: Mapping[str, Any]) -> ClaimCell:
    """Parse a move payload, accepting ``position`` as an alias of ``cell``."""
    move_type = data.get("type") or data.get("move_type") or CLAIM_CELL
    if move_type != CLAIM_CELL:
        raise ValueError(f"Unknown tic-tac-toe move type: {move_type!r}")
    if "cell" not in data and "position" in data:
        translated = dict(data)
        translated["cell"] = translated.pop("position")
        return ClaimCell.from_dict(translated)
    return ClaimCell.from_dict(data)
