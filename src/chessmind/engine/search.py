"""Shared engine search models and protocol."""

from __future__ import annotations

from enum import IntEnum
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from chessmind.core.board import Board
    from chessmind.core.enums import Color
    from chessmind.core.move import Move


class Difficulty(IntEnum):
    """Computer-opponent strength; maps one-to-one onto search depth."""

    EASY = 1
    MEDIUM = 2
    HARD = 3

    @property
    def max_depth(self) -> int:
        """Search depth in plies."""
        return _SEARCH_DEPTHS[self]

    @classmethod
    def from_name(cls, name: str) -> Difficulty:
        """Parse ``'easy'`` / ``'medium'`` / ``'hard'`` (case-insensitive)."""
        try:
            return cls[name.strip().upper()]
        except KeyError:
            raise ValueError(f"Unknown difficulty: {name!r}") from None

    def __str__(self) -> str:
        return self.name.lower()


_SEARCH_DEPTHS: dict[Difficulty, int] = {
    Difficulty.EASY: 2,
    Difficulty.MEDIUM: 3,
    Difficulty.HARD: 4,
}


class IEngine(Protocol):
    """Protocol for move pickers used by the game layer."""

    def get_best_move(self, board: Board, color: Color) -> Move | None: ...
