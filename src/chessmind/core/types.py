"""Board coordinates.

Layout (row-major, black at the top)::

    row 0  black back rank   (rank 8)
    row 1  black pawns       (rank 7)
    ...
    row 6  white pawns       (rank 2)
    row 7  white back rank   (rank 1)

Columns 0–7 map to files a–h.
"""

from __future__ import annotations

from dataclasses import dataclass

BOARD_SIZE = 8


@dataclass(frozen=True, slots=True)
class Position:
    """A square on the board, addressed by row and column."""

    row: int
    col: int

    @property
    def is_valid(self) -> bool:
        return 0 <= self.row < BOARD_SIZE and 0 <= self.col < BOARD_SIZE

    @property
    def index(self) -> int:
        """Flat row-major index 0–63."""
        return self.row * BOARD_SIZE + self.col

    def offset(self, d_row: int, d_col: int) -> Position:
        """Shifted position; may fall off the board (check :attr:`is_valid`)."""
        return Position(self.row + d_row, self.col + d_col)

    def __str__(self) -> str:
        return f"({self.row},{self.col})"


def is_valid_position(row: int, col: int) -> bool:
    """Check whether ``(row, col)`` lies on the 8x8 board."""
    return 0 <= row < BOARD_SIZE and 0 <= col < BOARD_SIZE


ALL_POSITIONS: tuple[Position, ...] = tuple(
    Position(row, col) for row in range(BOARD_SIZE) for col in range(BOARD_SIZE)
)
