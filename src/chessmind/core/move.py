"""Move value object."""

from __future__ import annotations

from dataclasses import dataclass

from chessmind.core.piece import Piece
from chessmind.core.types import Position


@dataclass(frozen=True, slots=True)
class Move:
    """Immutable proposed transition of one piece.

    A move is only *legal* once it has passed the self-check filter in
    :meth:`MoveGenerator.generate_legal_moves`.
    """

    from_pos: Position
    to_pos: Position
    piece: Piece
    captured_piece: Piece | None = None

    @property
    def is_capture(self) -> bool:
        return self.captured_piece is not None

    def same_squares(self, from_pos: Position, to_pos: Position) -> bool:
        return self.from_pos == from_pos and self.to_pos == to_pos

    def __str__(self) -> str:
        return f"{self.piece.piece_type!s}{self.from_pos}->{self.to_pos}"
