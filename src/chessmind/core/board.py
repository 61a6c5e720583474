"""Board - immutable piece placement on an 8x8 board."""

from __future__ import annotations

from collections.abc import Iterator, Mapping

from chessmind.core.enums import Color, PieceType
from chessmind.core.move import Move
from chessmind.core.piece import Piece
from chessmind.core.types import ALL_POSITIONS, BOARD_SIZE, Position

_BACK_RANK: tuple[PieceType, ...] = (
    PieceType.ROOK,
    PieceType.KNIGHT,
    PieceType.BISHOP,
    PieceType.QUEEN,
    PieceType.KING,
    PieceType.BISHOP,
    PieceType.KNIGHT,
    PieceType.ROOK,
)

# (back-rank row, pawn row) per color.
_HOME_ROWS: dict[Color, tuple[int, int]] = {
    Color.BLACK: (0, 1),
    Color.WHITE: (7, 6),
}


class Board:
    """Immutable 64-square snapshot.

    Every change produces a new :class:`Board`; instances are safe to share
    between threads and between search branches.
    """

    __slots__ = ("_squares",)

    def __init__(self, squares: tuple[Piece | None, ...] | None = None) -> None:
        if squares is None:
            squares = (None,) * (BOARD_SIZE * BOARD_SIZE)
        elif len(squares) != BOARD_SIZE * BOARD_SIZE:
            raise ValueError(f"Board needs 64 squares, got {len(squares)}")
        self._squares: tuple[Piece | None, ...] = squares

    # -- Element access -----------------------------------------------------

    def __getitem__(self, pos: Position) -> Piece | None:
        return self._squares[pos.row * BOARD_SIZE + pos.col]

    def piece_at(self, row: int, col: int) -> Piece | None:
        return self._squares[row * BOARD_SIZE + col]

    def is_empty(self, pos: Position) -> bool:
        return self[pos] is None

    # -- Query helpers ------------------------------------------------------

    def occupied(self) -> Iterator[tuple[Position, Piece]]:
        """Occupied squares in row-major order."""
        squares = self._squares
        for pos in ALL_POSITIONS:
            piece = squares[pos.index]
            if piece is not None:
                yield pos, piece

    def pieces(self, color: Color) -> list[tuple[Position, Piece]]:
        """``(position, piece)`` pairs for *color*, row-major."""
        return [(pos, p) for pos, p in self.occupied() if p.color == color]

    def find_king(self, color: Color) -> Position | None:
        """First king of *color* scanning row-major, or ``None``."""
        for pos, piece in self.occupied():
            if piece.piece_type == PieceType.KING and piece.color == color:
                return pos
        return None

    def count(self, color: Color) -> int:
        return sum(1 for _, p in self.occupied() if p.color == color)

    def rows(self) -> list[list[Piece | None]]:
        """Nested row lists, row 0 first."""
        return [
            list(self._squares[r * BOARD_SIZE : (r + 1) * BOARD_SIZE])
            for r in range(BOARD_SIZE)
        ]

    # -- Derivation ---------------------------------------------------------

    def with_pieces(self, changes: Mapping[Position, Piece | None]) -> Board:
        """New board with *changes* applied on top of this one."""
        squares = list(self._squares)
        for pos, piece in changes.items():
            squares[pos.index] = piece
        return Board(tuple(squares))

    def apply_move(self, move: Move) -> Board:
        """New board with ``move.piece`` relocated and flagged as moved.

        No legality check is performed: callers validate against the legal
        move list first. Whatever sits on ``to_pos`` is overwritten.
        """
        squares = list(self._squares)
        squares[move.to_pos.index] = move.piece.moved()
        squares[move.from_pos.index] = None
        return Board(tuple(squares))

    # -- Factory ------------------------------------------------------------

    @classmethod
    def empty(cls) -> Board:
        return cls()

    @classmethod
    def from_pieces(cls, placement: Mapping[Position, Piece]) -> Board:
        """Board holding exactly the pieces in *placement*."""
        return cls().with_pieces(placement)

    @classmethod
    def initial(cls) -> Board:
        """Standard starting position."""
        squares: list[Piece | None] = [None] * (BOARD_SIZE * BOARD_SIZE)
        for color, (back_row, pawn_row) in _HOME_ROWS.items():
            prefix = str(color)
            for col, pt in enumerate(_BACK_RANK):
                squares[back_row * BOARD_SIZE + col] = Piece(
                    pt, color, f"{prefix}-{pt!s}-{col}"
                )
                squares[pawn_row * BOARD_SIZE + col] = Piece(
                    PieceType.PAWN, color, f"{prefix}-pawn-{col}"
                )
        return cls(tuple(squares))

    # -- Dunder helpers -----------------------------------------------------

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return self._squares == other._squares

    def __hash__(self) -> int:
        return hash(self._squares)

    def __repr__(self) -> str:
        rows: list[str] = []
        for row in range(BOARD_SIZE):
            cells = []
            for col in range(BOARD_SIZE):
                p = self.piece_at(row, col)
                cells.append(str(p) if p else ".")
            rows.append(f"{BOARD_SIZE - row} {' '.join(cells)}")
        rows.append("  a b c d e f g h")
        return "\n".join(rows)
