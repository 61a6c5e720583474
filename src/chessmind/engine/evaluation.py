"""Static position evaluation, always from white's point of view."""

from __future__ import annotations

from chessmind.core.board import Board
from chessmind.core.enums import Color, PieceType
from chessmind.core.types import Position

PIECE_VALUES: dict[PieceType, int] = {
    PieceType.PAWN: 100,
    PieceType.KNIGHT: 320,
    PieceType.BISHOP: 330,
    PieceType.ROOK: 500,
    PieceType.QUEEN: 900,
    PieceType.KING: 20_000,
}

CENTER_SQUARES: tuple[Position, ...] = (
    Position(3, 3),
    Position(3, 4),
    Position(4, 3),
    Position(4, 4),
)
CENTER_BONUS = 10

CENTRAL_KING_PENALTY = 20
PAWN_SHIELD_BONUS = 5
_KING_ZONE = range(2, 6)

# Row offset from the king to the squares of its pawn shield (one row forward).
_SHIELD_DIRECTION: dict[Color, int] = {Color.WHITE: -1, Color.BLACK: 1}


def _signed(color: Color, value: int) -> int:
    return value if color == Color.WHITE else -value


def material_score(board: Board) -> int:
    return sum(
        _signed(piece.color, PIECE_VALUES[piece.piece_type])
        for _, piece in board.occupied()
    )


def center_score(board: Board) -> int:
    score = 0
    for pos in CENTER_SQUARES:
        piece = board[pos]
        if piece is not None:
            score += _signed(piece.color, CENTER_BONUS)
    return score


def king_safety(board: Board, king_pos: Position, color: Color) -> int:
    """Safety of *color*'s king on *king_pos*, positive is safer."""
    safety = 0
    if king_pos.row in _KING_ZONE and king_pos.col in _KING_ZONE:
        safety -= CENTRAL_KING_PENALTY

    d_row = _SHIELD_DIRECTION[color]
    for d_col in (-1, 0, 1):
        shield = king_pos.offset(d_row, d_col)
        if not shield.is_valid:
            continue
        piece = board[shield]
        if (
            piece is not None
            and piece.piece_type == PieceType.PAWN
            and piece.color == color
        ):
            safety += PAWN_SHIELD_BONUS
    return safety


def evaluate(board: Board) -> int:
    """Material + centre occupation + king safety; positive favours white."""
    score = material_score(board) + center_score(board)
    for color in (Color.WHITE, Color.BLACK):
        king_pos = board.find_king(color)
        if king_pos is not None:
            score += _signed(color, king_safety(board, king_pos, color))
    return score
