"""Legal and pseudo-legal move generation + attack detection."""

from __future__ import annotations

from collections.abc import Callable

from chessmind.core.board import Board
from chessmind.core.enums import Color, PieceType
from chessmind.core.move import Move
from chessmind.core.piece import Piece
from chessmind.core.types import Position

KNIGHT_OFFSETS: tuple[tuple[int, int], ...] = (
    (-2, -1),
    (-2, 1),
    (-1, -2),
    (-1, 2),
    (1, -2),
    (1, 2),
    (2, -1),
    (2, 1),
)

KING_OFFSETS: tuple[tuple[int, int], ...] = (
    (-1, -1),
    (-1, 0),
    (-1, 1),
    (0, -1),
    (0, 1),
    (1, -1),
    (1, 0),
    (1, 1),
)

ROOK_DIRS: tuple[tuple[int, int], ...] = ((-1, 0), (1, 0), (0, -1), (0, 1))
BISHOP_DIRS: tuple[tuple[int, int], ...] = ((-1, -1), (-1, 1), (1, -1), (1, 1))

# Row step and starting row of pawns per color.
PAWN_DIRECTION: dict[Color, int] = {Color.WHITE: -1, Color.BLACK: 1}
PAWN_START_ROW: dict[Color, int] = {Color.WHITE: 6, Color.BLACK: 1}


# -- Piece-specific generators ---------------------------------------------

TargetGenerator = Callable[[Board, Piece, Position], list[Position]]


def _pawn_targets(board: Board, piece: Piece, pos: Position) -> list[Position]:
    targets: list[Position] = []
    direction = PAWN_DIRECTION[piece.color]

    front = pos.offset(direction, 0)
    if front.is_valid and board.is_empty(front):
        targets.append(front)
        if pos.row == PAWN_START_ROW[piece.color]:
            double = pos.offset(2 * direction, 0)
            if double.is_valid and board.is_empty(double):
                targets.append(double)

    for d_col in (-1, 1):
        capture = pos.offset(direction, d_col)
        if capture.is_valid and piece.is_opponent_of(board[capture]):
            targets.append(capture)
    return targets


def _slide(
    board: Board,
    piece: Piece,
    pos: Position,
    directions: tuple[tuple[int, int], ...],
) -> list[Position]:
    targets: list[Position] = []
    for d_row, d_col in directions:
        to_pos = pos.offset(d_row, d_col)
        while to_pos.is_valid:
            occupant = board[to_pos]
            if occupant is None:
                targets.append(to_pos)
                to_pos = to_pos.offset(d_row, d_col)
                continue
            if occupant.color != piece.color:
                targets.append(to_pos)
            break
    return targets


def _leap(
    board: Board,
    piece: Piece,
    pos: Position,
    offsets: tuple[tuple[int, int], ...],
) -> list[Position]:
    targets: list[Position] = []
    for d_row, d_col in offsets:
        to_pos = pos.offset(d_row, d_col)
        if not to_pos.is_valid:
            continue
        occupant = board[to_pos]
        if occupant is None or occupant.color != piece.color:
            targets.append(to_pos)
    return targets


def _rook_targets(board: Board, piece: Piece, pos: Position) -> list[Position]:
    return _slide(board, piece, pos, ROOK_DIRS)


def _bishop_targets(board: Board, piece: Piece, pos: Position) -> list[Position]:
    return _slide(board, piece, pos, BISHOP_DIRS)


def _queen_targets(board: Board, piece: Piece, pos: Position) -> list[Position]:
    return _rook_targets(board, piece, pos) + _bishop_targets(board, piece, pos)


def _knight_targets(board: Board, piece: Piece, pos: Position) -> list[Position]:
    return _leap(board, piece, pos, KNIGHT_OFFSETS)


def _king_targets(board: Board, piece: Piece, pos: Position) -> list[Position]:
    return _leap(board, piece, pos, KING_OFFSETS)


_GENERATORS: dict[PieceType, TargetGenerator] = {
    PieceType.PAWN: _pawn_targets,
    PieceType.KNIGHT: _knight_targets,
    PieceType.BISHOP: _bishop_targets,
    PieceType.ROOK: _rook_targets,
    PieceType.QUEEN: _queen_targets,
    PieceType.KING: _king_targets,
}


class MoveGenerator:
    """Generates moves and answers attack queries for a :class:`Board`.

    Boards are immutable, so the generator never has to restore anything:
    candidate moves are tried on scratch copies produced by
    :meth:`Board.apply_move`.
    """

    __slots__ = ("_board",)

    def __init__(self, board: Board) -> None:
        self._board = board

    @property
    def board(self) -> Board:
        return self._board

    # -- Public API ---------------------------------------------------------

    def generate_legal_moves(self, color: Color) -> list[Move]:
        """All moves for *color* that do not leave its own king in check.

        Order: pieces row-major, then each piece's generation order.
        """
        board = self._board
        legal: list[Move] = []
        append_legal = legal.append

        for move in self.generate_pseudo_legal_moves(color):
            scratch = MoveGenerator(board.apply_move(move))
            if not scratch.is_in_check(color):
                append_legal(move)
        return legal

    def generate_pseudo_legal_moves(self, color: Color) -> list[Move]:
        """All pseudo-legal moves for *color* (may leave own king in check)."""
        board = self._board
        moves: list[Move] = []
        for from_pos, piece in board.pieces(color):
            for to_pos in self.pseudo_legal_targets(piece, from_pos):
                moves.append(Move(from_pos, to_pos, piece, board[to_pos]))
        return moves

    def pseudo_legal_targets(self, piece: Piece, pos: Position) -> list[Position]:
        """Destination squares for *piece* standing on *pos*."""
        targets = _GENERATORS[piece.piece_type](self._board, piece, pos)
        return [t for t in targets if t.is_valid]

    def legal_targets(self, pos: Position) -> list[Position]:
        """Legal destinations for whatever piece stands on *pos*."""
        piece = self._board[pos]
        if piece is None:
            return []
        return [
            m.to_pos
            for m in self.generate_legal_moves(piece.color)
            if m.from_pos == pos
        ]

    # -- Attack detection ---------------------------------------------------

    def is_in_check(self, color: Color) -> bool:
        """Is *color*'s king attacked? ``False`` when there is no king."""
        king_pos = self._board.find_king(color)
        if king_pos is None:
            return False
        return self.is_square_attacked(king_pos, color.opposite)

    def is_square_attacked(self, pos: Position, by_color: Color) -> bool:
        """Is *pos* among the pseudo-legal targets of any *by_color* piece?"""
        for from_pos, piece in self._board.pieces(by_color):
            if pos in self.pseudo_legal_targets(piece, from_pos):
                return True
        return False
