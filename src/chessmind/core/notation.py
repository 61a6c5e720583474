"""Square names, move notation and move-text parsing.

Rows count down from black's back rank, so ``Position(6, 4)`` is ``e2``.
"""

from __future__ import annotations

import re
from collections.abc import Iterable

from chessmind.core.board import Board
from chessmind.core.enums import Color, PieceType
from chessmind.core.move import Move
from chessmind.core.move_generator import MoveGenerator
from chessmind.core.piece import Piece
from chessmind.core.types import BOARD_SIZE, Position

_FILES = "abcdefgh"
_RANKS = "12345678"

_SAN_PIECE: dict[PieceType, str] = {
    PieceType.KNIGHT: "N",
    PieceType.BISHOP: "B",
    PieceType.ROOK: "R",
    PieceType.QUEEN: "Q",
    PieceType.KING: "K",
}
_SAN_PIECE_REV: dict[str, PieceType] = {v: k for k, v in _SAN_PIECE.items()}
_LETTER_TYPES: dict[str, PieceType] = {
    "p": PieceType.PAWN,
    "n": PieceType.KNIGHT,
    "b": PieceType.BISHOP,
    "r": PieceType.ROOK,
    "q": PieceType.QUEEN,
    "k": PieceType.KING,
}

_COORDINATE_RE = re.compile(r"^([a-h][1-8])\s*[-x ]?\s*([a-h][1-8])$")


# ── Squares ──────────────────────────────────────────────────────────────────


def square_name(pos: Position) -> str:
    """Algebraic name, e.g. ``Position(6, 4)`` → ``'e2'``."""
    return _FILES[pos.col] + str(BOARD_SIZE - pos.row)


def parse_square(name: str) -> Position:
    """Parse square name, e.g. ``'e2'`` → ``Position(6, 4)``."""
    if len(name) != 2 or name[0] not in _FILES or name[1] not in _RANKS:
        raise ValueError(f"Invalid square name: {name!r}")
    return Position(BOARD_SIZE - int(name[1]), _FILES.index(name[0]))


# ── Move → text ──────────────────────────────────────────────────────────────


def move_to_coordinate(move: Move) -> str:
    """Coordinate notation, e.g. ``'e2-e4'``."""
    return f"{square_name(move.from_pos)}-{square_name(move.to_pos)}"


def move_to_notation(move: Move) -> str:
    """Short algebraic form used by move lists: ``'Nf3'``, ``'exd5'``, ``'e4'``.

    No disambiguation and no check suffix.
    """
    text = _SAN_PIECE.get(move.piece.piece_type, "")
    if move.is_capture:
        if move.piece.piece_type == PieceType.PAWN:
            text += _FILES[move.from_pos.col]
        text += "x"
    return text + square_name(move.to_pos)


def format_move_history(moves: Iterable[Move]) -> str:
    """Numbered coordinate history, e.g. ``'1. e2-e4 e7-e5 2. g1-f3'``."""
    parts: list[str] = []
    for index, move in enumerate(moves):
        if index % 2 == 0:
            parts.append(f"{index // 2 + 1}.")
        parts.append(move_to_coordinate(move))
    return " ".join(parts)


def board_to_placement(board: Board) -> str:
    """FEN-style piece placement, row 0 (rank 8) first."""
    ranks: list[str] = []
    for row in board.rows():
        text = ""
        empty = 0
        for piece in row:
            if piece is None:
                empty += 1
                continue
            if empty:
                text += str(empty)
                empty = 0
            text += str(piece)
        if empty:
            text += str(empty)
        ranks.append(text)
    return "/".join(ranks)


def board_from_placement(placement: str) -> Board:
    """Parse FEN-style piece placement (rank 8 first) into a :class:`Board`.

    Pieces get identity tokens ``"<color>-<type>-<n>"`` numbered in reading
    order per color and type.
    """
    rows = placement.strip().split("/")
    if len(rows) != BOARD_SIZE:
        raise ValueError(f"Placement must contain 8 ranks: {placement!r}")

    counters: dict[tuple[Color, PieceType], int] = {}
    squares: dict[Position, Piece] = {}
    for row, rank_text in enumerate(rows):
        col = 0
        for ch in rank_text:
            if ch.isdigit():
                col += int(ch)
                continue
            piece_type = _LETTER_TYPES.get(ch.lower())
            if piece_type is None or col >= BOARD_SIZE:
                raise ValueError(f"Invalid placement {placement!r} at {ch!r}")
            color = Color.WHITE if ch.isupper() else Color.BLACK
            index = counters.get((color, piece_type), 0)
            counters[(color, piece_type)] = index + 1
            squares[Position(row, col)] = Piece(
                piece_type, color, f"{color!s}-{piece_type!s}-{index}"
            )
            col += 1
        if col != BOARD_SIZE:
            raise ValueError(f"Rank {rank_text!r} does not cover 8 files")
    return Board.from_pieces(squares)


# ── Text → move ──────────────────────────────────────────────────────────────


def parse_move(text: str, board: Board, color: Color) -> Move:
    """Resolve *text* to one of *color*'s legal moves on *board*.

    Accepts coordinate notation (``e2-e4``, ``e2e4``, ``e2 e4``) and short
    algebraic (``Nf3``, ``exd5``, ``Rae1``, ``e4``).
    Raises :class:`ValueError` for illegal, ambiguous or unreadable input.
    """
    legal = MoveGenerator(board).generate_legal_moves(color)
    clean = text.strip().rstrip("+#!?")

    match = _COORDINATE_RE.match(clean)
    if match is not None:
        from_pos = parse_square(match.group(1))
        to_pos = parse_square(match.group(2))
        for m in legal:
            if m.same_squares(from_pos, to_pos):
                return m
        raise ValueError(f"Illegal move: {text}")

    return _parse_short_algebraic(clean, text, legal)


def _parse_short_algebraic(clean: str, original: str, legal: list[Move]) -> Move:
    if len(clean) < 2:
        raise ValueError(f"Unreadable move: {original!r}")

    to_pos = parse_square(clean[-2:])
    clean = clean[:-2]

    if clean.endswith("x"):
        clean = clean[:-1]

    if clean and clean[0] in _SAN_PIECE_REV:
        piece_type = _SAN_PIECE_REV[clean[0]]
        clean = clean[1:]
    else:
        piece_type = PieceType.PAWN

    # Disambiguation
    from_col: int | None = None
    from_row: int | None = None
    for ch in clean:
        if ch in _FILES:
            from_col = _FILES.index(ch)
        elif ch in _RANKS:
            from_row = BOARD_SIZE - int(ch)
        else:
            raise ValueError(f"Unreadable move: {original!r}")

    candidates = [
        m
        for m in legal
        if m.piece.piece_type == piece_type
        and m.to_pos == to_pos
        and (from_col is None or m.from_pos.col == from_col)
        and (from_row is None or m.from_pos.row == from_row)
    ]

    if len(candidates) == 1:
        return candidates[0]
    if not candidates:
        raise ValueError(f"Illegal move: {original}")
    raise ValueError(f"Ambiguous move: {original}")
