"""Core domain layer: pure chess rules over immutable board snapshots.

Quick start::

    from chessmind.core import Board, Color, Rules

    board = Board.initial()
    for move in Rules.legal_moves(board, Color.WHITE):
        print(move)
"""

from chessmind.core.board import Board
from chessmind.core.enums import Color, GameStatus, PieceType
from chessmind.core.move import Move
from chessmind.core.move_generator import MoveGenerator
from chessmind.core.notation import (
    board_from_placement,
    board_to_placement,
    format_move_history,
    move_to_coordinate,
    move_to_notation,
    parse_move,
    parse_square,
    square_name,
)
from chessmind.core.piece import Piece
from chessmind.core.rules import Classification, Rules
from chessmind.core.types import Position, is_valid_position

__all__ = [
    # Enums
    "Color",
    "GameStatus",
    "PieceType",
    # Types / helpers
    "Position",
    "is_valid_position",
    # Domain objects
    "Board",
    "Classification",
    "Move",
    "MoveGenerator",
    "Piece",
    "Rules",
    # Notation
    "board_from_placement",
    "board_to_placement",
    "format_move_history",
    "move_to_coordinate",
    "move_to_notation",
    "parse_move",
    "parse_square",
    "square_name",
]
