"""High-level chess rules: check, checkmate, stalemate classification."""

from __future__ import annotations

from dataclasses import dataclass

from chessmind.core.board import Board
from chessmind.core.enums import Color, GameStatus
from chessmind.core.move import Move
from chessmind.core.move_generator import MoveGenerator


@dataclass(frozen=True, slots=True)
class Classification:
    """Situation of one side on one board, derived fresh on every query."""

    is_check: bool
    is_checkmate: bool
    is_stalemate: bool

    @property
    def status(self) -> GameStatus:
        if self.is_checkmate:
            return GameStatus.CHECKMATE
        if self.is_stalemate:
            return GameStatus.STALEMATE
        if self.is_check:
            return GameStatus.CHECK
        return GameStatus.PLAYING

    @property
    def is_terminal(self) -> bool:
        return self.is_checkmate or self.is_stalemate


class Rules:
    """Static rule-checker operating on board snapshots."""

    # Rule subset: no castling, en-passant, promotion or draw-by-rule.

    @staticmethod
    def legal_moves(board: Board, color: Color) -> list[Move]:
        return MoveGenerator(board).generate_legal_moves(color)

    @staticmethod
    def apply_move(board: Board, move: Move) -> Board:
        return board.apply_move(move)

    @staticmethod
    def is_in_check(board: Board, color: Color) -> bool:
        return MoveGenerator(board).is_in_check(color)

    @staticmethod
    def is_checkmate(board: Board, color: Color) -> bool:
        if not Rules.is_in_check(board, color):
            return False
        return len(Rules.legal_moves(board, color)) == 0

    @staticmethod
    def is_stalemate(board: Board, color: Color) -> bool:
        if Rules.is_in_check(board, color):
            return False
        return len(Rules.legal_moves(board, color)) == 0

    @staticmethod
    def classify(board: Board, color: Color) -> Classification:
        """Check / checkmate / stalemate flags for *color* on *board*."""
        gen = MoveGenerator(board)
        in_check = gen.is_in_check(color)
        no_moves = not gen.generate_legal_moves(color)
        return Classification(
            is_check=in_check,
            is_checkmate=in_check and no_moves,
            is_stalemate=not in_check and no_moves,
        )

    @staticmethod
    def status(board: Board, color: Color) -> GameStatus:
        return Rules.classify(board, color).status
