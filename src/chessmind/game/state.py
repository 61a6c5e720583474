"""Game state machine: tracks the board, phase and move history."""

from __future__ import annotations

from dataclasses import dataclass, field

from chessmind.core.board import Board
from chessmind.core.enums import Color, GameStatus
from chessmind.core.move import Move
from chessmind.core.move_generator import MoveGenerator
from chessmind.core.notation import move_to_notation
from chessmind.core.rules import Classification, Rules
from chessmind.core.types import Position
from chessmind.game.interfaces import GameEndReason, GamePhase

_NOT_CLASSIFIED = Classification(is_check=False, is_checkmate=False, is_stalemate=False)


@dataclass(frozen=True, slots=True)
class MoveRecord:
    """A single entry in the move history."""

    move: Move
    notation: str
    status: GameStatus  # opponent's status right after the move


@dataclass
class GameState:
    """Board snapshot plus everything needed to display and replay a game.

    This is a pure data/logic class: no threading, no UI.
    """

    board: Board = field(default_factory=Board.initial, init=False)
    start_board: Board = field(default_factory=Board.initial, init=False)
    side_to_move: Color = field(default=Color.WHITE, init=False)
    phase: GamePhase = field(default=GamePhase.NOT_STARTED, init=False)
    classification: Classification = field(default=_NOT_CLASSIFIED, init=False)
    winner: Color | None = field(default=None, init=False)
    end_reason: GameEndReason | None = field(default=None, init=False)
    move_history: list[MoveRecord] = field(default_factory=list, init=False)

    # ── Initialisation ───────────────────────────────────────────────────

    def setup(self, board: Board | None = None, side_to_move: Color = Color.WHITE) -> None:
        """Initialise (or reset) the game."""
        self.start_board = board if board is not None else Board.initial()
        self.board = self.start_board
        self.side_to_move = side_to_move
        self.phase = GamePhase.AWAITING_MOVE
        self.winner = None
        self.end_reason = None
        self.move_history.clear()
        self._refresh_status()

    # ── Move application ─────────────────────────────────────────────────

    def apply_move(self, move: Move) -> MoveRecord:
        """Apply a validated move and return the history record.

        Caller is responsible for legality check.
        """
        self.board = self.board.apply_move(move)
        self.side_to_move = self.side_to_move.opposite
        self._refresh_status()

        record = MoveRecord(move, move_to_notation(move), self.classification.status)
        self.move_history.append(record)
        return record

    def undo(self, plies: int = 1) -> list[Move]:
        """Take back up to *plies* moves by replaying the remaining history.

        Returns the undone moves, most recent first.
        """
        plies = min(plies, len(self.move_history))
        if plies <= 0:
            return []

        undone = [r.move for r in reversed(self.move_history[-plies:])]
        del self.move_history[-plies:]

        board = self.start_board
        for record in self.move_history:
            board = board.apply_move(record.move)
        self.board = board
        if plies % 2:
            self.side_to_move = self.side_to_move.opposite

        self.winner = None
        self.end_reason = None
        self.phase = GamePhase.AWAITING_MOVE
        self._refresh_status()
        return undone

    def flag_fall(self, color: Color) -> None:
        """Time ran out for *color*."""
        self.winner = color.opposite
        self.end_reason = GameEndReason.TIMEOUT
        self.phase = GamePhase.GAME_OVER

    # ── Query helpers ────────────────────────────────────────────────────

    @property
    def is_game_over(self) -> bool:
        return self.phase == GamePhase.GAME_OVER

    @property
    def status(self) -> GameStatus:
        return self.classification.status

    @property
    def ply_count(self) -> int:
        """Number of half-moves played."""
        return len(self.move_history)

    @property
    def fullmove_display(self) -> int:
        return (self.ply_count // 2) + 1

    @property
    def moves(self) -> list[Move]:
        return [r.move for r in self.move_history]

    def legal_moves(self) -> list[Move]:
        """Legal moves for the side to move."""
        return Rules.legal_moves(self.board, self.side_to_move)

    def legal_targets(self, pos: Position) -> list[Position]:
        """Legal destinations from *pos* for the side to move."""
        piece = self.board[pos]
        if piece is None or piece.color != self.side_to_move:
            return []
        return MoveGenerator(self.board).legal_targets(pos)

    # ── Internal ─────────────────────────────────────────────────────────

    def _refresh_status(self) -> None:
        self.classification = Rules.classify(self.board, self.side_to_move)
        if self.classification.is_checkmate:
            self.winner = self.side_to_move.opposite
            self.end_reason = GameEndReason.CHECKMATE
            self.phase = GamePhase.GAME_OVER
        elif self.classification.is_stalemate:
            self.winner = None
            self.end_reason = GameEndReason.STALEMATE
            self.phase = GamePhase.GAME_OVER
