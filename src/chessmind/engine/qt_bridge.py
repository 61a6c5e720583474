"""Qt bridge to run engine search in a worker thread."""

from __future__ import annotations

import logging

from PyQt6.QtCore import QObject, pyqtSignal, pyqtSlot

from chessmind.core.board import Board
from chessmind.core.enums import Color
from chessmind.engine.minimax import SearchAgent
from chessmind.engine.search import Difficulty, IEngine

_LOGGER = logging.getLogger(__name__)


class EngineWorker(QObject):
    """Thread-affine worker that computes engine moves on demand.

    Move the worker to a ``QThread`` and connect a queued signal to
    :meth:`request_move`; every result carries the caller's request id so
    answers to superseded requests can be dropped. A running search is never
    interrupted.
    """

    best_move_ready = pyqtSignal(int, object)
    search_no_move = pyqtSignal(int)
    search_error = pyqtSignal(int, str)

    __slots__ = ("_engine",)

    def __init__(self, difficulty: Difficulty = Difficulty.MEDIUM) -> None:
        super().__init__()
        self._engine: IEngine = SearchAgent(difficulty)

    @pyqtSlot(object, object, int)
    def request_move(self, board_obj: object, color_obj: object, request_id: int) -> None:
        """Search *board_obj* for *color_obj* and emit the result."""
        if not isinstance(board_obj, Board):
            self.search_error.emit(request_id, "Engine received invalid board")
            return
        if not isinstance(color_obj, Color):
            self.search_error.emit(request_id, "Engine received invalid color")
            return

        try:
            move = self._engine.get_best_move(board_obj, color_obj)
        except Exception as exc:
            _LOGGER.exception("Engine search failed for request %d", request_id)
            self.search_error.emit(request_id, str(exc))
            return

        if move is None:
            self.search_no_move.emit(request_id)
            return
        self.best_move_ready.emit(request_id, move)

    @pyqtSlot(str)
    def set_difficulty(self, name: str) -> None:
        """Switch difficulty (takes effect on the next search)."""
        try:
            difficulty = Difficulty.from_name(name)
        except ValueError as exc:
            self.search_error.emit(-1, str(exc))
            return
        self._engine = SearchAgent(difficulty)
