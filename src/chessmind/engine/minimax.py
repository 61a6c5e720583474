"""Fixed-depth minimax search with alpha-beta pruning."""

from __future__ import annotations

import logging
import math

from chessmind.core.board import Board
from chessmind.core.enums import Color
from chessmind.core.move import Move
from chessmind.core.move_generator import MoveGenerator
from chessmind.engine.evaluation import evaluate
from chessmind.engine.search import Difficulty, IEngine

_LOGGER = logging.getLogger(__name__)

MATE_SCORE = 10_000


class SearchAgent(IEngine):
    """Chooses a move by searching every line to a fixed depth.

    Scores are white-positive (see :func:`evaluate`). The search is hard-wired
    so that the *maximizing* side is black and the *minimizing* side is
    white: ``get_best_move`` keeps the highest-scoring root move for black and
    the lowest-scoring one for white, and the first recursion level is
    entered with ``maximizing = (color is BLACK)``.

    The agent holds no per-search state, so one instance may serve
    concurrent calls as long as each call passes its own board.
    """

    __slots__ = ("_difficulty",)

    def __init__(self, difficulty: Difficulty = Difficulty.MEDIUM) -> None:
        self._difficulty = difficulty

    @property
    def difficulty(self) -> Difficulty:
        return self._difficulty

    @property
    def max_depth(self) -> int:
        return self._difficulty.max_depth

    # ── Public API ───────────────────────────────────────────────────────

    def get_best_move(self, board: Board, color: Color) -> Move | None:
        """Best move for *color*, or ``None`` when it has no legal move."""
        moves = MoveGenerator(board).generate_legal_moves(color)
        if not moves:
            _LOGGER.debug("No legal move for %s", color)
            return None

        maximizing = color == Color.BLACK
        best_move: Move | None = None
        best_score = -math.inf if maximizing else math.inf

        for move in moves:
            score = self.minimax(
                board.apply_move(move),
                self.max_depth - 1,
                -math.inf,
                math.inf,
                maximizing,
            )
            if (maximizing and score > best_score) or (
                not maximizing and score < best_score
            ):
                best_score = score
                best_move = move

        _LOGGER.debug(
            "Search for %s at depth %d chose %s (score %s)",
            color,
            self.max_depth,
            best_move,
            best_score,
        )
        return best_move

    def minimax(
        self,
        board: Board,
        depth: int,
        alpha: float,
        beta: float,
        maximizing: bool,
    ) -> float:
        """Score of *board* searched *depth* more plies.

        The side to move is black when *maximizing*, white otherwise.
        """
        if depth == 0:
            return evaluate(board)

        color = Color.BLACK if maximizing else Color.WHITE
        gen = MoveGenerator(board)
        moves = gen.generate_legal_moves(color)

        if not moves:
            if gen.is_in_check(color):
                return self.mate_score(depth, maximizing)
            return 0

        if maximizing:
            best = -math.inf
            for move in moves:
                score = self.minimax(
                    board.apply_move(move), depth - 1, alpha, beta, False
                )
                best = max(best, score)
                alpha = max(alpha, score)
                if beta <= alpha:
                    break
            return best

        best = math.inf
        for move in moves:
            score = self.minimax(board.apply_move(move), depth - 1, alpha, beta, True)
            best = min(best, score)
            beta = min(beta, score)
            if beta <= alpha:
                break
        return best

    def mate_score(self, depth: int, maximizing: bool) -> int:
        """Score of a mated side found with *depth* plies left.

        Mates closer to the root are more extreme.
        """
        ply = self.max_depth - depth
        if maximizing:
            return -(MATE_SCORE - ply)
        return MATE_SCORE - ply
