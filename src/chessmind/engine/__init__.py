"""Chess engine package: evaluation, minimax search and advisor fallback.

The Qt worker lives in :mod:`chessmind.engine.qt_bridge` and is imported
explicitly so the search itself does not require a Qt runtime.
"""

from chessmind.engine.advisor import (
    Advice,
    AdvisorError,
    MoveAdvisor,
    analyze_position,
    build_analysis_prompt,
    build_explain_prompt,
    build_move_prompt,
    choose_move,
    explain_move,
    parse_advice,
)
from chessmind.engine.evaluation import PIECE_VALUES, evaluate
from chessmind.engine.minimax import MATE_SCORE, SearchAgent
from chessmind.engine.search import Difficulty, IEngine

__all__ = [
    "Advice",
    "AdvisorError",
    "Difficulty",
    "IEngine",
    "MATE_SCORE",
    "MoveAdvisor",
    "PIECE_VALUES",
    "SearchAgent",
    "analyze_position",
    "build_analysis_prompt",
    "build_explain_prompt",
    "build_move_prompt",
    "choose_move",
    "evaluate",
    "explain_move",
    "parse_advice",
]
