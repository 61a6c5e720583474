"""Move advice from an external generative model, with local fallback.

The transport (an HTTP client for a hosted model) lives outside this package
and is plugged in through :class:`MoveAdvisor`. This module builds the prompt,
parses the free-form reply and maps the suggestion onto a legal move. When
anything goes wrong the local :class:`SearchAgent` decides instead.
"""

from __future__ import annotations

import json
import logging
import re
from collections.abc import Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol, runtime_checkable

from chessmind.core.notation import (
    board_to_placement,
    format_move_history,
    move_to_coordinate,
    parse_move,
)
from chessmind.engine.search import Difficulty

if TYPE_CHECKING:
    from chessmind.core.board import Board
    from chessmind.core.enums import Color
    from chessmind.core.move import Move
    from chessmind.engine.search import IEngine

_LOGGER = logging.getLogger(__name__)


class AdvisorError(Exception):
    """The advisor could not produce a reply."""


@runtime_checkable
class MoveAdvisor(Protocol):
    """Sends a prompt to a generative model and returns its raw reply."""

    def request_advice(self, prompt: str) -> str: ...


@dataclass(frozen=True, slots=True)
class Advice:
    """Parsed advisor reply."""

    move: str | None
    explanation: str = ""
    coaching: str = ""


# ── Prompt ───────────────────────────────────────────────────────────────────

_DIFFICULTY_GUIDANCE: dict[Difficulty, str] = {
    Difficulty.EASY: (
        "Play at beginner level, occasionally make suboptimal moves, "
        "focus on basic tactics."
    ),
    Difficulty.MEDIUM: "Play at intermediate level, use good tactics and strategy.",
    Difficulty.HARD: (
        "Play at advanced level, use complex tactics, positional play "
        "and deep calculation."
    ),
}


def build_move_prompt(
    board: Board,
    color: Color,
    history: Sequence[Move] = (),
    difficulty: Difficulty = Difficulty.MEDIUM,
) -> str:
    """Prompt asking for one move for *color* as a small JSON object."""
    moves_text = format_move_history(history) or "Game start"
    return (
        f"You are a chess assistant. Suggest the best move for {color!s}.\n"
        "\n"
        f"Board (FEN piece placement, rank 8 first): {board_to_placement(board)}\n"
        f"Move history: {moves_text}\n"
        f"Difficulty: {difficulty!s} - {_DIFFICULTY_GUIDANCE[difficulty]}\n"
        "\n"
        "Castling, en passant and promotion are not available.\n"
        "Reply with JSON only:\n"
        '{"move": "e2-e4", "explanation": "one line", "coaching": "one line"}'
    )


def build_analysis_prompt(board: Board, history: Sequence[Move] = ()) -> str:
    """Prompt asking for a four-line assessment of the position."""
    moves_text = format_move_history(history) or "Game start"
    return (
        "Analyze this chess position briefly.\n"
        "\n"
        f"Board (FEN piece placement, rank 8 first): {board_to_placement(board)}\n"
        f"Move history: {moves_text}\n"
        "\n"
        "Provide a SHORT analysis in exactly 4 lines:\n"
        "1. Current situation (1 line)\n"
        "2. Key opportunity/threat (1 line)\n"
        "3. Recommended next move (1 line)\n"
        "4. Simple reason why (1 line)\n"
        "\n"
        "Keep it concise and practical."
    )


def build_explain_prompt(
    move: Move,
    board: Board,
    history: Sequence[Move] = (),
) -> str:
    """Prompt asking why *move* was played on *board*."""
    notation = move_to_coordinate(move)
    moves_text = format_move_history(history) or "Game start"
    return (
        f'Explain why the chess move "{notation}" was played in this position.\n'
        "\n"
        f"Board (FEN piece placement, rank 8 first): {board_to_placement(board)}\n"
        f"Move history: {moves_text}\n"
        f"Move: {notation}\n"
        "\n"
        "Provide a SHORT explanation in 2-3 lines:\n"
        "1. What this move accomplishes\n"
        "2. Why it was the right choice\n"
        "\n"
        "Keep it simple and concise."
    )


# ── Reply parsing ────────────────────────────────────────────────────────────

_CODE_BLOCK_RE = re.compile(r"```(?:json)?\s*([\s\S]*?)\s*```")
_MOVE_TOKEN_RE = re.compile(
    r"\b([a-h][1-8]-?[a-h][1-8]|[KQRBN]?[a-h]?[1-8]?x?[a-h][1-8])\b"
)
_EXPLANATION_RE = re.compile(r".*?explanation\W*", re.IGNORECASE)
_COACHING_RE = re.compile(r".*?coaching\W*", re.IGNORECASE)


def _extract_json(text: str) -> dict | None:
    candidates = [m.group(1) for m in _CODE_BLOCK_RE.finditer(text)]
    candidates.reverse()
    candidates.append(text.strip())
    if "{" in text and "}" in text:
        candidates.append(text[text.find("{") : text.rfind("}") + 1])

    for candidate in candidates:
        try:
            data = json.loads(candidate)
        except json.JSONDecodeError:
            continue
        if isinstance(data, dict):
            return data
    return None


def _parse_lines(text: str) -> Advice:
    move: str | None = None
    explanation = ""
    coaching = ""
    for line in (ln.strip() for ln in text.splitlines()):
        if not line:
            continue
        lowered = line.lower()
        if move is None and "move" in lowered:
            match = _MOVE_TOKEN_RE.search(line.split(":", 1)[-1])
            if match:
                move = match.group(1)
        if "explanation" in lowered or "because" in lowered:
            explanation = _EXPLANATION_RE.sub("", line, count=1)
        if "coaching" in lowered or "tip" in lowered:
            coaching = _COACHING_RE.sub("", line, count=1)
    return Advice(move, explanation, coaching)


def parse_advice(text: str) -> Advice:
    """Parse a reply; prefers JSON, falls back to line-based extraction."""
    data = _extract_json(text)
    if data is None:
        return _parse_lines(text)

    move = str(data.get("move") or "").strip()
    return Advice(
        move=move or None,
        explanation=str(data.get("explanation", "")),
        coaching=str(data.get("coaching", "")),
    )


# ── Move selection ───────────────────────────────────────────────────────────


def resolve_advice(advice: Advice, board: Board, color: Color) -> Move | None:
    """Legal move matching the suggestion, or ``None``."""
    if not advice.move:
        return None
    try:
        return parse_move(advice.move, board, color)
    except ValueError:
        return None


def choose_move(
    board: Board,
    color: Color,
    agent: IEngine,
    advisor: MoveAdvisor | None = None,
    history: Sequence[Move] = (),
    difficulty: Difficulty = Difficulty.MEDIUM,
) -> Move | None:
    """Move for *color*: the advisor's suggestion when usable, else *agent*'s."""
    if advisor is None:
        return agent.get_best_move(board, color)

    prompt = build_move_prompt(board, color, history, difficulty)
    try:
        reply = advisor.request_advice(prompt)
    except AdvisorError as exc:
        _LOGGER.warning("Advisor unavailable, using local search: %s", exc)
        return agent.get_best_move(board, color)

    advice = parse_advice(reply)
    move = resolve_advice(advice, board, color)
    if move is None:
        _LOGGER.warning(
            "Advisor suggestion %r is not a legal move, using local search",
            advice.move,
        )
        return agent.get_best_move(board, color)
    return move


# ── Commentary ───────────────────────────────────────────────────────────────


def analyze_position(
    board: Board,
    advisor: MoveAdvisor,
    history: Sequence[Move] = (),
) -> str | None:
    """Short position analysis from *advisor*, or ``None`` when it is unavailable."""
    try:
        reply = advisor.request_advice(build_analysis_prompt(board, history))
    except AdvisorError as exc:
        _LOGGER.warning("Advisor unavailable, no position analysis: %s", exc)
        return None
    return reply.strip()


def explain_move(
    move: Move,
    board: Board,
    advisor: MoveAdvisor,
    history: Sequence[Move] = (),
) -> str | None:
    """Why *move* was played on *board*, or ``None`` when the advisor is unavailable."""
    try:
        reply = advisor.request_advice(build_explain_prompt(move, board, history))
    except AdvisorError as exc:
        _LOGGER.warning(
            "Advisor unavailable, no explanation for %s: %s",
            move_to_coordinate(move),
            exc,
        )
        return None
    return reply.strip()
