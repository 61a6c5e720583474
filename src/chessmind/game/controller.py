"""GameController: the central orchestrator of a game.

Coordinates: Players, Clock, GameState, SearchAgent.
Emits events via simple callbacks so the UI / tests can subscribe.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from chessmind.core.board import Board
from chessmind.core.enums import Color
from chessmind.core.move import Move
from chessmind.core.types import Position
from chessmind.engine.advisor import MoveAdvisor, choose_move
from chessmind.engine.minimax import SearchAgent
from chessmind.engine.search import Difficulty
from chessmind.game.clock import Clock, ClockSnapshot
from chessmind.game.interfaces import (
    GameMode,
    GamePhase,
    IGameController,
    IPlayer,
    TimeControl,
)
from chessmind.game.player import AIPlayer, HumanPlayer
from chessmind.game.state import GameState

if TYPE_CHECKING:
    from chessmind.config import GameConfig

_LOGGER = logging.getLogger(__name__)

# ── Event definitions ────────────────────────────────────────────────────────

MoveCallback = Callable[[Move, str, GameState], None]  # move, notation, state
GameOverCallback = Callable[[GameState], None]
PhaseCallback = Callable[[GamePhase], None]


@dataclass
class GameEvents:
    """Observable callbacks. Multiple handlers per event."""

    on_move: list[MoveCallback] = field(default_factory=list)
    on_game_over: list[GameOverCallback] = field(default_factory=list)
    on_phase_changed: list[PhaseCallback] = field(default_factory=list)


# ── Controller ───────────────────────────────────────────────────────────────


class GameController(IGameController):
    """Orchestrates a game: validates moves, manages the clock, switches
    turns, asks the engine for replies and notifies listeners.

    Methods are meant to be called from a single (UI) thread. A background
    engine must deliver its answer back on that thread via ``submit_move``.
    """

    __slots__ = (
        "_state",
        "_players",
        "_clock",
        "_clock_history",
        "_agent",
        "_advisor",
        "events",
    )

    def __init__(
        self,
        difficulty: Difficulty = Difficulty.MEDIUM,
        advisor: MoveAdvisor | None = None,
    ) -> None:
        self._state = GameState()
        self._players: dict[Color, IPlayer] = {}
        self._clock: Clock | None = None
        self._clock_history: list[ClockSnapshot] = []
        self._agent = SearchAgent(difficulty)
        self._advisor = advisor
        self.events = GameEvents()

    @classmethod
    def from_config(
        cls,
        config: GameConfig,
        advisor: MoveAdvisor | None = None,
    ) -> GameController:
        """Start a game as described by *config*.

        In single-player mode the engine side answers synchronously.
        """
        ctrl = cls(config.difficulty, advisor)
        players: dict[Color, IPlayer] = {}
        for color in (Color.WHITE, Color.BLACK):
            if config.mode == GameMode.SINGLE and color == config.engine_color:
                players[color] = ctrl.engine_player(color)
            else:
                players[color] = HumanPlayer(color)
        ctrl.new_game(
            players[Color.WHITE],
            players[Color.BLACK],
            time_control=config.time_control,
        )
        return ctrl

    # ── Properties ───────────────────────────────────────────────────────

    @property
    def state(self) -> GameState:
        return self._state

    @property
    def clock(self) -> Clock | None:
        return self._clock

    @property
    def difficulty(self) -> Difficulty:
        return self._agent.difficulty

    @property
    def current_player(self) -> IPlayer | None:
        return self._players.get(self._state.side_to_move)

    def player(self, color: Color) -> IPlayer | None:
        return self._players.get(color)

    def engine_player(self, color: Color) -> AIPlayer:
        """An :class:`AIPlayer` answering with this controller's engine."""
        return AIPlayer(color, f"Engine ({self.difficulty!s})", self._play_engine_move)

    def set_difficulty(self, difficulty: Difficulty) -> None:
        """Use a new search depth from the next engine move on."""
        self._agent = SearchAgent(difficulty)

    # ── IGameController impl ─────────────────────────────────────────────

    def new_game(
        self,
        white: IPlayer,
        black: IPlayer,
        time_control: TimeControl | None = None,
        board: Board | None = None,
        side_to_move: Color = Color.WHITE,
    ) -> None:
        self._players = {Color.WHITE: white, Color.BLACK: black}
        self._clock = Clock(time_control) if time_control is not None else None
        self._clock_history = []

        self._state = GameState()
        self._state.setup(board, side_to_move)

        if self._state.is_game_over:
            self._emit_game_over()
            return
        self._prompt_current_player()

    def submit_move(self, move: Move) -> bool:
        if self._state.is_game_over:
            return False
        if move not in self._state.legal_moves():
            return False

        mover = self._state.side_to_move
        clock_snapshot: ClockSnapshot | None = None
        if self._clock is not None:
            clock_snapshot = self._clock.snapshot()
            if self._clock.is_flag_fallen(mover):
                self._clock.pause()
                self._state.flag_fall(mover)
                self._emit_game_over()
                return False

        record = self._state.apply_move(move)
        if clock_snapshot is not None:
            self._clock_history.append(clock_snapshot)
        _LOGGER.debug("%s played %s", mover, record.notation)

        self._emit_move(move, record.notation)

        if self._state.is_game_over:
            if self._clock is not None:
                self._clock.pause()
            self._emit_game_over()
            return True

        if self._clock is not None:
            self._clock.switch()

        self._prompt_current_player()
        return True

    def make_move(self, from_pos: Position, to_pos: Position) -> bool:
        for move in self._state.legal_moves():
            if move.same_squares(from_pos, to_pos):
                return self.submit_move(move)
        return False

    def legal_targets(self, pos: Position) -> list[Position]:
        """Squares the piece on *pos* may move to (empty when not its turn)."""
        if self._state.is_game_over:
            return []
        return self._state.legal_targets(pos)

    def undo_move(self) -> bool:
        """Take back the last ply, or the last two against the engine."""
        history_len = self._state.ply_count
        if history_len == 0:
            return False

        plies = 2 if self._has_single_engine() and history_len >= 2 else 1
        self._state.undo(plies)

        if self._clock is not None:
            self._clock.pause()
            snapshot: ClockSnapshot | None = None
            for _ in range(min(plies, len(self._clock_history))):
                snapshot = self._clock_history.pop()
            if snapshot is not None:
                self._clock.restore(snapshot)

        self._prompt_current_player()
        return True

    def check_time(self) -> bool:
        """End the game if the side to move has run out of time.

        Intended for a periodic UI timer. Returns True when the flag fell.
        """
        if self._clock is None or self._state.is_game_over:
            return False
        color = self._state.side_to_move
        if not self._clock.is_flag_fallen(color):
            return False
        self._clock.pause()
        self._state.flag_fall(color)
        self._emit_game_over()
        return True

    # ── Internal helpers ─────────────────────────────────────────────────

    def _has_single_engine(self) -> bool:
        return sum(1 for p in self._players.values() if not p.is_human) == 1

    def _play_engine_move(self, board: Board, color: Color) -> None:
        move = choose_move(
            board,
            color,
            self._agent,
            self._advisor,
            history=self._state.moves,
            difficulty=self.difficulty,
        )
        if move is not None:
            self.submit_move(move)

    def _prompt_current_player(self) -> None:
        """Ask the current player to move."""
        cp = self.current_player
        if cp is None:
            return

        if self._clock is not None and not self._clock.is_running:
            self._clock.start(cp.color)

        phase = GamePhase.AWAITING_MOVE if cp.is_human else GamePhase.THINKING
        self._state.phase = phase
        self._emit_phase(phase)
        if not cp.is_human:
            cp.request_move(self._state.board)

    def _emit_move(self, move: Move, notation: str) -> None:
        for cb in self.events.on_move:
            cb(move, notation, self._state)

    def _emit_game_over(self) -> None:
        reason = self._state.end_reason
        winner = self._state.winner
        _LOGGER.info(
            "Game over: %s, winner %s",
            reason.name.lower() if reason is not None else "unknown",
            winner if winner is not None else "none",
        )
        self._emit_phase(GamePhase.GAME_OVER)
        for cb in self.events.on_game_over:
            cb(self._state)

    def _emit_phase(self, phase: GamePhase) -> None:
        for cb in self.events.on_phase_changed:
            cb(phase)
