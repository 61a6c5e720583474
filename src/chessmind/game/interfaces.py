"""Abstract interfaces for the game layer.

The controller depends on these ABCs, not on concrete Player/Clock
implementations.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from enum import IntEnum, auto
from typing import TYPE_CHECKING

from chessmind.core.enums import Color

if TYPE_CHECKING:
    from chessmind.core.board import Board
    from chessmind.core.move import Move
    from chessmind.core.types import Position


class GameMode(IntEnum):
    """One human against the engine, or two humans at one board."""

    SINGLE = auto()
    MULTI = auto()

    @classmethod
    def from_name(cls, name: str) -> GameMode:
        try:
            return cls[name.strip().upper()]
        except KeyError:
            raise ValueError(f"Unknown game mode: {name!r}") from None


# ── Game phase FSM states ────────────────────────────────────────────────────


class GamePhase(IntEnum):
    """Finite-state-machine states for a chess game."""

    NOT_STARTED = auto()
    AWAITING_MOVE = auto()
    THINKING = auto()  # engine is computing
    GAME_OVER = auto()


class GameEndReason(IntEnum):
    CHECKMATE = auto()
    STALEMATE = auto()
    TIMEOUT = auto()


# ── Time control ─────────────────────────────────────────────────────────────


class TimeControl:
    """Immutable time-control definition.

    Args:
        initial_seconds: Starting time per player.
        increment_seconds: Per-move increment.
    """

    __slots__ = ("initial_seconds", "increment_seconds")

    def __init__(self, initial_seconds: float, increment_seconds: float = 0.0) -> None:
        if initial_seconds <= 0:
            raise ValueError("Initial time must be positive")
        self.initial_seconds = initial_seconds
        self.increment_seconds = increment_seconds

    @classmethod
    def minutes(cls, minutes: float) -> TimeControl:
        return cls(minutes * 60)

    @classmethod
    def rapid_10m(cls) -> TimeControl:
        return cls(600, 0)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, TimeControl):
            return NotImplemented
        return (self.initial_seconds, self.increment_seconds) == (
            other.initial_seconds,
            other.increment_seconds,
        )

    def __hash__(self) -> int:
        return hash((self.initial_seconds, self.increment_seconds))

    def __repr__(self) -> str:
        mins = self.initial_seconds / 60
        if self.increment_seconds:
            return f"TimeControl({mins:.0f}m+{self.increment_seconds:.0f}s)"
        return f"TimeControl({mins:.0f}m)"


# ── Abstract interfaces ─────────────────────────────────────────────────────


class IPlayer(ABC):
    """Interface for a game participant (human or AI)."""

    @property
    @abstractmethod
    def color(self) -> Color: ...

    @property
    @abstractmethod
    def name(self) -> str: ...

    @property
    @abstractmethod
    def is_human(self) -> bool: ...

    @abstractmethod
    def request_move(self, board: Board) -> None:
        """Begin the move-selection process.

        For humans this is a no-op (they interact via UI).
        For AI this starts the search; the answer comes back through
        the controller's ``submit_move``.
        """


class IClock(ABC):
    """Interface for a two-sided game clock."""

    @abstractmethod
    def start(self, color: Color) -> None:
        """Start the clock for *color*."""

    @abstractmethod
    def pause(self) -> None:
        """Pause the running clock."""

    @abstractmethod
    def switch(self) -> None:
        """Switch to the other player's clock."""

    @abstractmethod
    def remaining(self, color: Color) -> float:
        """Seconds remaining for *color*."""

    @abstractmethod
    def is_flag_fallen(self, color: Color) -> bool:
        """Has *color* run out of time?"""


class IGameController(ABC):
    """Interface for the game orchestrator."""

    @abstractmethod
    def new_game(
        self,
        white: IPlayer,
        black: IPlayer,
        time_control: TimeControl | None = None,
        board: Board | None = None,
        side_to_move: Color = Color.WHITE,
    ) -> None:
        """Set up a new game, optionally from *board* with *side_to_move* to play."""

    @abstractmethod
    def submit_move(self, move: Move) -> bool:
        """Submit a move. Returns True if legal and applied."""

    @abstractmethod
    def make_move(self, from_pos: Position, to_pos: Position) -> bool:
        """Submit the legal move between two squares, if there is one."""

    @abstractmethod
    def undo_move(self) -> bool:
        """Take back the last move (or move pair). Returns True on success."""
