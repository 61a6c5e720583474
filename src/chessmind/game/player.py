"""Concrete player implementations."""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING

from chessmind.core.enums import Color
from chessmind.game.interfaces import IPlayer

if TYPE_CHECKING:
    from chessmind.core.board import Board


class HumanPlayer(IPlayer):
    """A human participant: moves come from the UI.

    ``request_move`` is a no-op because humans select moves interactively.
    """

    __slots__ = ("_color", "_name")

    def __init__(self, color: Color, name: str = "") -> None:
        self._color = color
        self._name = name or f"Player ({color!s})"

    @property
    def color(self) -> Color:
        return self._color

    @property
    def name(self) -> str:
        return self._name

    @property
    def is_human(self) -> bool:
        return True

    def request_move(self, board: Board) -> None:
        pass  # Human moves arrive via controller.submit_move()


class AIPlayer(IPlayer):
    """A computer participant that delegates thinking to a callback.

    The callback receives the board and the player's color. It may answer
    synchronously (calling the controller's ``submit_move`` before returning)
    or hand the work to an ``EngineWorker`` running in a ``QThread``.
    """

    __slots__ = ("_color", "_name", "_on_request_move")

    def __init__(
        self,
        color: Color,
        name: str = "Engine",
        on_request_move: Callable[[Board, Color], None] | None = None,
    ) -> None:
        self._color = color
        self._name = name
        self._on_request_move = on_request_move

    @property
    def color(self) -> Color:
        return self._color

    @property
    def name(self) -> str:
        return self._name

    @property
    def is_human(self) -> bool:
        return False

    def request_move(self, board: Board) -> None:
        if self._on_request_move is not None:
            self._on_request_move(board, self._color)
