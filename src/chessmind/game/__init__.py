"""Game management layer: controller, players, clock, state machine.

Quick start::

    from chessmind.config import GameConfig
    from chessmind.game import GameController

    ctrl = GameController.from_config(GameConfig())
    ctrl.make_move(Position(6, 4), Position(4, 4))  # engine replies as black
"""

from chessmind.game.clock import Clock, ClockSnapshot
from chessmind.game.controller import GameController, GameEvents
from chessmind.game.interfaces import (
    GameEndReason,
    GameMode,
    GamePhase,
    IClock,
    IGameController,
    IPlayer,
    TimeControl,
)
from chessmind.game.player import AIPlayer, HumanPlayer
from chessmind.game.state import GameState, MoveRecord

__all__ = [
    # Interfaces
    "GameEndReason",
    "GameMode",
    "GamePhase",
    "IClock",
    "IGameController",
    "IPlayer",
    "TimeControl",
    # Concrete
    "AIPlayer",
    "Clock",
    "ClockSnapshot",
    "GameController",
    "GameEvents",
    "GameState",
    "HumanPlayer",
    "MoveRecord",
]
