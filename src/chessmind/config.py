"""Game configuration."""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass, field

from chessmind.core.enums import Color
from chessmind.engine.search import Difficulty
from chessmind.game.interfaces import GameMode, TimeControl

_LOGGER = logging.getLogger(__name__)

ENV_MODE = "CHESSMIND_MODE"
ENV_DIFFICULTY = "CHESSMIND_DIFFICULTY"
ENV_MINUTES = "CHESSMIND_MINUTES"
ENV_ENGINE_COLOR = "CHESSMIND_ENGINE_COLOR"


@dataclass(frozen=True, slots=True)
class GameConfig:
    """Settings for a new game.

    ``engine_color`` only matters in single-player mode.
    """

    mode: GameMode = GameMode.SINGLE
    difficulty: Difficulty = Difficulty.MEDIUM
    engine_color: Color = Color.BLACK
    time_control: TimeControl = field(default_factory=TimeControl.rapid_10m)

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> GameConfig:
        """Build a config from ``CHESSMIND_*`` variables; unset ones keep defaults.

        Raises :class:`ValueError` for values that cannot be parsed.
        """
        env = os.environ if environ is None else environ
        default = cls()

        def read(name: str) -> str:
            return env.get(name, "").strip()

        mode = default.mode
        if read(ENV_MODE):
            mode = GameMode.from_name(read(ENV_MODE))

        difficulty = default.difficulty
        if read(ENV_DIFFICULTY):
            difficulty = Difficulty.from_name(read(ENV_DIFFICULTY))

        engine_color = default.engine_color
        raw_color = read(ENV_ENGINE_COLOR)
        if raw_color:
            try:
                engine_color = Color[raw_color.upper()]
            except KeyError:
                raise ValueError(f"Unknown color: {raw_color!r}") from None

        time_control = default.time_control
        raw_minutes = read(ENV_MINUTES)
        if raw_minutes:
            try:
                minutes = float(raw_minutes)
            except ValueError:
                raise ValueError(f"Invalid minutes value: {raw_minutes!r}") from None
            time_control = TimeControl.minutes(minutes)

        if mode == GameMode.MULTI and raw_color:
            _LOGGER.warning("%s is ignored in multi-player mode", ENV_ENGINE_COLOR)

        return cls(mode, difficulty, engine_color, time_control)
