"""Two-sided game clock."""

from __future__ import annotations

import time
from collections.abc import Callable
from dataclasses import dataclass

from chessmind.core.enums import Color
from chessmind.game.interfaces import IClock, TimeControl

TimeSource = Callable[[], float]


@dataclass(frozen=True, slots=True)
class ClockSnapshot:
    """Clock state captured before a move so undo can restore it."""

    white_remaining: float
    black_remaining: float
    active_color: Color | None
    is_running: bool


class Clock(IClock):
    """Counts down the active side's time.

    Elapsed time is charged lazily from a monotonic *time_source* whenever
    the clock is read, paused or switched, so no ticking timer is needed.
    """

    __slots__ = (
        "_time_control",
        "_time_source",
        "_remaining",
        "_active_color",
        "_last_tick",
        "_running",
    )

    def __init__(
        self,
        time_control: TimeControl | None = None,
        time_source: TimeSource = time.monotonic,
    ) -> None:
        self._time_control = time_control or TimeControl.rapid_10m()
        self._time_source = time_source
        self._remaining: dict[Color, float] = {}
        self._active_color: Color | None = None
        self._last_tick = 0.0
        self._running = False
        self.reset()

    # ── IClock implementation ────────────────────────────────────────────

    def start(self, color: Color) -> None:
        self._active_color = color
        self._last_tick = self._time_source()
        self._running = True

    def pause(self) -> None:
        if self._running:
            self._charge_elapsed()
            self._running = False

    def switch(self) -> None:
        if self._active_color is None:
            return
        if self._running:
            self._charge_elapsed()
            self._remaining[self._active_color] += self._time_control.increment_seconds
        self._active_color = self._active_color.opposite
        self._last_tick = self._time_source()

    def remaining(self, color: Color) -> float:
        left = self._remaining[color]
        if self._running and self._active_color == color:
            left -= self._time_source() - self._last_tick
        return max(0.0, left)

    def is_flag_fallen(self, color: Color) -> bool:
        return self.remaining(color) <= 0.0

    # ── Extra helpers ────────────────────────────────────────────────────

    @property
    def time_control(self) -> TimeControl:
        return self._time_control

    @property
    def is_running(self) -> bool:
        return self._running

    @property
    def active_color(self) -> Color | None:
        return self._active_color

    def reset(self) -> None:
        """Full time for both sides, stopped."""
        initial = self._time_control.initial_seconds
        self._remaining = {Color.WHITE: initial, Color.BLACK: initial}
        self._active_color = None
        self._running = False

    def snapshot(self) -> ClockSnapshot:
        return ClockSnapshot(
            white_remaining=self.remaining(Color.WHITE),
            black_remaining=self.remaining(Color.BLACK),
            active_color=self._active_color,
            is_running=self._running,
        )

    def restore(self, snapshot: ClockSnapshot) -> None:
        self._remaining[Color.WHITE] = snapshot.white_remaining
        self._remaining[Color.BLACK] = snapshot.black_remaining
        self._active_color = snapshot.active_color
        self._running = snapshot.is_running and snapshot.active_color is not None
        self._last_tick = self._time_source()

    # ── Internal ─────────────────────────────────────────────────────────

    def _charge_elapsed(self) -> None:
        if self._active_color is None:
            return
        now = self._time_source()
        color = self._active_color
        self._remaining[color] = max(0.0, self._remaining[color] - (now - self._last_tick))
        self._last_tick = now
