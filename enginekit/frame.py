"""Frame timing: per-frame delta time and an averaged frames-per-second value."""

from __future__ import annotations

import time
from typing import Callable

_FPS_INTERVAL = 0.5


class FrameTimer:
    """Tracks the time between updates and the average FPS over half-second windows."""

    def __init__(self, clock: Callable[[], float] = time.perf_counter) -> None:
        self._clock = clock
        self._last_time = 0.0
        self._fps_calc_time = 0.0
        self._delta_time = 0.0
        self._fps = 0.0
        self._frame_count = 0
        self.reset()

    def reset(self) -> None:
        """Restart timing from the current clock value."""
        now = self._clock()
        self._last_time = now
        self._fps_calc_time = now
        self._delta_time = 0.0
        self._fps = 0.0
        self._frame_count = 0

    def update(self) -> None:
        """Advance one frame."""
        now = self._clock()
        self._delta_time = now - self._last_time
        self._frame_count += 1

        fps_elapsed = now - self._fps_calc_time
        if fps_elapsed >= _FPS_INTERVAL:
            self._fps = self._frame_count / fps_elapsed
            self._frame_count = 0
            self._fps_calc_time = now

        self._last_time = now

    @property
    def delta_time(self) -> float:
        """Seconds elapsed between the last two updates."""
        return self._delta_time

    @property
    def fps(self) -> float:
        """Average frames per second over the last completed window."""
        return self._fps