"""Simulation clock and wall-clock frame timing."""
from __future__ import annotations

import math
import numbers
import time
from dataclasses import dataclass, field


class InvalidSpeedError(ValueError):
    """Raised when a speed multiplier is not a finite positive number."""


@dataclass
class FrameTimer:
    """High resolution timer based on :func:`time.perf_counter`."""

    last_time: float = field(default_factory=time.perf_counter)

    def tick(self) -> float:
        now = time.perf_counter()
        dt = now - self.last_time
        self.last_time = now
        return dt


@dataclass
class SimulationClock:
    """Play/pause flag and speed multiplier gating the orbit integrator.

    ``elapsed`` counts simulated time units and only moves while playing.
    """

    playing: bool = True
    speed: float = 1.0
    elapsed: float = 0.0
    ticks: int = 0

    def __post_init__(self) -> None:
        if not _valid_speed(self.speed):
            raise InvalidSpeedError(f"speed multiplier must be finite and positive, got {self.speed!r}")

    def toggle_playing(self) -> bool:
        self.playing = not self.playing
        return self.playing

    def set_speed(self, multiplier: float) -> None:
        if not _valid_speed(multiplier):
            raise InvalidSpeedError(
                f"speed multiplier must be finite and positive, got {multiplier!r}"
            )
        self.speed = float(multiplier)

    def consume(self, dt: float) -> float:
        """Return the scaled step for *dt* and accumulate it into ``elapsed``."""

        if not self.playing or dt <= 0.0:
            return 0.0
        step = self.speed * dt
        self.elapsed += step
        self.ticks += 1
        return step


def _valid_speed(value: object) -> bool:
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        return False
    return math.isfinite(value) and value > 0.0


__all__ = ["FrameTimer", "InvalidSpeedError", "SimulationClock"]
