"""Circular orbit integration over the body tree."""
from __future__ import annotations

import math

import numpy as np

from .model import CelestialBody, Scene
from .timekeeping import SimulationClock

TWO_PI = 2.0 * math.pi


def polar_offset(distance: float, phase: float) -> np.ndarray:
    """Offset of a body from its parent on the x-z orbital plane."""

    return np.array(
        [distance * math.cos(phase), 0.0, distance * math.sin(phase)],
        dtype=float,
    )


def _place(body: CelestialBody, parents: dict[str, CelestialBody]) -> None:
    if body.parent is None:
        body.position[:] = 0.0
        return
    parent = parents[body.parent]
    body.position[:] = parent.position + polar_offset(body.distance, body.phase)


def resolve_positions(scene: Scene) -> None:
    """Recompute every world position from the current phases."""

    for body in scene.order:
        _place(body, scene.by_name)


def advance(scene: Scene, clock: SimulationClock, dt: float) -> float:
    """Advance phases and spins by *dt* simulated time units.

    Nothing changes while the clock is paused. ``scene.order`` is root
    first, so each parent is placed before its moons read its position.
    Returns the scaled step actually applied.
    """

    if not clock.playing:
        return 0.0
    step = clock.consume(dt)
    if step == 0.0:
        return 0.0

    for body in scene.order:
        body.spin = (body.spin + body.spin_rate * step) % TWO_PI
        if body.parent is not None:
            body.phase = (body.phase + body.speed * step) % TWO_PI
        _place(body, scene.by_name)
    return step


__all__ = ["advance", "polar_offset", "resolve_positions"]
