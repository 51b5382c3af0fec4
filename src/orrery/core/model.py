"""Data models for the orbiting bodies of a system."""
from __future__ import annotations

from dataclasses import dataclass, field

import numpy as np


class InvalidBodyError(ValueError):
    """Raised when a body definition cannot be placed in a scene."""


@dataclass(frozen=True)
class BodyDef:
    """Static orbital parameters of a body and its moons."""

    name: str
    size: float
    distance: float
    speed: float
    color: str
    moons: tuple["BodyDef", ...] = ()
    phase: float | None = None
    spin_rate: float | None = None
    ring: tuple[float, float] | None = None


@dataclass
class CelestialBody:
    """Runtime state of a body. Positions are world space and stored by value."""

    name: str
    size: float
    distance: float
    speed: float
    color: str
    spin_rate: float
    depth: int = 0
    parent: str | None = None
    phase: float = 0.0
    spin: float = 0.0
    ring: tuple[float, float] | None = None
    position: np.ndarray = field(
        default_factory=lambda: np.zeros(3, dtype=float)
    )
    moons: list["CelestialBody"] = field(default_factory=list)

    @property
    def is_root(self) -> bool:
        return self.parent is None

    @property
    def speed_label(self) -> str:
        return f"{self.speed * 1000:.1f} km/s"

    def summary(self) -> list[tuple[str, str]]:
        """Attributes shown by the info panel for a selected body."""

        rows = [
            ("Size", f"{self.size:g} units"),
            ("Distance", f"{self.distance:g} AU"),
            ("Orbital Speed", self.speed_label),
        ]
        if self.moons:
            rows.append(("Moons", str(len(self.moons))))
        return rows


@dataclass
class Scene:
    """Body tree plus the lookup and traversal views built over it."""

    root: CelestialBody
    by_name: dict[str, CelestialBody] = field(default_factory=dict)
    order: list[CelestialBody] = field(default_factory=list)
    rejected: list[tuple[str, str]] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.order)

    def __contains__(self, name: object) -> bool:
        return name in self.by_name

    @property
    def names(self) -> list[str]:
        return [body.name for body in self.order]


__all__ = ["BodyDef", "CelestialBody", "InvalidBodyError", "Scene"]
