"""Built-in system definitions."""
from __future__ import annotations

from orrery.core.model import BodyDef


SOLAR_SYSTEM = BodyDef(
    name="Sun",
    size=3.0,
    distance=0.0,
    speed=0.0,
    color="#FFD700",
    moons=(
        BodyDef(name="Mercury", size=0.4, distance=8.0, speed=0.04, color="#8C7853"),
        BodyDef(name="Venus", size=0.7, distance=12.0, speed=0.03, color="#FFC649"),
        BodyDef(
            name="Earth",
            size=0.8,
            distance=16.0,
            speed=0.02,
            color="#6B93D6",
            moons=(BodyDef(name="Moon", size=0.2, distance=2.0, speed=0.1, color="#C0C0C0"),),
        ),
        BodyDef(name="Mars", size=0.6, distance=20.0, speed=0.015, color="#CD5C5C"),
        BodyDef(
            name="Jupiter",
            size=2.5,
            distance=28.0,
            speed=0.008,
            color="#D8CA9D",
            moons=(
                BodyDef(name="Io", size=0.3, distance=4.0, speed=0.05, color="#FFFF99"),
                BodyDef(name="Europa", size=0.25, distance=5.0, speed=0.04, color="#87CEEB"),
            ),
        ),
        BodyDef(
            name="Saturn",
            size=2.2,
            distance=36.0,
            speed=0.006,
            color="#FAD5A5",
            ring=(0.5, 1.5),
            moons=(BodyDef(name="Titan", size=0.4, distance=5.0, speed=0.03, color="#F4A460"),),
        ),
        BodyDef(name="Uranus", size=1.5, distance=44.0, speed=0.004, color="#4FD0E7"),
        BodyDef(name="Neptune", size=1.4, distance=52.0, speed=0.003, color="#4B70DD"),
    ),
)

SYSTEMS: dict[str, BodyDef] = {"solar": SOLAR_SYSTEM}
DEFAULT_SYSTEM_KEY = "solar"


__all__ = ["DEFAULT_SYSTEM_KEY", "SOLAR_SYSTEM", "SYSTEMS"]
