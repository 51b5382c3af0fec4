import numpy as np
import pytest

from orrery.core.model import BodyDef
from orrery.core.registry import create_scene


@pytest.fixture
def small_system() -> BodyDef:
    return BodyDef(
        name="Sun",
        size=3.0,
        distance=0.0,
        speed=0.0,
        color="#FFD700",
        moons=(
            BodyDef(
                name="Earth",
                size=0.8,
                distance=16.0,
                speed=0.02,
                color="#6B93D6",
                phase=0.0,
                moons=(
                    BodyDef(name="Moon", size=0.2, distance=2.0, speed=0.1, color="#C0C0C0", phase=0.0),
                ),
            ),
            BodyDef(name="Mars", size=0.6, distance=20.0, speed=0.015, color="#CD5C5C", phase=np.pi),
        ),
    )


@pytest.fixture
def scene(small_system):
    return create_scene(small_system, rng=np.random.default_rng(7))
