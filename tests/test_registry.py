import json

import numpy as np
import pytest

from orrery.core.model import BodyDef, InvalidBodyError
from orrery.core.registry import (
    create_scene,
    find_by_name,
    for_each_body,
    iter_bodies,
    load_system,
    validate_body_def,
)
from orrery.data.systems import SOLAR_SYSTEM


def test_solar_system_builds_every_body_once() -> None:
    scene = create_scene(SOLAR_SYSTEM, rng=np.random.default_rng(1))
    assert scene.rejected == []
    assert len(scene) == 13
    assert len(set(scene.names)) == len(scene.names)
    assert scene.root.name == "Sun"
    np.testing.assert_allclose(scene.root.position, np.zeros(3))
    assert [moon.name for moon in find_by_name(scene, "Jupiter").moons] == ["Io", "Europa"]


def test_find_by_name_miss_returns_none(scene) -> None:
    assert find_by_name(scene, "Earth") is scene.by_name["Earth"]
    assert find_by_name(scene, "Pluto-not-present") is None
    assert "Pluto-not-present" not in scene


def test_traversal_visits_parents_before_children(scene) -> None:
    visited: list[str] = []
    for_each_body(scene, lambda body: visited.append(body.name))
    assert visited == ["Sun", "Earth", "Moon", "Mars"]
    assert [body.name for body in iter_bodies(scene)] == scene.names

    seen: set[str] = set()
    for body in iter_bodies(scene):
        if body.parent is not None:
            assert body.parent in seen
        seen.add(body.name)


def test_depth_and_parent_links(scene) -> None:
    moon = scene.by_name["Moon"]
    assert moon.depth == 2
    assert moon.parent == "Earth"
    assert scene.by_name["Earth"].depth == 1
    assert scene.root.is_root


def test_initial_positions_are_resolved(scene) -> None:
    np.testing.assert_allclose(scene.by_name["Earth"].position, [16.0, 0.0, 0.0])
    np.testing.assert_allclose(scene.by_name["Moon"].position, [18.0, 0.0, 0.0])
    np.testing.assert_allclose(scene.by_name["Mars"].position, [-20.0, 0.0, 0.0], atol=1e-9)


def test_invalid_planet_is_left_out_with_its_moons() -> None:
    root = BodyDef(
        name="Sun",
        size=3.0,
        distance=0.0,
        speed=0.0,
        color="#FFD700",
        moons=(
            BodyDef(
                name="Broken",
                size=1.0,
                distance=0.0,
                speed=0.01,
                color="#FFFFFF",
                moons=(BodyDef(name="Orphan", size=0.1, distance=1.0, speed=0.1, color="#FFFFFF"),),
            ),
            BodyDef(name="Still", size=1.0, distance=5.0, speed=0.0, color="#FFFFFF"),
            BodyDef(name="Good", size=1.0, distance=5.0, speed=-0.01, color="#FFFFFF"),
            BodyDef(name="Good", size=1.0, distance=7.0, speed=0.01, color="#FFFFFF"),
        ),
    )
    scene = create_scene(root, rng=np.random.default_rng(0))
    assert scene.names == ["Sun", "Good"]
    rejected = [name for name, _ in scene.rejected]
    assert rejected == ["Broken", "Still", "Good"]
    assert "duplicate" in scene.rejected[-1][1]
    assert scene.by_name["Good"].distance == 5.0


def test_invalid_root_raises() -> None:
    with pytest.raises(InvalidBodyError):
        create_scene(BodyDef(name="Sun", size=0.0, distance=0.0, speed=0.0, color="#FFD700"))


@pytest.mark.parametrize(
    "definition",
    [
        BodyDef(name="", size=1.0, distance=1.0, speed=0.1, color="#FFFFFF"),
        BodyDef(name="A", size=-1.0, distance=1.0, speed=0.1, color="#FFFFFF"),
        BodyDef(name="A", size=1.0, distance=float("nan"), speed=0.1, color="#FFFFFF"),
        BodyDef(name="A", size=1.0, distance=1.0, speed=float("inf"), color="#FFFFFF"),
        BodyDef(name="A", size=1.0, distance=-2.0, speed=0.1, color="#FFFFFF"),
    ],
)
def test_validate_rejects_bad_definitions(definition) -> None:
    with pytest.raises(InvalidBodyError):
        validate_body_def(definition, is_root=False)


def test_random_phases_follow_the_rng() -> None:
    first = create_scene(SOLAR_SYSTEM, rng=np.random.default_rng(42))
    second = create_scene(SOLAR_SYSTEM, rng=np.random.default_rng(42))
    assert [b.phase for b in first.order] == [b.phase for b in second.order]
    assert all(0.0 <= body.phase < 2 * np.pi for body in first.order)


def test_spin_rate_defaults_by_depth(scene) -> None:
    assert scene.root.spin_rate == 0.005
    assert scene.by_name["Earth"].spin_rate == 0.01
    assert scene.by_name["Moon"].spin_rate == 0.02


def test_summary_rows_for_info_panel(scene) -> None:
    earth = scene.by_name["Earth"]
    assert earth.summary() == [
        ("Size", "0.8 units"),
        ("Distance", "16 AU"),
        ("Orbital Speed", "20.0 km/s"),
        ("Moons", "1"),
    ]
    assert [label for label, _ in scene.by_name["Mars"].summary()] == ["Size", "Distance", "Orbital Speed"]


def test_load_system_from_json(tmp_path) -> None:
    path = tmp_path / "system.json"
    path.write_text(
        json.dumps(
            {
                "name": "Star",
                "size": 2,
                "color": "#FFFFFF",
                "moons": [
                    {
                        "name": "World",
                        "size": 0.5,
                        "distance": 9,
                        "speed": 0.02,
                        "ring": [0.2, 0.6],
                        "moons": [{"name": "Rock", "size": 0.1, "distance": 1.5, "speed": 0.2}],
                    }
                ],
            }
        ),
        encoding="utf-8",
    )
    system = load_system(path)
    assert system.name == "Star"
    assert system.moons[0].ring == (0.2, 0.6)
    scene = create_scene(system, rng=np.random.default_rng(3))
    assert scene.names == ["Star", "World", "Rock"]


def test_load_system_reports_malformed_bodies(tmp_path) -> None:
    path = tmp_path / "broken.json"
    path.write_text(json.dumps({"name": "Star", "moons": [{"name": "World"}]}), encoding="utf-8")
    with pytest.raises(InvalidBodyError):
        load_system(path)


def test_numpy_scalar_definitions_are_accepted() -> None:
    root = BodyDef(
        name="Sun",
        size=np.float32(3.0),
        distance=0.0,
        speed=0.0,
        color="#FFD700",
        moons=(
            BodyDef(
                name="World",
                size=np.float64(0.5),
                distance=np.int64(9),
                speed=np.float32(0.02),
                color="#FFFFFF",
                phase=0.0,
            ),
        ),
    )
    scene = create_scene(root, rng=np.random.default_rng(0))
    assert scene.rejected == []
    world = scene.by_name["World"]
    assert isinstance(world.distance, float)
    np.testing.assert_allclose(world.position, [9.0, 0.0, 0.0])
