"""Construction, lookup and traversal of the body tree."""
from __future__ import annotations

import json
import logging
import math
import numbers
from pathlib import Path
from typing import Callable, Iterator

import numpy as np

from .config import SIMULATION_CFG, SimulationCfg
from .model import BodyDef, CelestialBody, InvalidBodyError, Scene
from .orbits import resolve_positions

logger = logging.getLogger(__name__)


def _is_finite(value: float) -> bool:
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        return False
    return math.isfinite(value)


def validate_body_def(definition: BodyDef, *, is_root: bool) -> None:
    """Raise :class:`InvalidBodyError` for the first rule *definition* breaks."""

    if not definition.name:
        raise InvalidBodyError("body name must be non-empty")
    if not _is_finite(definition.size) or definition.size <= 0.0:
        raise InvalidBodyError(f"{definition.name}: size must be positive, got {definition.size!r}")
    if not _is_finite(definition.distance) or definition.distance < 0.0:
        raise InvalidBodyError(
            f"{definition.name}: distance must be finite and non-negative, got {definition.distance!r}"
        )
    if not _is_finite(definition.speed):
        raise InvalidBodyError(f"{definition.name}: speed must be finite, got {definition.speed!r}")
    if definition.phase is not None and not _is_finite(definition.phase):
        raise InvalidBodyError(f"{definition.name}: phase must be finite, got {definition.phase!r}")
    if definition.spin_rate is not None and not _is_finite(definition.spin_rate):
        raise InvalidBodyError(
            f"{definition.name}: spin rate must be finite, got {definition.spin_rate!r}"
        )
    if is_root:
        return
    if definition.distance <= 0.0:
        raise InvalidBodyError(f"{definition.name}: orbiting bodies need a positive distance")
    if definition.speed == 0.0:
        raise InvalidBodyError(f"{definition.name}: orbiting bodies need a non-zero speed")


def create_scene(
    root: BodyDef,
    *,
    rng: np.random.Generator | None = None,
    cfg: SimulationCfg = SIMULATION_CFG,
) -> Scene:
    """Build a :class:`Scene` from the static definition tree rooted at *root*.

    Invalid moons and planets are left out (together with their own moons)
    and listed in ``scene.rejected``; an invalid root raises
    :class:`InvalidBodyError`. Bodies without an explicit phase start at a
    random angle drawn from *rng*.
    """

    validate_body_def(root, is_root=True)
    rng = rng if rng is not None else np.random.default_rng()

    def make_body(definition: BodyDef, parent: CelestialBody | None) -> CelestialBody:
        depth = 0 if parent is None else parent.depth + 1
        if parent is None:
            phase = 0.0
        elif definition.phase is not None:
            phase = float(definition.phase)
        else:
            phase = float(rng.uniform(0.0, 2.0 * math.pi))
        spin_rate = definition.spin_rate
        if spin_rate is None:
            spin_rate = cfg.spin_rate_for_depth(depth)
        return CelestialBody(
            name=definition.name,
            size=float(definition.size),
            distance=0.0 if parent is None else float(definition.distance),
            speed=0.0 if parent is None else float(definition.speed),
            color=definition.color,
            spin_rate=float(spin_rate),
            depth=depth,
            parent=None if parent is None else parent.name,
            phase=phase,
            ring=definition.ring,
        )

    root_body = make_body(root, None)
    scene = Scene(root=root_body)
    scene.by_name[root_body.name] = root_body
    scene.order.append(root_body)

    def attach(parent: CelestialBody, definitions: tuple[BodyDef, ...]) -> None:
        for definition in definitions:
            try:
                validate_body_def(definition, is_root=False)
                if definition.name in scene.by_name:
                    raise InvalidBodyError(f"{definition.name}: duplicate body name")
            except InvalidBodyError as exc:
                logger.warning("Skipping body %r: %s", definition.name, exc)
                scene.rejected.append((definition.name, str(exc)))
                continue
            body = make_body(definition, parent)
            parent.moons.append(body)
            scene.by_name[body.name] = body
            scene.order.append(body)
            attach(body, definition.moons)

    attach(root_body, root.moons)
    resolve_positions(scene)
    logger.debug("Scene created with %d bodies (%d rejected)", len(scene), len(scene.rejected))
    return scene


def find_by_name(scene: Scene, name: str) -> CelestialBody | None:
    return scene.by_name.get(name)


def iter_bodies(scene: Scene) -> Iterator[CelestialBody]:
    """Yield bodies depth first, every parent before its moons."""

    stack = [scene.root]
    while stack:
        body = stack.pop()
        yield body
        stack.extend(reversed(body.moons))


def for_each_body(scene: Scene, visitor: Callable[[CelestialBody], None]) -> None:
    for body in iter_bodies(scene):
        visitor(body)


def _definition_from_dict(data: dict) -> BodyDef:
    try:
        ring = data.get("ring")
        return BodyDef(
            name=str(data["name"]),
            size=float(data["size"]),
            distance=float(data.get("distance", 0.0)),
            speed=float(data.get("speed", 0.0)),
            color=str(data.get("color", "#C0C0C0")),
            moons=tuple(_definition_from_dict(moon) for moon in data.get("moons", [])),
            phase=None if data.get("phase") is None else float(data["phase"]),
            spin_rate=None if data.get("spin_rate") is None else float(data["spin_rate"]),
            ring=None if ring is None else (float(ring[0]), float(ring[1])),
        )
    except (KeyError, TypeError, ValueError, IndexError) as exc:
        raise InvalidBodyError(f"malformed body definition {data!r}: {exc}") from exc


def load_system(path: str | Path) -> BodyDef:
    """Read a system definition (root body with nested ``moons``) from JSON."""

    path = Path(path)
    with path.open("r", encoding="utf-8") as fh:
        data = json.load(fh)
    if not isinstance(data, dict):
        raise InvalidBodyError(f"{path}: expected a JSON object describing the root body")
    return _definition_from_dict(data)


__all__ = [
    "create_scene",
    "find_by_name",
    "for_each_body",
    "iter_bodies",
    "load_system",
    "validate_body_def",
]
