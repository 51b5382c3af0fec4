"""Simulation context tying the scene, clock and camera together."""
from __future__ import annotations

import logging
from dataclasses import dataclass

import numpy as np

from .camera import Camera, CameraState
from .config import CAMERA_CFG, SIMULATION_CFG, CameraCfg, SimulationCfg
from .controls import CameraController
from .logging_utils import SessionRecorder
from .model import BodyDef, CelestialBody, Scene
from .picking import pick
from .registry import create_scene, find_by_name
from .timekeeping import SimulationClock

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BodySnapshot:
    name: str
    position: np.ndarray
    parent_position: np.ndarray | None
    size: float
    distance: float
    spin: float
    depth: int
    color: str
    ring: tuple[float, float] | None


@dataclass(frozen=True)
class SceneSnapshot:
    bodies: tuple[BodySnapshot, ...]
    camera: CameraState
    selected: str | None
    playing: bool
    speed: float
    elapsed: float


class Simulation:
    """Explicit context passed to every operation instead of module globals."""

    def __init__(
        self,
        scene: Scene,
        *,
        viewport: tuple[int, int],
        clock: SimulationClock | None = None,
        camera_cfg: CameraCfg = CAMERA_CFG,
        cfg: SimulationCfg = SIMULATION_CFG,
        recorder: SessionRecorder | None = None,
    ) -> None:
        self.cfg = cfg
        self.scene = scene
        self.clock = clock if clock is not None else SimulationClock(speed=cfg.default_speed)
        self.camera = Camera(viewport, cfg=camera_cfg)
        self.controller = CameraController(self.camera, scene)
        self.recorder = recorder
        self.selected: str | None = None

    @classmethod
    def from_system(
        cls,
        system: BodyDef,
        *,
        viewport: tuple[int, int],
        rng: np.random.Generator | None = None,
        cfg: SimulationCfg = SIMULATION_CFG,
        **kwargs,
    ) -> "Simulation":
        scene = create_scene(system, rng=rng, cfg=cfg)
        return cls(scene, viewport=viewport, cfg=cfg, **kwargs)

    def toggle_playing(self) -> bool:
        playing = self.clock.toggle_playing()
        self._record("play" if playing else "pause")
        return playing

    def set_speed(self, multiplier: float) -> None:
        self.clock.set_speed(multiplier)
        self._record("speed", details={"speed": self.clock.speed})

    def focus_on(self, name: str) -> bool:
        focused = self.controller.focus_on(name)
        if focused:
            self.selected = name
            self._record("focus", name)
        else:
            logger.debug("Ignoring focus request for unknown body %r", name)
        return focused

    def reset(self) -> None:
        self.controller.reset()
        self.selected = None
        self._record("reset")

    def select_at(self, screen: tuple[float, float]) -> str | None:
        """Pick at *screen*; a hit replaces the selection, a miss keeps it."""

        name = pick(self.camera, screen, self.scene)
        if name is not None:
            self.selected = name
            self._record("select", name)
        return name

    def selected_body(self) -> CelestialBody | None:
        if self.selected is None:
            return None
        return find_by_name(self.scene, self.selected)

    def snapshot(self) -> SceneSnapshot:
        bodies = []
        for body in self.scene.order:
            parent = None if body.parent is None else self.scene.by_name[body.parent]
            bodies.append(
                BodySnapshot(
                    name=body.name,
                    position=body.position.copy(),
                    parent_position=None if parent is None else parent.position.copy(),
                    size=body.size,
                    distance=body.distance,
                    spin=body.spin,
                    depth=body.depth,
                    color=body.color,
                    ring=body.ring,
                )
            )
        return SceneSnapshot(
            bodies=tuple(bodies),
            camera=self.camera.snapshot(),
            selected=self.selected,
            playing=self.clock.playing,
            speed=self.clock.speed,
            elapsed=self.clock.elapsed,
        )

    def _record(self, event_type: str, body: str | None = None, details: dict | None = None) -> None:
        if self.recorder is not None:
            self.recorder.log_event(self.clock.elapsed, event_type, body, details)


__all__ = ["BodySnapshot", "SceneSnapshot", "Simulation"]
