"""Perspective camera state and projection helpers."""
from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from .config import CAMERA_CFG, CameraCfg

WORLD_UP = np.array([0.0, 1.0, 0.0], dtype=float)


def _clamp(value: float, minimum: float, maximum: float) -> float:
    return max(minimum, min(maximum, value))


def _normalize(vector: np.ndarray) -> np.ndarray:
    norm = float(np.linalg.norm(vector))
    if norm <= 1e-12:
        return np.zeros_like(vector)
    return vector / norm


@dataclass
class CameraState:
    position: np.ndarray
    target: np.ndarray
    viewport: tuple[int, int]
    focus: str | None = None


class Camera:
    """Perspective camera looking from ``position`` towards ``target``."""

    def __init__(
        self,
        viewport: tuple[int, int],
        *,
        cfg: CameraCfg = CAMERA_CFG,
    ) -> None:
        if viewport[0] <= 0 or viewport[1] <= 0:
            raise ValueError(f"viewport must have a positive size, got {viewport!r}")
        self._cfg = cfg
        self._state = CameraState(
            position=np.array(cfg.initial_position, dtype=float),
            target=np.array(cfg.initial_target, dtype=float),
            viewport=(int(viewport[0]), int(viewport[1])),
        )

    @classmethod
    def from_state(cls, state: CameraState, *, cfg: CameraCfg = CAMERA_CFG) -> "Camera":
        """Detached camera for projecting a frozen :class:`CameraState`."""

        camera = cls(state.viewport, cfg=cfg)
        camera.move_to(state.position)
        camera.look_at(state.target)
        camera.set_focus(state.focus)
        return camera

    @property
    def cfg(self) -> CameraCfg:
        return self._cfg

    @property
    def position(self) -> np.ndarray:
        return self._state.position

    @property
    def target(self) -> np.ndarray:
        return self._state.target

    @property
    def focus(self) -> str | None:
        return self._state.focus

    @property
    def viewport(self) -> tuple[int, int]:
        return self._state.viewport

    @property
    def aspect(self) -> float:
        width, height = self._state.viewport
        return width / max(height, 1)

    @property
    def distance(self) -> float:
        return float(np.linalg.norm(self._state.position - self._state.target))

    def snapshot(self) -> CameraState:
        state = self._state
        return CameraState(
            position=state.position.copy(),
            target=state.target.copy(),
            viewport=state.viewport,
            focus=state.focus,
        )

    def update_viewport(self, viewport: tuple[int, int]) -> None:
        width, height = viewport
        if width <= 0 or height <= 0:
            return
        self._state.viewport = (int(width), int(height))

    def look_at(self, target: np.ndarray) -> None:
        self._state.target[:] = target

    def move_to(self, position: np.ndarray) -> None:
        self._state.position[:] = position

    def set_focus(self, name: str | None) -> None:
        self._state.focus = name

    def set_distance(self, distance: float) -> None:
        """Move along the current view line so the target is *distance* away."""

        cfg = self._cfg
        distance = _clamp(distance, cfg.min_distance, cfg.max_distance)
        offset = self._state.position - self._state.target
        direction = _normalize(offset)
        if not direction.any():
            direction = _normalize(cfg.initial_position - cfg.initial_target)
        self._state.position[:] = self._state.target + direction * distance

    def reset(self) -> None:
        cfg = self._cfg
        self._state.position[:] = cfg.initial_position
        self._state.target[:] = cfg.initial_target
        self._state.focus = None

    def basis(self) -> tuple[np.ndarray, np.ndarray, np.ndarray]:
        """Return ``(right, up, forward)`` unit vectors of the view."""

        forward = _normalize(self._state.target - self._state.position)
        if not forward.any():
            forward = np.array([0.0, 0.0, -1.0])
        right = np.cross(forward, WORLD_UP)
        if float(np.linalg.norm(right)) <= 1e-9:
            # Looking straight up or down; pick any horizontal right vector.
            right = np.array([1.0, 0.0, 0.0])
        right = _normalize(right)
        up = np.cross(right, forward)
        return right, up, forward

    def screen_to_ndc(self, screen: tuple[float, float]) -> tuple[float, float]:
        width, height = self._state.viewport
        x = (screen[0] / width) * 2.0 - 1.0
        y = -(screen[1] / height) * 2.0 + 1.0
        return x, y

    def world_to_screen(self, point: np.ndarray) -> tuple[float, float] | None:
        """Project *point* to pixel coordinates, or ``None`` behind the near plane."""

        right, up, forward = self.basis()
        rel = np.asarray(point, dtype=float) - self._state.position
        depth = float(rel @ forward)
        if depth <= self._cfg.near:
            return None
        tan_half = self._cfg.tan_half_fov
        x_ndc = float(rel @ right) / (depth * tan_half * self.aspect)
        y_ndc = float(rel @ up) / (depth * tan_half)
        width, height = self._state.viewport
        return (x_ndc + 1.0) * 0.5 * width, (1.0 - y_ndc) * 0.5 * height

    def projected_radius(self, point: np.ndarray, radius: float) -> float:
        """Approximate on-screen radius in pixels of a sphere at *point*."""

        _, _, forward = self.basis()
        depth = float((np.asarray(point, dtype=float) - self._state.position) @ forward)
        if depth <= self._cfg.near:
            return 0.0
        height = self._state.viewport[1]
        return radius / (depth * self._cfg.tan_half_fov) * 0.5 * height


__all__ = ["Camera", "CameraState"]
