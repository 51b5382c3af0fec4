"""Pointer and wheel driven camera control.

Dragging is a two state machine (``IDLE`` / ``DRAGGING``). Every
``(state, event type)`` pair the controller reacts to is listed in
:data:`TRANSITIONS`; pairs missing from the table are ignored.
"""
from __future__ import annotations

from enum import Enum, auto
from typing import Callable

import numpy as np

from .camera import Camera
from .events import InputEvent, PointerDown, PointerLeave, PointerMove, PointerUp, Wheel
from .model import Scene
from .registry import find_by_name


class DragState(Enum):
    IDLE = auto()
    DRAGGING = auto()


Handler = Callable[["CameraController", InputEvent], DragState]


def _press(controller: "CameraController", event: PointerDown) -> DragState:
    controller.last_pointer = (event.x, event.y)
    return DragState.DRAGGING


def _track(controller: "CameraController", event: PointerMove) -> DragState:
    controller.last_pointer = (event.x, event.y)
    return controller.state


def _drag(controller: "CameraController", event: PointerMove) -> DragState:
    last = controller.last_pointer
    if last is not None:
        controller.orbit(event.x - last[0], event.y - last[1])
    controller.last_pointer = (event.x, event.y)
    return DragState.DRAGGING


def _release(controller: "CameraController", event: InputEvent) -> DragState:
    return DragState.IDLE


def _zoom(controller: "CameraController", event: Wheel) -> DragState:
    controller.zoom(event.delta_y)
    return controller.state


TRANSITIONS: dict[tuple[DragState, type], Handler] = {
    (DragState.IDLE, PointerDown): _press,
    (DragState.IDLE, PointerMove): _track,
    (DragState.IDLE, PointerUp): _release,
    (DragState.IDLE, PointerLeave): _release,
    (DragState.IDLE, Wheel): _zoom,
    (DragState.DRAGGING, PointerDown): _press,
    (DragState.DRAGGING, PointerMove): _drag,
    (DragState.DRAGGING, PointerUp): _release,
    (DragState.DRAGGING, PointerLeave): _release,
    (DragState.DRAGGING, Wheel): _zoom,
}


class CameraController:
    """Applies drag, wheel and focus requests to a :class:`Camera`."""

    def __init__(self, camera: Camera, scene: Scene) -> None:
        self.camera = camera
        self.scene = scene
        self.state = DragState.IDLE
        self.last_pointer: tuple[float, float] | None = None
        self._anchor = np.array(camera.target, dtype=float)

    def handle(self, event: InputEvent) -> bool:
        """Feed one input event through the transition table."""

        handler = TRANSITIONS.get((self.state, type(event)))
        if handler is None:
            return False
        self.state = handler(self, event)
        return True

    def orbit(self, dx: float, dy: float) -> None:
        if dx == 0 and dy == 0:
            return
        sensitivity = self.camera.cfg.drag_sensitivity
        position = self.camera.position.copy()
        position[0] += dx * sensitivity
        position[1] -= dy * sensitivity
        self.camera.move_to(position)
        self.camera.look_at(self._anchor)
        self._enforce_distance_bounds()

    def zoom(self, delta_y: float) -> None:
        if delta_y == 0:
            return
        factor = self.camera.cfg.zoom_factor
        if delta_y < 0:
            factor = 1.0 / factor
        self.camera.set_distance(self.camera.distance * factor)

    def focus_on(self, name: str) -> bool:
        """Frame the body called *name* once. Unknown names leave the camera untouched."""

        body = find_by_name(self.scene, name)
        if body is None:
            return False
        cfg = self.camera.cfg
        reach = body.distance + cfg.focus_margin
        target = body.position.copy()
        self.camera.move_to(target + np.array([reach, cfg.focus_height, reach]))
        self.camera.look_at(target)
        self.camera.set_focus(body.name)
        self._anchor = target
        return True

    def resize(self, width: int, height: int) -> None:
        """Update the viewport; non-positive sizes are ignored."""

        self.camera.update_viewport((width, height))

    def reset(self) -> None:
        self.camera.reset()
        self._anchor = np.array(self.camera.target, dtype=float)
        self.state = DragState.IDLE
        self.last_pointer = None

    def _enforce_distance_bounds(self) -> None:
        cfg = self.camera.cfg
        distance = self.camera.distance
        if distance < cfg.min_distance or distance > cfg.max_distance:
            self.camera.set_distance(distance)


__all__ = ["CameraController", "DragState", "TRANSITIONS"]
