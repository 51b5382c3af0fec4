"""Resolve a screen coordinate to the body drawn under it."""
from __future__ import annotations

import math

import numpy as np

from .camera import Camera
from .model import Scene


def screen_ray(camera: Camera, screen: tuple[float, float]) -> tuple[np.ndarray, np.ndarray]:
    """Return ``(origin, direction)`` of the ray through *screen*.

    The ray starts at the camera and passes through the matching point of
    the near plane; ``direction`` is a unit vector.
    """

    x_ndc, y_ndc = camera.screen_to_ndc(screen)
    right, up, forward = camera.basis()
    tan_half = camera.cfg.tan_half_fov
    direction = (
        forward
        + right * (x_ndc * tan_half * camera.aspect)
        + up * (y_ndc * tan_half)
    )
    direction = direction / np.linalg.norm(direction)
    return camera.position.copy(), direction


def intersect_sphere(
    origin: np.ndarray,
    direction: np.ndarray,
    center: np.ndarray,
    radius: float,
) -> float | None:
    """Distance along a unit ray to its first hit with a sphere, if any."""

    oc = origin - center
    b = float(oc @ direction)
    c = float(oc @ oc) - radius * radius
    disc = b * b - c
    if disc < 0.0:
        return None
    root = math.sqrt(disc)
    near = -b - root
    if near >= 0.0:
        return near
    far = -b + root
    if far >= 0.0:
        # Camera sits inside the sphere.
        return far
    return None


def pick(camera: Camera, screen: tuple[float, float], scene: Scene) -> str | None:
    """Name of the nearest body hit at *screen*, or ``None``."""

    origin, direction = screen_ray(camera, screen)
    best_name: str | None = None
    best_distance = math.inf
    for body in scene.order:
        hit = intersect_sphere(origin, direction, body.position, body.size)
        if hit is None or hit < camera.cfg.near or hit > camera.cfg.far:
            continue
        if hit < best_distance:
            best_distance = hit
            best_name = body.name
    return best_name


__all__ = ["intersect_sphere", "pick", "screen_ray"]
