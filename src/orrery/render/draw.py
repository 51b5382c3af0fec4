from __future__ import annotations

import math
import random
from typing import Iterable, Sequence, TYPE_CHECKING

import numpy as np
import pygame

from orrery.core.camera import Camera
from orrery.core.simulation import BodySnapshot

from .assets import AssetLibrary, parse_hex_color

if TYPE_CHECKING:  # pragma: no cover
    from orrery.core.config import RenderCfg


def generate_starfield(
    num_stars: int,
    *,
    size: tuple[int, int],
    rng: random.Random | None = None,
) -> list[dict[str, object]]:
    rng = rng or random.Random()
    width, height = size
    stars: list[dict[str, object]] = []
    for _ in range(num_stars):
        x = rng.uniform(0, width)
        y = rng.uniform(0, height)
        radius = rng.choice([1, 1, 1, 2])
        alpha = rng.randint(80, 150)
        base = rng.randint(200, 240)
        color = (
            max(0, base - rng.randint(10, 25)),
            max(0, base - rng.randint(5, 15)),
            base,
        )
        star_surface = pygame.Surface((radius * 2, radius * 2), pygame.SRCALPHA)
        pygame.draw.circle(star_surface, (*color, alpha), (radius, radius), radius)
        stars.append({"pos": (x, y), "surface": star_surface, "radius": radius})
    return stars


def draw_starfield(
    surface: pygame.Surface,
    starfield: Iterable[dict[str, object]],
    camera: Camera,
    elapsed: float,
    *,
    render_cfg: RenderCfg,
) -> None:
    """Blit the starfield, drifting with simulated time and camera position."""

    width, height = surface.get_size()
    # The sky turns slowly with the simulation, 0.0002 rad per time unit.
    drift = elapsed * 0.0002 / (2.0 * math.pi) * width
    offset_x = drift + camera.position[0] * render_cfg.starfield_parallax
    offset_y = camera.position[1] * render_cfg.starfield_parallax
    for star in starfield:
        base_x, base_y = star["pos"]  # type: ignore[index]
        star_surface = star["surface"]  # type: ignore[index]
        radius = star["radius"]  # type: ignore[index]
        sx = int((base_x - offset_x) % width)
        sy = int((base_y + offset_y) % height)
        surface.blit(star_surface, (sx - radius, sy - radius))


def circle_points(center: np.ndarray, radius: float, segments: int) -> np.ndarray:
    """Points of a horizontal circle around *center*, closed (first == last)."""

    theta = np.linspace(0.0, 2.0 * np.pi, segments + 1)
    points = np.empty((segments + 1, 3), dtype=float)
    points[:, 0] = center[0] + radius * np.cos(theta)
    points[:, 1] = center[1]
    points[:, 2] = center[2] + radius * np.sin(theta)
    return points


def project_polyline(camera: Camera, points: np.ndarray) -> list[list[tuple[int, int]]]:
    """Project 3D points, splitting the line wherever it passes behind the camera."""

    runs: list[list[tuple[int, int]]] = []
    current: list[tuple[int, int]] = []
    for point in points:
        screen = camera.world_to_screen(point)
        if screen is None:
            if len(current) >= 2:
                runs.append(current)
            current = []
            continue
        current.append((int(screen[0]), int(screen[1])))
    if len(current) >= 2:
        runs.append(current)
    return runs


def draw_orbit_line(
    surface: pygame.Surface,
    color: tuple[int, int, int] | tuple[int, int, int, int],
    points: Sequence[tuple[int, int]],
    width: int,
) -> None:
    if len(points) < 2:
        return
    if width <= 1:
        pygame.draw.aalines(surface, color, False, points)
    else:
        pygame.draw.lines(surface, color, False, points, width)
        pygame.draw.aalines(surface, color, False, points)


def draw_orbit_rings(
    surface: pygame.Surface,
    camera: Camera,
    bodies: Iterable[BodySnapshot],
    *,
    render_cfg: RenderCfg,
) -> None:
    for body in bodies:
        if body.parent_position is None:
            continue
        points = circle_points(body.parent_position, body.distance, render_cfg.orbit_ring_segments)
        for run in project_polyline(camera, points):
            draw_orbit_line(surface, render_cfg.orbit_ring_color, run, 1)


def draw_planet_ring(
    surface: pygame.Surface,
    camera: Camera,
    body: BodySnapshot,
    *,
    render_cfg: RenderCfg,
) -> None:
    if body.ring is None:
        return
    inner, outer = body.ring
    for offset in np.linspace(inner, outer, 4):
        points = circle_points(body.position, body.size + offset, 48)
        for run in project_polyline(camera, points):
            draw_orbit_line(surface, render_cfg.ring_color, run, 2)


def draw_body(
    surface: pygame.Surface,
    camera: Camera,
    body: BodySnapshot,
    *,
    assets: AssetLibrary,
    render_cfg: RenderCfg,
    selected: bool = False,
) -> None:
    screen = camera.world_to_screen(body.position)
    if screen is None:
        return
    radius = max(render_cfg.min_body_pixels, int(round(camera.projected_radius(body.position, body.size))))
    width, height = surface.get_size()
    if screen[0] + radius < 0 or screen[0] - radius > width:
        return
    if screen[1] + radius < 0 or screen[1] - radius > height:
        return
    color = parse_hex_color(body.color)
    sprite = assets.get_body_sprite(color, radius, glow=body.depth == 0)
    center = (int(screen[0]), int(screen[1]))
    surface.blit(sprite, sprite.get_rect(center=center))
    if body.depth > 0 and radius >= 4:
        # Surface marker that turns with the body's spin.
        mx = center[0] + int(math.cos(body.spin) * radius * 0.6)
        pygame.draw.circle(surface, (255, 255, 255), (mx, center[1]), max(1, radius // 6))
    if selected:
        pygame.draw.circle(surface, render_cfg.selection_color, center, radius + 4, 2)


def draw_scene(
    surface: pygame.Surface,
    camera: Camera,
    bodies: Sequence[BodySnapshot],
    *,
    assets: AssetLibrary,
    render_cfg: RenderCfg,
    selected: str | None,
) -> None:
    """Draw rings and bodies far to near so closer bodies cover farther ones."""

    draw_orbit_rings(surface, camera, bodies, render_cfg=render_cfg)
    _, _, forward = camera.basis()
    ordered = sorted(
        bodies,
        key=lambda body: float((body.position - camera.position) @ forward),
        reverse=True,
    )
    for body in ordered:
        draw_planet_ring(surface, camera, body, render_cfg=render_cfg)
        draw_body(
            surface,
            camera,
            body,
            assets=assets,
            render_cfg=render_cfg,
            selected=body.name == selected,
        )
