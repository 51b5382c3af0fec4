"""Configuration dataclasses for the orrery."""
from __future__ import annotations

import math
from dataclasses import dataclass, field

import numpy as np


@dataclass(frozen=True)
class SimulationCfg:
    # One simulated time unit is one frame of a 60 Hz display.
    time_units_per_second: float = 60.0
    default_speed: float = 1.0
    min_speed: float = 0.1
    max_speed: float = 5.0
    speed_step: float = 0.1
    spin_rates: tuple[float, ...] = (0.005, 0.01, 0.02)
    record_every_ticks: int = 10

    def spin_rate_for_depth(self, depth: int) -> float:
        if depth < len(self.spin_rates):
            return self.spin_rates[depth]
        return self.spin_rates[-1]


@dataclass(frozen=True)
class CameraCfg:
    initial_position: np.ndarray = field(
        default_factory=lambda: np.array([0.0, 30.0, 60.0], dtype=float)
    )
    initial_target: np.ndarray = field(
        default_factory=lambda: np.zeros(3, dtype=float)
    )
    fov_degrees: float = 75.0
    near: float = 0.1
    far: float = 1000.0
    drag_sensitivity: float = 0.01
    zoom_factor: float = 1.1
    focus_margin: float = 10.0
    focus_height: float = 10.0
    min_distance: float = 2.0
    max_distance: float = 400.0

    @property
    def tan_half_fov(self) -> float:
        return math.tan(math.radians(self.fov_degrees) / 2.0)


@dataclass(frozen=True)
class RenderCfg:
    width: int = 1280
    height: int = 800
    fps: int = 60
    background_color: tuple[int, int, int] = (0, 0, 17)
    orbit_ring_color: tuple[int, int, int, int] = (68, 68, 68, 110)
    orbit_ring_segments: int = 96
    ring_color: tuple[int, int, int, int] = (196, 164, 132, 180)
    selection_color: tuple[int, int, int] = (250, 204, 21)
    min_body_pixels: int = 2
    star_count: int = 400
    star_seed: int = 42
    starfield_parallax: float = 0.35
    panel_background_color: tuple[int, int, int, int] = (17, 24, 39, int(255 * 0.8))
    panel_title_color: tuple[int, int, int] = (250, 204, 21)
    panel_text_color: tuple[int, int, int] = (234, 241, 255)
    panel_muted_color: tuple[int, int, int] = (156, 163, 175)
    button_color: tuple[int, int, int, int] = (37, 99, 235, 220)
    button_hover_color: tuple[int, int, int, int] = (29, 78, 216, 235)
    reset_button_color: tuple[int, int, int, int] = (22, 163, 74, 220)
    reset_button_hover_color: tuple[int, int, int, int] = (21, 128, 61, 235)
    button_text_color: tuple[int, int, int] = (255, 255, 255)
    button_radius: int = 8
    flash_duration: float = 2.0


SIMULATION_CFG = SimulationCfg()
CAMERA_CFG = CameraCfg()
RENDER_CFG = RenderCfg()


__all__ = [
    "CAMERA_CFG",
    "RENDER_CFG",
    "SIMULATION_CFG",
    "CameraCfg",
    "RenderCfg",
    "SimulationCfg",
]
