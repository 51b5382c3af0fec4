"""
Orrery - Interactive Orbital Diagram
====================================

Animated Sun, planets and moons on circular orbits. Drag to orbit the
camera, scroll to zoom, click a body to inspect it.

Controls: space play/pause, r reset view, left/right slower/faster,
tab / shift-tab cycle focus, escape quit.
"""
from __future__ import annotations

import argparse
import logging
from pathlib import Path

import numpy as np
import pygame

from orrery.core.config import RENDER_CFG
from orrery.core.logging_utils import SessionRecorder
from orrery.core.registry import load_system
from orrery.core.scheduler import RenderLoop
from orrery.core.simulation import Simulation
from orrery.core.timekeeping import FrameTimer
from orrery.data.systems import DEFAULT_SYSTEM_KEY, SYSTEMS
from orrery.render import ControlPanel, PygameSurface

logger = logging.getLogger("orrery")

# Longest frame delta fed to the integrator, so a stalled window does not jump.
MAX_FRAME_SECONDS = 0.25


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Interactive animated orbital diagram.")
    parser.add_argument("--width", type=int, default=RENDER_CFG.width)
    parser.add_argument("--height", type=int, default=RENDER_CFG.height)
    parser.add_argument("--fps", type=int, default=RENDER_CFG.fps)
    parser.add_argument("--seed", type=int, default=None, help="Seed for the initial orbital phases")
    parser.add_argument(
        "--system",
        default=DEFAULT_SYSTEM_KEY,
        help=f"Built-in system ({', '.join(SYSTEMS)}) or path to a JSON system definition",
    )
    parser.add_argument("--record", action="store_true", help="Record body samples and events")
    parser.add_argument("--sessions-dir", type=Path, default=Path("data") / "sessions")
    parser.add_argument("--log-level", default="INFO")
    return parser


def main(argv: list[str] | None = None) -> None:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level.upper(), logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    system = SYSTEMS.get(args.system)
    if system is None:
        system = load_system(args.system)

    recorder = SessionRecorder(args.sessions_dir) if args.record else None
    simulation = Simulation.from_system(
        system,
        viewport=(args.width, args.height),
        rng=np.random.default_rng(args.seed),
        recorder=recorder,
    )
    for name, reason in simulation.scene.rejected:
        logger.warning("Body %s left out: %s", name, reason)
    if recorder is not None:
        recorder.write_meta(
            {
                "system": system.name,
                "seed": args.seed,
                "bodies": {
                    body.name: {
                        "parent": body.parent,
                        "size": body.size,
                        "distance": body.distance,
                        "speed": body.speed,
                        "color": body.color,
                    }
                    for body in simulation.scene.order
                },
                "time_units_per_second": simulation.cfg.time_units_per_second,
            }
        )
        logger.info("Recording session to %s", recorder.session_dir)

    pygame.init()
    surface = PygameSurface((args.width, args.height))
    panel = ControlPanel(simulation, surface.font, surface.title_font)
    surface.attach_panel(panel)

    loop = RenderLoop(simulation, surface)
    loop.on_teardown(surface.close)
    if recorder is not None:
        loop.on_teardown(recorder.close)

    clock = pygame.time.Clock()
    timer = FrameTimer()
    try:
        while loop.running:
            surface.pump_events(loop)
            if not loop.running:
                break
            loop.tick(min(timer.tick(), MAX_FRAME_SECONDS))
            clock.tick(args.fps)
    finally:
        loop.stop()
        pygame.quit()


if __name__ == "__main__":
    main()
