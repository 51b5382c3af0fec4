"""pygame window acting as rendering surface and input source."""
from __future__ import annotations

import random

import pygame

from orrery.core.camera import Camera, CameraState
from orrery.core.config import CAMERA_CFG, RENDER_CFG, CameraCfg, RenderCfg
from orrery.core.events import Click, PointerDown, PointerLeave, PointerMove, PointerUp, Resize, Wheel
from orrery.core.scheduler import RenderLoop
from orrery.core.simulation import SceneSnapshot

from .assets import AssetLibrary, load_font
from .draw import draw_scene, draw_starfield, generate_starfield
from .ui import ControlPanel

# Pointer travel (pixels) below which a press/release pair counts as a click.
CLICK_SLOP = 4


class PygameSurface:
    """Implements ``present``/``size`` and translates pygame events for a :class:`RenderLoop`."""

    def __init__(
        self,
        size: tuple[int, int],
        *,
        render_cfg: RenderCfg = RENDER_CFG,
        camera_cfg: CameraCfg = CAMERA_CFG,
    ) -> None:
        self.render_cfg = render_cfg
        self.camera_cfg = camera_cfg
        self.screen = pygame.display.set_mode(size, pygame.RESIZABLE | pygame.DOUBLEBUF)
        pygame.display.set_caption("Orrery")
        self.font = load_font(["segoeui", "helvetica", "arial"], 16)
        self.title_font = load_font(["segoeui", "helvetica", "arial"], 20, bold=True)
        self.assets = AssetLibrary()
        self.starfield = generate_starfield(
            render_cfg.star_count,
            size=self.screen.get_size(),
            rng=random.Random(render_cfg.star_seed),
        )
        self.panel: ControlPanel | None = None
        self._press_pos: tuple[int, int] | None = None
        self._panel_press = False

    def attach_panel(self, panel: ControlPanel) -> None:
        self.panel = panel

    def size(self) -> tuple[int, int]:
        return self.screen.get_size()

    def present(self, snapshot: SceneSnapshot, camera: CameraState) -> None:
        view = Camera.from_state(camera, cfg=self.camera_cfg)
        self.screen.fill(self.render_cfg.background_color)
        draw_starfield(self.screen, self.starfield, view, snapshot.elapsed, render_cfg=self.render_cfg)
        draw_scene(
            self.screen,
            view,
            snapshot.bodies,
            assets=self.assets,
            render_cfg=self.render_cfg,
            selected=snapshot.selected,
        )
        if self.panel is not None:
            self.panel.draw(self.screen, snapshot)
        pygame.display.flip()

    def pump_events(self, loop: RenderLoop) -> None:
        """Drain pygame's queue into *loop*; quitting stops the loop.

        Events after a quit or escape in the same batch are dropped.
        """

        for event in pygame.event.get():
            if not loop.running:
                return
            if event.type == pygame.QUIT:
                loop.stop()
            elif event.type == pygame.KEYDOWN:
                self._handle_key(event, loop)
            elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
                if self.panel is not None and self.panel.contains(event.pos):
                    self._panel_press = True
                    self.panel.handle_click(event.pos)
                    continue
                self._press_pos = event.pos
                loop.enqueue(PointerDown(*event.pos))
            elif event.type == pygame.MOUSEBUTTONUP and event.button == 1:
                if self._panel_press:
                    self._panel_press = False
                    continue
                loop.enqueue(PointerUp(*event.pos))
                if self._press_pos is not None:
                    dx = event.pos[0] - self._press_pos[0]
                    dy = event.pos[1] - self._press_pos[1]
                    if dx * dx + dy * dy <= CLICK_SLOP * CLICK_SLOP:
                        loop.enqueue(Click(*event.pos))
                self._press_pos = None
            elif event.type == pygame.MOUSEMOTION:
                loop.enqueue(PointerMove(*event.pos))
            elif event.type == pygame.MOUSEWHEEL:
                # pygame reports scrolling up as positive; up zooms in.
                loop.enqueue(Wheel(delta_y=-event.y))
            elif event.type == pygame.WINDOWLEAVE:
                self._press_pos = None
                loop.enqueue(PointerLeave())
            elif event.type == pygame.VIDEORESIZE:
                loop.enqueue(Resize(event.w, event.h))

    def _handle_key(self, event: pygame.event.Event, loop: RenderLoop) -> None:
        if event.key == pygame.K_ESCAPE:
            loop.stop()
            return
        panel = self.panel
        if panel is None:
            return
        if event.key == pygame.K_SPACE:
            panel.toggle_playing()
        elif event.key == pygame.K_r:
            panel.reset()
        elif event.key == pygame.K_RIGHT:
            panel.faster()
        elif event.key == pygame.K_LEFT:
            panel.slower()
        elif event.key == pygame.K_TAB:
            if event.mod & pygame.KMOD_SHIFT:
                panel.focus_previous()
            else:
                panel.focus_next()

    def close(self) -> None:
        pygame.display.quit()
