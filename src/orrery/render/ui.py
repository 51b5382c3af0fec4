from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Callable, Sequence

import pygame

from orrery.core.config import RENDER_CFG, RenderCfg
from orrery.core.simulation import SceneSnapshot, Simulation
from orrery.core.timekeeping import InvalidSpeedError

from .assets import Color, get_text_surface


@dataclass(frozen=True)
class ButtonVisualStyle:
    base_color: Color
    hover_color: Color
    text_color: tuple[int, int, int]
    radius: int
    border_color: Color | None = None
    border_width: int = 0


class Button:
    """Simple rectangular button with hover feedback and callbacks."""

    def __init__(
        self,
        rect: tuple[int, int, int, int],
        text: str,
        callback: Callable[[], None],
        text_getter: Callable[[], str] | None = None,
        *,
        style: ButtonVisualStyle,
    ) -> None:
        self.rect = pygame.Rect(rect)
        self._text = text
        self._callback = callback
        self._text_getter = text_getter
        self._style = style

    def get_text(self) -> str:
        if self._text_getter is not None:
            return self._text_getter()
        return self._text

    def draw(
        self,
        surface: pygame.Surface,
        font: pygame.font.Font,
        mouse_pos: tuple[int, int] | None = None,
    ) -> None:
        if mouse_pos is None:
            mouse_pos = pygame.mouse.get_pos()
        style = self._style
        hovered = self.rect.collidepoint(mouse_pos)
        color = style.hover_color if hovered else style.base_color
        button_surface = pygame.Surface(self.rect.size, pygame.SRCALPHA)
        pygame.draw.rect(
            button_surface,
            color,
            button_surface.get_rect(),
            border_radius=style.radius,
        )
        if style.border_color is not None and style.border_width > 0:
            pygame.draw.rect(
                button_surface,
                style.border_color,
                button_surface.get_rect(),
                style.border_width,
                border_radius=style.radius,
            )
        surface.blit(button_surface, self.rect.topleft)
        text_surf = get_text_surface(font, self.get_text(), style.text_color)
        surface.blit(text_surf, text_surf.get_rect(center=self.rect.center))

    def handle_click(self, pos: tuple[int, int]) -> bool:
        if self.rect.collidepoint(pos):
            self._callback()
            return True
        return False


def build_text_panel(
    font: pygame.font.Font,
    lines: Sequence[tuple[str, tuple[int, int, int]]],
    *,
    background_color: Color,
    padding: tuple[int, int] = (14, 14),
    min_width: int = 0,
) -> pygame.Surface:
    if not lines:
        raise ValueError("lines must not be empty")
    padding_x, padding_y = padding
    line_height = font.get_linesize()
    width = max(min_width, max(font.size(text)[0] for text, _ in lines) + padding_x * 2)
    height = line_height * len(lines) + padding_y * 2
    panel_surface = pygame.Surface((width, height), pygame.SRCALPHA)
    pygame.draw.rect(
        panel_surface,
        background_color,
        panel_surface.get_rect(),
        border_radius=12,
    )
    for idx, (text, color) in enumerate(lines):
        if not text:
            continue
        text_surf = get_text_surface(font, text, color)
        panel_surface.blit(text_surf, (padding_x, padding_y + idx * line_height))
    return panel_surface


class ControlPanel:
    """Play/pause, speed and focus controls plus the selected body's info card.

    Every action goes through the :class:`Simulation` context; the panel
    only reads body attributes for display.
    """

    MARGIN = 16
    WIDTH = 264

    def __init__(
        self,
        simulation: Simulation,
        font: pygame.font.Font,
        title_font: pygame.font.Font,
        *,
        render_cfg: RenderCfg = RENDER_CFG,
    ) -> None:
        self.simulation = simulation
        self.font = font
        self.title_font = title_font
        self.render_cfg = render_cfg
        self.focus_names = [body.name for body in simulation.scene.root.moons]
        self._flash_text: str | None = None
        self._flash_until = 0.0

        primary = ButtonVisualStyle(
            base_color=render_cfg.button_color,
            hover_color=render_cfg.button_hover_color,
            text_color=render_cfg.button_text_color,
            radius=render_cfg.button_radius,
        )
        secondary = ButtonVisualStyle(
            base_color=render_cfg.reset_button_color,
            hover_color=render_cfg.reset_button_hover_color,
            text_color=render_cfg.button_text_color,
            radius=render_cfg.button_radius,
        )
        x = self.MARGIN * 2
        y = self.MARGIN + 56
        self.buttons = [
            Button((x, y, 110, 34), "", self.toggle_playing, self._play_label, style=primary),
            Button((x + 122, y, 110, 34), "Reset View", self.reset, style=secondary),
            Button((x, y + 78, 50, 30), "-", self.slower, style=primary),
            Button((x + 182, y + 78, 50, 30), "+", self.faster, style=primary),
            Button((x, y + 150, 50, 30), "<", self.focus_previous, style=primary),
            Button((x + 182, y + 150, 50, 30), ">", self.focus_next, style=primary),
        ]
        self.rect = pygame.Rect(self.MARGIN, self.MARGIN, self.WIDTH, 250)

    def _play_label(self) -> str:
        return "Pause" if self.simulation.clock.playing else "Play"

    def contains(self, pos: tuple[int, int]) -> bool:
        return self.rect.collidepoint(pos)

    def handle_click(self, pos: tuple[int, int]) -> bool:
        return any(button.handle_click(pos) for button in self.buttons)

    def toggle_playing(self) -> None:
        self.simulation.toggle_playing()

    def reset(self) -> None:
        self.simulation.reset()

    def set_speed(self, value: float) -> None:
        try:
            self.simulation.set_speed(value)
        except InvalidSpeedError as exc:
            self.flash(str(exc))

    def slower(self) -> None:
        self._step_speed(-self.simulation.cfg.speed_step)

    def faster(self) -> None:
        self._step_speed(self.simulation.cfg.speed_step)

    def _step_speed(self, delta: float) -> None:
        cfg = self.simulation.cfg
        value = round(self.simulation.clock.speed + delta, 1)
        self.set_speed(max(cfg.min_speed, min(cfg.max_speed, value)))

    def focus_next(self) -> None:
        self._cycle_focus(1)

    def focus_previous(self) -> None:
        self._cycle_focus(-1)

    def _cycle_focus(self, step: int) -> None:
        if not self.focus_names:
            return
        current = self.simulation.selected
        if current in self.focus_names:
            index = (self.focus_names.index(current) + step) % len(self.focus_names)
        else:
            index = 0 if step > 0 else len(self.focus_names) - 1
        self.simulation.focus_on(self.focus_names[index])

    def flash(self, text: str) -> None:
        self._flash_text = text
        self._flash_until = time.perf_counter() + self.render_cfg.flash_duration

    def draw(self, surface: pygame.Surface, snapshot: SceneSnapshot) -> None:
        cfg = self.render_cfg
        panel = pygame.Surface(self.rect.size, pygame.SRCALPHA)
        pygame.draw.rect(panel, cfg.panel_background_color, panel.get_rect(), border_radius=12)
        surface.blit(panel, self.rect.topleft)

        title = get_text_surface(self.title_font, "Solar System Controls", cfg.panel_title_color)
        surface.blit(title, (self.rect.x + self.MARGIN, self.rect.y + 14))

        x = self.rect.x + self.MARGIN
        speed_text = get_text_surface(self.font, "Speed:", cfg.panel_text_color)
        surface.blit(speed_text, (x, self.rect.y + 104))
        speed_value = get_text_surface(self.font, f"{snapshot.speed:.1f}x", cfg.panel_text_color)
        surface.blit(speed_value, speed_value.get_rect(center=(self.rect.centerx, self.buttons[2].rect.centery)))

        focus_label = get_text_surface(self.font, "Focus on Planet:", cfg.panel_text_color)
        surface.blit(focus_label, (x, self.rect.y + 176))
        focus_name = snapshot.selected or "Select Planet"
        focus_text = get_text_surface(self.font, focus_name, cfg.panel_muted_color)
        surface.blit(focus_text, focus_text.get_rect(center=(self.rect.centerx, self.buttons[4].rect.centery)))

        mouse_pos = pygame.mouse.get_pos()
        for button in self.buttons:
            button.draw(surface, self.font, mouse_pos)

        self._draw_info(surface)
        self._draw_flash(surface)

    def _draw_info(self, surface: pygame.Surface) -> None:
        body = self.simulation.selected_body()
        if body is None:
            return
        cfg = self.render_cfg
        lines = [(body.name, cfg.panel_title_color)]
        lines.extend((f"{label}: {value}", cfg.panel_text_color) for label, value in body.summary())
        card = build_text_panel(self.font, lines, background_color=cfg.panel_background_color, min_width=200)
        surface.blit(card, (surface.get_width() - card.get_width() - self.MARGIN, self.MARGIN))

    def _draw_flash(self, surface: pygame.Surface) -> None:
        if self._flash_text is None:
            return
        if time.perf_counter() > self._flash_until:
            self._flash_text = None
            return
        card = build_text_panel(
            self.font,
            [(self._flash_text, self.render_cfg.panel_text_color)],
            background_color=self.render_cfg.panel_background_color,
        )
        rect = card.get_rect(midbottom=(surface.get_width() // 2, surface.get_height() - self.MARGIN))
        surface.blit(card, rect)
