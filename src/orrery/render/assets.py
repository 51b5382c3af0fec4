from __future__ import annotations

from collections import OrderedDict
from typing import Iterable

import pygame


Color = tuple[int, int, int] | tuple[int, int, int, int]


def parse_hex_color(value: str, default: tuple[int, int, int] = (192, 192, 192)) -> tuple[int, int, int]:
    """Turn ``"#RRGGBB"`` into an RGB tuple, falling back to *default*."""

    text = value.lstrip("#")
    if len(text) != 6:
        return default
    try:
        return (int(text[0:2], 16), int(text[2:4], 16), int(text[4:6], 16))
    except ValueError:
        return default


def shade(color: tuple[int, int, int], factor: float) -> tuple[int, int, int]:
    return tuple(max(0, min(255, int(channel * factor))) for channel in color)  # type: ignore[return-value]


class AssetLibrary:
    """Cache of pre-rendered body sprites keyed by colour and pixel radius."""

    def __init__(self, max_entries: int = 512) -> None:
        self._sprites: OrderedDict[tuple[tuple[int, int, int], int, bool], pygame.Surface] = OrderedDict()
        self._max_entries = max_entries

    def get_body_sprite(self, color: tuple[int, int, int], radius: int, *, glow: bool = False) -> pygame.Surface:
        if radius <= 0:
            raise ValueError("Body sprite radius must be positive")
        key = (color, radius, glow)
        cached = self._sprites.get(key)
        if cached is not None:
            self._sprites.move_to_end(key)
            return cached
        sprite = self._build_sprite(color, radius, glow)
        self._sprites[key] = sprite
        if len(self._sprites) > self._max_entries:
            self._sprites.popitem(last=False)
        return sprite

    @staticmethod
    def _build_sprite(color: tuple[int, int, int], radius: int, glow: bool) -> pygame.Surface:
        pad = radius if glow else 0
        size = (radius + pad) * 2
        sprite = pygame.Surface((size, size), pygame.SRCALPHA)
        center = (radius + pad, radius + pad)
        if glow:
            pygame.draw.circle(sprite, (*color, 50), center, radius + pad)
            pygame.draw.circle(sprite, (*color, 90), center, radius + pad // 2)
        pygame.draw.circle(sprite, shade(color, 0.55), center, radius)
        # Lit hemisphere offset towards the upper left.
        highlight_radius = max(1, int(radius * 0.8))
        offset = radius - highlight_radius
        pygame.draw.circle(
            sprite,
            color,
            (center[0] - offset // 2, center[1] - offset // 2),
            highlight_radius,
        )
        return sprite


_TEXT_SURFACE_CACHE_MAX_SIZE = 256
_TEXT_SURFACE_CACHE: OrderedDict[tuple[int, str, Color], pygame.Surface] = OrderedDict()


def get_text_surface(font: pygame.font.Font, text: str, color: Color) -> pygame.Surface:
    """Return a cached rendered surface for the given font, text and color."""

    key = (id(font), text, color)
    cached = _TEXT_SURFACE_CACHE.get(key)
    if cached is not None:
        _TEXT_SURFACE_CACHE.move_to_end(key)
        return cached
    rendered = font.render(text, True, color)
    _TEXT_SURFACE_CACHE[key] = rendered
    if len(_TEXT_SURFACE_CACHE) > _TEXT_SURFACE_CACHE_MAX_SIZE:
        _TEXT_SURFACE_CACHE.popitem(last=False)
    return rendered


def load_font(preferred_names: Iterable[str], size: int, *, bold: bool = False) -> pygame.font.Font:
    names = list(preferred_names)
    for name in names:
        match = pygame.font.match_font(name, bold=bold)
        if match:
            return pygame.font.Font(match, size)
    fallback = names[0] if names else None
    return pygame.font.SysFont(fallback, size, bold=bold)
