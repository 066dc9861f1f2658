"""Draw a star system onto a pygame Surface: grid, axes, markers and labels.

Used both by the interactive SystemScene and by the headless PNG export.
"""
from __future__ import annotations

from typing import Dict, Optional, Set, Tuple
import logging

import pygame

from scansector.config import MARKER_RADIUS
from scansector.entities import StarSystem
from scansector.plot.markers import draw_marker, marker_color
from scansector.plot.viewport import Viewport, format_tick, grid_lines, nice_step

_logger = logging.getLogger("scansector.plot")


class PlotRenderer:
    def __init__(self, font_size: int = 18, label_size: int = 20):
        self.font = pygame.font.Font(None, font_size)
        self.label_font = pygame.font.Font(None, label_size)
        self.marker_radius = MARKER_RADIUS

    def draw(
        self,
        surface: pygame.Surface,
        system: StarSystem,
        viewport: Viewport,
        palette: Dict[str, Tuple[int, int, int]],
        hidden: Optional[Set[int]] = None,
        highlight: Optional[int] = None,
    ) -> None:
        hidden = hidden or set()
        area = pygame.Rect(viewport.rect)
        prev_clip = surface.get_clip()
        surface.set_clip(area)
        try:
            pygame.draw.rect(surface, palette["background"], area)
            self._draw_grid(surface, viewport, palette)
            for i, obj in enumerate(system.objects):
                if i in hidden:
                    continue
                sx, sy = viewport.world_to_screen(obj.pos.x, obj.pos.y)
                if not area.inflate(200, 40).collidepoint(int(sx), int(sy)):
                    continue
                color = marker_color(obj, palette)
                radius = self.marker_radius + (3 if i == highlight else 0)
                draw_marker(surface, obj.marker, (sx, sy), radius, color)
                label = self.label_font.render(obj.name, True, palette["text"])
                surface.blit(label, (int(sx) - label.get_width() // 2, int(sy) + radius + 2))
        finally:
            surface.set_clip(prev_clip)
        pygame.draw.rect(surface, palette["panel_border"], area, 1)

    def _draw_grid(self, surface: pygame.Surface, viewport: Viewport, palette) -> None:
        x0, y0, x1, y1 = viewport.visible_world()
        rx, ry, rw, rh = viewport.rect
        # same world step on both axes; pick it from the wider span
        step = nice_step(max(x1 - x0, y1 - y0), 10)
        for gx in grid_lines(x0, x1, step):
            sx, _ = viewport.world_to_screen(gx, 0)
            color = palette["axis"] if gx == 0 else palette["grid"]
            pygame.draw.line(surface, color, (sx, ry), (sx, ry + rh))
            tick = self.font.render(format_tick(gx), True, palette["muted"])
            surface.blit(tick, (int(sx) + 3, int(ry + rh) - tick.get_height() - 2))
        for gy in grid_lines(y0, y1, step):
            _, sy = viewport.world_to_screen(0, gy)
            color = palette["axis"] if gy == 0 else palette["grid"]
            pygame.draw.line(surface, color, (rx, sy), (rx + rw, sy))
            tick = self.font.render(format_tick(gy), True, palette["muted"])
            surface.blit(tick, (int(rx) + 3, int(sy) - tick.get_height() - 1))
