"""Legend listing every object of the current system.

Clicking a row hides or shows that object on the plot.
"""
from __future__ import annotations

from typing import Optional, Set
import logging

import pygame

from scansector.entities import StarSystem
from scansector.plot.markers import draw_marker, marker_color
from scansector.ui.widgets import Palette, draw_panel, fit_text

_logger = logging.getLogger("scansector.ui.legend")


class Legend:
    def __init__(self, row_height: int = 22):
        self.row_height = row_height
        self.hidden: Set[int] = set()
        self.offset = 0
        self.rect: Optional[pygame.Rect] = None
        self._count = 0

    def reset(self) -> None:
        self.hidden = set()
        self.offset = 0

    def toggle(self, index: int) -> None:
        if index in self.hidden:
            self.hidden.discard(index)
        else:
            self.hidden.add(index)

    def _rows(self) -> int:
        if self.rect is None:
            return self._count
        return max(1, (self.rect.h - 8) // self.row_height)

    def handle_event(self, event) -> bool:
        """Return True if the event was consumed by the legend."""
        if self.rect is None:
            return False
        etype = getattr(event, "type", None)
        if etype == pygame.MOUSEWHEEL and self.rect.collidepoint(pygame.mouse.get_pos()):
            self.offset = max(0, min(max(0, self._count - self._rows()), self.offset - event.y * 2))
            return True
        if etype == pygame.MOUSEBUTTONDOWN and event.button == 1 and self.rect.collidepoint(event.pos):
            row = (event.pos[1] - self.rect.y - 4) // self.row_height + self.offset
            if 0 <= row < self._count:
                self.toggle(row)
            return True
        return False

    def draw(self, surface: pygame.Surface, rect: pygame.Rect, system: StarSystem, font: pygame.font.Font, palette: Palette) -> None:
        self.rect = rect
        self._count = len(system.objects)
        draw_panel(surface, rect, palette)
        prev_clip = surface.get_clip()
        surface.set_clip(rect)
        try:
            for row in range(self._rows()):
                idx = self.offset + row
                if idx >= self._count:
                    break
                obj = system.objects[idx]
                y = rect.y + 4 + row * self.row_height
                hidden = idx in self.hidden
                color = palette["muted"] if hidden else marker_color(obj, palette)
                draw_marker(surface, obj.marker, (rect.x + 14, y + self.row_height // 2), 6, color)
                text_color = palette["muted"] if hidden else palette["text"]
                lbl = font.render(fit_text(font, obj.name, rect.w - 36), True, text_color)
                surface.blit(lbl, (rect.x + 28, y + (self.row_height - lbl.get_height()) // 2))
        finally:
            surface.set_clip(prev_clip)
