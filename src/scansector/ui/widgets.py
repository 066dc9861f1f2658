"""Small immediate-mode-ish widgets shared by the scenes.

Widgets keep the rect they were last drawn at so clicks can be mapped back.
"""
from __future__ import annotations

from typing import Dict, List, Optional, Sequence, Tuple
import logging

import pygame

_logger = logging.getLogger("scansector.ui.widgets")

Palette = Dict[str, Tuple[int, int, int]]


def draw_button(surface: pygame.Surface, rect: pygame.Rect, label: str, font: pygame.font.Font, palette: Palette, enabled: bool = True) -> None:
    hovering = enabled and rect.collidepoint(pygame.mouse.get_pos())
    color = palette["button_hover"] if hovering else palette["button"]
    pygame.draw.rect(surface, color, rect, border_radius=6)
    text_color = palette["text"] if enabled else palette["muted"]
    lbl = font.render(label, True, text_color)
    lw, lh = lbl.get_size()
    surface.blit(lbl, (rect.x + (rect.w - lw) // 2, rect.y + (rect.h - lh) // 2))


def draw_panel(surface: pygame.Surface, rect: pygame.Rect, palette: Palette) -> None:
    pygame.draw.rect(surface, palette["panel"], rect, border_radius=6)
    pygame.draw.rect(surface, palette["panel_border"], rect, 1, border_radius=6)


def fit_text(font: pygame.font.Font, text: str, max_width: int) -> str:
    """Trim `text` from the left with an ellipsis until it fits `max_width` pixels."""
    if font.size(text)[0] <= max_width:
        return text
    trimmed = text
    while trimmed and font.size("..." + trimmed)[0] > max_width:
        trimmed = trimmed[1:]
    return "..." + trimmed


class TextInput:
    """Single-line text box fed by pygame TEXTINPUT events."""

    def __init__(self, placeholder: str = "", text: str = ""):
        self.placeholder = placeholder
        self.text = text
        self.active = True
        self.rect: Optional[pygame.Rect] = None

    def handle_event(self, event) -> bool:
        """Return True when the text changed."""
        etype = getattr(event, "type", None)
        if etype == pygame.MOUSEBUTTONDOWN and getattr(event, "button", None) == 1 and self.rect is not None:
            self.active = self.rect.collidepoint(event.pos)
            return False
        if not self.active:
            return False
        if etype == pygame.TEXTINPUT:
            self.text += event.text
            return True
        if etype == pygame.KEYDOWN and event.key == pygame.K_BACKSPACE and self.text:
            if getattr(event, "mod", 0) & pygame.KMOD_CTRL:
                self.text = ""
            else:
                self.text = self.text[:-1]
            return True
        return False

    def draw(self, surface: pygame.Surface, rect: pygame.Rect, font: pygame.font.Font, palette: Palette) -> None:
        self.rect = rect
        pygame.draw.rect(surface, palette["background"], rect, border_radius=4)
        border = palette["accent"] if self.active else palette["panel_border"]
        pygame.draw.rect(surface, border, rect, 1, border_radius=4)
        if self.text:
            shown = fit_text(font, self.text, rect.w - 14)
            lbl = font.render(shown, True, palette["text"])
        else:
            lbl = font.render(self.placeholder, True, palette["muted"])
        surface.blit(lbl, (rect.x + 6, rect.y + (rect.h - lbl.get_height()) // 2))
        if self.active and (pygame.time.get_ticks() // 500) % 2 == 0:
            cx = rect.x + 6 + (lbl.get_width() if self.text else 0) + 1
            pygame.draw.line(surface, palette["text"], (cx, rect.y + 5), (cx, rect.bottom - 6))


class ListView:
    """Scrollable list of (key, label) rows with one selected key."""

    def __init__(self, row_height: int = 24):
        self.row_height = row_height
        self.items: List[Tuple[object, str]] = []
        self.selected: Optional[object] = None
        self.offset = 0
        self.rect: Optional[pygame.Rect] = None

    def set_items(self, items: Sequence[Tuple[object, str]]) -> None:
        self.items = list(items)
        self.offset = max(0, min(self.offset, self._max_offset()))

    def _visible_rows(self) -> int:
        if self.rect is None:
            return len(self.items)
        return max(1, self.rect.h // self.row_height)

    def _max_offset(self) -> int:
        return max(0, len(self.items) - self._visible_rows())

    def scroll(self, rows: int) -> None:
        self.offset = max(0, min(self._max_offset(), self.offset + rows))

    def ensure_visible(self, key: object) -> None:
        for i, (k, _) in enumerate(self.items):
            if k == key:
                if i < self.offset:
                    self.offset = i
                elif i >= self.offset + self._visible_rows():
                    self.offset = i - self._visible_rows() + 1
                return

    def handle_event(self, event) -> Optional[object]:
        """Return the key of a clicked row, if any."""
        if self.rect is None:
            return None
        etype = getattr(event, "type", None)
        if etype == pygame.MOUSEWHEEL:
            if self.rect.collidepoint(pygame.mouse.get_pos()):
                self.scroll(-event.y * 3)
            return None
        if etype == pygame.MOUSEBUTTONDOWN and event.button == 1 and self.rect.collidepoint(event.pos):
            row = (event.pos[1] - self.rect.y) // self.row_height + self.offset
            if 0 <= row < len(self.items):
                return self.items[row][0]
        return None

    def draw(self, surface: pygame.Surface, rect: pygame.Rect, font: pygame.font.Font, palette: Palette) -> None:
        self.rect = rect
        self.offset = max(0, min(self.offset, self._max_offset()))
        draw_panel(surface, rect, palette)
        prev_clip = surface.get_clip()
        surface.set_clip(rect)
        try:
            mouse = pygame.mouse.get_pos()
            for row in range(self._visible_rows()):
                idx = self.offset + row
                if idx >= len(self.items):
                    break
                key, label = self.items[idx]
                r = pygame.Rect(rect.x + 2, rect.y + row * self.row_height, rect.w - 4, self.row_height)
                if key == self.selected:
                    pygame.draw.rect(surface, palette["accent"], r, border_radius=3)
                elif r.collidepoint(mouse):
                    pygame.draw.rect(surface, palette["button_hover"], r, border_radius=3)
                lbl = font.render(fit_text(font, label, r.w - 12), True, palette["text"])
                surface.blit(lbl, (r.x + 6, r.y + (r.h - lbl.get_height()) // 2))
        finally:
            surface.set_clip(prev_clip)
        if len(self.items) > self._visible_rows():
            # scrollbar
            total = len(self.items)
            bar_h = max(16, rect.h * self._visible_rows() // total)
            bar_y = rect.y + (rect.h - bar_h) * self.offset // max(1, self._max_offset())
            pygame.draw.rect(surface, palette["muted"], pygame.Rect(rect.right - 5, bar_y, 3, bar_h), border_radius=2)
