"""HUD for Scansector scenes.

Draws a status bar along the bottom edge, transient toasts near the top and
the controls overlay. It is defensive: drawing problems are logged and never
escape into the main loop.
"""
from __future__ import annotations

from typing import Dict, List, Optional, Tuple
import logging

import pygame

_logger = logging.getLogger("scansector.ui.hud")

MAX_TOASTS = 6

CONTROLS = [
    "Controls:",
    "Type            - Filter systems",
    "Up / Down       - Previous / next system",
    "Mouse wheel     - Zoom at cursor",
    "Drag            - Pan the plot",
    "Home / Ctrl+0   - Fit system",
    "Ctrl +/-        - Zoom in / out",
    "Click legend    - Hide / show object",
    "F2              - Dark / light theme",
    "F5              - Reload save",
    "F12             - Save screenshot",
    "Esc             - Back to save picker",
]


class HUD:
    def __init__(self, font_size: int = 20):
        self.font = pygame.font.Font(None, font_size)
        self.status = ""
        self.show_controls = False
        self._toasts: List[dict] = []

    def toast(self, text: str, duration: float = 2.0, ttype: str = "info") -> None:
        """Show a transient on-screen message.

        ttype: 'info'|'success'|'error' to influence color. Duration in seconds.
        """
        now = pygame.time.get_ticks()
        dur_ms = int(duration * 1000)
        self._toasts.append({"text": str(text), "start": now, "expire": now + dur_ms, "duration": dur_ms, "type": ttype})
        if len(self._toasts) > MAX_TOASTS:
            self._toasts = self._toasts[-MAX_TOASTS:]

    @property
    def toasts(self) -> List[str]:
        return [t["text"] for t in self._toasts]

    def _toast_color(self, ttype: str, palette: Dict[str, Tuple[int, int, int]]) -> Tuple[int, int, int]:
        if ttype == "success":
            return (140, 220, 140)
        if ttype == "error":
            return palette["error"]
        return palette["text"]

    def display(self, surface: pygame.Surface, palette: Dict[str, Tuple[int, int, int]], cursor: Optional[Tuple[float, float]] = None) -> None:
        try:
            self._draw_status(surface, palette, cursor)
            self._draw_toasts(surface, palette)
            if self.show_controls:
                self._draw_controls(surface, palette)
        except Exception:
            _logger.exception("Error drawing HUD")

    def _draw_status(self, surface, palette, cursor) -> None:
        sw, sh = surface.get_size()
        bar = pygame.Rect(0, sh - 24, sw, 24)
        pygame.draw.rect(surface, palette["panel"], bar)
        pygame.draw.line(surface, palette["panel_border"], bar.topleft, bar.topright)
        surface.blit(self.font.render(self.status, True, palette["muted"]), (8, bar.y + 5))
        right = "F1: controls"
        if cursor is not None:
            right = f"x {cursor[0]:.0f}   y {cursor[1]:.0f}    " + right
        lbl = self.font.render(right, True, palette["muted"])
        surface.blit(lbl, (sw - lbl.get_width() - 8, bar.y + 5))

    def _draw_toasts(self, surface, palette) -> None:
        if not self._toasts:
            return
        now = pygame.time.get_ticks()
        ty_base = 8
        kept = []
        for t in self._toasts:
            if t["expire"] <= now:
                continue
            prog = max(0.0, min(1.0, (now - t["start"]) / float(t["duration"] or 1)))
            alpha = int(255 * (1.0 - prog * prog))
            s = self.font.render(t["text"], True, self._toast_color(t["type"], palette))
            sw = s.get_width()
            sh = s.get_height()
            sx = surface.get_width() // 2 - sw // 2
            pill = pygame.Surface((sw + 20, sh + 8), pygame.SRCALPHA)
            pill.fill((0, 0, 0, 170))
            pill.set_alpha(max(40, alpha))
            surface.blit(pill, (sx - 10, ty_base - 4))
            s.set_alpha(alpha)
            surface.blit(s, (sx, ty_base))
            ty_base += sh + 10
            kept.append(t)
        self._toasts = kept

    def _draw_controls(self, surface, palette) -> None:
        box_w, box_h = 440, 28 + 24 * len(CONTROLS)
        sw, sh = surface.get_size()
        bx = sw // 2 - box_w // 2
        by = sh // 2 - box_h // 2
        overlay = pygame.Surface((box_w, box_h), pygame.SRCALPHA)
        overlay.fill((8, 8, 8, 225))
        surface.blit(overlay, (bx, by))
        for i, ln in enumerate(CONTROLS):
            surface.blit(self.font.render(ln, True, (235, 235, 235)), (bx + 20, by + 14 + i * 24))
