"""Image export: headless PNG rendering of a system and window screenshots."""
from __future__ import annotations

from datetime import datetime
from pathlib import Path
from typing import Tuple, Union
import logging

import pygame

from scansector.config import BOUNDS_MARGIN, DEFAULT_EXPORT_SIZE, DEFAULT_THEME, THEMES
from scansector.entities import StarSystem
from scansector.plot.renderer import PlotRenderer
from scansector.plot.viewport import Viewport
from scansector.ui.legend import Legend

_logger = logging.getLogger("scansector.export")

LEGEND_W = 260


def render_system_image(system: StarSystem, size: Tuple[int, int] = DEFAULT_EXPORT_SIZE, theme: str = DEFAULT_THEME) -> pygame.Surface:
    """Draw `system` onto a new Surface. Needs only the font module, no window."""
    if not pygame.font.get_init():
        pygame.font.init()
    palette = THEMES[theme]
    w, h = size
    surface = pygame.Surface((w, h))
    surface.fill(palette["background"])

    heading_font = pygame.font.Font(None, 40)
    heading = heading_font.render(f"Current System: {system.name}", True, palette["text"])
    surface.blit(heading, (16, 14))

    top = 16 + heading.get_height() + 12
    plot_rect = pygame.Rect(16, top, w - LEGEND_W - 48, h - top - 16)
    if system.is_empty:
        msg = heading_font.render("Spooky empty system", True, palette["muted"])
        surface.blit(msg, (plot_rect.centerx - msg.get_width() // 2, plot_rect.centery - msg.get_height() // 2))
        return surface

    viewport = Viewport(plot_rect)
    viewport.fit(*system.bounds(BOUNDS_MARGIN))
    PlotRenderer().draw(surface, system, viewport, palette)
    legend_rect = pygame.Rect(plot_rect.right + 16, top, LEGEND_W, plot_rect.h)
    Legend().draw(surface, legend_rect, system, pygame.font.Font(None, 20), palette)
    return surface


def export_system_png(system: StarSystem, path: Union[str, Path], size: Tuple[int, int] = DEFAULT_EXPORT_SIZE, theme: str = DEFAULT_THEME) -> Path:
    target = Path(path)
    target.parent.mkdir(parents=True, exist_ok=True)
    pygame.image.save(render_system_image(system, size, theme), str(target))
    _logger.info("Exported %s to %s", system.name, target)
    return target


def export_screenshot(surface: pygame.Surface, data_dir: Path) -> Path:
    shots = Path(data_dir) / "screenshots"
    shots.mkdir(parents=True, exist_ok=True)
    target = shots / f"scansector_{datetime.now():%Y%m%d_%H%M%S}.png"
    pygame.image.save(surface, str(target))
    _logger.info("Screenshot saved to %s", target)
    return target
