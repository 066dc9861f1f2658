"""SystemScene: browse the star systems of a loaded save.

Left: filter box and the list of systems whose name matches the filter.
Centre: the plot of the selected system. Right: the legend.
"""
from __future__ import annotations

from typing import List, Optional, Tuple
import logging

import pygame

from scansector.config import BOUNDS_MARGIN
from scansector.entities import StarSystem
from scansector.plot.renderer import PlotRenderer
from scansector.plot.viewport import Viewport, hit_test
from scansector.scenes.base_scene import BaseScene
from scansector.systems import input_system as actions
from scansector.systems.event_bus import LOAD_FAILED, SAVE_LOADED
from scansector.systems.loader import LoadResult
from scansector.systems.savefile import filter_systems
from scansector.ui.hud import HUD
from scansector.ui.legend import Legend
from scansector.ui.widgets import ListView, TextInput, draw_panel, fit_text

_logger = logging.getLogger("scansector.system_scene")

EMPTY_SYSTEM_TEXT = "Spooky empty system"
HEADER_H = 72
SIDEBAR_W = 280
LEGEND_W = 230
STATUS_H = 24
GAP = 10
WHEEL_ZOOM = 1.15
KEY_ZOOM = 1.25


def step_selection(visible: List[int], selected: int, delta: int) -> int:
    """Move `selected` by `delta` rows among the `visible` indices.

    If the current selection is filtered out, the first (or last, when moving
    up) visible entry is chosen. With nothing visible the selection stays.
    """
    if not visible:
        return selected
    if selected not in visible:
        return visible[0] if delta > 0 else visible[-1]
    pos = visible.index(selected) + delta
    pos = max(0, min(len(visible) - 1, pos))
    return visible[pos]


class SystemScene(BaseScene):
    def __init__(self, result: LoadResult):
        self.path = result.path
        self.systems: List[StarSystem] = result.systems
        self.selected = 0
        self.filter = TextInput(placeholder="Filter")
        self.system_list = ListView(row_height=24)
        self.legend = Legend()
        self.viewport: Optional[Viewport] = None
        self.hover: Optional[int] = None
        self.cursor_world: Optional[Tuple[float, float]] = None
        self._needs_fit = True
        self._dragging = False

    def on_enter(self, context):
        _logger.info("Entering SystemScene (%d systems)", len(self.systems))
        self.context = context
        self._heading_font = pygame.font.Font(None, 34)
        self._font = pygame.font.Font(None, 24)
        self._small_font = pygame.font.Font(None, 20)
        self.renderer = PlotRenderer()
        self.hud = HUD()
        self.hud.status = f"{len(self.systems)} systems"
        self._refresh_list()

    def on_exit(self):
        _logger.info("Exiting SystemScene")
        # a reload still running belongs to this scene, not to the picker below
        self.context.loader.discard()

    @property
    def current_system(self) -> Optional[StarSystem]:
        if not self.systems:
            return None
        return self.systems[self.selected]

    def visible_indices(self) -> List[int]:
        return filter_systems(self.systems, self.filter.text)

    def _refresh_list(self) -> None:
        self.system_list.set_items([(i, self.systems[i].name) for i in self.visible_indices()])
        self.system_list.selected = self.selected

    def select(self, index: int) -> None:
        if not (0 <= index < len(self.systems)) or index == self.selected:
            return
        self.selected = index
        self.system_list.selected = index
        self.system_list.ensure_visible(index)
        self.legend.reset()
        self.hover = None
        self._needs_fit = True
        _logger.debug("Selected system %s", self.systems[index].name)

    def _fit(self) -> None:
        system = self.current_system
        if self.viewport is None or system is None or system.is_empty:
            return
        bx, by = system.bounds(BOUNDS_MARGIN)
        self.viewport.fit(bx, by)
        self._needs_fit = False

    def _screenshot(self) -> None:
        from scansector.export import export_screenshot

        surface = pygame.display.get_surface()
        if surface is None:
            return
        try:
            path = export_screenshot(surface, self.context.data_dir)
        except (pygame.error, OSError) as e:
            _logger.warning("Screenshot failed: %s", e)
            self.hud.toast(f"Screenshot failed: {e}", 3.0, "error")
            return
        self.hud.toast(f"Saved {path.name}", 2.5, "success")

    def _reload(self) -> None:
        if self.context.loader.start(self.path):
            self.hud.toast("Reloading save...", 1.5)

    def handle_event(self, event):
        etype = getattr(event, "type", None)
        action = self.context.input_system.action_for(event)

        if action == actions.BACK:
            if self.hud.show_controls:
                self.hud.show_controls = False
            else:
                self.context.scene_manager.pop()
            return
        if action == actions.TOGGLE_HELP:
            self.hud.show_controls = not self.hud.show_controls
            return
        if action == actions.TOGGLE_THEME:
            self.context.toggle_theme()
            return
        if action == actions.RELOAD:
            self._reload()
            return
        if action == actions.SCREENSHOT:
            self._screenshot()
            return
        if action in (actions.PREV_SYSTEM, actions.NEXT_SYSTEM):
            delta = -1 if action == actions.PREV_SYSTEM else 1
            self.select(step_selection(self.visible_indices(), self.selected, delta))
            return
        if action == actions.RESET_VIEW:
            self._fit()
            return
        if action in (actions.ZOOM_IN, actions.ZOOM_OUT) and self.viewport is not None:
            self.viewport.zoom(KEY_ZOOM if action == actions.ZOOM_IN else 1 / KEY_ZOOM)
            return

        if self.filter.handle_event(event):
            self._refresh_list()
            return

        picked = self.system_list.handle_event(event)
        if picked is not None:
            self.select(picked)
            return

        if self.legend.handle_event(event):
            return

        self._handle_plot_event(event, etype)

    def _handle_plot_event(self, event, etype) -> None:
        if self.viewport is None:
            return
        if etype == pygame.MOUSEWHEEL:
            mouse = pygame.mouse.get_pos()
            if self.viewport.contains_px(*mouse):
                self.viewport.zoom(WHEEL_ZOOM ** event.y, mouse)
        elif etype == pygame.MOUSEBUTTONDOWN and event.button == 1:
            self._dragging = self.viewport.contains_px(*event.pos)
        elif etype == pygame.MOUSEBUTTONUP and event.button == 1:
            self._dragging = False
        elif etype == pygame.MOUSEMOTION and self._dragging:
            self.viewport.pan(*event.rel)

    def update(self, dt: float):
        result = self.context.loader.poll()
        if result is not None:
            self._apply_reload(result)

        self.hover = None
        self.cursor_world = None
        system = self.current_system
        if self.viewport is None or system is None:
            return
        mouse = pygame.mouse.get_pos()
        if self.viewport.contains_px(*mouse):
            self.cursor_world = self.viewport.screen_to_world(*mouse)
            self.hover = hit_test(system.objects, self.viewport, mouse, self.renderer.marker_radius + 4, self.legend.hidden)

    def _apply_reload(self, result: LoadResult) -> None:
        if not result.ok:
            self.hud.toast(result.error, 4.0, "error")
            self.context.event_bus.post(LOAD_FAILED, result)
            return
        previous = self.current_system.name if self.current_system else None
        self.systems = result.systems
        self.selected = 0
        for i, s in enumerate(self.systems):
            if s.name == previous:
                self.selected = i
                break
        self.legend.reset()
        self._needs_fit = True
        self._refresh_list()
        self.hud.status = f"{len(self.systems)} systems"
        self.hud.toast("Save reloaded", 2.0, "success")
        self.context.event_bus.post(SAVE_LOADED, result)

    def _layout(self, surface) -> Tuple[pygame.Rect, pygame.Rect, pygame.Rect, pygame.Rect]:
        sw, sh = surface.get_size()
        body_top = HEADER_H
        body_h = sh - HEADER_H - STATUS_H - GAP
        filter_rect = pygame.Rect(GAP, body_top, SIDEBAR_W, 30)
        list_rect = pygame.Rect(GAP, filter_rect.bottom + 6, SIDEBAR_W, body_h - 36)
        legend_rect = pygame.Rect(sw - LEGEND_W - GAP, body_top, LEGEND_W, body_h)
        plot_rect = pygame.Rect(list_rect.right + GAP, body_top, legend_rect.x - list_rect.right - 2 * GAP, body_h)
        return filter_rect, list_rect, plot_rect, legend_rect

    def render(self, surface):
        palette = self.context.palette
        surface.fill(palette["background"])
        sw, _ = surface.get_size()

        path_lbl = self._small_font.render(fit_text(self._small_font, str(self.path), sw - 2 * GAP), True, palette["muted"])
        surface.blit(path_lbl, (GAP, 8))

        filter_rect, list_rect, plot_rect, legend_rect = self._layout(surface)
        self.filter.draw(surface, filter_rect, self._font, palette)
        self.system_list.draw(surface, list_rect, self._font, palette)

        system = self.current_system
        if system is None:
            msg = self._heading_font.render("This save has no star systems", True, palette["muted"])
            surface.blit(msg, (plot_rect.x, HEADER_H))
            self.hud.display(surface, palette)
            return

        heading = self._heading_font.render(f"Current System: {system.name}", True, palette["text"])
        surface.blit(heading, (GAP, 32))

        if system.is_empty:
            draw_panel(surface, plot_rect, palette)
            msg = self._heading_font.render(EMPTY_SYSTEM_TEXT, True, palette["muted"])
            surface.blit(msg, (plot_rect.centerx - msg.get_width() // 2, plot_rect.centery - msg.get_height() // 2))
            self.hud.display(surface, palette)
            return

        if self.viewport is None:
            self.viewport = Viewport(plot_rect)
        elif tuple(self.viewport.rect) != tuple(plot_rect):
            self.viewport.resize(plot_rect)
        if self._needs_fit:
            self._fit()

        self.renderer.draw(surface, system, self.viewport, palette, self.legend.hidden, self.hover)
        self.legend.draw(surface, legend_rect, system, self._small_font, palette)

        if self.hover is not None:
            self._draw_tooltip(surface, system, palette)

        self.hud.display(surface, palette, self.cursor_world)

    def _draw_tooltip(self, surface, system: StarSystem, palette) -> None:
        obj = system.objects[self.hover]
        kind = "planet" if obj.planet else ("mission item" if obj.mission else "entity")
        text = f"{obj.name} ({kind})  x {obj.pos.x:.0f}  y {obj.pos.y:.0f}"
        lbl = self._small_font.render(text, True, palette["text"])
        mx, my = pygame.mouse.get_pos()
        box = pygame.Rect(mx + 14, my + 14, lbl.get_width() + 12, lbl.get_height() + 8)
        box.clamp_ip(surface.get_rect())
        draw_panel(surface, box, palette)
        surface.blit(lbl, (box.x + 6, box.y + 4))
