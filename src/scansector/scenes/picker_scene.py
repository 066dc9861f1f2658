"""PickerScene: choose the save to scan.

Lists the saves found in the Starsector `saves/` folder plus recently opened
files. A save can also be opened by typing its path and pressing Enter, or
by dropping the file onto the window. Loading runs in the background; once
it finishes the SystemScene is pushed on top.
"""
from __future__ import annotations

from pathlib import Path
from typing import Dict, List, Optional, Tuple
import logging

import pygame

from scansector.scenes.base_scene import BaseScene
from scansector.systems import input_system as actions
from scansector.systems.event_bus import LOAD_FAILED, SAVE_LOADED
from scansector.systems.savefile import discover_saves
from scansector.ui.hud import HUD
from scansector.ui.widgets import ListView, TextInput, draw_button, fit_text

_logger = logging.getLogger("scansector.picker_scene")


class PickerScene(BaseScene):
    def on_enter(self, context):
        _logger.info("Entering PickerScene")
        self.context = context
        self._title_font = pygame.font.Font(None, 56)
        self._font = pygame.font.Font(None, 26)
        self._small_font = pygame.font.Font(None, 22)
        self.hud = HUD()
        self.path_input = TextInput(placeholder="Type or paste a save path and press Enter, or drop a file here")
        self.saves_list = ListView(row_height=28)
        self._button_rects: Dict[str, pygame.Rect] = {}
        self.message: Optional[str] = None
        self.refresh()

    def on_exit(self):
        _logger.info("Exiting PickerScene")

    @property
    def saves_dir(self) -> Optional[Path]:
        return getattr(self.context, "saves_dir", None)

    def refresh(self) -> None:
        items: List[Tuple[Path, str]] = []
        seen = set()
        settings = getattr(self.context, "settings", None)
        recent = settings.recent_paths() if settings is not None else []
        for p in recent:
            seen.add(str(p))
            items.append((p, f"Recent: {p}"))
        for entry in discover_saves(self.saves_dir):
            if str(entry.path) in seen:
                continue
            items.append((entry.path, f"{entry.name}   {entry.modified:%Y-%m-%d %H:%M}"))
        self.saves_list.set_items(items)
        _logger.debug("Picker lists %d saves", len(items))

    def open(self, path) -> None:
        loader = self.context.loader
        if loader.busy:
            return
        p = Path(str(path).strip().strip('"'))
        self.message = None
        if loader.start(p):
            self.hud.status = f"Loading {p} ..."

    def handle_event(self, event):
        etype = getattr(event, "type", None)
        action = self.context.input_system.action_for(event)

        if action == actions.BACK:
            if self.hud.show_controls:
                self.hud.show_controls = False
            else:
                self.context.running = False
            return
        if action == actions.TOGGLE_HELP:
            self.hud.show_controls = not self.hud.show_controls
            return
        if action == actions.TOGGLE_THEME:
            self.context.toggle_theme()
            return
        if action == actions.CONFIRM:
            if self.path_input.text.strip():
                self.open(self.path_input.text)
            return

        if etype == pygame.DROPFILE:
            self.open(event.file)
            return

        if self.path_input.handle_event(event):
            return

        picked = self.saves_list.handle_event(event)
        if picked is not None:
            self.saves_list.selected = picked
            self.open(picked)
            return

        if etype == pygame.MOUSEBUTTONDOWN and event.button == 1:
            for name, rect in list(self._button_rects.items()):
                if not rect.collidepoint(event.pos):
                    continue
                if name == "open" and self.path_input.text.strip():
                    self.open(self.path_input.text)
                elif name == "refresh":
                    self.refresh()
                elif name == "quit":
                    self.context.running = False
                return

    def update(self, dt: float):
        result = self.context.loader.poll()
        if result is None:
            return
        if not result.ok:
            self.message = result.error
            self.hud.status = ""
            self.context.event_bus.post(LOAD_FAILED, result)
            return
        self.hud.status = ""
        self.context.event_bus.post(SAVE_LOADED, result)
        from scansector.scenes.system_scene import SystemScene

        self.context.scene_manager.push(SystemScene(result), context=self.context)

    def render(self, surface):
        palette = self.context.palette
        surface.fill(palette["background"])
        sw, sh = surface.get_size()
        margin = 32

        title = self._title_font.render("Scansector", True, palette["text"])
        surface.blit(title, (margin, 24))
        sub = self._font.render("Pick Save", True, palette["muted"])
        surface.blit(sub, (margin + title.get_width() + 16, 24 + title.get_height() - sub.get_height() - 4))

        where = str(self.saves_dir) if self.saves_dir else "no Starsector saves folder found (use --saves-dir)"
        surface.blit(self._small_font.render(fit_text(self._small_font, f"Saves folder: {where}", sw - 2 * margin), True, palette["muted"]), (margin, 84))

        input_rect = pygame.Rect(margin, 112, sw - 2 * margin - 110, 32)
        self.path_input.draw(surface, input_rect, self._small_font, palette)
        open_rect = pygame.Rect(input_rect.right + 10, input_rect.y, 100, 32)
        busy = self.context.loader.busy
        draw_button(surface, open_rect, "Open", self._font, palette, enabled=not busy)
        self._button_rects["open"] = open_rect

        list_top = input_rect.bottom + 16
        btn_h = 40
        list_rect = pygame.Rect(margin, list_top, sw - 2 * margin, sh - list_top - btn_h - 80)
        self.saves_list.draw(surface, list_rect, self._font, palette)
        if not self.saves_list.items:
            hint = self._font.render("No saves found", True, palette["muted"])
            surface.blit(hint, (list_rect.x + 12, list_rect.y + 12))

        by = list_rect.bottom + 14
        refresh_rect = pygame.Rect(margin, by, 140, btn_h)
        quit_rect = pygame.Rect(sw - margin - 140, by, 140, btn_h)
        draw_button(surface, refresh_rect, "Refresh", self._font, palette)
        draw_button(surface, quit_rect, "Quit", self._font, palette)
        self._button_rects["refresh"] = refresh_rect
        self._button_rects["quit"] = quit_rect

        if self.message:
            msg = self._small_font.render(fit_text(self._small_font, self.message, sw - 2 * margin - 320), True, palette["error"])
            surface.blit(msg, (refresh_rect.right + 16, by + (btn_h - msg.get_height()) // 2))
        elif busy:
            dots = "." * (1 + (pygame.time.get_ticks() // 400) % 3)
            msg = self._small_font.render(f"Loading{dots}", True, palette["accent"])
            surface.blit(msg, (refresh_rect.right + 16, by + (btn_h - msg.get_height()) // 2))

        self.hud.display(surface, palette)
