from __future__ import annotations

"""Application bootstrap and main loop for Scansector.

Sets up directories, settings and the shared systems, then runs the pygame
loop. Scan logic lives in scenes and systems.
"""
from pathlib import Path
import logging
from typing import Optional

from scansector.config import DEFAULT_THEME, THEMES, WINDOW_TITLE, Config
from scansector.logger import configure_logging
from scansector.scenes.manager import SceneManager
from scansector.scenes.picker_scene import PickerScene
from scansector.systems.event_bus import LOAD_FAILED, SAVE_LOADED, EventBus
from scansector.systems.input_system import InputSystem
from scansector.systems.loader import LoadResult, SaveLoader
from scansector.systems.settings import SettingsError, SettingsStore

_logger = logging.getLogger("scansector.app")


class Application:
    def __init__(self, config: Config):
        self.config = config
        self.debug = config.debug
        configure_logging(config.debug, config.log_level)
        self.data_dir = Path(config.data_dir)
        self.running = False

        self.settings = SettingsStore(self.data_dir, config.recent_limit).load()
        if config.theme in THEMES:
            self.settings.theme = config.theme
        self.saves_dir: Optional[Path] = config.saves_dir
        if self.saves_dir is None and self.settings.saves_dir:
            self.saves_dir = Path(self.settings.saves_dir)

        # Systems
        self.event_bus = EventBus()
        self.input_system = InputSystem()
        self.scene_manager = SceneManager()
        self.loader = SaveLoader()

        self.event_bus.subscribe(SAVE_LOADED, self._remember_save)
        self.event_bus.subscribe(LOAD_FAILED, self._forget_missing_save)

        _logger.info("Application initialized. data=%s saves=%s", self.data_dir, self.saves_dir)

    @property
    def palette(self):
        return THEMES.get(self.settings.theme, THEMES[DEFAULT_THEME])

    def toggle_theme(self) -> None:
        self.settings.theme = "light" if self.settings.theme == "dark" else "dark"
        self._persist_settings()

    def _remember_save(self, result: LoadResult) -> None:
        self.settings.add_recent(result.path)
        if self.saves_dir is not None:
            self.settings.saves_dir = str(self.saves_dir)
        self._persist_settings()

    def _forget_missing_save(self, result: LoadResult) -> None:
        if result.path.exists() or str(result.path) not in self.settings.recent:
            return
        _logger.info("Dropping missing save %s from recent list", result.path)
        self.settings.remove_recent(result.path)
        self._persist_settings()

    def _persist_settings(self) -> None:
        try:
            self.settings.save()
        except SettingsError as e:
            _logger.warning("Could not write settings: %s", e)

    def run(self, initial_save: Optional[Path] = None) -> None:
        """Open the window and run the scene loop until the user quits."""
        import pygame  # type: ignore

        pygame.init()
        pygame.font.init()

        flags = pygame.RESIZABLE
        screen = pygame.display.set_mode(self.config.window_size, flags)
        pygame.display.set_caption(WINDOW_TITLE)
        clock = pygame.time.Clock()

        picker = PickerScene()
        self.scene_manager.push(picker, context=self)
        if initial_save is not None:
            picker.open(initial_save)

        self.running = True
        try:
            while self.running:
                dt = clock.tick(self.config.fps) / 1000.0
                for ev in pygame.event.get():
                    if ev.type == pygame.QUIT:
                        self.running = False
                    else:
                        self.scene_manager.handle_event(ev)

                self.scene_manager.update(dt)

                screen = pygame.display.get_surface()
                self.scene_manager.render(screen)
                pygame.display.flip()
        except Exception:
            _logger.exception("Unhandled exception in main loop")
            raise
        finally:
            self.shutdown()
            pygame.quit()

    def shutdown(self) -> None:
        _logger.info("Shutting down application")
        self.loader.shutdown()
