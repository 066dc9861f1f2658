"""Input system: translate pygame key events into high level actions.

Scenes ask for the action of a KEYDOWN event instead of testing key codes
themselves, so bindings live in one table.
"""
from typing import Dict, Optional, Tuple
import logging

import pygame

_logger = logging.getLogger("scansector.input")

ZOOM_IN = "zoom_in"
ZOOM_OUT = "zoom_out"
RESET_VIEW = "reset_view"
TOGGLE_THEME = "toggle_theme"
TOGGLE_HELP = "toggle_help"
RELOAD = "reload"
SCREENSHOT = "screenshot"
BACK = "back"
PREV_SYSTEM = "prev_system"
NEXT_SYSTEM = "next_system"
CONFIRM = "confirm"

# (key, needs_ctrl) -> action; ctrl variants mirror the usual zoom shortcuts
DEFAULT_BINDINGS: Dict[Tuple[int, bool], str] = {
    (pygame.K_PLUS, True): ZOOM_IN,
    (pygame.K_EQUALS, True): ZOOM_IN,
    (pygame.K_KP_PLUS, False): ZOOM_IN,
    (pygame.K_MINUS, True): ZOOM_OUT,
    (pygame.K_KP_MINUS, False): ZOOM_OUT,
    (pygame.K_0, True): RESET_VIEW,
    (pygame.K_HOME, False): RESET_VIEW,
    (pygame.K_F1, False): TOGGLE_HELP,
    (pygame.K_F2, False): TOGGLE_THEME,
    (pygame.K_F5, False): RELOAD,
    (pygame.K_F12, False): SCREENSHOT,
    (pygame.K_ESCAPE, False): BACK,
    (pygame.K_UP, False): PREV_SYSTEM,
    (pygame.K_DOWN, False): NEXT_SYSTEM,
    (pygame.K_RETURN, False): CONFIRM,
    (pygame.K_KP_ENTER, False): CONFIRM,
}


class InputSystem:
    def __init__(self, bindings: Optional[Dict[Tuple[int, bool], str]] = None):
        self.bindings = dict(DEFAULT_BINDINGS if bindings is None else bindings)

    def bind(self, key: int, action: str, ctrl: bool = False) -> None:
        self.bindings[(key, ctrl)] = action

    def action_for(self, event: object) -> Optional[str]:
        if getattr(event, "type", None) != pygame.KEYDOWN:
            return None
        key = getattr(event, "key", None)
        ctrl = bool(getattr(event, "mod", 0) & pygame.KMOD_CTRL)
        action = self.bindings.get((key, ctrl))
        if action is None and ctrl:
            # a ctrl-less binding still fires when ctrl is held
            action = self.bindings.get((key, False))
        if action is not None:
            _logger.debug("Key %s -> %s", key, action)
        return action
