"""Configuration defaults and constants for Scansector.

Keep this file light: constants plus a small Config dataclass.
"""
from __future__ import annotations

import os
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Optional, Tuple


DEFAULT_WINDOW_SIZE: Tuple[int, int] = (1280, 800)
DEFAULT_EXPORT_SIZE: Tuple[int, int] = (1600, 1200)
DEFAULT_FPS: int = 60
WINDOW_TITLE = "Scansector - Starsector System Scanner"

# world units added around the furthest object so markers never sit on the edge
BOUNDS_MARGIN: float = 2000.0
MARKER_RADIUS: int = 10
MAX_RECENT_SAVES: int = 8

THEMES: Dict[str, Dict[str, Tuple[int, int, int]]] = {
    "dark": {
        "background": (18, 20, 26),
        "panel": (30, 33, 42),
        "panel_border": (60, 64, 78),
        "text": (225, 225, 230),
        "muted": (140, 144, 156),
        "grid": (40, 44, 54),
        "axis": (90, 96, 112),
        "accent": (90, 150, 230),
        "button": (52, 58, 74),
        "button_hover": (74, 84, 108),
        "planet": (110, 180, 255),
        "mission": (255, 190, 60),
        "entity": (200, 110, 110),
        "error": (240, 120, 120),
    },
    "light": {
        "background": (244, 244, 246),
        "panel": (228, 229, 234),
        "panel_border": (180, 182, 192),
        "text": (24, 26, 32),
        "muted": (100, 104, 116),
        "grid": (214, 216, 222),
        "axis": (150, 154, 166),
        "accent": (40, 100, 200),
        "button": (206, 208, 216),
        "button_hover": (186, 192, 210),
        "planet": (30, 100, 200),
        "mission": (210, 130, 0),
        "entity": (180, 50, 50),
        "error": (200, 40, 40),
    },
}
DEFAULT_THEME = "dark"


def default_saves_dirs() -> List[Path]:
    """Usual locations of the Starsector `saves/` folder for this platform."""
    home = Path.home()
    if sys.platform.startswith("win"):
        return [
            Path("C:/Program Files (x86)/Fractal Softworks/Starsector/saves"),
            Path("C:/Program Files/Fractal Softworks/Starsector/saves"),
        ]
    if sys.platform == "darwin":
        return [
            Path("/Applications/Starsector.app/saves"),
            home / "Applications" / "Starsector.app" / "saves",
        ]
    return [home / "starsector" / "saves", home / "Starsector" / "saves", Path("/opt/starsector/saves")]


def find_saves_dir() -> Optional[Path]:
    for candidate in default_saves_dirs():
        if candidate.is_dir():
            return candidate
    return None


@dataclass
class Config:
    data_dir: Path
    saves_dir: Optional[Path] = None
    window_size: Tuple[int, int] = DEFAULT_WINDOW_SIZE
    fps: int = DEFAULT_FPS
    theme: Optional[str] = None
    debug: bool = False
    log_level: str = "INFO"
    recent_limit: int = MAX_RECENT_SAVES

    @staticmethod
    def from_env() -> "Config":
        data_dir = os.getenv("SCANSECTOR_DATA_DIR")
        saves_dir = os.getenv("SCANSECTOR_SAVES_DIR")
        log_level = os.getenv("SCANSECTOR_LOG_LEVEL", "INFO")
        return Config(
            data_dir=Path(data_dir) if data_dir else Path.cwd() / "data",
            saves_dir=Path(saves_dir) if saves_dir else find_saves_dir(),
            log_level=log_level,
        )
