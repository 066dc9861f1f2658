from __future__ import annotations

"""Transactional settings storage for Scansector.

Features:
- Ensure the `data/` folder and its subfolders (settings, screenshots) exist.
- Atomic writes using a temporary file + fsync + os.replace.
- Keep a .bak of the previous file on successful replace.
- Safe load with fallback to .bak if the main file is corrupted, then to defaults.

Only user preferences live here (theme, saves folder, recent saves); the game
save itself is never written.
"""

from pathlib import Path
import json
import logging
import os
import shutil
import tempfile
import time
from typing import Any, Dict, List, Optional

from scansector.config import DEFAULT_THEME, MAX_RECENT_SAVES, THEMES

_logger = logging.getLogger("scansector.settings")

SETTINGS_VERSION = 1


class SettingsError(Exception):
    pass


def ensure_data_dirs(data_dir: Path) -> Path:
    """Ensure `data/` and required subfolders exist and return the data dir path."""
    data_dir = Path(data_dir)
    data_dir.mkdir(parents=True, exist_ok=True)
    (data_dir / "settings").mkdir(exist_ok=True)
    (data_dir / "screenshots").mkdir(exist_ok=True)
    return data_dir


def _save_atomic(target_path: Path, data_bytes: bytes) -> None:
    """Write bytes to target_path atomically with fsync and replace.

    Steps:
    - Write to a temp file in the same directory.
    - Flush and fsync.
    - Rename/replace the target atomically.
    """
    target_dir = target_path.parent
    target_dir.mkdir(parents=True, exist_ok=True)

    fd = None
    tmp_path = None
    try:
        fd, tmp_path = tempfile.mkstemp(prefix=target_path.name, dir=str(target_dir))
        with os.fdopen(fd, "wb") as f:
            fd = None
            f.write(data_bytes)
            f.flush()
            os.fsync(f.fileno())
        if target_path.exists():
            bak = target_path.with_suffix(target_path.suffix + ".bak")
            shutil.copy2(target_path, bak)
        os.replace(tmp_path, target_path)
        tmp_path = None
    except OSError as e:
        raise SettingsError(f"Atomic write failed: {e}") from e
    finally:
        if fd is not None:
            os.close(fd)
        if tmp_path is not None and os.path.exists(tmp_path):
            os.remove(tmp_path)


def _serialize(data: Dict[str, Any]) -> bytes:
    envelope = {
        "metadata": {
            "version": SETTINGS_VERSION,
            "timestamp": int(time.time()),
        },
        "payload": data,
    }
    return json.dumps(envelope, indent=2, ensure_ascii=False).encode("utf-8")


def _read(path: Path) -> Dict[str, Any]:
    try:
        with path.open("r", encoding="utf-8") as f:
            obj = json.load(f)
    except (OSError, ValueError) as e:
        raise SettingsError(f"Failed to read settings '{path}': {e}") from e
    if not isinstance(obj, dict) or not isinstance(obj.get("payload"), dict):
        raise SettingsError(f"Invalid settings file structure: {path}")
    return obj["payload"]


class SettingsStore:
    """User preferences persisted as `data/settings/settings.json`."""

    def __init__(self, data_dir: Path, recent_limit: int = MAX_RECENT_SAVES):
        self.data_dir = ensure_data_dirs(data_dir)
        self.path = self.data_dir / "settings" / "settings.json"
        self.recent_limit = recent_limit
        self.theme: str = DEFAULT_THEME
        self.saves_dir: Optional[str] = None
        self.recent: List[str] = []

    def load(self) -> "SettingsStore":
        bak = self.path.with_suffix(self.path.suffix + ".bak")
        payload: Optional[Dict[str, Any]] = None
        for candidate in (self.path, bak):
            if not candidate.exists():
                continue
            try:
                payload = _read(candidate)
                break
            except SettingsError as e:
                _logger.warning("%s", e)
        if payload is None:
            _logger.debug("No usable settings found; using defaults")
            return self
        theme = payload.get("theme")
        if theme in THEMES:
            self.theme = theme
        saves_dir = payload.get("saves_dir")
        if isinstance(saves_dir, str) and saves_dir:
            self.saves_dir = saves_dir
        recent = payload.get("recent")
        if isinstance(recent, list):
            self.recent = [r for r in recent if isinstance(r, str)][: self.recent_limit]
        return self

    def save(self) -> Path:
        data = {"theme": self.theme, "saves_dir": self.saves_dir, "recent": self.recent}
        _save_atomic(self.path, _serialize(data))
        _logger.debug("Settings written to %s", self.path)
        return self.path

    def add_recent(self, save_path) -> None:
        entry = str(Path(save_path))
        self.recent = [entry] + [r for r in self.recent if r != entry]
        self.recent = self.recent[: self.recent_limit]

    def remove_recent(self, save_path) -> None:
        entry = str(Path(save_path))
        self.recent = [r for r in self.recent if r != entry]

    def recent_paths(self) -> List[Path]:
        return [Path(r) for r in self.recent if Path(r).exists()]
