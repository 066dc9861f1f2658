"""Background save loading.

Large campaign saves take a few seconds to parse; SaveLoader runs the parse
on one worker thread and the scene polls it once per frame.
"""
from __future__ import annotations

from concurrent.futures import Future, ThreadPoolExecutor
from dataclasses import dataclass, field
from pathlib import Path
import logging
from typing import Callable, List, Optional

from scansector.entities import StarSystem
from scansector.systems.savefile import SaveFileError, load_save

_logger = logging.getLogger("scansector.loader")


@dataclass
class LoadResult:
    path: Path
    systems: List[StarSystem] = field(default_factory=list)
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None


class SaveLoader:
    def __init__(self, load_fn: Callable[[Path], List[StarSystem]] = load_save):
        self._load_fn = load_fn
        self._executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="scansector-load")
        self._future: Optional[Future] = None
        self._path: Optional[Path] = None

    @property
    def busy(self) -> bool:
        return self._future is not None and not self._future.done()

    @property
    def path(self) -> Optional[Path]:
        return self._path

    def start(self, path) -> bool:
        """Queue a load of `path`. Returns False if a load is already running."""
        if self.busy:
            _logger.debug("Load already in progress; ignoring %s", path)
            return False
        self._path = Path(path)
        self._future = self._executor.submit(self._load_fn, self._path)
        return True

    def poll(self) -> Optional[LoadResult]:
        """Return the finished result once, or None while idle or still running."""
        if self._future is None or not self._future.done():
            return None
        fut, self._future = self._future, None
        try:
            systems = fut.result()
        except SaveFileError as e:
            _logger.warning("Load failed: %s", e)
            return LoadResult(self._path, error=str(e))
        except Exception as e:
            _logger.exception("Unexpected error loading %s", self._path)
            return LoadResult(self._path, error=f"{type(e).__name__}: {e}")
        return LoadResult(self._path, systems=systems)

    def discard(self) -> None:
        """Forget a pending load; its result will never be reported."""
        if self._future is None:
            return
        if not self._future.cancel():
            _logger.debug("Discarding running load of %s", self._path)
        self._future = None

    def shutdown(self) -> None:
        self._executor.shutdown(wait=False, cancel_futures=True)
