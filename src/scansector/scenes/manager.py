"""Simple SceneManager to push/pop scenes and forward events/updates/renders."""
from typing import Any, List, Optional
import logging

_logger = logging.getLogger("scansector.scenes")


class SceneManager:
    def __init__(self):
        self._stack: List[Any] = []

    def __len__(self) -> int:
        return len(self._stack)

    def push(self, scene, context: Any = None) -> None:
        scene.on_enter(context)
        self._stack.append(scene)

    def pop(self) -> None:
        if not self._stack:
            return
        scene = self._stack.pop()
        scene.on_exit()
        # re-enter the revealed scene so it can refresh transient UI state
        if self._stack:
            new_top = self._stack[-1]
            try:
                new_top.on_enter(getattr(new_top, "context", None))
            except Exception:
                _logger.exception("Error re-entering %s", type(new_top).__name__)

    def current(self) -> Optional[object]:
        return self._stack[-1] if self._stack else None

    def handle_event(self, event: object) -> None:
        cur = self.current()
        if cur:
            cur.handle_event(event)

    def update(self, dt: float) -> None:
        cur = self.current()
        if cur:
            cur.update(dt)

    def render(self, surface) -> None:
        cur = self.current()
        if cur:
            cur.render(surface)
