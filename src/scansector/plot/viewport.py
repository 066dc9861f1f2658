"""World <-> screen mapping for the system plot.

World coordinates come straight from the save (y up, origin at the system's
star). The plot keeps one scale for both axes so orbits stay round.
"""
from __future__ import annotations

import math
from typing import Iterable, List, Optional, Sequence, Tuple

from scansector.entities import CelestialObject

MIN_SCALE = 1e-6
MAX_SCALE = 10.0

Rect = Tuple[float, float, float, float]


def compute_bounds(objects: Sequence[CelestialObject], margin: float = 2000.0) -> Tuple[float, float]:
    if not objects:
        raise ValueError("cannot compute bounds of an empty system")
    bx = max(abs(o.pos.x) for o in objects) + margin
    by = max(abs(o.pos.y) for o in objects) + margin
    return bx, by


def nice_step(span: float, target_lines: int = 8) -> float:
    """Smallest 1/2/5 x 10^n step that gives at most `target_lines` divisions of `span`."""
    if span <= 0 or target_lines <= 0:
        return 1.0
    raw = span / target_lines
    mag = 10 ** math.floor(math.log10(raw))
    for m in (1, 2, 5, 10):
        if m * mag >= raw:
            return m * mag
    return 10 * mag


def grid_lines(lo: float, hi: float, step: float) -> List[float]:
    if step <= 0 or hi < lo:
        return []
    first = math.ceil(lo / step)
    last = math.floor(hi / step)
    return [k * step for k in range(first, last + 1)]


def format_tick(value: float) -> str:
    if abs(value) < 1e-9:
        return "0"
    if abs(value) >= 1000:
        return f"{value / 1000:g}k"
    return f"{value:g}"


class Viewport:
    def __init__(self, rect: Iterable[float], center: Tuple[float, float] = (0.0, 0.0), scale: float = 1.0):
        self.rect: Rect = tuple(rect)  # type: ignore[assignment]
        self.center = (float(center[0]), float(center[1]))
        self.scale = max(MIN_SCALE, min(MAX_SCALE, float(scale)))

    def _origin(self) -> Tuple[float, float]:
        x, y, w, h = self.rect
        return x + w / 2.0, y + h / 2.0

    def resize(self, rect: Iterable[float]) -> None:
        self.rect = tuple(rect)  # type: ignore[assignment]

    def fit(self, bx: float, by: float) -> None:
        """Centre on the origin and show at least [-bx, bx] x [-by, by]."""
        _, _, w, h = self.rect
        bx = max(bx, 1e-9)
        by = max(by, 1e-9)
        self.center = (0.0, 0.0)
        self.scale = max(MIN_SCALE, min(MAX_SCALE, min(w / (2 * bx), h / (2 * by))))

    def world_to_screen(self, x: float, y: float) -> Tuple[float, float]:
        ox, oy = self._origin()
        cx, cy = self.center
        return ox + (x - cx) * self.scale, oy - (y - cy) * self.scale

    def screen_to_world(self, sx: float, sy: float) -> Tuple[float, float]:
        ox, oy = self._origin()
        cx, cy = self.center
        return cx + (sx - ox) / self.scale, cy - (sy - oy) / self.scale

    def pan(self, dx_px: float, dy_px: float) -> None:
        cx, cy = self.center
        self.center = (cx - dx_px / self.scale, cy + dy_px / self.scale)

    def zoom(self, factor: float, anchor_px: Optional[Tuple[float, float]] = None) -> None:
        """Scale by `factor`, keeping the world point under `anchor_px` in place."""
        if anchor_px is None:
            anchor_px = self._origin()
        ax, ay = anchor_px
        wx, wy = self.screen_to_world(ax, ay)
        self.scale = max(MIN_SCALE, min(MAX_SCALE, self.scale * factor))
        ox, oy = self._origin()
        self.center = (wx - (ax - ox) / self.scale, wy + (ay - oy) / self.scale)

    def visible_world(self) -> Tuple[float, float, float, float]:
        x, y, w, h = self.rect
        x0, y0 = self.screen_to_world(x, y + h)
        x1, y1 = self.screen_to_world(x + w, y)
        return x0, y0, x1, y1

    def contains_px(self, sx: float, sy: float) -> bool:
        x, y, w, h = self.rect
        return x <= sx < x + w and y <= sy < y + h


def hit_test(
    objects: Sequence[CelestialObject],
    viewport: Viewport,
    pos_px: Tuple[float, float],
    radius_px: float,
    hidden: Optional[set] = None,
) -> Optional[int]:
    """Index of the visible object drawn nearest to `pos_px`, within `radius_px`."""
    best: Optional[int] = None
    best_d = radius_px * radius_px
    px, py = pos_px
    for i, o in enumerate(objects):
        if hidden and i in hidden:
            continue
        sx, sy = viewport.world_to_screen(o.pos.x, o.pos.y)
        d = (sx - px) ** 2 + (sy - py) ** 2
        if d <= best_d:
            best, best_d = i, d
    return best
