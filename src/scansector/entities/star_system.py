"""StarSystem: a named group of celestial objects."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Tuple

from scansector.entities.celestial import CelestialObject


@dataclass
class StarSystem:
    name: str
    objects: List[CelestialObject] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.objects

    @property
    def mission_objects(self) -> List[CelestialObject]:
        return [o for o in self.objects if o.mission]

    def bounds(self, margin: float) -> Tuple[float, float]:
        """Half-extents of a box centred on the origin that holds every object."""
        from scansector.plot.viewport import compute_bounds

        return compute_bounds(self.objects, margin)
