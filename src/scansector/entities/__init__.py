"""Plain data types extracted from a save."""
from scansector.entities.celestial import CelestialObject, Position
from scansector.entities.star_system import StarSystem

__all__ = ["CelestialObject", "Position", "StarSystem"]
