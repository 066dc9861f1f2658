"""Celestial objects read from a save: planets, stars, stations, derelicts."""
from dataclasses import dataclass


@dataclass(frozen=True)
class Position:
    x: float = 0.0
    y: float = 0.0


@dataclass
class CelestialObject:
    name: str
    pos: Position
    planet: bool = False
    mission: bool = False

    @property
    def marker(self) -> str:
        # planets win over the mission flag
        if self.planet:
            return "circle"
        if self.mission:
            return "asterisk"
        return "cross"
