"""Marker shapes for plotted objects: circle (planet), asterisk (mission), cross."""
from __future__ import annotations

import math
from typing import Dict, Tuple

import pygame

from scansector.entities import CelestialObject

Color = Tuple[int, int, int]

CIRCLE = "circle"
ASTERISK = "asterisk"
CROSS = "cross"


def marker_color(obj: CelestialObject, palette: Dict[str, Color]) -> Color:
    if obj.planet:
        return palette["planet"]
    if obj.mission:
        return palette["mission"]
    return palette["entity"]


def draw_marker(surface: pygame.Surface, shape: str, center: Tuple[float, float], radius: int, color: Color, width: int = 2) -> None:
    cx, cy = int(round(center[0])), int(round(center[1]))
    if shape == CIRCLE:
        pygame.draw.circle(surface, color, (cx, cy), radius)
        return
    if shape == ASTERISK:
        # six arms: vertical plus two diagonals at 60 degrees
        for deg in (90, 30, 150):
            rad = math.radians(deg)
            dx = math.cos(rad) * radius
            dy = math.sin(rad) * radius
            pygame.draw.line(surface, color, (cx - dx, cy - dy), (cx + dx, cy + dy), width + 1)
        return
    if shape == CROSS:
        d = int(round(radius * math.sqrt(0.5)))
        pygame.draw.line(surface, color, (cx - d, cy - d), (cx + d, cy + d), width)
        pygame.draw.line(surface, color, (cx - d, cy + d), (cx + d, cy - d), width)
        return
    raise ValueError(f"unknown marker shape: {shape}")
