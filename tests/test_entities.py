import pygame
import pytest

from scansector.config import THEMES
from scansector.entities import CelestialObject, Position, StarSystem
from scansector.plot.markers import draw_marker, marker_color


def test_marker_planet_wins_over_mission():
    assert CelestialObject("p", Position(), planet=True, mission=True).marker == "circle"
    assert CelestialObject("m", Position(), mission=True).marker == "asterisk"
    assert CelestialObject("e", Position()).marker == "cross"


def test_marker_color_follows_kind():
    palette = THEMES["dark"]
    assert marker_color(CelestialObject("p", Position(), planet=True), palette) == palette["planet"]
    assert marker_color(CelestialObject("m", Position(), mission=True), palette) == palette["mission"]
    assert marker_color(CelestialObject("e", Position()), palette) == palette["entity"]


def test_system_bounds_and_emptiness():
    system = StarSystem("Corvus", [CelestialObject("a", Position(-100, 50)), CelestialObject("b", Position(30, -700))])
    assert not system.is_empty
    assert system.bounds(2000.0) == (2100.0, 2700.0)
    assert StarSystem("Void").is_empty


@pytest.mark.parametrize("shape", ["circle", "asterisk", "cross"])
def test_draw_marker_paints_centre(shape):
    surf = pygame.Surface((40, 40))
    surf.fill((0, 0, 0))
    draw_marker(surf, shape, (20, 20), 10, (255, 0, 0))
    assert surf.get_at((20, 20))[:3] == (255, 0, 0)


def test_draw_marker_unknown_shape():
    with pytest.raises(ValueError):
        draw_marker(pygame.Surface((10, 10)), "hexagon", (5, 5), 3, (1, 1, 1))
