import os
import time

os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")

from types import SimpleNamespace

import pygame
import pytest

from scansector.config import THEMES
from scansector.scenes.manager import SceneManager
from scansector.systems.event_bus import EventBus
from scansector.systems.input_system import InputSystem
from scansector.systems.loader import SaveLoader

SAMPLE_SAVE = """<?xml version="1.0" encoding="UTF-8"?>
<CampaignGameState z="1">
  <starSystems>
    <Sstm z="2" bN="Zeta">
      <o>
        <Plnt z="3"><loc>100.0|-200.5</loc><j0>{"f0":"Zeta Star","f1":"star_yellow"}</j0></Plnt>
        <Plnt z="4"><loc>bad</loc><j0>{"f0":"Broken"}</j0></Plnt>
        <CCEnt z="5"><loc>-3000|4000</loc><j0>{"f0":"Derelict Survey Ship"}</j0><mem><MReq z="6"/></mem></CCEnt>
        <CCEnt z="7"><loc>10|10</loc><j0>{"f0":"Buoy"}</j0></CCEnt>
        <CCEnt z="8"><loc>10|10</loc></CCEnt>
      </o>
    </Sstm>
    <Sstm z="9"><o><Plnt z="10"><loc>1|1</loc><j0>{"f0":"Orphan"}</j0></Plnt></o></Sstm>
    <Sstm z="11" bN="Alpha"/>
    <Sstm z="12" bN="Corvus">
      <Plnt z="13"><loc>0|0</loc><j0>{"f0":"Corvus"}</j0></Plnt>
      <Plnt z="14"><loc>2500|0</loc><j0>{"f0":"Jangala"}</j0></Plnt>
    </Sstm>
  </starSystems>
</CampaignGameState>
"""


@pytest.fixture
def sample_save(tmp_path):
    path = tmp_path / "save_test_1" / "campaign.xml"
    path.parent.mkdir()
    path.write_text(SAMPLE_SAVE, encoding="utf-8")
    return path


@pytest.fixture
def wait_idle():
    """Block until a SaveLoader has finished its current job."""

    def _wait(loader, timeout=10.0):
        deadline = time.monotonic() + timeout
        while loader.busy:
            if time.monotonic() > deadline:
                raise AssertionError("save load did not finish in time")
            time.sleep(0.01)

    return _wait


@pytest.fixture
def display():
    pygame.display.init()
    pygame.font.init()
    surface = pygame.display.set_mode((1024, 700))
    yield surface
    pygame.display.quit()


@pytest.fixture
def context(tmp_path):
    """Stand-in for the Application as seen by the scenes."""
    ctx = SimpleNamespace(
        palette=THEMES["dark"],
        input_system=InputSystem(),
        event_bus=EventBus(),
        scene_manager=SceneManager(),
        loader=SaveLoader(),
        data_dir=tmp_path / "data",
        saves_dir=tmp_path,
        settings=None,
        running=True,
        theme_toggles=0,
    )

    def toggle_theme():
        ctx.theme_toggles += 1

    ctx.toggle_theme = toggle_theme
    yield ctx
    ctx.loader.shutdown()
