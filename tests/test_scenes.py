import threading

import pygame
import pytest

from scansector.scenes.manager import SceneManager
from scansector.scenes.picker_scene import PickerScene
from scansector.scenes.system_scene import EMPTY_SYSTEM_TEXT, SystemScene, step_selection
from scansector.systems.event_bus import LOAD_FAILED, SAVE_LOADED
from scansector.systems.loader import LoadResult, SaveLoader
from scansector.systems.savefile import load_save


class RecordingScene:
    def __init__(self, name, log):
        self.name = name
        self.log = log
        self.context = None

    def on_enter(self, context):
        self.context = context
        self.log.append(("enter", self.name))

    def on_exit(self):
        self.log.append(("exit", self.name))

    def handle_event(self, event):
        self.log.append(("event", self.name))

    def update(self, dt):
        self.log.append(("update", self.name))

    def render(self, surface):
        self.log.append(("render", self.name))


def test_scene_manager_stack():
    log = []
    mgr = SceneManager()
    a, b, c = (RecordingScene(n, log) for n in "abc")
    mgr.push(a, context="ctx")
    mgr.push(b, context="ctx")
    mgr.handle_event(object())
    assert mgr.current() is b
    mgr.pop()
    assert mgr.current() is a
    # a is re-entered with its own context
    assert log[-1] == ("enter", "a") and a.context == "ctx"
    assert ("exit", "b") in log
    mgr.push(c, context="ctx")
    assert mgr.current() is c and len(mgr) == 2
    mgr.pop()
    mgr.pop()
    assert mgr.current() is None


@pytest.mark.parametrize(
    "visible,selected,delta,expected",
    [
        ([0, 2, 5], 2, 1, 5),
        ([0, 2, 5], 2, -1, 0),
        ([0, 2, 5], 5, 1, 5),
        ([0, 2, 5], 0, -1, 0),
        ([0, 2, 5], 3, 1, 0),
        ([0, 2, 5], 3, -1, 5),
        ([], 3, 1, 3),
    ],
)
def test_step_selection(visible, selected, delta, expected):
    assert step_selection(visible, selected, delta) == expected


@pytest.fixture
def system_scene(display, context, sample_save):
    scene = SystemScene(LoadResult(sample_save, systems=load_save(sample_save)))
    context.scene_manager.push(scene, context=context)
    return scene


def test_system_scene_renders_first_system(system_scene, display):
    # Alpha is empty and sorted first
    assert system_scene.current_system.name == "Alpha"
    system_scene.render(display)
    assert system_scene.viewport is None


def test_system_scene_fits_plot_on_select(system_scene, display):
    system_scene.select(2)
    system_scene.render(display)
    vp = system_scene.viewport
    assert vp is not None
    x0, y0, x1, y1 = vp.visible_world()
    bx, by = system_scene.current_system.bounds(2000.0)
    assert x0 <= -bx + 1e-6 and x1 >= bx - 1e-6
    assert y0 <= -by + 1e-6 and y1 >= by - 1e-6


def test_filter_narrows_list_but_keeps_selection(system_scene):
    system_scene.select(1)
    system_scene.handle_event(pygame.event.Event(pygame.TEXTINPUT, text="zE"))
    assert system_scene.filter.text == "zE"
    assert [k for k, _ in system_scene.system_list.items] == [2]
    assert system_scene.current_system.name == "Corvus"
    # moving down jumps into the filtered list
    system_scene.handle_event(pygame.event.Event(pygame.KEYDOWN, key=pygame.K_DOWN, mod=0))
    assert system_scene.current_system.name == "Zeta"


def test_backspace_widens_filter(system_scene):
    system_scene.handle_event(pygame.event.Event(pygame.TEXTINPUT, text="q"))
    assert system_scene.system_list.items == []
    system_scene.handle_event(pygame.event.Event(pygame.KEYDOWN, key=pygame.K_BACKSPACE, mod=0))
    assert len(system_scene.system_list.items) == 3


def test_theme_and_help_keys(system_scene, context):
    system_scene.handle_event(pygame.event.Event(pygame.KEYDOWN, key=pygame.K_F2, mod=0))
    assert context.theme_toggles == 1
    system_scene.handle_event(pygame.event.Event(pygame.KEYDOWN, key=pygame.K_F1, mod=0))
    assert system_scene.hud.show_controls
    # escape closes the overlay before leaving the scene
    system_scene.handle_event(pygame.event.Event(pygame.KEYDOWN, key=pygame.K_ESCAPE, mod=0))
    assert not system_scene.hud.show_controls
    assert context.scene_manager.current() is system_scene


def test_escape_pops_scene(system_scene, context):
    system_scene.handle_event(pygame.event.Event(pygame.KEYDOWN, key=pygame.K_ESCAPE, mod=0))
    assert context.scene_manager.current() is None


def test_reload_keeps_selected_system(system_scene, context, sample_save, wait_idle):
    seen = []
    context.event_bus.subscribe(SAVE_LOADED, seen.append)
    system_scene.select(1)
    system_scene.handle_event(pygame.event.Event(pygame.KEYDOWN, key=pygame.K_F5, mod=0))
    wait_idle(context.loader)
    system_scene.update(0.016)
    assert system_scene.current_system.name == "Corvus"
    assert len(seen) == 1
    # Corvus moves to the front when Alpha is gone
    system_scene._apply_reload(LoadResult(sample_save, systems=load_save(sample_save)[1:]))
    assert system_scene.current_system.name == "Corvus"
    assert system_scene.selected == 0
    assert len(seen) == 2


def test_reload_finishing_after_leaving_scene_is_dropped(display, context, sample_save):
    started = threading.Event()
    gate = threading.Event()
    done = threading.Event()

    def slow_load(path):
        started.set()
        gate.wait(10)
        done.set()
        return load_save(path)

    context.loader.shutdown()
    context.loader = SaveLoader(load_fn=slow_load)
    loaded = []
    context.event_bus.subscribe(SAVE_LOADED, loaded.append)

    picker = PickerScene()
    context.scene_manager.push(picker, context=context)
    viewer = SystemScene(LoadResult(sample_save, systems=load_save(sample_save)))
    context.scene_manager.push(viewer, context=context)
    viewer.handle_event(pygame.event.Event(pygame.KEYDOWN, key=pygame.K_F5, mod=0))
    assert started.wait(10)
    viewer.handle_event(pygame.event.Event(pygame.KEYDOWN, key=pygame.K_ESCAPE, mod=0))
    assert context.scene_manager.current() is picker

    gate.set()
    assert done.wait(10)
    for _ in range(3):
        context.scene_manager.update(0.016)
    assert context.scene_manager.current() is picker
    assert len(context.scene_manager) == 1
    assert loaded == []
    assert not context.loader.busy


def test_failed_reload_shows_toast(system_scene, context, tmp_path):
    failures = []
    context.event_bus.subscribe(LOAD_FAILED, failures.append)
    system_scene._apply_reload(LoadResult(tmp_path / "x.xml", error="Malformed save"))
    assert "Malformed save" in system_scene.hud.toasts
    assert len(failures) == 1
    assert system_scene.current_system.name == "Alpha"


def test_legend_click_hides_object(system_scene, display):
    system_scene.select(2)
    system_scene.render(display)
    rect = system_scene.legend.rect
    click = pygame.event.Event(pygame.MOUSEBUTTONDOWN, button=1, pos=(rect.x + 40, rect.y + 4 + 22 + 5))
    system_scene.handle_event(click)
    assert system_scene.legend.hidden == {1}
    system_scene.render(display)


def test_empty_system_text_constant():
    assert EMPTY_SYSTEM_TEXT == "Spooky empty system"


def test_picker_lists_discovered_saves(display, context, sample_save):
    picker = PickerScene()
    context.scene_manager.push(picker, context=context)
    assert [p for p, _ in picker.saves_list.items] == [sample_save]
    picker.render(display)


def test_picker_opens_save_and_pushes_viewer(display, context, sample_save, wait_idle):
    loaded = []
    context.event_bus.subscribe(SAVE_LOADED, loaded.append)
    picker = PickerScene()
    context.scene_manager.push(picker, context=context)
    picker.open(sample_save)
    wait_idle(context.loader)
    picker.update(0.016)
    assert isinstance(context.scene_manager.current(), SystemScene)
    assert loaded and loaded[0].path == sample_save


def test_picker_shows_load_error(display, context, tmp_path, wait_idle):
    picker = PickerScene()
    context.scene_manager.push(picker, context=context)
    picker.path_input.text = str(tmp_path / "missing.xml")
    picker.handle_event(pygame.event.Event(pygame.KEYDOWN, key=pygame.K_RETURN, mod=0))
    wait_idle(context.loader)
    picker.update(0.016)
    assert context.scene_manager.current() is picker
    assert "Cannot read" in picker.message
    picker.render(display)


def test_picker_escape_quits(display, context):
    picker = PickerScene()
    context.scene_manager.push(picker, context=context)
    picker.handle_event(pygame.event.Event(pygame.KEYDOWN, key=pygame.K_ESCAPE, mod=0))
    assert context.running is False
