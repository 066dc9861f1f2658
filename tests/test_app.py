import pytest

from scansector.app import Application
from scansector.config import Config
from scansector.systems.event_bus import LOAD_FAILED, SAVE_LOADED
from scansector.systems.loader import LoadResult
from scansector.systems.settings import SettingsStore


@pytest.fixture
def app(tmp_path):
    application = Application(Config(data_dir=tmp_path / "data", saves_dir=tmp_path))
    yield application
    application.loader.shutdown()


def test_loaded_save_is_remembered(app, sample_save, tmp_path):
    app.event_bus.post(SAVE_LOADED, LoadResult(sample_save))
    stored = SettingsStore(tmp_path / "data").load()
    assert stored.recent == [str(sample_save)]
    assert stored.saves_dir == str(tmp_path)


def test_missing_recent_save_is_forgotten(app, sample_save, tmp_path):
    gone = tmp_path / "gone.xml"
    app.settings.add_recent(gone)
    app.settings.add_recent(sample_save)
    app.event_bus.post(LOAD_FAILED, LoadResult(gone, error=f"Cannot read {gone}"))
    assert app.settings.recent == [str(sample_save)]
    assert SettingsStore(tmp_path / "data").load().recent == [str(sample_save)]


def test_unparseable_save_stays_in_recent(app, sample_save):
    app.settings.add_recent(sample_save)
    app.event_bus.post(LOAD_FAILED, LoadResult(sample_save, error="Malformed save"))
    assert app.settings.recent == [str(sample_save)]


def test_theme_toggle_is_persisted(app, tmp_path):
    assert app.settings.theme == "dark"
    app.toggle_theme()
    assert app.palette is not None
    assert SettingsStore(tmp_path / "data").load().theme == "light"
