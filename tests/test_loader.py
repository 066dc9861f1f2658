import threading

from scansector.systems.loader import SaveLoader


def test_loads_in_background(sample_save, wait_idle):
    loader = SaveLoader()
    try:
        assert loader.poll() is None
        assert loader.start(sample_save)
        wait_idle(loader)
        result = loader.poll()
        assert result.ok
        assert result.path == sample_save
        assert [s.name for s in result.systems] == ["Alpha", "Corvus", "Zeta"]
        # result is handed out once
        assert loader.poll() is None
    finally:
        loader.shutdown()


def test_reports_save_errors(tmp_path, wait_idle):
    loader = SaveLoader()
    try:
        loader.start(tmp_path / "missing.xml")
        wait_idle(loader)
        result = loader.poll()
        assert not result.ok
        assert "Cannot read" in result.error
        assert result.systems == []
    finally:
        loader.shutdown()


def test_reports_unexpected_errors(tmp_path, wait_idle):
    def boom(path):
        raise RuntimeError("disk on fire")

    loader = SaveLoader(load_fn=boom)
    try:
        loader.start(tmp_path / "x.xml")
        wait_idle(loader)
        assert loader.poll().error == "RuntimeError: disk on fire"
    finally:
        loader.shutdown()


def test_refuses_second_start_while_busy(tmp_path, wait_idle):
    gate = threading.Event()

    def slow(path):
        gate.wait(10)
        return []

    loader = SaveLoader(load_fn=slow)
    try:
        assert loader.start(tmp_path / "a.xml")
        assert loader.busy
        assert not loader.start(tmp_path / "b.xml")
        assert loader.poll() is None
        gate.set()
        wait_idle(loader)
        result = loader.poll()
        assert result.ok and result.path == tmp_path / "a.xml"
        assert not loader.busy
    finally:
        gate.set()
        loader.shutdown()


def test_discarded_load_is_never_reported(tmp_path, wait_idle):
    started = threading.Event()
    gate = threading.Event()
    done = threading.Event()

    def slow(path):
        started.set()
        gate.wait(10)
        done.set()
        return []

    loader = SaveLoader(load_fn=slow)
    try:
        loader.start(tmp_path / "a.xml")
        assert started.wait(10)
        loader.discard()
        assert not loader.busy
        gate.set()
        assert done.wait(10)
        assert loader.poll() is None
        # a fresh load still works afterwards
        assert loader.start(tmp_path / "b.xml")
        wait_idle(loader)
        assert loader.poll().path == tmp_path / "b.xml"
    finally:
        gate.set()
        loader.shutdown()


def test_discard_when_idle_is_harmless():
    loader = SaveLoader(load_fn=lambda path: [])
    try:
        loader.discard()
        assert loader.poll() is None
    finally:
        loader.shutdown()
