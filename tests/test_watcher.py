import queue
import threading
import time

import pytest
from watchdog.events import DirCreatedEvent, FileDeletedEvent, FileModifiedEvent

from quire.config import load_config
from quire.errors import BuildError, WatchError
from quire.watcher import SiteWatcher, _ChangeHandler


def make_watcher(tmp_path):
    (tmp_path / "data").mkdir(exist_ok=True)
    return SiteWatcher(load_config(False, environ={}, cwd=tmp_path))


def test_handler_queues_every_event_type(tmp_path):
    events = queue.Queue()
    handler = _ChangeHandler(events)
    modified = FileModifiedEvent(str(tmp_path / "data" / "a.md"))
    deleted = FileDeletedEvent(str(tmp_path / "data" / "b.md"))
    created_dir = DirCreatedEvent(str(tmp_path / "data" / "drafts"))

    for event in (modified, deleted, created_dir):
        handler.dispatch(event)

    assert [events.get_nowait() for _ in range(3)] == [modified, deleted, created_dir]


def test_handler_dispatch_errors_are_logged_and_ignored(tmp_path, capsys):
    class BrokenQueue:
        def put(self, item):
            raise RuntimeError("delivery failed")

    handler = _ChangeHandler(BrokenQueue())
    handler.dispatch(FileModifiedEvent(str(tmp_path / "a.md")))
    err = capsys.readouterr().err
    assert "watch error" in err
    assert "delivery failed" in err


def test_each_event_triggers_a_full_rebuild(monkeypatch, tmp_path):
    watcher = make_watcher(tmp_path)
    calls = []

    def fake_rebuild(config):
        calls.append(config)
        return "built"

    monkeypatch.setattr("quire.watcher.rebuild", fake_rebuild)
    for name in ("a.md", "a.md", "b.md"):
        watcher.events.put(FileModifiedEvent(str(tmp_path / "data" / name)))

    results = [watcher.run_once(timeout=0) for _ in range(3)]
    assert results == ["built", "built", "built"]
    assert calls == [watcher.config] * 3
    assert watcher.run_once(timeout=0) is None
    assert len(calls) == 3


def test_rebuild_flag_resets_after_failure(monkeypatch, tmp_path):
    watcher = make_watcher(tmp_path)
    seen = {}

    def failing_rebuild(config):
        seen["rebuilding"] = watcher.rebuilding
        raise BuildError(tmp_path / "data" / "a.md", "boom")

    monkeypatch.setattr("quire.watcher.rebuild", failing_rebuild)
    watcher.events.put(FileModifiedEvent(str(tmp_path / "data" / "a.md")))
    with pytest.raises(BuildError):
        watcher.run_once(timeout=0)
    assert seen["rebuilding"] is True
    assert watcher.rebuilding is False


def test_run_once_logs_event(monkeypatch, tmp_path, capsys):
    watcher = make_watcher(tmp_path)
    monkeypatch.setattr("quire.watcher.rebuild", lambda config: None)
    path = str(tmp_path / "data" / "a.md")
    watcher.events.put(FileModifiedEvent(path))
    watcher.run_once(timeout=0)
    assert f"modified: {path}" in capsys.readouterr().out


def test_subscribe_missing_data_dir(tmp_path):
    watcher = SiteWatcher(load_config(False, environ={}, cwd=tmp_path))
    with pytest.raises(WatchError):
        watcher.subscribe()


def test_subscribe_and_stop(tmp_path):
    watcher = make_watcher(tmp_path)
    watcher.subscribe()
    try:
        assert watcher._observer is not None
        assert watcher._observer.is_alive()
    finally:
        watcher.stop()
    assert watcher._observer is None
    watcher.stop()  # no-op once stopped


def wait_for(predicate, timeout=10.0):
    deadline = time.monotonic() + timeout
    while time.monotonic() < deadline:
        if predicate():
            return True
        time.sleep(0.05)
    return predicate()


def read_or_empty(path):
    try:
        return path.read_text(encoding="utf-8")
    except OSError:
        return ""


def test_start_builds_then_rebuilds_on_change(tmp_path):
    watcher = make_watcher(tmp_path)
    data = tmp_path / "data"
    (data / "first.md").write_text("# First\n01-02-2024\n\nHello.", encoding="utf-8")
    webpage = tmp_path / "webpage"

    thread = threading.Thread(target=watcher.start, kwargs={"poll_interval": 0.05}, daemon=True)
    thread.start()
    try:
        assert wait_for(lambda: (webpage / "first.html").exists())
        assert wait_for(lambda: watcher._observer is not None)

        (data / "second.md").write_text("# Second\n03-04-2024\n\nAgain.", encoding="utf-8")
        assert wait_for(lambda: (webpage / "second.html").exists())
        assert wait_for(lambda: "Second" in read_or_empty(webpage / "index.html"))
    finally:
        watcher.stop()
        thread.join(timeout=5)
    assert not thread.is_alive()
