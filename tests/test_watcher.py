#!/usr/bin/env python3
"""
Tests for hot reloading of an ignore file

The handler is driven with watchdog event objects directly, so no observer
thread or filesystem notification backend is involved except in the
start/stop tests.
"""

import sys
import time
from pathlib import Path

import pytest
from watchdog.events import (
    FileCreatedEvent,
    FileDeletedEvent,
    FileModifiedEvent,
    FileMovedEvent,
    DirModifiedEvent,
)

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from pathignore.errors import IgnoreFileError
from pathignore.matcher import MatchStrategy
from pathignore.watcher import IgnoreFileHandler, WatchedIgnoreSet


def wait_for(condition, timeout=5.0):
    deadline = time.monotonic() + timeout
    while time.monotonic() < deadline:
        if condition():
            return True
        time.sleep(0.01)
    return condition()


@pytest.fixture
def ignore_file(tmp_path):
    path = tmp_path / ".gitignore"
    path.write_text("*.log\n", encoding="utf-8")
    return path


@pytest.fixture
def watched(ignore_file):
    return WatchedIgnoreSet(ignore_file)


def test_initial_load(watched):
    assert watched.current.patterns == ("*.log",)
    assert watched.matches_path("debug.log")
    assert not watched.is_running


def test_initial_load_requires_file(tmp_path):
    with pytest.raises(IgnoreFileError):
        WatchedIgnoreSet(tmp_path / "missing")


def test_reload_swaps_rules(watched, ignore_file):
    reloaded = []
    watched.on_reload = reloaded.append

    ignore_file.write_text("*.tmp\n", encoding="utf-8")
    assert watched.reload()

    assert not watched.matches_path("debug.log")
    assert watched.matches_path("x.tmp")
    assert reloaded == [watched.current]


def test_failed_reload_keeps_previous_rules(watched, ignore_file):
    ignore_file.unlink()
    ignore_file.mkdir()

    assert not watched.reload()
    assert watched.matches_path("debug.log")


def test_reload_keeps_strategy(ignore_file):
    watched = WatchedIgnoreSet(ignore_file, strategy=MatchStrategy.BACKTRACKING)
    watched.reload()
    assert watched.current.strategy is MatchStrategy.BACKTRACKING


def test_handler_reloads_on_modify(watched, ignore_file):
    handler = IgnoreFileHandler(watched, debounce_seconds=0)
    ignore_file.write_text("build/**\n", encoding="utf-8")

    handler.on_modified(FileModifiedEvent(str(ignore_file)))

    assert watched.current.patterns == ("build/**",)


def test_handler_ignores_other_files_and_directories(watched, ignore_file, tmp_path):
    handler = IgnoreFileHandler(watched, debounce_seconds=0)
    ignore_file.write_text("changed\n", encoding="utf-8")

    handler.on_modified(FileModifiedEvent(str(tmp_path / "other.txt")))
    handler.on_modified(DirModifiedEvent(str(tmp_path)))

    assert watched.current.patterns == ("*.log",)


def test_handler_reloads_once_after_a_burst(watched, ignore_file):
    """Only the last write of a burst is loaded, after the file goes quiet"""
    reloaded = []
    watched.on_reload = reloaded.append
    handler = IgnoreFileHandler(watched, debounce_seconds=0.3)

    ignore_file.write_text("first\n", encoding="utf-8")
    handler.on_modified(FileModifiedEvent(str(ignore_file)))
    ignore_file.write_text("second\n", encoding="utf-8")
    handler.on_modified(FileModifiedEvent(str(ignore_file)))
    assert watched.current.patterns == ("*.log",)

    assert wait_for(lambda: reloaded)
    assert watched.current.patterns == ("second",)
    assert len(reloaded) == 1
    assert not handler.has_pending


def test_handler_last_event_decides(watched, ignore_file):
    handler = IgnoreFileHandler(watched, debounce_seconds=0.3)

    ignore_file.unlink()
    handler.on_deleted(FileDeletedEvent(str(ignore_file)))
    ignore_file.write_text("*.bak\n", encoding="utf-8")
    handler.on_created(FileCreatedEvent(str(ignore_file)))

    assert wait_for(lambda: watched.current.patterns == ("*.bak",))
    assert not handler.has_pending


def test_handler_cancel_drops_pending_reload(watched, ignore_file):
    handler = IgnoreFileHandler(watched, debounce_seconds=60)
    ignore_file.write_text("changed\n", encoding="utf-8")
    handler.on_modified(FileModifiedEvent(str(ignore_file)))
    assert handler.has_pending

    handler.cancel()

    assert not handler.has_pending
    assert watched.current.patterns == ("*.log",)


def test_handler_delete_and_create(watched, ignore_file):
    handler = IgnoreFileHandler(watched, debounce_seconds=0)

    ignore_file.unlink()
    handler.on_deleted(FileDeletedEvent(str(ignore_file)))
    assert len(watched.current) == 0
    assert not watched.matches_path("debug.log")

    ignore_file.write_text("*.bak\n", encoding="utf-8")
    handler.on_created(FileCreatedEvent(str(ignore_file)))
    assert watched.matches_path("old.bak")


def test_handler_atomic_save(watched, ignore_file, tmp_path):
    """Writing a temp file and renaming it over the ignore file reloads it"""
    handler = IgnoreFileHandler(watched, debounce_seconds=0)
    temp = tmp_path / ".gitignore.swp"
    temp.write_text("*.swp\n", encoding="utf-8")
    temp.replace(ignore_file)

    handler.on_moved(FileMovedEvent(str(temp), str(ignore_file)))

    assert watched.current.patterns == ("*.swp",)


def test_handler_move_away(watched, ignore_file, tmp_path):
    handler = IgnoreFileHandler(watched, debounce_seconds=0)
    moved = tmp_path / "gitignore.old"
    ignore_file.replace(moved)

    handler.on_moved(FileMovedEvent(str(ignore_file), str(moved)))

    assert len(watched.current) == 0


def test_start_and_stop(watched):
    with watched:
        assert watched.is_running
    assert not watched.is_running


def test_stop_cancels_pending_reload(ignore_file):
    watched = WatchedIgnoreSet(ignore_file, debounce_seconds=60)
    watched.start()
    handler = watched._handler
    ignore_file.write_text("changed\n", encoding="utf-8")
    handler.on_modified(FileModifiedEvent(str(ignore_file)))

    watched.stop()

    assert not handler.has_pending
    assert watched.current.patterns == ("*.log",)
