import logging
import os

import pytest

from scriptkb.errors import ClipboardError
from scriptkb.watch import ClipWatcher, looks_like_filename


class FakeClipboard:
    """Returns queued values, repeating the last one."""

    def __init__(self, *values):
        self.values = list(values)
        self.current = ""

    def __call__(self):
        if self.values:
            self.current = self.values.pop(0)
        if isinstance(self.current, Exception):
            raise self.current
        return self.current


@pytest.mark.parametrize(
    "text,expected",
    [
        ("main.py", True),
        ("  src/app.js\n", True),
        ("two words", False),
        ("line\nbreak", False),
        ("tab\tsep", False),
        ("", False),
        ("   ", False),
    ],
)
def test_looks_like_filename(text, expected):
    assert looks_like_filename(text) is expected


def test_filename_then_content(tmp_path, central_repo):
    clip = FakeClipboard("notes.md", "# Title\nbody text")
    watcher = ClipWatcher(str(tmp_path), read=clip)

    first = watcher.poll()
    assert first.kind == "create"
    assert (tmp_path / "notes.md").read_text(encoding="utf-8") == ""
    assert watcher.pending_file_name == "notes.md"

    second = watcher.poll()
    assert second.kind == "write"
    assert second.path == str(tmp_path / "notes.md")
    assert (tmp_path / "notes.md").read_text(encoding="utf-8") == "# Title\nbody text"
    assert second.mirrored == str(central_repo / "notes.md")
    assert watcher.pending_file_name is None


def test_content_without_pending_name_goes_to_unnamed(tmp_path):
    watcher = ClipWatcher(str(tmp_path), read=FakeClipboard("some copied text", "more copied text"), mirror=False)
    assert watcher.poll().path == str(tmp_path / "unnamed-file-1.txt")
    event = watcher.poll()
    assert event.kind == "write_new"
    assert event.path == str(tmp_path / "unnamed-file-2.txt")
    assert event.mirrored is None


def test_existing_file_name_is_touched(tmp_path):
    (tmp_path / "keep.txt").write_text("content", encoding="utf-8")
    watcher = ClipWatcher(str(tmp_path), read=FakeClipboard("keep.txt"), mirror=False)
    event = watcher.poll()
    assert event.kind == "touch"
    assert (tmp_path / "keep.txt").read_text(encoding="utf-8") == "content"


def test_unchanged_and_blank_values_are_ignored(tmp_path):
    watcher = ClipWatcher(str(tmp_path), read=FakeClipboard("hello there", "hello there", "  "), mirror=False)
    assert watcher.poll() is not None
    assert watcher.poll() is None
    assert watcher.poll() is None
    assert os.listdir(tmp_path) == ["unnamed-file-1.txt"]


def test_read_errors_are_logged_and_polling_continues(tmp_path, caplog):
    clip = FakeClipboard(ClipboardError("no tool"), "after the error")
    watcher = ClipWatcher(str(tmp_path), read=clip, mirror=False, log=True)
    with caplog.at_level(logging.ERROR):
        assert watcher.poll() is None
    assert any("Error reading clipboard: no tool" in rec.message for rec in caplog.records)
    assert watcher.poll().kind == "write_new"


def test_run_respects_max_polls_and_sleeps_between(tmp_path):
    sleeps = []
    events = []
    watcher = ClipWatcher(
        str(tmp_path),
        read=FakeClipboard("a.txt", "text for a"),
        mirror=False,
        interval=0.5,
        sleep=sleeps.append,
    )
    assert watcher.run(max_polls=3, on_event=events.append) == 3
    assert sleeps == [0.5, 0.5]
    assert [e.kind for e in events] == ["create", "write"]


def test_run_stops_on_keyboard_interrupt(tmp_path):
    def interrupt(_seconds):
        raise KeyboardInterrupt

    watcher = ClipWatcher(str(tmp_path), read=FakeClipboard("x y"), mirror=False, sleep=interrupt)
    assert watcher.run() == 1
