# scriptkb/watch.py
import logging
import os
import time
from dataclasses import dataclass
from typing import Callable, Optional

from ._logging import resolve_logger
from .errors import ScriptKBError
from .repository import copy_to_central_repo
from .system import read_clipboard
from .utils.fs import next_unnamed_file_path, touch

_FILENAME_BREAKERS = (" ", "\t", "\r", "\n")


@dataclass
class ClipEvent:
    """What a single poll did with a new clipboard value."""

    kind: str  # "create", "touch", "write", "write_new"
    path: str
    mirrored: Optional[str] = None


def looks_like_filename(text: str) -> bool:
    """A non-blank clipboard value without inner whitespace is taken as a file name."""
    stripped = text.strip()
    return bool(stripped) and not any(ch in stripped for ch in _FILENAME_BREAKERS)


class ClipWatcher:
    """
    Polls the clipboard and turns what it sees into files.

    Copying a bare file name arms it as the pending target (the file is
    created, or its timestamp refreshed). The next multi-word copy is written
    to that target; without one it goes to the next `unnamed-file-N.txt`.
    Written files are mirrored into the central repository.
    """

    def __init__(
        self,
        work_dir: str,
        *,
        read: Optional[Callable[[], str]] = None,
        mirror: bool = True,
        repo_dir: Optional[str] = None,
        interval: float = 1.0,
        sleep: Callable[[float], None] = time.sleep,
        logger: Optional[logging.Logger] = None,
        log: bool = False,
    ):
        self.work_dir = os.path.abspath(work_dir)
        self.read = read or read_clipboard
        self.mirror = mirror
        self.repo_dir = repo_dir
        self.interval = interval
        self.sleep = sleep
        self.log = resolve_logger(logger=logger, enabled=log, name=__name__)
        self.last_text: Optional[str] = None
        self.pending_file_name: Optional[str] = None

    def handle(self, text: str) -> Optional[ClipEvent]:
        """Act on a clipboard value. Unchanged or blank values are ignored."""
        if text == self.last_text:
            return None
        self.last_text = text
        if not text.strip():
            return None

        if looks_like_filename(text):
            self.pending_file_name = text.strip()
            path = os.path.join(self.work_dir, self.pending_file_name)
            created = touch(path)
            self.log.info(f"{'Created' if created else 'Touched'} pending target {path}")
            return ClipEvent(kind="create" if created else "touch", path=path)

        if self.pending_file_name:
            path = os.path.join(self.work_dir, self.pending_file_name)
            kind = "write"
        else:
            path = next_unnamed_file_path(self.work_dir)
            kind = "write_new"
        with open(path, "w", encoding="utf-8", newline="") as f:
            f.write(text)
        self.pending_file_name = None
        self.log.info(f"Wrote {len(text)} chars to {path}")

        mirrored = copy_to_central_repo(path, repo_dir=self.repo_dir) if self.mirror else None
        return ClipEvent(kind=kind, path=path, mirrored=mirrored)

    def poll(self) -> Optional[ClipEvent]:
        """One iteration: read the clipboard and handle it. Errors are logged, not raised."""
        try:
            return self.handle(self.read())
        except (ScriptKBError, OSError) as e:
            self.log.error(f"Error reading clipboard: {e}")
            return None

    def run(
        self,
        max_polls: Optional[int] = None,
        on_event: Optional[Callable[[ClipEvent], None]] = None,
    ) -> int:
        """Poll until interrupted (or `max_polls` is reached). Returns the number of polls."""
        polls = 0
        try:
            while max_polls is None or polls < max_polls:
                event = self.poll()
                polls += 1
                if event is not None and on_event is not None:
                    on_event(event)
                if max_polls is None or polls < max_polls:
                    self.sleep(self.interval)
        except KeyboardInterrupt:
            self.log.info("Clipboard watcher stopped")
        return polls
