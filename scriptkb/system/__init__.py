"""
Reading the system clipboard through whichever paste tool the platform ships.

Public API:
  - read_clipboard() -> str
"""
from __future__ import annotations

import os
import subprocess
from typing import List, Sequence

from ..errors import ClipboardError

__all__ = ["read_clipboard"]

# First tool present on PATH wins.
_PASTE_COMMANDS: Sequence[List[str]] = (
    ["pbpaste"],  # macOS
    ["powershell", "-NoProfile", "-Command", "Get-Clipboard -Raw"],  # Windows
    ["wl-paste", "--no-newline"],  # Wayland
    ["xclip", "-selection", "clipboard", "-o"],  # X11
    ["xsel", "--clipboard", "--output"],
)


def read_clipboard() -> str:
    """
    Return the current clipboard text.
    Raises ClipboardError if no paste tool is installed or every one fails.
    """
    errors: List[str] = []
    for cmd in _PASTE_COMMANDS:
        if not _on_path(cmd[0]):
            continue
        try:
            proc = subprocess.run(cmd, capture_output=True, check=False)
        except OSError as e:
            errors.append(f"{cmd[0]}: {e}")
            continue
        if proc.returncode == 0:
            return proc.stdout.decode("utf-8", errors="replace")
        errors.append(f"{cmd[0]}: exit status {proc.returncode}")
    if not errors:
        raise ClipboardError("No clipboard tool found (tried pbpaste, powershell, wl-paste, xclip, xsel)")
    raise ClipboardError("; ".join(errors))


def _on_path(tool: str) -> bool:
    """True if an executable named `tool` (or `tool` + a PATHEXT suffix on Windows) is on PATH."""
    suffixes = [""]
    if os.name == "nt":
        suffixes += [s.lower() for s in os.environ.get("PATHEXT", ".EXE;.BAT;.CMD").split(";") if s]
    for folder in os.environ.get("PATH", "").split(os.pathsep):
        for suffix in suffixes:
            candidate = os.path.join(folder, tool + suffix)
            if os.path.isfile(candidate) and os.access(candidate, os.X_OK):
                return True
    return False
