# scriptkb/utils/fs.py
import datetime
import itertools
import ntpath
import os
from typing import AbstractSet, Optional

from ..errors.path import PathViolation


def _basename(file_name: str) -> str:
    # ntpath splits on both '/' and '\\', so hints written on Windows behave too.
    return ntpath.basename(file_name)


def resolve_destination(file_name: str, work_dir: str, *, ignore_relative: bool = False) -> str:
    """
    Resolves a block's file name to an absolute destination path.

    - Absolute names are used as-is.
    - Relative names are joined onto `work_dir`.
    - With `ignore_relative`, any directory part is dropped and the file
      lands directly in `work_dir`, absolute or not.
    """
    name = file_name.strip()
    if ignore_relative:
        return os.path.join(os.path.abspath(work_dir), _basename(name))
    if os.path.isabs(name):
        return os.path.normpath(name)
    parts = [p for p in name.replace("\\", "/").split("/") if p]
    return os.path.normpath(os.path.join(os.path.abspath(work_dir), *parts))


def ensure_within(root: str, path: str) -> str:
    """
    Return the absolute form of `path`, raising PathViolation if it is not
    inside `root`. Symlinks in existing parents are resolved before comparing.
    """
    root_real = os.path.realpath(root)
    resolved = os.path.realpath(path)
    try:
        inside = os.path.commonpath([root_real, resolved]) == root_real
    except ValueError:
        # Different drives on Windows.
        inside = False
    if not inside or resolved == root_real:
        raise PathViolation(f"'{path}' resolves outside '{root}'")
    return os.path.abspath(path)


def _is_free(candidate: str, reserved: Optional[AbstractSet[str]]) -> bool:
    return not os.path.exists(candidate) and not (reserved and candidate in reserved)


def next_unnamed_file_path(work_dir: str, reserved: Optional[AbstractSet[str]] = None) -> str:
    """Returns the first free `unnamed-file-{i}.txt` in `work_dir`, counting from 1."""
    base = os.path.abspath(work_dir)
    for i in itertools.count(1):
        candidate = os.path.join(base, f"unnamed-file-{i}.txt")
        if _is_free(candidate, reserved):
            return candidate


def dated_default_path(
    work_dir: str,
    *,
    today: Optional[datetime.date] = None,
    reserved: Optional[AbstractSet[str]] = None,
) -> str:
    """Returns the first free `YYYY-MM-DD-NNN.txt` in `work_dir`, counting from 001."""
    base = os.path.abspath(work_dir)
    date_part = (today or datetime.date.today()).strftime("%Y-%m-%d")
    for i in itertools.count(1):
        candidate = os.path.join(base, f"{date_part}-{i:03d}.txt")
        if _is_free(candidate, reserved):
            return candidate


def touch(path: str) -> bool:
    """Creates an empty file, or bumps the mtime of an existing one. True when created."""
    if os.path.exists(path):
        os.utime(path, None)
        return False
    parent = os.path.dirname(path)
    if parent:
        os.makedirs(parent, exist_ok=True)
    with open(path, "w", encoding="utf-8"):
        pass
    return True
