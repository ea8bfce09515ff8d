# scriptkb/utils/gitignore.py
import os
from typing import Iterator, List

import pathspec

# Never write into a repository's metadata, .gitignore or not.
ALWAYS_IGNORED = (".git/",)


def _ancestors(start: str) -> Iterator[str]:
    cur = start
    while True:
        yield cur
        parent = os.path.dirname(cur)
        if parent == cur:
            return
        cur = parent


def _nearest_patterns(start: str) -> List[str]:
    for folder in _ancestors(start):
        candidate = os.path.join(folder, ".gitignore")
        if not os.path.isfile(candidate):
            continue
        try:
            with open(candidate, encoding="utf-8", errors="ignore") as f:
                return f.read().splitlines()
        except OSError:
            continue
    return []


def get_gitignore(path: str) -> pathspec.PathSpec:
    """
    Ignore rules for destinations under `path`: the closest .gitignore at or
    above it, plus '.git/'. A malformed file falls back to '.git/' alone.
    """
    base = os.path.abspath(path or ".")
    if os.path.isfile(base):
        base = os.path.dirname(base)
    patterns = list(ALWAYS_IGNORED) + _nearest_patterns(base)
    try:
        return pathspec.PathSpec.from_lines("gitwildmatch", patterns)
    except Exception:
        return pathspec.PathSpec.from_lines("gitwildmatch", ALWAYS_IGNORED)


def is_ignored(spec: pathspec.PathSpec, path: str, root: str) -> bool:
    """True if `path` sits under `root` and matches `spec`. Paths outside `root` never match."""
    root_abs = os.path.abspath(root)
    path_abs = os.path.abspath(path)
    try:
        if os.path.commonpath([root_abs, path_abs]) != root_abs:
            return False
    except ValueError:
        # Different drives on Windows.
        return False
    # POSIX-style relative path, as PathSpec expects.
    relative = os.path.relpath(path_abs, root_abs).replace(os.sep, "/")
    return spec.match_file(relative)
