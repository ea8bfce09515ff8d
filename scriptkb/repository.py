"""
The central repository: a per-user directory that collects a copy of every
file the tools write.

Location, highest precedence first:
  - an explicit `repo_dir` argument (the CLI's --repo-dir),
  - the SCRIPT_KB_REPO environment variable,
  - ~/.script_kb/llm_code
"""
from __future__ import annotations

import os
import shutil

from .errors import RepositoryError

REPO_ENV_VAR = "SCRIPT_KB_REPO"
DEFAULT_REPO_PARTS = (".script_kb", "llm_code")

__all__ = ["REPO_ENV_VAR", "central_repo_path", "copy_to_central_repo"]


def central_repo_path(*, repo_dir: str | None = None, create: bool = True) -> str:
    """Return the absolute repository path, creating the directory unless `create` is False."""
    repo = repo_dir or os.environ.get(REPO_ENV_VAR) or os.path.join(
        os.path.expanduser("~"), *DEFAULT_REPO_PARTS
    )
    repo = os.path.abspath(os.path.expanduser(repo))
    if create and not os.path.isdir(repo):
        try:
            os.makedirs(repo, exist_ok=True)
        except OSError as e:
            raise RepositoryError(f"Cannot create central repository '{repo}': {e}") from e
    return repo


def copy_to_central_repo(file_path: str, *, repo_dir: str | None = None) -> str:
    """
    Copy `file_path` into the repository under its base name, overwriting any
    same-named file. Returns the destination path.
    """
    repo = central_repo_path(repo_dir=repo_dir)
    dest = os.path.join(repo, os.path.basename(file_path))
    if os.path.abspath(file_path) == dest:
        return dest
    try:
        shutil.copyfile(file_path, dest)
    except OSError as e:
        raise RepositoryError(f"Cannot copy '{file_path}' to central repository: {e}") from e
    return dest
