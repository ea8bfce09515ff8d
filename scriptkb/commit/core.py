# scriptkb/commit/core.py
import contextlib
import os
import tempfile
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Set

import pathspec

from .._logging import resolve_logger
from ..errors import PathViolation, RepositoryError, WriteError
from ..models.blocks import ExtractedBlock
from ..repository import central_repo_path, copy_to_central_repo
from ..utils.fs import dated_default_path, ensure_within, next_unnamed_file_path, resolve_destination
from ..utils.gitignore import is_ignored

NAMING_SCHEMES = ("unnamed", "dated")


@dataclass
class PendingFile:
    """Content slated to be written to an absolute path."""

    path: str
    content: str
    source: Optional[str] = None
    # Set for names taken from block text: the destination must stay inside it.
    root: Optional[str] = None


@dataclass
class WriteSummary:
    """Outcome of a write_files call."""

    written: List[str] = field(default_factory=list)
    mirrored: List[str] = field(default_factory=list)
    skipped: List[str] = field(default_factory=list)
    failed: List[str] = field(default_factory=list)
    dry_run: bool = False
    # Map destination path -> error string (when failed)
    errors: Dict[str, str] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return not self.failed


def plan_block_files(
    blocks: Iterable[ExtractedBlock],
    work_dir: str,
    *,
    ignore_relative: bool = False,
    naming: str = "unnamed",
) -> List[PendingFile]:
    """
    Assign a destination to every block, in order.

    Named blocks resolve through resolve_destination(); a relative name is
    confined to `work_dir` when written. Unnamed blocks get the
    next free generated name. Generated names skip paths already claimed by
    earlier blocks in the same plan, since nothing is on disk yet.
    """
    if naming not in NAMING_SCHEMES:
        raise ValueError(f"naming must be one of {NAMING_SCHEMES!r}")

    claimed: Set[str] = set()
    planned: List[PendingFile] = []
    for i, block in enumerate(blocks, start=1):
        root = None
        if block.file_name and block.file_name.strip():
            dest = resolve_destination(block.file_name, work_dir, ignore_relative=ignore_relative)
            if ignore_relative or not os.path.isabs(block.file_name.strip()):
                root = os.path.abspath(work_dir)
        elif naming == "dated":
            dest = dated_default_path(work_dir, reserved=claimed)
        else:
            dest = next_unnamed_file_path(work_dir, reserved=claimed)
        claimed.add(dest)
        planned.append(PendingFile(path=dest, content=block.content, source=f"block #{i}", root=root))
    return planned


def _write_atomic(path: str, content: str) -> None:
    dirpath = os.path.dirname(path) or "."
    fd, tmp = tempfile.mkstemp(prefix=".skb-", suffix=".tmp", dir=dirpath)
    try:
        with os.fdopen(fd, "w", encoding="utf-8", newline="") as f:
            f.write(content)
        os.replace(tmp, path)
    except Exception:
        with contextlib.suppress(OSError):
            os.remove(tmp)
        raise


def write_files(
    files: Iterable[PendingFile],
    *,
    mirror: bool = True,
    repo_dir: Optional[str] = None,
    mode: str = "best_effort",
    dry_run: bool = False,
    ignore_spec: Optional[pathspec.PathSpec] = None,
    ignore_root: Optional[str] = None,
    raise_on_error: bool = False,
    logger=None,
    log: bool = False,
) -> WriteSummary:
    """
    Write each pending file (overwriting) and optionally mirror it into the
    central repository.

    Args:
        files: PendingFile entries with absolute destinations. An entry whose
               `root` is set fails (PathViolation message) if it escapes it.
        mirror: Copy each written file into the central repository.
        repo_dir: Repository override; see scriptkb.repository.
        mode: "best_effort" (default) records failures and keeps going;
              "fail_fast" stops at the first failure.
        dry_run: Resolve and validate only; nothing touches the disk.
        ignore_spec: When given, destinations under `ignore_root` that the
                     spec matches are skipped.
        raise_on_error: Raise WriteError for the first failure instead of
                        returning it in the summary.

    Returns:
        WriteSummary with written/mirrored/skipped/failed paths.
    """
    if mode not in {"best_effort", "fail_fast"}:
        raise ValueError("mode must be one of {'best_effort','fail_fast'}")
    lg = resolve_logger(logger=logger, enabled=log, name=__name__)

    summary = WriteSummary(dry_run=dry_run)
    root = ignore_root or os.getcwd()

    for pf in files:
        dest = pf.path
        if pf.root is not None:
            try:
                ensure_within(pf.root, dest)
            except PathViolation as e:
                summary.failed.append(dest)
                summary.errors[dest] = str(e)
                lg.error(f"Refusing to write {pf.source or dest}: {e}")
                if raise_on_error:
                    raise WriteError(dest, str(e)) from e
                if mode == "fail_fast":
                    break
                continue

        if ignore_spec is not None and is_ignored(ignore_spec, dest, root):
            lg.info(f"Skipping ignored destination {dest}")
            summary.skipped.append(dest)
            continue

        if dry_run:
            dirpath = os.path.dirname(dest)
            if os.path.isdir(dest):
                error = f"Destination is a directory: '{dest}'"
            elif os.path.exists(dirpath) and not os.access(dirpath, os.W_OK):
                error = f"No write permission for directory '{dirpath}'"
            else:
                error = None
            if error is None:
                summary.written.append(dest)
                if mirror:
                    summary.mirrored.append(
                        os.path.join(central_repo_path(repo_dir=repo_dir, create=False), os.path.basename(dest))
                    )
                continue
            summary.failed.append(dest)
            summary.errors[dest] = error
        else:
            try:
                os.makedirs(os.path.dirname(dest) or ".", exist_ok=True)
                _write_atomic(dest, pf.content)
                summary.written.append(dest)
                lg.debug(f"Wrote {len(pf.content)} chars to {dest}")
                if mirror:
                    summary.mirrored.append(copy_to_central_repo(dest, repo_dir=repo_dir))
                continue
            except (OSError, RepositoryError) as e:
                summary.failed.append(dest)
                summary.errors[dest] = str(e)
                lg.error(f"Failed to write {pf.source or dest}: {e}")

        if raise_on_error:
            raise WriteError(dest, summary.errors[dest])
        if mode == "fail_fast":
            break

    return summary
