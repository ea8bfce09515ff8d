from .commit import PendingFile, WriteSummary, plan_block_files, write_files
from .errors import ClipboardError, PathViolation, RepositoryError, ScriptKBError, WriteError
from .extract import BlockScanner, extract_code_blocks, extract_think_tags
from .models import ExtractedBlock, ThinkResult
from .repository import central_repo_path, copy_to_central_repo
from .system import read_clipboard
from .utils.fs import dated_default_path, ensure_within, next_unnamed_file_path, resolve_destination
from .watch import ClipEvent, ClipWatcher, looks_like_filename

__version__ = "0.1.0"

__all__ = [
    "BlockScanner",
    "extract_code_blocks",
    "extract_think_tags",
    "ExtractedBlock",
    "ThinkResult",
    "plan_block_files",
    "write_files",
    "PendingFile",
    "WriteSummary",
    "resolve_destination",
    "ensure_within",
    "next_unnamed_file_path",
    "dated_default_path",
    "central_repo_path",
    "copy_to_central_repo",
    "read_clipboard",
    "ClipWatcher",
    "ClipEvent",
    "looks_like_filename",
    "ScriptKBError",
    "WriteError",
    "RepositoryError",
    "ClipboardError",
    "PathViolation",
]
