from .base import ScriptKBError
from .clipboard import ClipboardError
from .path import PathViolation
from .repository import RepositoryError
from .write import WriteError

__all__ = ["ScriptKBError", "ClipboardError", "PathViolation", "RepositoryError", "WriteError"]
