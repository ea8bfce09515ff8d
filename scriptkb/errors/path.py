from .base import ScriptKBError


class PathViolation(ScriptKBError):
    """Raised when a block's relative file name resolves outside its working directory."""
