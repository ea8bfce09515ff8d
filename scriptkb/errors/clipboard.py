from .base import ScriptKBError


class ClipboardError(ScriptKBError):
    """Raised when the system clipboard cannot be read."""
