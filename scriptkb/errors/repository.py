from .base import ScriptKBError


class RepositoryError(ScriptKBError):
    """Raised when the central repository cannot be created or written."""
