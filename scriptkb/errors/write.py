from .base import ScriptKBError


class WriteError(ScriptKBError):
    """Raised when extracted content cannot be written to its destination."""

    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to write '{path}': {reason}")
