class ScriptKBError(Exception):
    """Base class for every error raised by scriptkb."""
