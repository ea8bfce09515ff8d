# scriptkb/utils/__init__.py
from .fs import dated_default_path, ensure_within, next_unnamed_file_path, resolve_destination, touch
from .gitignore import get_gitignore, is_ignored

__all__ = [
    "dated_default_path",
    "ensure_within",
    "get_gitignore",
    "is_ignored",
    "next_unnamed_file_path",
    "resolve_destination",
    "touch",
]
