from .scanner import BlockScanner, extract_code_blocks, is_fence
from .think import extract_think_tags

__all__ = [
    "BlockScanner",
    "extract_code_blocks",
    "extract_think_tags",
    "is_fence",
]
