from dataclasses import dataclass, field
from typing import Optional, Tuple


@dataclass(frozen=True)
class ExtractedBlock:
    """A fenced code block pulled out of free text."""

    content: str
    file_name: Optional[str] = None


@dataclass(frozen=True)
class ThinkResult:
    """Text with its <think> sections removed, plus the removed bodies."""

    text: str
    thinks: Tuple[str, ...] = field(default_factory=tuple)
