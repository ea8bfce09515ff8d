# scriptkb/extract/scanner.py

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import List, Optional, Union

from ..models.blocks import ExtractedBlock

FENCE = "```"

# Either terminator convention splits lines; content is re-joined with "\n".
_LINE_SPLIT_RE = re.compile(r"\r\n|\n")

# "filename: path/to/file.cs" anywhere on the line before a fence.
_PRE_FENCE_HINT_RE = re.compile(r"filename\s*:\s*(.+)", re.IGNORECASE)

# "// filename: x.cs" or "# filename: x.py" as the first line inside a fence.
_IN_CONTENT_HINT_RE = re.compile(r"^(//|#)\s*filename\s*:\s*(.+)$", re.IGNORECASE)


@dataclass(frozen=True)
class Outside:
    """Scanning free text. Non-blank lines seen here are filename hint sources."""

    last_non_empty_line: Optional[str] = None


@dataclass
class InsideBlock:
    """Accumulating a block between an opening and a closing fence."""

    file_name: Optional[str]
    # The outer line is restored when the block closes; lines inside never replace it.
    last_non_empty_line: Optional[str]
    lines: List[str] = field(default_factory=list)


State = Union[Outside, InsideBlock]


def is_fence(line: str) -> bool:
    return line.lstrip().startswith(FENCE)


def _pre_fence_hint(line: Optional[str]) -> Optional[str]:
    if not line or not line.strip():
        return None
    m = _PRE_FENCE_HINT_RE.search(line)
    if m:
        return m.group(1).strip()
    return None


def _finalize(block: InsideBlock) -> ExtractedBlock:
    lines = block.lines
    file_name = block.file_name
    if lines:
        m = _IN_CONTENT_HINT_RE.match(lines[0].strip())
        if m:
            file_name = m.group(2).strip()
            lines = lines[1:]
    content = "".join(line + "\n" for line in lines)
    return ExtractedBlock(content=content, file_name=file_name)


class BlockScanner:
    """
    Line-oriented scanner for ``` fenced blocks.

    Each fence line toggles between the Outside and InsideBlock states.
    The opening fence picks up a `filename: x` hint from the last non-blank
    line outside any block; the closing fence checks the first content line
    for a `// filename: x` or `# filename: x` comment, which overrides the
    earlier hint and is dropped from the content.

    Malformed input never raises: an unterminated block is discarded.
    """

    def __init__(self) -> None:
        self.state: State = Outside()
        self.blocks: List[ExtractedBlock] = []

    def step(self, line: str) -> Optional[ExtractedBlock]:
        """Advance by one line. Returns the block closed by this line, if any."""
        state = self.state
        if is_fence(line):
            if isinstance(state, Outside):
                self.state = InsideBlock(
                    file_name=_pre_fence_hint(state.last_non_empty_line),
                    last_non_empty_line=state.last_non_empty_line,
                )
                return None
            block = _finalize(state)
            self.blocks.append(block)
            self.state = Outside(state.last_non_empty_line)
            return block

        if isinstance(state, InsideBlock):
            state.lines.append(line)
        elif line.strip():
            self.state = Outside(line)
        return None

    def scan(self, text: str) -> List[ExtractedBlock]:
        """Scan a complete text and return its blocks in closing-fence order."""
        self.state = Outside()
        self.blocks = []
        for line in _LINE_SPLIT_RE.split(text):
            self.step(line)
        return list(self.blocks)


def extract_code_blocks(text: str) -> List[ExtractedBlock]:
    """Extract every complete fenced block from `text`."""
    if not text:
        return []
    return BlockScanner().scan(text)
