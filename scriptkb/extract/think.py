# scriptkb/extract/think.py
import re
from typing import List

from ..models.blocks import ThinkResult

_THINK_RE = re.compile(r"<think>(.*?)</think>", re.DOTALL | re.IGNORECASE)


def extract_think_tags(text: str) -> ThinkResult:
    """
    Removes every <think>...</think> section from `text`.
    Returns the remaining text and the stripped section bodies, in order.
    An unclosed <think> tag is left as-is.
    """
    if not text:
        return ThinkResult(text="")

    thinks: List[str] = []

    def _collect(m: "re.Match[str]") -> str:
        thinks.append(m.group(1).strip())
        return ""

    remaining = _THINK_RE.sub(_collect, text)
    return ThinkResult(text=remaining, thinks=tuple(thinks))
