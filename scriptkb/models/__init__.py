from .blocks import ExtractedBlock, ThinkResult

__all__ = ["ExtractedBlock", "ThinkResult"]
