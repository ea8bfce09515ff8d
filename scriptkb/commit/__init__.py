from .core import NAMING_SCHEMES, PendingFile, WriteSummary, plan_block_files, write_files

__all__ = ["NAMING_SCHEMES", "PendingFile", "WriteSummary", "plan_block_files", "write_files"]
