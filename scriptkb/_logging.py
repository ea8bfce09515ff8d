"""
Logging for scriptkb library code stays silent until a caller asks for it.

Functions that do I/O take `logger=` and `log=` keywords and call
resolve_logger() once; the CLI passes its own logger, tests pass `log=True`
and read records through caplog.
"""
from __future__ import annotations

import logging

DEFAULT_LOGGER_NAME = "scriptkb"


class NoopLogger:
    """Stands in for a Logger and drops every record."""

    def _drop(self, *args, **kwargs):  # type: ignore[no-untyped-def]
        return None

    debug = info = warning = error = exception = critical = _drop


def resolve_logger(
    logger: logging.Logger | None = None,
    *,
    enabled: bool = False,
    name: str | None = None,
    level: int = logging.INFO,
) -> logging.Logger | NoopLogger:
    """
    An explicit `logger` always wins. Otherwise `enabled` yields the named
    stdlib logger at `level`, propagating to the root; disabled yields a
    NoopLogger.
    """
    if logger is not None:
        return logger
    if not enabled:
        return NoopLogger()
    named = logging.getLogger(name or DEFAULT_LOGGER_NAME)
    named.setLevel(level)
    named.propagate = True
    return named
