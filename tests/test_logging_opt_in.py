import logging

from scriptkb._logging import NoopLogger, resolve_logger


def test_resolve_logger_default_noop():
    lg = resolve_logger()
    assert isinstance(lg, NoopLogger)
    # Should not raise:
    lg.debug("hello")
    lg.error("world")


def test_resolve_logger_enabled_creates_logger(caplog):
    with caplog.at_level(logging.INFO):
        lg = resolve_logger(enabled=True, name="scriptkb.test")
        lg.info("test message")
    assert any("test message" in rec.message for rec in caplog.records)


def test_resolve_logger_uses_passed_logger():
    custom = logging.getLogger("custom")
    assert resolve_logger(logger=custom, enabled=False) is custom
