import logging

from phpbeautify import beautify
from phpbeautify._logging import NoopLogger, resolve_logger


def test_resolve_logger_default_noop():
    lg = resolve_logger()
    assert isinstance(lg, NoopLogger)
    # Should not raise:
    lg.debug("hello")
    lg.warning("world")


def test_resolve_logger_enabled_creates_logger(caplog):
    with caplog.at_level(logging.INFO):
        lg = resolve_logger(enabled=True, name="phpbeautify.test")
        lg.info("test message")
    assert any("test message" in rec.message for rec in caplog.records)


def test_resolve_logger_uses_passed_logger():
    custom = logging.getLogger("x")
    assert resolve_logger(logger=custom) is custom


def test_beautify_is_silent_by_default(caplog):
    with caplog.at_level(logging.DEBUG):
        beautify("<p><?= $x ?></p>")
    assert not [r for r in caplog.records if r.name == "phpbeautify.core"]


def test_beautify_logs_when_enabled(caplog):
    with caplog.at_level(logging.DEBUG, logger="phpbeautify.core"):
        beautify("<?php echo 1; ?>", log=True)
    assert any("single code block" in rec.message for rec in caplog.records)
