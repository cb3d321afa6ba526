import logging

from photoline.logging_config import QUIET_LOGGERS, ColoredFormatter, configure_logging


def _record(level: int = logging.WARNING) -> logging.LogRecord:
    return logging.LogRecord("photoline.test", level, __file__, 1, "disk %s", ("full",), None)


def test_plain_format_when_not_colored():
    """Test plain output when colors are off."""
    formatter = ColoredFormatter("%(levelname)s %(message)s", colored=False)
    assert formatter.format(_record()) == "WARNING disk full"


def test_colored_format_restores_levelname():
    """Test colored output leaves the record's levelname untouched."""
    formatter = ColoredFormatter("%(levelname)s %(message)s", colored=True)
    record = _record(logging.ERROR)

    out = formatter.format(record)

    assert out.startswith("\x1b[31mERROR\x1b[0m")
    assert record.levelname == "ERROR"


def test_configure_logging_levels():
    """Test configure_logging sets the app level and quiets noisy loggers."""
    configure_logging(level="DEBUG", colored=False)

    assert logging.getLogger("photoline").level == logging.DEBUG
    assert logging.getLogger("photoline").propagate is False
    for name in QUIET_LOGGERS:
        assert logging.getLogger(name).level == logging.WARNING
