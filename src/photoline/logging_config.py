import logging
import sys
from logging import config as logging_config

# Third-party loggers that are noisy at INFO
QUIET_LOGGERS = ("sqlalchemy.engine", "sqlalchemy.pool", "multipart", "urllib3")


class ColoredFormatter(logging.Formatter):
    """Prefix the level name with an ANSI color when writing to a terminal."""

    COLOR_MAP = {
        "DEBUG": "\x1b[36m",
        "INFO": "\x1b[32m",
        "WARNING": "\x1b[33m",
        "ERROR": "\x1b[31m",
        "CRITICAL": "\x1b[41m",
    }
    RESET = "\x1b[0m"

    def __init__(self, fmt: str | None = None, datefmt: str | None = None, colored: bool | None = None):
        super().__init__(fmt=fmt, datefmt=datefmt)
        self.colored = sys.stdout.isatty() if colored is None else colored

    def format(self, record: logging.LogRecord) -> str:
        if not self.colored:
            return super().format(record)
        original_levelname = record.levelname
        record.levelname = f"{self.COLOR_MAP.get(original_levelname, '')}{original_levelname}{self.RESET}"
        try:
            return super().format(record)
        finally:
            record.levelname = original_levelname


def configure_logging(level: str = "INFO", colored: bool | None = None) -> None:
    """Send application, uvicorn and audit-event logs to stdout."""

    formatter = {
        "()": "photoline.logging_config.ColoredFormatter",
        "format": "%(asctime)s %(levelname)-5s [%(name)s] %(message)s",
        "datefmt": "%Y-%m-%d %H:%M:%S",
        "colored": colored,
    }

    cfg = {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {"default": formatter},
        "handlers": {
            "default": {"class": "logging.StreamHandler", "formatter": "default", "stream": "ext://sys.stdout"},
        },
        "loggers": {
            "photoline": {"handlers": ["default"], "level": level, "propagate": False},
            "uvicorn": {"handlers": ["default"], "level": level, "propagate": False},
            "uvicorn.access": {"handlers": ["default"], "level": level, "propagate": False},
            **{name: {"level": "WARNING"} for name in QUIET_LOGGERS},
        },
        "root": {"handlers": ["default"], "level": level},
    }

    logging_config.dictConfig(cfg)


__all__ = ["configure_logging", "ColoredFormatter"]
