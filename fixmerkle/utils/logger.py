"""
Centralized logging configuration for fixmerkle.

Library modules call get_logger() at import time. The first such call
installs a color console handler at INFO so messages have somewhere to
go. An explicit setup_logging() call always replaces that default, so an
application can turn on DEBUG tree logs or a log file at any point.
"""

import logging
import sys
from pathlib import Path
from typing import Optional

import colorlog

ROOT_LOGGER_NAME = "fixmerkle"
LOG_FILE_NAME = "fixmerkle.log"

_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
_LOG_COLORS = {
    "DEBUG": "cyan",
    "INFO": "green",
    "WARNING": "yellow",
    "ERROR": "red",
    "CRITICAL": "red,bg_white",
}


def _console_handler(level: int) -> logging.Handler:
    handler = colorlog.StreamHandler(sys.stderr)
    handler.setLevel(level)
    handler.setFormatter(colorlog.ColoredFormatter(
        "%(log_color)s%(asctime)s [%(name)s] %(levelname)-8s%(reset)s %(message)s",
        datefmt=_DATE_FORMAT,
        log_colors=_LOG_COLORS,
    ))
    return handler


def _file_handler(log_dir: Path, level: int) -> logging.Handler:
    log_dir.mkdir(exist_ok=True, parents=True)
    handler = logging.FileHandler(log_dir / LOG_FILE_NAME)
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(
        "%(asctime)s [%(name)s] %(levelname)-8s %(message)s",
        datefmt=_DATE_FORMAT,
    ))
    return handler


class FixMerkleLogger:
    """Owns the handlers on the "fixmerkle" logger namespace"""

    _initialized = False
    _log_dir: Optional[Path] = None

    @classmethod
    def setup(
        cls,
        level: int = logging.INFO,
        log_dir: Optional[str] = None,
        log_to_file: bool = False,
        force: bool = False,
    ):
        """
        Install handlers on the package logger.

        Args:
            level: Logging level (DEBUG, INFO, WARNING, ERROR)
            log_dir: Directory for the log file. If None, uses ./logs
            log_to_file: Whether to also write fixmerkle.log
            force: Replace an existing configuration instead of keeping it
        """
        if cls._initialized and not force:
            return

        cls._close_handlers()

        root_logger = logging.getLogger(ROOT_LOGGER_NAME)
        root_logger.setLevel(level)
        root_logger.addHandler(_console_handler(level))

        if log_to_file:
            cls._log_dir = Path(log_dir) if log_dir else Path("logs")
            root_logger.addHandler(_file_handler(cls._log_dir, level))
        else:
            cls._log_dir = None

        cls._initialized = True

    @classmethod
    def _close_handlers(cls):
        root_logger = logging.getLogger(ROOT_LOGGER_NAME)
        for handler in list(root_logger.handlers):
            root_logger.removeHandler(handler)
            handler.close()

    @classmethod
    def reset(cls):
        """Drop installed handlers; the next get_logger() reinstalls defaults."""
        cls._close_handlers()
        cls._initialized = False
        cls._log_dir = None

    @classmethod
    def get_logger(cls, name: str) -> logging.Logger:
        """
        Get a logger for a specific component.

        Args:
            name: Component name (e.g., 'tree', 'proof')
        """
        cls.setup()
        return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")


# Convenience functions
def get_logger(name: str) -> logging.Logger:
    """Get a logger for a specific component"""
    return FixMerkleLogger.get_logger(name)


def setup_logging(
    level: int = logging.INFO,
    log_dir: Optional[str] = None,
    log_to_file: bool = False,
):
    """Apply logging configuration, replacing any earlier one"""
    FixMerkleLogger.setup(level=level, log_dir=log_dir, log_to_file=log_to_file, force=True)
