"""
Logging for ArtMarket.

All loggers live under the ``artmarket`` namespace; ``get_logger("auction")``
returns ``artmarket.auction``. Console output goes to stderr so that
command results printed on stdout stay machine readable.
"""

import logging
import sys
from pathlib import Path
from typing import TYPE_CHECKING, Optional

import colorlog

if TYPE_CHECKING:
    from artmarket.core.config import MarketConfig

ROOT_LOGGER = "artmarket"
LOG_FILE_NAME = "artmarket.log"

CONSOLE_FORMAT = "%(log_color)s%(asctime)s [%(name)s] %(levelname)-8s%(reset)s %(message)s"
FILE_FORMAT = "%(asctime)s [%(name)s] %(levelname)-8s %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

LEVEL_COLORS = {
    "DEBUG": "cyan",
    "INFO": "green",
    "WARNING": "yellow",
    "ERROR": "red",
    "CRITICAL": "red,bg_white",
}


class StderrHandler(colorlog.StreamHandler):
    """Colored handler bound to whatever ``sys.stderr`` is at emit time."""

    def __init__(self, level: int = logging.NOTSET):
        super().__init__()
        self.setLevel(level)

    @property
    def stream(self):
        return sys.stderr

    @stream.setter
    def stream(self, value):
        pass


class MarketLogger:
    """Owns the handlers attached to the ``artmarket`` logger"""

    _configured = False

    @classmethod
    def configure(cls, level: int = logging.INFO, log_file: Optional[Path] = None):
        """
        (Re)configure marketplace logging.

        Replaces any handlers installed by an earlier call, so the CLI can
        apply its settings after modules have already created loggers.

        Args:
            level: Logging level for every handler
            log_file: Also append plain-text records to this file
        """
        root = logging.getLogger(ROOT_LOGGER)
        root.setLevel(level)
        for handler in list(root.handlers):
            root.removeHandler(handler)
            handler.close()

        console = StderrHandler(level)
        console.setFormatter(
            colorlog.ColoredFormatter(CONSOLE_FORMAT, datefmt=DATE_FORMAT, log_colors=LEVEL_COLORS)
        )
        root.addHandler(console)

        if log_file is not None:
            log_file.parent.mkdir(parents=True, exist_ok=True)
            file_handler = logging.FileHandler(log_file, encoding="utf-8")
            file_handler.setLevel(level)
            file_handler.setFormatter(logging.Formatter(FILE_FORMAT, datefmt=DATE_FORMAT))
            root.addHandler(file_handler)

        cls._configured = True

    @classmethod
    def get_logger(cls, name: str) -> logging.Logger:
        if not cls._configured:
            cls.configure()
        return logging.getLogger(f"{ROOT_LOGGER}.{name}")


def get_logger(name: str) -> logging.Logger:
    """Get a logger for a marketplace subsystem (e.g. 'catalog', 'storage.sqlite')"""
    return MarketLogger.get_logger(name)


def setup_logging(config: "MarketConfig", debug: bool = False):
    """Apply the logging section of a MarketConfig; ``debug`` forces DEBUG."""
    level = logging.DEBUG if debug else config.log_level_value
    log_file = config.log_dir / LOG_FILE_NAME if config.log_to_file else None
    MarketLogger.configure(level=level, log_file=log_file)
