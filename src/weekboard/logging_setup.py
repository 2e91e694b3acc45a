# src/weekboard/logging_setup.py

from __future__ import annotations

import logging
import sys
from pathlib import Path

LOG_FILE_NAME = "weekboard.log"
LOG_FORMAT = "%(asctime)s.%(msecs)03d %(levelname)-7s [%(threadName)s] %(name)s: %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


class _ConsoleNoiseFilter(logging.Filter):
    """
    Stderr shares the terminal with the board and the prompt.

    Our own records pass, but the reset thread only speaks up at WARNING
    since it prints while the user is typing. Anything from other
    libraries (and captured warnings) must be an ERROR to show.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        if not record.name.startswith("weekboard."):
            return record.levelno >= logging.ERROR
        if record.name == "weekboard.tasks.reset_scheduler":
            return record.levelno >= logging.WARNING
        return True


def level_from_name(name: object, default: int = logging.WARNING) -> int:
    """Map "info" / "DEBUG" / "20" to a logging level; unknown names give `default`."""
    text = str(name or "").strip().upper()
    if text.isdigit():
        return int(text)
    level = logging.getLevelName(text)
    return level if isinstance(level, int) else default


def _console_handler(level: int, formatter: logging.Formatter) -> logging.Handler:
    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level)
    handler.setFormatter(formatter)
    handler.addFilter(_ConsoleNoiseFilter())
    return handler


def _file_handler(path: Path, level: int, formatter: logging.Formatter) -> logging.Handler:
    handler = logging.FileHandler(str(path), encoding="utf-8")
    handler.setLevel(level)
    handler.setFormatter(formatter)
    return handler


def setup_logging(
    *,
    log_dir: str | Path = ".local/weekboard",
    console_level: int = logging.WARNING,
    file_level: int = logging.DEBUG,
) -> Path:
    """
    Route every record to the log file and a filtered subset to stderr.

    Replaces whatever handlers the root logger had, so run it once at
    startup. Returns the path of the log file.
    """
    directory = Path(log_dir)
    directory.mkdir(parents=True, exist_ok=True)
    log_file = directory / LOG_FILE_NAME

    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=LOG_DATE_FORMAT)

    root = logging.getLogger()
    for old in root.handlers[:]:
        root.removeHandler(old)
    root.setLevel(min(console_level, file_level))
    root.addHandler(_console_handler(console_level, formatter))
    root.addHandler(_file_handler(log_file, file_level, formatter))

    logging.captureWarnings(True)
    return log_file
