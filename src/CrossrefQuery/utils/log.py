"""CrossrefQuery logging utilities.

One package logger, `log`, with a timestamp + abbreviated level prefix.
Query rendering and date decoding never log; the client and CLI do.
"""

from __future__ import annotations

import logging
from datetime import datetime
from pathlib import Path
from typing import Final

LOG_FORMAT: Final[str] = "%(asctime)s [%(levelabbr)s] %(message)s"
DATE_FORMAT: Final[str] = "%m-%d %H:%M:%S"

_LEVEL_ABBREV: Final[dict[int, str]] = {
    logging.DEBUG: "DEBG",
    logging.INFO: "INFO",
    logging.WARNING: "WARN",
    logging.ERROR: "ERRO",
    logging.CRITICAL: "ERRO",
}


class _AbbrevLevelFormatter(logging.Formatter):
    """Formatter exposing a four-letter `levelabbr` field."""

    def format(self, record: logging.LogRecord) -> str:  # noqa: A003 - record is stdlib name
        """Render a record after attaching its abbreviated level.

        Args:
            record: Record emitted by the package logger.

        Returns:
            The formatted line, e.g. `03-14 09:26:53 [DEBG] Crossref GET ...`.
        """
        record.levelabbr = _LEVEL_ABBREV.get(record.levelno, record.levelname[:4])
        return super().format(record)


log = logging.getLogger("CrossrefQuery")


def log_file_path(log_dir: str, action: str, *, now: datetime | None = None) -> Path:
    """Return `<log_dir>/<action>/<action>_<mmddHHMMSS>.log`."""
    stamp = (now or datetime.now()).strftime("%m%d%H%M%S")
    return Path(log_dir or "log") / action / f"{action}_{stamp}.log"


def configure_logging(
    *,
    level: str = "INFO",
    action: str | None = None,
    log_to_file: bool = False,
    log_dir: str = "log",
) -> None:
    """Configure the CrossrefQuery logger.

    The console follows `level`; the optional file handler always records
    DEBUG so request URLs end up in the log file. Calling it again replaces
    the previous handlers.

    Args:
        level: Logging level name (e.g. INFO, DEBUG). Unknown names fall
            back to INFO.
        action: CLI command name, used for the log file path.
        log_to_file: Whether to mirror logs to `<log_dir>/<action>/`.
        log_dir: Base directory for log files.
    """
    console_level = getattr(logging, (level or "INFO").upper(), logging.INFO)
    formatter = _AbbrevLevelFormatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)

    console = logging.StreamHandler()
    console.setLevel(console_level)
    console.setFormatter(formatter)
    handlers: list[logging.Handler] = [console]

    if log_to_file and action:
        path = log_file_path(log_dir, action)
        path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(path, encoding="utf-8")
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(formatter)
        handlers.append(file_handler)

    log.handlers.clear()
    for handler in handlers:
        log.addHandler(handler)
    log.setLevel(logging.DEBUG if len(handlers) > 1 else console_level)
    log.propagate = False
