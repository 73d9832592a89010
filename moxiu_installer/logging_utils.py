from __future__ import annotations

import logging
import os
import sys
from pathlib import Path
from typing import Optional, TextIO


def default_log_path() -> str:
    state_home = os.environ.get("XDG_STATE_HOME") or str(Path.home() / ".local" / "state")
    return str(Path(state_home) / "moxiu-installer" / "install.log")


class ConsoleFormatter(logging.Formatter):
    """`[INFO] message` style console output, coloured on a TTY."""

    TAGS = {
        logging.DEBUG: ("DEBUG", "\033[0;34m"),
        logging.INFO: ("INFO", "\033[0;32m"),
        logging.WARNING: ("WARN", "\033[1;33m"),
        logging.ERROR: ("ERROR", "\033[0;31m"),
        logging.CRITICAL: ("ERROR", "\033[0;31m"),
    }
    RESET = "\033[0m"

    def __init__(self, *, color: bool) -> None:
        super().__init__(fmt="%(message)s")
        self.color = color

    def format(self, record: logging.LogRecord) -> str:
        tag, color = self.TAGS.get(record.levelno, (record.levelname, ""))
        msg = super().format(record)
        if self.color and color:
            return f"{color}[{tag}]{self.RESET} {msg}"
        return f"[{tag}] {msg}"


def configure_logging(
    log_path: Optional[str] = None,
    level: int = logging.INFO,
    also_console: bool = True,
    stream: Optional[TextIO] = None,
) -> str:
    """Configure logging.

    The file handler always records DEBUG and up so command output ends up in
    the log even when the console only shows INFO.

    Notes:
    - If the requested log file cannot be opened we fall back to a file in
      the working directory rather than running without a log.

    Returns the actual file path being used.
    """

    log_path = log_path or default_log_path()
    logger = logging.getLogger()
    logger.setLevel(logging.DEBUG)

    # Avoid duplicate handlers if configure_logging() is called multiple times.
    if getattr(logger, "_moxiu_configured", False):
        return getattr(logger, "_moxiu_log_path", log_path)

    handlers: list[logging.Handler] = []

    fmt = logging.Formatter(
        fmt="%(asctime)s %(levelname)s %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S%z",
    )

    try:
        Path(os.path.dirname(log_path) or ".").mkdir(parents=True, exist_ok=True)
        file_handler: logging.Handler = logging.FileHandler(log_path)
        chosen_path = log_path
    except OSError:
        # Fall back to a writable location.
        chosen_path = str(Path.cwd() / "moxiu-installer.log")
        file_handler = logging.FileHandler(chosen_path)
    file_handler.setFormatter(fmt)
    file_handler.setLevel(logging.DEBUG)
    handlers.append(file_handler)

    if also_console:
        out = stream or sys.stderr
        console = logging.StreamHandler(out)
        console.setFormatter(ConsoleFormatter(color=bool(getattr(out, "isatty", lambda: False)())))
        console.setLevel(level)
        handlers.append(console)

    for h in handlers:
        logger.addHandler(h)

    setattr(logger, "_moxiu_configured", True)
    setattr(logger, "_moxiu_log_path", chosen_path)

    logging.getLogger(__name__).debug(
        "Logging initialized (requested=%s, actual=%s)", log_path, chosen_path
    )
    return chosen_path
