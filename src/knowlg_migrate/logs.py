# SPDX-FileCopyrightText: 2025 knowlg-migrate contributors
# SPDX-License-Identifier: MIT

"""Console and log-file output for a migration run.

Records go to two places: a coloured console stream and the run's log
file. Pass ``extra={"tone": ...}`` to pick a colour explicitly (``info``,
``progress``, ``success`` or ``failure``); otherwise the level decides.
Records carrying ``extra={"console_only": True}`` never reach the log file.
"""

from __future__ import annotations

import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import Dict, Optional, TextIO

LOGGER_NAME = "knowlg_migrate"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
RULE = "=" * 46

RED = "\033[0;31m"
GREEN = "\033[0;32m"
YELLOW = "\033[1;33m"
BLUE = "\033[0;34m"
RESET = "\033[0m"

TONE_COLORS: Dict[str, str] = {
    "info": BLUE,
    "progress": YELLOW,
    "success": GREEN,
    "failure": RED,
}

LEVEL_TONES: Dict[int, str] = {
    logging.WARNING: "progress",
    logging.ERROR: "failure",
    logging.CRITICAL: "failure",
}


def log_file_name(now: Optional[datetime] = None) -> str:
    now = now or datetime.now()
    return f"migration_{now:%Y%m%d_%H%M%S}.log"


class ConsoleFormatter(logging.Formatter):
    def __init__(self, color: bool = True) -> None:
        super().__init__("%(message)s")
        self.color = color

    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)
        if not self.color or getattr(record, "plain", False):
            return message
        tone = getattr(record, "tone", None) or LEVEL_TONES.get(record.levelno)
        color = TONE_COLORS.get(tone or "")
        if color is None:
            return message
        return f"{color}{message}{RESET}"


class _SkipConsoleOnly(logging.Filter):
    def filter(self, record: logging.LogRecord) -> bool:
        return not getattr(record, "console_only", False)


def configure_logging(
    log_file: Path,
    color: bool = True,
    stream: Optional[TextIO] = None,
) -> logging.Logger:
    """Attach fresh console and file handlers to the package logger."""
    logger = logging.getLogger(LOGGER_NAME)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.setLevel(logging.INFO)
    logger.propagate = False

    console = logging.StreamHandler(stream or sys.stdout)
    console.setFormatter(ConsoleFormatter(color=color))
    logger.addHandler(console)

    log_file.parent.mkdir(parents=True, exist_ok=True)
    file_handler = logging.FileHandler(log_file, mode="a", encoding="utf-8")
    file_handler.setFormatter(logging.Formatter("[%(asctime)s] %(message)s", LOG_DATE_FORMAT))
    file_handler.addFilter(_SkipConsoleOnly())
    logger.addHandler(file_handler)
    return logger


def shutdown_logging() -> None:
    logger = logging.getLogger(LOGGER_NAME)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()


def echo(logger: logging.Logger, message: str = "") -> None:
    """Console-only, uncoloured line."""
    logger.info(message, extra={"console_only": True, "plain": True})


def header(logger: logging.Logger, title: str) -> None:
    echo(logger)
    for line in (RULE, title, RULE):
        logger.info(line, extra={"tone": "info"})
    echo(logger)
