"""Logging setup for the hook.

stdout carries the resulting domain XML back to virt-launcher, so log records
go to stderr (through rich) and optionally to a file.
"""

from __future__ import annotations

import logging
from pathlib import Path

from rich.console import Console
from rich.logging import RichHandler

LOGGER_NAME = "vnc_passwd_hook"


def setup_logger(
    name: str = LOGGER_NAME,
    level: int | str = logging.INFO,
    log_file: Path | None = None,
) -> logging.Logger:
    """
    Configure and return the hook logger.

    Args:
        name: Logger name.
        level: Logging level (number or name).
        log_file: Optional path to a log file. If None, logs to stderr only.

    Returns:
        Configured logger.
    """
    log = logging.getLogger(name)
    log.setLevel(level)
    if log.handlers:
        return log

    console = RichHandler(
        console=Console(stderr=True),
        show_path=False,
        markup=False,
        rich_tracebacks=False,
    )
    console.setFormatter(logging.Formatter("%(name)s | %(message)s"))
    log.addHandler(console)

    if log_file:
        log_file = Path(log_file)
        log_file.parent.mkdir(parents=True, exist_ok=True)
        fh = logging.FileHandler(log_file, encoding="utf-8")
        fh.setFormatter(
            logging.Formatter(
                "%(asctime)s | %(levelname)s | %(name)s | %(message)s",
                datefmt="%Y-%m-%d %H:%M:%S",
            )
        )
        log.addHandler(fh)

    return log


def get_logger(name: str) -> logging.Logger:
    """Return a child of the hook logger for module `name`."""
    return logging.getLogger(f"{LOGGER_NAME}.{name}")
