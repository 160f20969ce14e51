"""
Intcode VM - Logging Setup

Same layout as the vECU tools: a rich console handler for humans and an
optional plain file handler that captures everything at DEBUG.

File format:
    2026-01-19 10:31:02 | DEBUG   | intcode_vm.emu | _run:212 | Output 42 at pc=9
"""

import logging
from pathlib import Path
from typing import Optional, Union

from rich.console import Console
from rich.logging import RichHandler

FILE_FORMAT = "%(asctime)s | %(levelname)-7s | %(name)s | %(funcName)s:%(lineno)d | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logging(
    name: str = "intcode_vm",
    console_level: int = logging.WARNING,
    log_file: Optional[Union[str, Path]] = None,
) -> logging.Logger:
    """Configure and return the package logger.

    Safe to call more than once; handlers are only attached the first
    time, later calls just return the logger.
    """
    logger = logging.getLogger(name)
    if logger.handlers:
        return logger
    logger.setLevel(logging.DEBUG)

    # ── Console handler: stderr, stdout is reserved for program output ──
    console = RichHandler(
        level=console_level,
        console=Console(stderr=True),
        show_time=False,
        show_path=False,
        rich_tracebacks=True,
    )
    logger.addHandler(console)

    # ── File handler: captures everything (DEBUG+) ──
    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        fh = logging.FileHandler(str(log_path), encoding="utf-8")
        fh.setLevel(logging.DEBUG)
        fh.setFormatter(logging.Formatter(FILE_FORMAT, datefmt=DATE_FORMAT))
        logger.addHandler(fh)
        logger.debug("Log file: %s", log_path)

    return logger
