"""Structured logging setup for photorender."""

from __future__ import annotations

import logging
import sys
from pathlib import Path

from rich.console import Console
from rich.logging import RichHandler

DEFAULT_LOG_FILE = Path("photorender.log")

_PIL_LOGGERS = ("PIL", "PIL.Image", "PIL.PngImagePlugin", "PIL.TiffImagePlugin")


def build_handlers(console: Console | None = None, log_file: Path | None = None) -> list[logging.Handler]:
    """Console handler plus an optional file handler.

    With a rich ``console`` records are printed through it, so they land
    above a live progress bar drawn on the same console instead of tearing it.
    """
    if console is not None:
        stream: logging.Handler = RichHandler(
            console=console,
            show_time=False,
            show_level=False,
            show_path=False,
            markup=False,
        )
    else:
        stream = logging.StreamHandler(sys.stderr)

    handlers = [stream]
    if log_file is not None:
        handlers.append(logging.FileHandler(log_file, encoding="utf-8"))
    return handlers


def setup_logging(
    level: str = "INFO",
    log_file: Path | None = None,
    console: Console | None = None,
) -> None:
    """Configure structured logging with consistent format.

    Records go to stderr (or the given stderr console); stdout carries only
    the resulting model path.
    """
    logging.basicConfig(
        level=getattr(logging, level.upper()),
        format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        handlers=build_handlers(console, log_file),
    )

    # Pillow logs every plugin probe at DEBUG.
    pil_level = logging.DEBUG if level.upper() == "DEBUG" else logging.WARNING
    for name in _PIL_LOGGERS:
        logging.getLogger(name).setLevel(pil_level)
