import logging
import sys
from pathlib import Path
from typing import Optional

from loguru import logger
from rich.console import Console

from inotify_broker.watcher.event import Event

__all__ = [
    "console",
    "logger",
    "configure_logging",
    "format_event",
]

console = Console()

log_format = "<green>{time:YYYY-MM-DD HH:mm:ss.SSS zz}</green> | <level>{level: <8}</level> | <yellow>{name}:{line}</yellow> <b>{message}</b>"


class InterceptHandler(logging.Handler):
    """Forward stdlib logging records to loguru."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            level: str | int = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        frame, depth = logging.currentframe(), 2
        while frame is not None and frame.f_code.co_filename == logging.__file__:
            frame = frame.f_back
            depth += 1

        logger.opt(depth=depth, exception=record.exc_info).log(level, record.getMessage())


def configure_logging(level: str = "INFO", log_file: Optional[Path] = None) -> None:
    """Send library logs through loguru to stderr and, optionally, a file."""
    logger.remove()
    logger.add(sys.stderr, level=level, format=log_format, colorize=True)
    if log_file is not None:
        logger.add(
            str(log_file),
            level="DEBUG",
            format=log_format,
            colorize=False,
            backtrace=True,
            diagnose=True,
        )
    logging.basicConfig(handlers=[InterceptHandler()], level=0, force=True)


def format_event(event: Event) -> str:
    """Rich markup line for one event."""
    flags = ", ".join(event.mask_names()) or "-"
    line = f"[bold]{event.fullname}[/bold] [cyan]{flags}[/cyan]"
    if event.cookie:
        line += f" [magenta]cookie={event.cookie}[/magenta]"
    return line
