"""Logging helpers used by the POSBRIDGE CLI.

Console output goes through Rich. Alongside it an in-memory "flight
recorder" keeps recent DEBUG records and writes them to disk once something
goes wrong, so a failed cascade delete can be diagnosed after the fact
without running at DEBUG all the time.
"""

from __future__ import annotations

import logging
import os
import platform
import sys
from logging.handlers import MemoryHandler
from pathlib import Path
from typing import TYPE_CHECKING, Literal, TypeAlias

import alembic
import boto3
import sqlalchemy
from rich.console import Console
from rich.logging import RichHandler

if TYPE_CHECKING:
    from logging import Logger

# pylint: disable=too-few-public-methods

PROJECT_PREFIX = "posbridge"

ColorSystem: TypeAlias = Literal["auto", "standard", "256", "truecolor", "windows"]

CONSOLE_FORMAT = "%(prefix)s %(message)s"
DEBUG_CONSOLE_FORMAT = "%(asctime)s %(name)s: %(message)s"
FLIGHT_RECORDER_FORMAT = (
    "[%(asctime)s] [%(process)d:%(threadName)s] "
    "%(levelname)s %(name)s:%(lineno)d: %(message)s"
)


class ThirdPartyPrefixFilter(logging.Filter):
    """Tag records from other libraries with a short ``[library]`` prefix.

    Records from ``posbridge.*`` loggers get an empty prefix. The filter never
    drops a record.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        if record.name.startswith(PROJECT_PREFIX):
            record.prefix = ""
        else:
            # e.g. "botocore.credentials" -> "[botocore]"
            record.prefix = f"[{record.name.split('.')[0]}]"
        return True


def config_console_handler(
    level: int = logging.INFO, debug_mode: bool = False, color: bool = True
) -> RichHandler:
    """Build the stderr console handler.

    Args:
        level: Minimum level shown (forced to DEBUG in debug mode).
        debug_mode: Show timestamps, logger names and source paths.
        color: Enable color output when True.

    Returns:
        RichHandler: Handler to attach to the root logger.
    """
    color_system: ColorSystem | None = "auto" if color else None
    console = Console(color_system=color_system, stderr=True)

    handler = RichHandler(
        level=logging.DEBUG if debug_mode else level,
        console=console,
        rich_tracebacks=True,
        show_time=False,
        show_path=debug_mode,
        enable_link_path=debug_mode,
    )

    if debug_mode:
        handler.setFormatter(logging.Formatter(fmt=DEBUG_CONSOLE_FORMAT))
    else:
        handler.setFormatter(logging.Formatter(fmt=CONSOLE_FORMAT))
        handler.addFilter(ThirdPartyPrefixFilter())

    return handler


def config_flight_recorder(
    path: Path,
    capacity: int = 2000,
    flush_level: int = logging.WARNING,
    flush_on_close: bool = False,
) -> MemoryHandler:
    """Build the in-memory flight recorder.

    Buffers up to ``capacity`` records at DEBUG granularity and writes them to
    ``path`` when a record at ``flush_level`` or above arrives, or on close
    when ``flush_on_close`` is set.

    Args:
        path: Destination file for flushed records.
        capacity: Number of records to buffer.
        flush_level: Level that triggers a flush.
        flush_on_close: Flush on close even without a triggering record.

    Returns:
        MemoryHandler: Memory-backed handler with a FileHandler target.
    """
    file_handler = logging.FileHandler(path, mode="w", encoding="utf-8")
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(logging.Formatter(FLIGHT_RECORDER_FORMAT))

    return MemoryHandler(
        capacity=capacity,
        flushLevel=flush_level,
        target=file_handler,
        flushOnClose=flush_on_close,
    )


def log_startup(  # pylint: disable=too-many-arguments
    logger: Logger,
    *,
    app_version: str,
    level: int,
    handlers: list[logging.Handler],
    log_path: Path | None,
    flight_recorder: bool,
    logger_levels: dict[str, int],
) -> None:
    """Log a one-line startup summary plus DEBUG diagnostics.

    The diagnostics cover interpreter and platform, process, working
    directory, storage library versions, active handlers and per-logger
    level overrides.
    """
    logger.info(
        "POSBRIDGE %s: console=%s, flight-recorder=%s",
        app_version,
        logging.getLevelName(level),
        "ON" if flight_recorder else "OFF",
    )

    logger.debug("Python: %s", sys.version.split()[0])
    logger.debug("Platform: %s %s", platform.system(), platform.release())
    logger.debug("PID: %s", os.getpid())
    logger.debug("CWD: %s", Path.cwd())
    logger.debug(
        "SQLAlchemy: %s, Alembic: %s, boto3: %s",
        sqlalchemy.__version__,
        alembic.__version__,
        boto3.__version__,
    )
    logger.debug("Handlers: %s", [type(h).__name__ for h in handlers])
    if flight_recorder:
        logger.debug("Flight recorder path: %s", log_path if log_path else "<none>")
    logger.debug(
        "Per-logger overrides: %s",
        {name: logging.getLevelName(lvl) for name, lvl in logger_levels.items()}
        or "<none>",
    )
