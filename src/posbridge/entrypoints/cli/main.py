"""POSBRIDGE CLI entry point.

Defines the top-level ``posbridge`` command (via Click-Extra), configures
logging, and registers the command groups:

- ``posbridge db``: forward-only schema management for the SQL backend.
- ``posbridge integrations``: create, inspect and delete integration records.

Examples
    $ posbridge --version
    $ posbridge -v integrations show 01J9Z6X4M3ZK8Q1W2E3R4T5Y6U
"""

import logging
from pathlib import Path
from typing import TYPE_CHECKING

import click
import click_extra as clickx
from platformdirs import user_log_dir

from posbridge import __version__
from posbridge.logging import config_console_handler, config_flight_recorder, log_startup

from .db import db as db_group
from .helpers.log_level_parser import parse_log_level
from .integrations import integrations as integrations_group

if TYPE_CHECKING:
    from logging import Handler

logger = logging.getLogger(__name__)


HELP = """POSBRIDGE command-line interface.

    POSBRIDGE keeps the records that connect a seller's point-of-sale system
    to the auction platform: integrations, keyed by ID and grouped by
    point-of-sale tenant, and the configs each integration owns.
    """


@clickx.extra_group(
    version=__version__,
    help=HELP,
    params=[
        clickx.ColorOption(show_envvar=True),
        clickx.TimerOption(show_envvar=True),
        clickx.ExtraVersionOption(),
    ],
)
@click.option(
    "--verbose",
    "-v",
    "verbose_count",
    count=True,
    help="Increase the default WARNING verbosity by one level per repetition.",
    default=0,
)
@click.option(
    "--quiet",
    "-q",
    "quiet_count",
    count=True,
    help="Decrease the default WARNING verbosity by one level per repetition.",
    default=0,
)
@click.option(
    "--debug/--no-debug",
    is_flag=True,
    help="Enable debug mode (timestamps, logger names and source paths).",
    default=False,
)
@click.option(
    "--log-path",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Path the flight recorder writes to.",
    default=Path(user_log_dir("posbridge", appauthor=False, ensure_exists=True))
    / "latest.log",
    envvar="POSBRIDGE_LOG_PATH",
    show_default=True,
    show_envvar=True,
)
@click.option(
    "--flight-recorder-capacity",
    type=int,
    default=2000,
    hidden=True,
    envvar="POSBRIDGE_FLIGHT_RECORDER_CAPACITY",
    show_envvar=True,
    help="Capacity of the flight recorder (in number of log records).",
)
@click.option(
    "--flight-recorder/--no-flight-recorder",
    "flight_recorder",
    is_flag=True,
    help=(
        "Keep the last N log records at DEBUG granularity (unaffected by -v/-q) "
        "and write them to --log-path when a WARNING/ERROR occurs, or on exit "
        "if --force-flush is set."
    ),
    default=True,
    show_envvar=True,
)
@click.option(
    "--force-flush/--no-force-flush",
    "force_flush_flight_recorder",
    is_flag=True,
    help="Write the flight recorder buffer to --log-path on exit even without errors.",
    default=False,
    show_default=True,
    show_envvar=True,
)
@click.option(
    "-L",
    "--logger-level",
    "logger_levels",
    multiple=True,
    callback=parse_log_level,
    help=(
        "Set the minimum level of specific loggers (NAME=LEVEL), for both the "
        "console and the flight recorder. Repeatable, e.g. -L botocore=DEBUG "
        "-L sqlalchemy.engine=INFO."
    ),
    default=("sqlalchemy=WARNING", "alembic=WARNING", "botocore=WARNING"),
    show_default=True,
    show_envvar=True,
)
@clickx.pass_context
def posbridge(  # pylint: disable=too-many-arguments, too-many-positional-arguments
    ctx: click.Context,
    verbose_count: int,
    quiet_count: int,
    debug: bool,
    log_path: Path,
    flight_recorder_capacity: int,
    flight_recorder: bool,
    force_flush_flight_recorder: bool,
    logger_levels: dict[str, int],
) -> None:
    """POSBRIDGE command-line interface."""

    # 0) effective console verbosity
    level = logging.WARNING - (10 * verbose_count) + (10 * quiet_count)
    level = max(logging.DEBUG, min(logging.CRITICAL, level))

    handlers: list[Handler] = [
        config_console_handler(
            level=level, debug_mode=debug, color=ctx.color is not False
        )
    ]

    # 1) flight recorder
    if flight_recorder:
        handlers.append(
            config_flight_recorder(
                path=log_path,
                capacity=flight_recorder_capacity,
                flush_on_close=force_flush_flight_recorder,
            )
        )

    # 2) root logger captures everything; handlers filter
    logging.basicConfig(level=logging.DEBUG, handlers=handlers, force=True)

    # 3) third-party logger levels
    for name, lvl in logger_levels.items():
        logging.getLogger(name).setLevel(lvl)

    log_startup(
        logger,
        app_version=__version__,
        level=level,
        handlers=handlers,
        log_path=log_path,
        flight_recorder=flight_recorder,
        logger_levels=logger_levels,
    )

    ctx.call_on_close(logging.shutdown)


posbridge.add_command(db_group)
posbridge.add_command(integrations_group)
