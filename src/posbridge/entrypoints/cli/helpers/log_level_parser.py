"""Parser for the ``-L/--logger-level NAME=LEVEL`` CLI option.

Accepts repeated options and comma/space separated lists, and turns them
into a mapping of logger names to numeric levels on top of the defaults
that keep the storage libraries quiet.
"""

import logging
import re

import click

DEFAULT_LIB_LEVELS = {
    "sqlalchemy": logging.WARNING,
    "alembic": logging.WARNING,
    "botocore": logging.WARNING,
}


def split_items(value: str | list[str] | tuple[str, ...]) -> list[str]:
    """Flatten option values into non-empty items split on commas and whitespace."""
    values = [value] if isinstance(value, str) else list(value)
    return [item for v in values for item in re.split(r"[,\s]+", v) if item]


def parse_log_level(
    ctx: click.Context,  # pylint: disable=unused-argument
    param: click.Parameter | None,  # pylint: disable=unused-argument
    value: str | list[str] | tuple[str, ...],
) -> dict[str, int]:
    """Click callback that parses NAME=LEVEL pairs into a name->level dict.

    Raises:
        click.BadParameter: If an item is not NAME=LEVEL or LEVEL is unknown.
    """
    levels = dict(DEFAULT_LIB_LEVELS)
    for item in split_items(value):
        name, sep, level_str = item.partition("=")
        if not sep:
            raise click.BadParameter(f"Expected NAME=LEVEL, got {item!r}")
        lvl = logging.getLevelName(level_str.strip().upper())
        if not isinstance(lvl, int):
            raise click.BadParameter(f"Invalid log level: {level_str}")
        levels[name.strip()] = lvl
    return levels
