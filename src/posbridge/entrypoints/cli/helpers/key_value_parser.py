"""Parser for ``KEY=VALUE`` config arguments.

Values are kept as strings, except that a value which parses as JSON
(integers, booleans, null, lists, objects) is stored decoded so
``enabled=true`` stores a boolean. Quote a value in JSON to force a string:
``code='"007"'``.

Non-integer numbers (``NaN`` and ``Infinity`` included) stay strings (``price=1.5`` stores ``"1.5"``) because
DynamoDB rejects Python floats.
"""

import json
from typing import Any

import click


def _decode(raw: str) -> Any:
    try:
        return json.loads(raw, parse_float=str, parse_constant=str)
    except ValueError:
        return raw


def parse_key_values(
    ctx: click.Context,  # pylint: disable=unused-argument
    param: click.Parameter | None,  # pylint: disable=unused-argument
    value: tuple[str, ...],
) -> dict[str, Any]:
    """Click callback that turns ``KEY=VALUE`` arguments into a dict.

    Later duplicates win.

    Raises:
        click.BadParameter: If an argument has no ``=`` or an empty key.
    """
    payload: dict[str, Any] = {}
    for item in value:
        key, sep, raw = item.partition("=")
        if not sep or not key.strip():
            raise click.BadParameter(f"Expected KEY=VALUE, got {item!r}")
        payload[key.strip()] = _decode(raw)
    return payload
