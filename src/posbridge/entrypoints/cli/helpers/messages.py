"""Status lines for the POSBRIDGE CLI.

Every helper writes to **stderr** so JSON printed on stdout stays pipeable.
Glyphs degrade to ASCII when stderr cannot encode them.
"""

import click

GLYPHS = {
    "warn": ("⚠️", "[!]"),
    "success": ("✅", "[OK]"),
    "error": ("❌", "[X]"),
}


def _can_encode(text: str) -> bool:
    """Return True if *text* can be encoded on stderr."""
    stream = click.get_text_stream("stderr")  # pragma: no mutate
    encoding = getattr(stream, "encoding", None) or "ascii"
    try:
        text.encode(encoding)
    except UnicodeEncodeError:
        return False
    return True


def glyph(kind: str) -> str:
    """Marker for ``kind`` (``warn``, ``success`` or ``error``).

    Returns the emoji when stderr supports it, the ASCII fallback otherwise.
    """
    emoji, fallback = GLYPHS[kind]
    return emoji if _can_encode(emoji) else fallback


def warn(msg: str) -> None:
    """Emit a yellow, bold warning line, e.g. ``⚠️  Deleting 3 config(s).``"""
    click.secho(f"{glyph('warn')}  {msg}", fg="yellow", bold=True, err=True)


def success(msg: str) -> None:
    """Emit a green, bold success line."""
    click.secho(f"{glyph('success')}  {msg}", fg="green", bold=True, err=True)


def error(msg: str) -> None:
    """Emit a red, bold error line."""
    click.secho(f"{glyph('error')}  {msg}", fg="red", bold=True, err=True)
