"""Option type tags and help-text flag hints.

Pure functions over :class:`~slana.core.models.ResolvedOption`; no
parser objects are touched here.
"""

from __future__ import annotations

from collections.abc import Iterable

from slana.core.models import ResolvedOption

STRING: str = "string"
NUMBER: str = "number"
BOOLEAN: str = "boolean"
ARRAY: str = "array"
COUNT: str = "count"

OPTION_TYPES: frozenset[str] = frozenset({STRING, NUMBER, BOOLEAN, ARRAY, COUNT})
"""Type tags an inventory option may declare.  No tag means ``string``."""


def normalize_type(tag: str | None) -> str | None:
    """Lower-case and strip *tag*; ``None`` and blank tags stay ``None``."""
    if tag is None:
        return None
    cleaned = str(tag).strip().lower()
    return cleaned or None


def is_known_type(tag: str | None) -> bool:
    return tag is None or tag in OPTION_TYPES


def parse_number(value: str) -> int | float:
    """Convert a command line token to ``int`` when integral, else ``float``.

    Raises ``ValueError`` for non-numeric input, which argparse reports as
    an invalid value.
    """
    try:
        return int(value)
    except ValueError:
        return float(value)


def flag_hint(option: ResolvedOption) -> str:
    """Render ``[--name]`` or ``[--name, -alias]``."""
    if option.alias:
        return f"[--{option.name}, -{option.alias}]"
    return f"[--{option.name}]"


def describe_with_hints(description: str | None, options: Iterable[ResolvedOption]) -> str | None:
    """Prefix *description* with one flag hint per option, in iteration order.

    Returns *description* unchanged when there are no options.
    """
    hints = [flag_hint(option) for option in options]
    if not hints:
        return description
    prefix = " ".join(hints)
    if not description:
        return prefix
    return f"{prefix} {description}"
