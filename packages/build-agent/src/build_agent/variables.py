"""Helpers behind the variable and input accessors."""

from __future__ import annotations

import re
from collections.abc import Mapping

INPUT_PREFIX = "INPUT_"

# $NAME, ${NAME}, or any other braced token such as ${} (expands to "")
_REFERENCE = re.compile(r"\$(?:\{([^}]*)\}|([A-Za-z_][A-Za-z0-9_]*))")
_IDENTIFIER = re.compile(r"[A-Za-z_][A-Za-z0-9_]*")


def input_key(name: str) -> str:
    """Transform an input name into its normalized key: spaces to ``_``, upper case."""
    return name.replace(" ", "_").upper()


def input_variable_name(name: str) -> str:
    return INPUT_PREFIX + input_key(name)


def expand_references(pattern: str, env: Mapping[str, str]) -> str:
    """Substitute ``$NAME`` and ``${NAME}`` with the upper-cased variable's value.

    Unknown variables and malformed references become empty strings. Values
    are inserted verbatim and never expanded again.
    """

    def _replace(match: re.Match[str]) -> str:
        braced, bare = match.group(1), match.group(2)
        name = bare if bare is not None else braced
        if not _IDENTIFIER.fullmatch(name):
            return ""
        return env.get(name.upper(), "")

    return _REFERENCE.sub(_replace, pattern)


def split_delimited(value: str, delimiter: str) -> list[str]:
    """Split on ``delimiter`` and drop blank entries, keeping order."""
    return [item for item in value.split(delimiter) if item.strip()]


def parse_bool(value: str) -> bool:
    return (value or "false").strip().lower() == "true"
