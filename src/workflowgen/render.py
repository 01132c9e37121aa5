# render.py
from __future__ import annotations

from typing import Iterable, Mapping, Optional

from .errors import InvalidKeyError

# ---------------------------------------------------------------------
# YAML emission primitives
# ---------------------------------------------------------------------
# Only a conservative subset of YAML scalar rules is recognised: anything
# containing ':' or '#' anywhere, or starting with an indicator character,
# gets single-quoted even when YAML would accept it bare.
# ---------------------------------------------------------------------

INDENT_UNIT = "  "

UNSAFE_LEADING_CHARS = frozenset("!*-?{}[],|>@`\"'&")


def indent(text: str, levels: int) -> str:
    """Prefix every line of `text`, the first included, with `levels` indent units."""
    space = INDENT_UNIT * levels
    return space + text.replace("\n", "\n" + space)


def is_safe_string(value: str) -> bool:
    if ":" in value or "#" in value:
        return False
    return not (value and value[0] in UNSAFE_LEADING_CHARS)


def wrap(value: str) -> str:
    """Encode a string as a YAML scalar: block literal, bare, or single-quoted."""
    if "\n" in value:
        return " |\n" + indent(value, 1)
    if is_safe_string(value):
        return value
    return "'" + value.replace("'", "''") + "'"


def as_sequence_item(text: str) -> str:
    """Turn a rendered block into a `- ` list item, continuation lines aligned."""
    indented = indent(text, 1)
    return "-" + indented[1:]


def compile_list(items: Iterable[str]) -> str:
    return "\n".join("- " + wrap(item) for item in items)


def compile_env(env: Optional[Mapping[str, str]], header: str = "env") -> str:
    """
    Render a mapping as a `<header>:` block.

    Returns "" for an empty mapping so callers can omit the key entirely.
    Raises InvalidKeyError for keys that are not bare identifier-safe tokens.
    """
    if not env:
        return ""

    rendered = []
    for key, value in env.items():
        if " " in key or not is_safe_string(key):
            raise InvalidKeyError(key, mapping=header)
        rendered.append(f"{key}: {wrap(value)}")

    return f"{header}:\n" + indent("\n".join(rendered), 1)
