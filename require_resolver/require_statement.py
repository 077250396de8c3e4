"""Logic for rendering `local Name = require(...)` statements."""

import re

from require_resolver.path_segments import strip_script_suffixes

NON_IDENTIFIER_RE = re.compile(r"[^A-Za-z0-9_]")


def variable_name(display_name: str, *, capitalize: bool = False) -> str:
    """Turn a module name into a valid Luau local variable name."""
    name = strip_script_suffixes(display_name)
    name = NON_IDENTIFIER_RE.sub("_", name)
    if not name:
        return "_"
    if name[0].isdigit():
        name = f"_{name}"
    if capitalize:
        name = name[0].upper() + name[1:]
    return name


def require_statement(
    display_name: str, require_path: str, *, capitalize: bool = False
) -> str:
    """Render the statement inserted for a chosen module."""
    name = variable_name(display_name, capitalize=capitalize)
    return f"local {name} = require({require_path})"
