"""Logic for extracting locally declared instance aliases from Luau source.

This is a whole-document heuristic, not a scope analysis: every matching
`local` declaration is visible everywhere, and a reassigned name keeps all of
its bindings.
"""

import re
from dataclasses import dataclass

from require_resolver.path_segments import (
    ROOT_TOKEN,
    format_segment,
    join_logical_path,
    split_logical_path,
)

SERVICE_DEPTH = 2

GET_SERVICE_RE = re.compile(
    r"""local\s+(\w+)\s*=\s*game:GetService\s*\(\s*["'](\w+)["']\s*\)"""
)
DOT_ACCESS_RE = re.compile(r"local\s+(\w+)\s*=\s*game\.(\w+)\s*(?:$|[\r\n;])", re.M)
CHAINED_ACCESS_RE = re.compile(
    r"""local\s+(\w+)\s*=\s*(\w+)((?:\s*\.\s*\w+|\s*\[\s*(?:"[^"]*"|'[^']*')\s*\])+)"""
)
CHAIN_PART_RE = re.compile(r"""\s*\.\s*(\w+)|\s*\[\s*(?:"([^"]*)"|'([^']*)')\s*\]""")


@dataclass(frozen=True)
class AliasBinding:
    """A local variable known to hold a specific instance path."""

    alias_name: str
    logical_path: str
    depth: int  # number of path segments, root included
    source_line_index: int


def extract_aliases(text: str) -> list[AliasBinding]:
    """Return alias bindings declared in `text`, deepest first.

    Ties keep first-seen order. Unparsable input yields an empty list.
    """
    if not isinstance(text, str) or not text:
        return []

    bindings: list[AliasBinding] = []
    known: dict[str, str] = {}  # alias -> logical path
    accessor_names: set[str] = set()

    for match in GET_SERVICE_RE.finditer(text):
        alias, service = match.group(1), match.group(2)
        path = join_logical_path([service])
        accessor_names.add(alias)
        known[alias] = path
        bindings.append(
            AliasBinding(alias, path, SERVICE_DEPTH, _line_of(text, match.start()))
        )

    for match in DOT_ACCESS_RE.finditer(text):
        alias, service = match.group(1), match.group(2)
        if not service[0].isupper() or alias in accessor_names:
            continue
        path = join_logical_path([service])
        known[alias] = path
        bindings.append(
            AliasBinding(alias, path, SERVICE_DEPTH, _line_of(text, match.start()))
        )

    for match in CHAINED_ACCESS_RE.finditer(text):
        alias, base, chain = match.group(1), match.group(2), match.group(3)
        base_path = known.get(base)
        if base_path is None or base == ROOT_TOKEN:
            continue
        suffix = "".join(_chain_segments(chain))
        if not suffix:
            continue
        path = base_path + suffix
        known[alias] = path
        bindings.append(
            AliasBinding(
                alias,
                path,
                len(split_logical_path(path)),
                _line_of(text, match.start()),
            )
        )

    # sorted() is stable: equal depths keep declaration-scan order
    return sorted(bindings, key=lambda b: -b.depth)


def _chain_segments(chain: str) -> list[str]:
    parts = []
    for part in CHAIN_PART_RE.finditer(chain):
        if part.group(1) is not None:
            parts.append(f".{part.group(1)}")
        else:
            name = part.group(2) if part.group(2) is not None else part.group(3)
            parts.append(format_segment(name))
    return parts


def _line_of(text: str, offset: int) -> int:
    return text.count("\n", 0, offset)
