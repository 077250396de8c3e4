"""Logic for formatting and splitting Roblox instance path segments."""

import re

ROOT_TOKEN = "game"
SOURCE_EXTENSIONS = (".luau", ".lua")
ROLE_SUFFIXES = (".server", ".client")
INDEX_TOKEN = "init"

IDENTIFIER_RE = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")
# .Name or ["quoted name"] with backslash escapes
SEGMENT_RE = re.compile(
    r"""\.([A-Za-z_][A-Za-z0-9_]*)|\[(["'])((?:\\.|(?!\2).)*)\2\]"""
)


def format_segment(name: str) -> str:
    """Format a single segment as `.Name` or as a quoted bracket accessor."""
    if IDENTIFIER_RE.match(name):
        return f".{name}"
    escaped = name.replace("\\", "\\\\").replace('"', '\\"')
    return f'["{escaped}"]'


def join_logical_path(segments: list[str], root: str = ROOT_TOKEN) -> str:
    """Join segments onto a root token using the segment formatting rule."""
    return root + "".join(format_segment(s) for s in segments)


def split_logical_path(path: str) -> list[str]:
    """Split a logical path into its raw segments, root token included.

    `game.ReplicatedStorage["My Module"]` -> ["game", "ReplicatedStorage", "My Module"]
    """
    head = re.match(r"^[A-Za-z_][A-Za-z0-9_]*", path)
    if not head:
        return []
    segments = [head.group(0)]
    pos = head.end()
    while pos < len(path):
        match = SEGMENT_RE.match(path, pos)
        if not match:
            # Trailing garbage is kept verbatim as a final segment
            segments.append(path[pos:])
            break
        if match.group(1) is not None:
            segments.append(match.group(1))
        else:
            segments.append(re.sub(r"\\(.)", r"\1", match.group(3)))
        pos = match.end()
    return segments


def strip_source_extension(name: str) -> str:
    """Remove a trailing `.luau`/`.lua` extension, case-insensitively."""
    lower = name.lower()
    for ext in SOURCE_EXTENSIONS:
        if lower.endswith(ext):
            return name[: -len(ext)]
    return name


def strip_script_suffixes(name: str) -> str:
    """Remove the source extension and then any `.server`/`.client` role suffix."""
    name = strip_source_extension(name)
    lower = name.lower()
    for suffix in ROLE_SUFFIXES:
        if lower.endswith(suffix):
            return name[: -len(suffix)]
    return name


def is_index_segment(segment: str) -> bool:
    """Return True if the segment names an `init` file standing for its folder."""
    return strip_script_suffixes(segment).lower() == INDEX_TOKEN


def collapse_segments(segments: list[str]) -> list[str]:
    """Strip script suffixes from every segment and drop index segments."""
    return [
        strip_script_suffixes(s) for s in segments if s and not is_index_segment(s)
    ]
