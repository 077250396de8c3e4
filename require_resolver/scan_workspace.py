"""Logic for discovering Luau module files under a workspace root."""

from pathlib import Path

import pathspec

from require_resolver.module_index import FileEntry

MODULE_GLOB = "*.luau"


def scan_workspace(root: Path, exclude: list[str] | None = None) -> list[FileEntry]:
    """Return (file name, physical path, origin tag) for every module file.

    `exclude` holds gitignore-style patterns matched against the root-relative
    posix path.
    """
    spec = pathspec.GitIgnoreSpec.from_lines(exclude or [])
    entries: list[FileEntry] = []
    for f in sorted(root.rglob(MODULE_GLOB)):
        if not f.is_file():
            continue
        if spec.match_file(f.relative_to(root).as_posix()):
            continue
        entries.append((f.name, f.as_posix(), root.as_posix()))
    return entries
