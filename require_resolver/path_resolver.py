"""Logic for resolving file system paths to Roblox instance paths."""

import logging
import posixpath
import re
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path

from require_resolver.convention_map import build_convention_map
from require_resolver.load_trees import load_project, load_sourcemap
from require_resolver.path_segments import (
    collapse_segments,
    join_logical_path,
    strip_source_extension,
)
from require_resolver.resolution_result import PathResolution
from require_resolver.resolver_cache import ResolverCache
from require_resolver.tree_models import (
    BoundProjectNode,
    ProjectDefinition,
    ProjectTreeNode,
    Sourcemap,
)

logger = logging.getLogger(__name__)

MAX_TREE_DEPTH = 256
FALLBACK_NAME = "Unknown"

DRIVE_RE = re.compile(r"^[A-Za-z]:/")


def normalize_path(path: str) -> str:
    """Canonicalize separators and collapse `.`/`..` segments."""
    p = path.replace("\\", "/")
    if not p:
        return ""
    norm = posixpath.normpath(p)
    return "" if norm == "." else norm


def is_absolute(path: str) -> bool:
    """Return True for posix-absolute or drive-letter paths."""
    return path.startswith("/") or bool(DRIVE_RE.match(path))


def relative_to(path: str, root: str) -> str | None:
    """Return `path` relative to `root`, or None if it lies outside.

    The shared prefix must end on a separator boundary, so `src/Foo` is not
    inside `src/Fo`.
    """
    if not root:
        return None if is_absolute(path) else path
    if path == root:
        return ""
    prefix = root.rstrip("/") + "/"
    if path.startswith(prefix):
        return path[len(prefix) :]
    return None


def bare_file_name(path: str) -> str:
    """Return the file name without its source extension; never empty."""
    name = posixpath.basename(normalize_path(path))
    return strip_source_extension(name) or name or FALLBACK_NAME


@dataclass
class WorkspaceTrees:
    """Structural snapshots loaded for one workspace root."""

    root: str
    sourcemap: Sourcemap | None = None
    project: ProjectDefinition | None = None


class PathResolver:
    """Resolves file system paths to instance paths.

    Priority: sourcemap, then project tree, then folder conventions, then the
    bare file name. Results are memoized until a tree snapshot changes.
    """

    def __init__(
        self,
        roots: Sequence[str | Path] = (),
        convention_map: dict[str, str] | None = None,
    ) -> None:
        """Initialize the resolver for a set of workspace roots."""
        self.workspaces = [WorkspaceTrees(normalize_path(str(r))) for r in roots]
        self.convention_map = build_convention_map(convention_map)
        self.cache = ResolverCache()

    def load_mapping_tree(self, root: str | Path, sourcemap: Sourcemap | None) -> None:
        """Replace the sourcemap snapshot of a workspace root."""
        self._workspace(root).sourcemap = sourcemap
        self.clear_cache()

    def load_project_tree(
        self, root: str | Path, project: ProjectDefinition | None
    ) -> None:
        """Replace the project tree snapshot of a workspace root."""
        self._workspace(root).project = project
        self.clear_cache()

    def reload_from_disk(self) -> None:
        """Re-read `sourcemap.json` and `default.project.json` for every root."""
        for ws in self.workspaces:
            ws.sourcemap = load_sourcemap(ws.root or ".")
            ws.project = load_project(ws.root or ".")
        self.clear_cache()

    def clear_cache(self) -> None:
        """Forget every memoized resolution."""
        self.cache.invalidate()

    def resolve(self, physical_path: str) -> str:
        """Resolve a physical path to its instance path. Never fails."""
        return self.resolve_with_tier(physical_path).logical_path

    def resolve_with_tier(self, physical_path: str) -> PathResolution:
        """Resolve a physical path, also reporting which tier produced it."""
        cached = self.cache.lookup(physical_path)
        if cached is not None:
            return cached
        resolution = self._resolve_uncached(physical_path)
        logger.debug(
            "Resolved %s -> %s (%s)",
            physical_path,
            resolution.logical_path,
            resolution.tier,
        )
        self.cache.update(resolution)
        return resolution

    def relative_display_path(self, physical_path: str) -> str:
        """Return the path relative to its owning root, or the normalized path."""
        target = normalize_path(physical_path)
        _, relative = self._find_workspace(target)
        return relative if relative is not None else target

    def _resolve_uncached(self, physical_path: str) -> PathResolution:
        target = normalize_path(physical_path)
        ws, relative = self._find_workspace(target)

        if ws is not None and relative is not None:
            for tier in ("sourcemap", "project"):
                try:
                    if tier == "sourcemap":
                        segments = self._resolve_from_sourcemap(target, ws)
                    else:
                        segments = self._resolve_from_project(relative, ws)
                except Exception:
                    logger.exception("%s lookup failed for %s", tier, physical_path)
                    continue
                if segments:
                    return PathResolution(
                        physical_path, join_logical_path(segments), tier
                    )

        if relative is not None:
            try:
                segments = self._resolve_from_convention(relative)
            except Exception:
                logger.exception("Convention lookup failed for %s", physical_path)
                segments = []
            if segments:
                return PathResolution(
                    physical_path, join_logical_path(segments), "convention"
                )

        return PathResolution(
            physical_path,
            join_logical_path([bare_file_name(physical_path)]),
            "filename",
        )

    def _find_workspace(
        self, target: str
    ) -> tuple[WorkspaceTrees | None, str | None]:
        for ws in self.workspaces:
            relative = relative_to(target, ws.root)
            if relative is not None:
                return ws, relative
        # Relative inputs nobody claims are taken as already root-relative
        return None, (None if is_absolute(target) else target)

    def _workspace(self, root: str | Path) -> WorkspaceTrees:
        key = normalize_path(str(root))
        for ws in self.workspaces:
            if ws.root == key:
                return ws
        ws = WorkspaceTrees(key)
        self.workspaces.append(ws)
        return ws

    def _resolve_from_sourcemap(
        self, target: str, ws: WorkspaceTrees
    ) -> list[str] | None:
        if ws.sourcemap is None:
            return None
        wanted = strip_source_extension(target)

        stack = [(node, (node.name,), 1) for node in reversed(ws.sourcemap.children)]
        while stack:
            node, names, depth = stack.pop()
            if depth > MAX_TREE_DEPTH:
                logger.debug("Sourcemap deeper than %s at %s", MAX_TREE_DEPTH, names)
                continue
            for file_path in node.file_paths:
                full = normalize_path(posixpath.join(ws.root, file_path))
                if strip_source_extension(full) == wanted:
                    return list(names)
            stack.extend(
                (child, (*names, child.name), depth + 1)
                for child in reversed(node.children)
            )
        return None

    def _resolve_from_project(
        self, relative: str, ws: WorkspaceTrees
    ) -> list[str] | None:
        if ws.project is None:
            return None

        stack: list[tuple[ProjectTreeNode, tuple[str, ...], int]] = [
            (ws.project.tree, (), 0)
        ]
        while stack:
            node, names, depth = stack.pop()
            if depth > MAX_TREE_DEPTH:
                logger.debug("Project tree deeper than %s at %s", MAX_TREE_DEPTH, names)
                continue
            if isinstance(node, BoundProjectNode):
                remainder = relative_to(relative, normalize_path(node.path))
                if remainder is not None:
                    rest = remainder.split("/") if remainder else []
                    segments = [*names, *collapse_segments(rest)]
                    if segments:
                        return segments
            stack.extend(
                (child, (*names, key), depth + 1)
                for key, child in reversed(list(node.children.items()))
            )
        return None

    def _resolve_from_convention(self, relative: str) -> list[str]:
        segments = collapse_segments(relative.split("/")) if relative else []
        if not segments:
            return []
        mapped = self.convention_map.get(segments[0].lower())
        if mapped:
            segments = [*mapped.split("."), *segments[1:]]
        return segments
