"""Logic for loading Rojo sourcemaps and project files into tree models."""

import json
import logging
from collections.abc import Callable
from pathlib import Path
from typing import Any

from require_resolver.errors import StructuralParseError
from require_resolver.tree_models import (
    DEFAULT_ROOT_CLASS,
    BoundProjectNode,
    ContainerProjectNode,
    MappingTreeNode,
    ProjectDefinition,
    ProjectTreeNode,
    Sourcemap,
)

logger = logging.getLogger(__name__)

SOURCEMAP_FILE = "sourcemap.json"
PROJECT_FILE = "default.project.json"

# Untrusted input: deeper nesting is rejected instead of recursing further.
MAX_PARSE_DEPTH = 256


def parse_sourcemap(data: Any, source: str = SOURCEMAP_FILE) -> Sourcemap:
    """Build a Sourcemap from decoded JSON.

    Raises StructuralParseError when the data does not have the sourcemap shape.
    """
    if not isinstance(data, dict):
        raise StructuralParseError(source, "sourcemap root must be an object")
    return Sourcemap(
        name=str(data.get("name") or ""),
        class_name=str(data.get("className") or DEFAULT_ROOT_CLASS),
        file_paths=_parse_file_paths(data, source),
        children=tuple(
            _parse_mapping_node(child, source, 1)
            for child in _as_list(data.get("children"), source)
        ),
    )


def _parse_mapping_node(data: Any, source: str, depth: int) -> MappingTreeNode:
    if depth > MAX_PARSE_DEPTH:
        raise StructuralParseError(source, "sourcemap nesting too deep")
    if not isinstance(data, dict) or not isinstance(data.get("name"), str):
        raise StructuralParseError(source, "sourcemap node requires a string 'name'")
    class_name = data.get("className")
    return MappingTreeNode(
        name=data["name"],
        class_name=str(class_name) if class_name is not None else None,
        file_paths=_parse_file_paths(data, source),
        children=tuple(
            _parse_mapping_node(child, source, depth + 1)
            for child in _as_list(data.get("children"), source)
        ),
    )


def _parse_file_paths(data: dict[str, Any], source: str) -> tuple[str, ...]:
    paths = _as_list(data.get("filePaths"), source)
    if not all(isinstance(p, str) for p in paths):
        raise StructuralParseError(source, "'filePaths' must contain strings")
    return tuple(paths)


def _as_list(value: Any, source: str) -> list[Any]:
    if value is None:
        return []
    if not isinstance(value, list):
        msg = f"expected a list, got {type(value).__name__}"
        raise StructuralParseError(source, msg)
    return value


def parse_project(data: Any, source: str = PROJECT_FILE) -> ProjectDefinition:
    """Build a ProjectDefinition from decoded JSON."""
    if not isinstance(data, dict):
        raise StructuralParseError(source, "project root must be an object")
    if not isinstance(data.get("tree"), dict):
        raise StructuralParseError(source, "project requires a 'tree' object")
    return ProjectDefinition(
        name=str(data.get("name") or ""),
        tree=_parse_project_node(data["tree"], source, 0),
    )


def _parse_project_node(
    data: dict[str, Any], source: str, depth: int
) -> ProjectTreeNode:
    if depth > MAX_PARSE_DEPTH:
        raise StructuralParseError(source, "project tree nesting too deep")

    children: dict[str, ProjectTreeNode] = {}
    for key, value in data.items():
        # $-prefixed keys are properties; non-object values carry no children
        if key.startswith("$") or not isinstance(value, dict):
            continue
        children[key] = _parse_project_node(value, source, depth + 1)

    class_name = data.get("$className")
    class_name = str(class_name) if class_name is not None else None

    path = data.get("$path")
    if path is None:
        return ContainerProjectNode(class_name=class_name, children=children)
    if isinstance(path, dict):
        # Rojo also accepts {"optional": "path"}
        path = path.get("optional")
    if not isinstance(path, str):
        raise StructuralParseError(source, "'$path' must be a string")
    return BoundProjectNode(path=path, class_name=class_name, children=children)


def load_sourcemap(root: str | Path) -> Sourcemap | None:
    """Load `sourcemap.json` from a workspace root, or None if absent or invalid."""
    return _load_tree_file(Path(root) / SOURCEMAP_FILE, parse_sourcemap)


def load_project(root: str | Path) -> ProjectDefinition | None:
    """Load `default.project.json` from a workspace root, or None if unusable."""
    return _load_tree_file(Path(root) / PROJECT_FILE, parse_project)


def _load_tree_file(path: Path, parse: Callable[[Any, str], Any]) -> Any:
    if not path.exists():
        return None
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
        tree = parse(data, str(path))
    # ValueError covers bad JSON, bad UTF-8 and StructuralParseError
    except (OSError, ValueError, RecursionError) as e:
        logger.warning("Ignoring %s: %s", path, e)
        return None
    logger.info("Loaded %s", path)
    return tree
