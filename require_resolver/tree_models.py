"""Data models for Rojo sourcemap and project-definition trees."""

from dataclasses import dataclass, field

DEFAULT_ROOT_CLASS = "DataModel"


@dataclass(frozen=True)
class MappingTreeNode:
    """A node of `sourcemap.json`: an instance and the files that back it."""

    name: str
    class_name: str | None = None
    file_paths: tuple[str, ...] = ()
    children: tuple["MappingTreeNode", ...] = ()


@dataclass(frozen=True)
class Sourcemap:
    """Root of a sourcemap. The root itself is not part of any instance path."""

    name: str
    class_name: str = DEFAULT_ROOT_CLASS
    file_paths: tuple[str, ...] = ()
    children: tuple[MappingTreeNode, ...] = ()


@dataclass(frozen=True)
class ContainerProjectNode:
    """A project tree node that only groups named children."""

    class_name: str | None = None
    children: dict[str, "ProjectTreeNode"] = field(default_factory=dict)


@dataclass(frozen=True)
class BoundProjectNode:
    """A project tree node bound to a physical path via `$path`."""

    path: str
    class_name: str | None = None
    children: dict[str, "ProjectTreeNode"] = field(default_factory=dict)


ProjectTreeNode = ContainerProjectNode | BoundProjectNode


@dataclass(frozen=True)
class ProjectDefinition:
    """Root of `default.project.json`."""

    name: str
    tree: ProjectTreeNode
