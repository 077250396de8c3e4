"""Tests for resolving file system paths to instance paths."""

import json
import logging
from pathlib import Path

import pytest

from require_resolver.path_resolver import (
    MAX_TREE_DEPTH,
    PathResolver,
    bare_file_name,
    normalize_path,
    relative_to,
)
from require_resolver.tree_models import (
    BoundProjectNode,
    ContainerProjectNode,
    MappingTreeNode,
    ProjectDefinition,
    Sourcemap,
)

WS = "/ws"


def make_sourcemap() -> Sourcemap:
    """Create a sourcemap placing src/Lib.luau under ServerStorage."""
    return Sourcemap(
        name="Game",
        children=(
            MappingTreeNode(
                "ServerStorage",
                children=(
                    MappingTreeNode("Lib", file_paths=("src/Lib.lua",)),
                    MappingTreeNode("My Module", file_paths=("src/My Module.luau",)),
                ),
            ),
        ),
    )


def make_project() -> ProjectDefinition:
    """Create a project tree binding a few folders to services."""
    return ProjectDefinition(
        name="game",
        tree=ContainerProjectNode(
            class_name="DataModel",
            children={
                "ReplicatedStorage": ContainerProjectNode(
                    children={"Lib": BoundProjectNode(path="lib")}
                ),
                "ServerScriptService": ContainerProjectNode(
                    children={"Main": BoundProjectNode(path="app/Main.server.luau")}
                ),
            },
        ),
    )


def test_normalize_path() -> None:
    """Verify separator and dot-segment normalization."""
    assert normalize_path("src\\Shared\\..\\Foo.luau") == "src/Foo.luau"
    assert normalize_path("./a/b/") == "a/b"
    assert normalize_path(".") == ""
    assert normalize_path("") == ""


def test_relative_to_boundary() -> None:
    """Verify that containment requires a separator boundary."""
    assert relative_to("src/Foo/Bar.luau", "src/Foo") == "Bar.luau"
    assert relative_to("src/Foo", "src/Foo") == ""
    assert relative_to("src/FooBar/Baz.luau", "src/Foo") is None
    assert relative_to("a/b.luau", "") == "a/b.luau"
    assert relative_to("/abs/b.luau", "") is None


def test_bare_file_name() -> None:
    """Verify that the fallback name is never empty."""
    assert bare_file_name("x/y/Thing.luau") == "Thing"
    assert bare_file_name("") == "Unknown"


def test_convention_resolution() -> None:
    """Verify the folder convention table."""
    resolver = PathResolver()
    assert (
        resolver.resolve("src/Packages/Janitor.luau")
        == "game.ReplicatedStorage.Packages.Janitor"
    )
    main = resolver.resolve("server/Main.server.luau")
    assert main == "game.ServerScriptService.Main"
    assert (
        resolver.resolve("client/Input.client.luau")
        == "game.StarterPlayer.StarterPlayerScripts.Input"
    )
    spaced = resolver.resolve("src/My Module.luau")
    assert spaced == 'game.ReplicatedStorage["My Module"]'
    assert resolver.resolve_with_tier("src/A.luau").tier == "convention"


def test_convention_unknown_folder_kept() -> None:
    """Verify that an unmapped first folder is used as-is."""
    assert PathResolver().resolve("Tools/Build.luau") == "game.Tools.Build"


def test_convention_overrides() -> None:
    """Verify that user entries extend and replace the convention table."""
    resolver = PathResolver(convention_map={"Lib": "ReplicatedStorage.Vendor"})
    assert resolver.resolve("lib/Signal.luau") == "game.ReplicatedStorage.Vendor.Signal"


def test_index_file_collapses_to_folder() -> None:
    """Verify that init files resolve to their folder's instance."""
    resolver = PathResolver()
    assert resolver.resolve("src/Shared/init.luau") == "game.ReplicatedStorage.Shared"
    assert (
        resolver.resolve("server/Boot/init.server.luau")
        == "game.ServerScriptService.Boot"
    )


def test_sourcemap_takes_priority() -> None:
    """Verify that a sourcemap entry wins over the convention table."""
    resolver = PathResolver([WS])
    resolver.load_mapping_tree(WS, make_sourcemap())
    res = resolver.resolve_with_tier("/ws/src/Lib.luau")
    assert res.logical_path == "game.ServerStorage.Lib"
    assert res.tier == "sourcemap"
    assert resolver.resolve("/ws/src/My Module.luau") == (
        'game.ServerStorage["My Module"]'
    )


def test_project_tree_resolution() -> None:
    """Verify project-tree matches, including file-bound nodes and init files."""
    resolver = PathResolver([WS])
    resolver.load_project_tree(WS, make_project())
    res = resolver.resolve_with_tier("/ws/lib/Signal.luau")
    assert res.logical_path == "game.ReplicatedStorage.Lib.Signal"
    assert res.tier == "project"
    assert resolver.resolve("/ws/lib/init.luau") == "game.ReplicatedStorage.Lib"
    main = resolver.resolve("/ws/app/Main.server.luau")
    assert main == "game.ServerScriptService.Main"


def test_project_tree_respects_boundaries() -> None:
    """Verify that `lib` does not claim files under `library`."""
    resolver = PathResolver([WS])
    resolver.load_project_tree(WS, make_project())
    res = resolver.resolve_with_tier("/ws/library/Thing.luau")
    assert res.tier == "convention"
    assert res.logical_path == "game.library.Thing"


def test_sourcemap_before_project() -> None:
    """Verify tier order when both trees know a file."""
    resolver = PathResolver([WS])
    resolver.load_project_tree(
        WS,
        ProjectDefinition(
            "game",
            ContainerProjectNode(children={"Workspace": BoundProjectNode(path="src")}),
        ),
    )
    resolver.load_mapping_tree(WS, make_sourcemap())
    assert resolver.resolve("/ws/src/Lib.luau") == "game.ServerStorage.Lib"
    assert resolver.resolve("/ws/src/Other.luau") == "game.Workspace.Other"


def test_unclaimed_absolute_path_uses_file_name() -> None:
    """Verify the last-resort fallback."""
    resolver = PathResolver([WS])
    res = resolver.resolve_with_tier("/elsewhere/deep/Thing.luau")
    assert res.logical_path == "game.Thing"
    assert res.tier == "filename"


def test_failing_tier_falls_through(
    monkeypatch: pytest.MonkeyPatch, caplog: pytest.LogCaptureFixture
) -> None:
    """Verify that an error inside one tier is logged and skipped."""
    resolver = PathResolver([WS])
    resolver.load_mapping_tree(WS, make_sourcemap())

    def boom(*args: object) -> None:
        raise RuntimeError("broken tree")

    monkeypatch.setattr(resolver, "_resolve_from_sourcemap", boom)
    with caplog.at_level(logging.ERROR):
        res = resolver.resolve_with_tier("/ws/src/Lib.luau")
    assert res.tier == "convention"
    assert res.logical_path == "game.ReplicatedStorage.Lib"
    assert "sourcemap lookup failed" in caplog.text


def test_results_are_cached_and_invalidated() -> None:
    """Verify memoization and invalidation when a tree is replaced."""
    resolver = PathResolver([WS])
    first = resolver.resolve("/ws/src/Lib.luau")
    assert resolver.resolve("/ws/src/Lib.luau") == first
    assert resolver.cache.hits == 1
    assert "/ws/src/Lib.luau" in resolver.cache

    resolver.load_mapping_tree(WS, make_sourcemap())
    assert len(resolver.cache) == 0
    assert resolver.resolve("/ws/src/Lib.luau") == "game.ServerStorage.Lib"


def test_relative_display_path() -> None:
    """Verify display paths relative to the owning root."""
    resolver = PathResolver([WS])
    assert resolver.relative_display_path("/ws/src/Lib.luau") == "src/Lib.luau"
    assert resolver.relative_display_path("/other/Lib.luau") == "/other/Lib.luau"


def test_reload_from_disk(tmp_path: Path) -> None:
    """Verify that trees are read from the workspace root."""
    sourcemap = {
        "name": "Game",
        "children": [
            {
                "name": "ServerStorage",
                "children": [{"name": "Vault", "filePaths": ["src/Vault.luau"]}],
            }
        ],
    }
    (tmp_path / "sourcemap.json").write_text(json.dumps(sourcemap), encoding="utf-8")
    resolver = PathResolver([tmp_path])
    target = (tmp_path / "src" / "Vault.luau").as_posix()
    assert resolver.resolve(target) == "game.ReplicatedStorage.Vault"

    resolver.reload_from_disk()
    assert resolver.resolve(target) == "game.ServerStorage.Vault"


def test_reload_ignores_undecodable_tree(tmp_path: Path) -> None:
    """Verify that a broken project file leaves convention resolution intact."""
    (tmp_path / "default.project.json").write_bytes(b'{"tree": "\xff"}')
    resolver = PathResolver([tmp_path])
    resolver.reload_from_disk()
    target = (tmp_path / "src" / "A.luau").as_posix()
    assert resolver.resolve(target) == "game.ReplicatedStorage.A"


def test_clear_cache_recomputes_same_result() -> None:
    """Verify that clearing the cache does not change resolutions."""
    resolver = PathResolver([WS])
    resolver.load_mapping_tree(WS, make_sourcemap())
    resolver.load_project_tree(WS, make_project())
    paths = ["/ws/src/Lib.luau", "/ws/lib/Signal.luau", "/ws/other/X.luau"]
    before = [resolver.resolve_with_tier(p) for p in paths]

    resolver.clear_cache()
    assert len(resolver.cache) == 0
    after = [resolver.resolve_with_tier(p) for p in paths]
    assert after == before
    assert len(resolver.cache) == len(paths)
    assert resolver.cache.hits == 0


def test_overly_deep_trees_are_not_followed() -> None:
    """Verify that nodes beyond the traversal depth limit are skipped."""
    leaf = MappingTreeNode("Deep", file_paths=("src/Deep.luau",))
    for i in range(MAX_TREE_DEPTH + 10):
        leaf = MappingTreeNode(f"N{i}", children=(leaf,))
    bound: BoundProjectNode | ContainerProjectNode = BoundProjectNode(path="deep")
    for _ in range(MAX_TREE_DEPTH + 10):
        bound = ContainerProjectNode(children={"Level": bound})

    resolver = PathResolver([WS])
    resolver.load_mapping_tree(
        WS,
        Sourcemap(
            name="Game",
            children=(leaf, MappingTreeNode("Near", file_paths=("src/Near.luau",))),
        ),
    )
    resolver.load_project_tree(WS, ProjectDefinition("game", bound))

    assert resolver.resolve_with_tier("/ws/src/Deep.luau").tier == "convention"
    assert resolver.resolve("/ws/src/Near.luau") == "game.Near"
    assert resolver.resolve_with_tier("/ws/deep/X.luau").logical_path == "game.deep.X"
