"""Tests for choosing the require expression of a module."""

from require_resolver.alias_extractor import AliasBinding, extract_aliases
from require_resolver.require_path_builder import (
    RequirePathOptions,
    build_require_path,
    deepest_alias_path,
    get_service_path,
    relative_require_path,
    service_alias_path,
)

DOC = (
    'local ReplicatedStorage = game:GetService("ReplicatedStorage")\n'
    "local Shared = ReplicatedStorage.Shared\n"
)


def test_deepest_alias_wins() -> None:
    """Verify that the most specific alias is used."""
    aliases = extract_aliases(DOC)
    assert (
        build_require_path("game.ReplicatedStorage.Shared.Utils", aliases)
        == "Shared.Utils"
    )
    assert (
        build_require_path("game.ReplicatedStorage.Packages.Janitor", aliases)
        == "ReplicatedStorage.Packages.Janitor"
    )


def test_alias_chain_from_service() -> None:
    """Verify a chained alias declared from a service alias."""
    aliases = extract_aliases(
        'local V1 = game:GetService("ReplicatedStorage")\nlocal V2 = V1.Shared'
    )
    assert build_require_path("game.ReplicatedStorage.Shared.Utils", aliases) == (
        "V2.Utils"
    )


def test_alias_prefix_ends_on_segment_boundary() -> None:
    """Verify that `Foo` does not prefix `FooBar`."""
    aliases = extract_aliases(
        'local RS = game:GetService("ReplicatedStorage")\nlocal Foo = RS.Foo\n'
    )
    assert deepest_alias_path("game.ReplicatedStorage.FooBar.X", aliases) == (
        "RS.FooBar.X"
    )


def test_alias_exact_target() -> None:
    """Verify that an alias bound to the target itself is used bare."""
    aliases = extract_aliases(DOC)
    assert build_require_path("game.ReplicatedStorage.Shared", aliases) == "Shared"


def test_relative_path_hops() -> None:
    """Verify parent hops counted from the current script."""
    current = "game.X.Y.Z.Current"
    assert relative_require_path(current, "game.X.Y.Sibling") == (
        "script.Parent.Parent.Sibling"
    )
    assert relative_require_path(current, "game.X.Sibling") == (
        "script.Parent.Parent.Parent.Sibling"
    )
    assert relative_require_path(current, "game.X.Sibling", max_parent_hops=2) is None


def test_relative_path_needs_shared_service() -> None:
    """Verify that scripts in different services get no relative path."""
    assert relative_require_path("game.A.B", "game.C.D") is None
    assert relative_require_path("", "game.C.D") is None


def test_relative_used_without_aliases() -> None:
    """Verify that a relative path beats the absolute fallback."""
    assert (
        build_require_path(
            "game.ReplicatedStorage.Util.Format",
            [],
            current_path="game.ReplicatedStorage.Util.Helper",
        )
        == "script.Parent.Format"
    )


def test_path_style_controls_relative() -> None:
    """Verify that aliases win under every style and absolute skips relative."""
    aliases = extract_aliases(DOC)
    target = "game.ReplicatedStorage.A.Sibling"
    current = "game.ReplicatedStorage.A.Current"

    assert build_require_path(target, aliases, current) == "ReplicatedStorage.A.Sibling"
    relative = RequirePathOptions(path_style="relative")
    assert build_require_path(target, aliases, current, relative) == (
        "ReplicatedStorage.A.Sibling"
    )
    assert build_require_path(target, [], current, relative) == (
        "script.Parent.Sibling"
    )
    absolute = RequirePathOptions(path_style="absolute")
    assert build_require_path(target, [], current, absolute) == target


def test_service_alias_path() -> None:
    """Verify the bare service alias rewrite."""
    aliases = [AliasBinding("SS", "game.ServerStorage", 2, 0)]
    assert service_alias_path("game.ServerStorage.Vault", aliases) == "SS.Vault"
    assert service_alias_path("game.CustomThing.Vault", aliases) is None


def test_explicit_accessor() -> None:
    """Verify the GetService form when requested."""
    assert get_service_path("game.ServerStorage.Vault") == (
        'game:GetService("ServerStorage").Vault'
    )
    options = RequirePathOptions(use_explicit_accessor=True)
    assert build_require_path("game.ServerStorage.Vault", [], None, options) == (
        'game:GetService("ServerStorage").Vault'
    )


def test_absolute_fallback() -> None:
    """Verify that the instance path is returned when nothing else applies."""
    assert build_require_path('game.ServerStorage["My Module"]', []) == (
        'game.ServerStorage["My Module"]'
    )
