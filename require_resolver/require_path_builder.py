"""Logic for choosing the shortest expression that reaches a module instance."""

from dataclasses import dataclass
from typing import Literal

from require_resolver.alias_extractor import AliasBinding
from require_resolver.convention_map import KNOWN_SERVICES
from require_resolver.path_segments import (
    ROOT_TOKEN,
    format_segment,
    split_logical_path,
)

SELF_TOKEN = "script"
PARENT_ACCESSOR = ".Parent"
MIN_COMMON_SEGMENTS = 2

PathStyle = Literal["auto", "absolute", "relative"]


@dataclass(frozen=True)
class RequirePathOptions:
    """Controls which require path strategies are allowed."""

    path_style: PathStyle = "auto"
    max_parent_hops: int = 3
    use_explicit_accessor: bool = False


def build_require_path(
    target_path: str,
    aliases: list[AliasBinding],
    current_path: str | None = None,
    options: RequirePathOptions | None = None,
) -> str:
    """Build the expression to pass to `require` for `target_path`.

    Strategies, first applicable wins:
    1. the deepest declared alias whose path prefixes the target
    2. a `script.Parent...` path relative to the current script
    3. a declared alias for the target's top-level service
    4. `game:GetService("Service")...` when explicitly requested
    5. the absolute instance path
    With `path_style="absolute"` strategy 2 is skipped.
    """
    opts = options or RequirePathOptions()

    relative = None
    if current_path and opts.path_style != "absolute":
        relative = relative_require_path(
            current_path, target_path, opts.max_parent_hops
        )

    alias_match = deepest_alias_path(target_path, aliases)
    if alias_match:
        return alias_match
    if relative:
        return relative

    service_alias = service_alias_path(target_path, aliases)
    if service_alias:
        return service_alias

    if opts.use_explicit_accessor:
        accessor = get_service_path(target_path)
        if accessor:
            return accessor

    return target_path


def _service_split(target_path: str) -> tuple[str, str] | None:
    segments = split_logical_path(target_path)
    if len(segments) < MIN_COMMON_SEGMENTS or segments[0] != ROOT_TOKEN:
        return None
    return segments[1], "".join(format_segment(s) for s in segments[2:])


def service_alias_path(target_path: str, aliases: list[AliasBinding]) -> str | None:
    """Rewrite the target through a bare alias of its top-level service."""
    split = _service_split(target_path)
    if split is None or split[0] not in KNOWN_SERVICES:
        return None
    service, suffix = split
    for binding in aliases:
        if binding.depth == MIN_COMMON_SEGMENTS and split_logical_path(
            binding.logical_path
        ) == [ROOT_TOKEN, service]:
            return binding.alias_name + suffix
    return None


def get_service_path(target_path: str) -> str | None:
    """Rewrite `game.Service.X` as `game:GetService("Service").X`."""
    split = _service_split(target_path)
    if split is None:
        return None
    service, suffix = split
    escaped = service.replace("\\", "\\\\").replace('"', '\\"')
    return f'{ROOT_TOKEN}:GetService("{escaped}"){suffix}'


def deepest_alias_path(target_path: str, aliases: list[AliasBinding]) -> str | None:
    """Rewrite the target through the first alias that prefixes it.

    `aliases` is expected deepest-first, so the most specific alias wins. The
    prefix must end on a segment boundary: `game.Foo` does not prefix
    `game.FooBar`.
    """
    target_segments = split_logical_path(target_path)
    for binding in aliases:
        alias_segments = split_logical_path(binding.logical_path)
        if not alias_segments or len(alias_segments) > len(target_segments):
            continue
        if target_segments[: len(alias_segments)] == alias_segments:
            rest = target_segments[len(alias_segments) :]
            return binding.alias_name + "".join(format_segment(s) for s in rest)
    return None


def relative_require_path(
    current_path: str, target_path: str, max_parent_hops: int = 3
) -> str | None:
    """Build a `script.Parent...` path from the current script to the target."""
    current = split_logical_path(current_path)
    target = split_logical_path(target_path)
    if not current or not target or current[0] != ROOT_TOKEN or target[0] != ROOT_TOKEN:
        return None

    common = 0
    for a, b in zip(current, target):
        if a != b:
            break
        common += 1

    if common < MIN_COMMON_SEGMENTS:
        return None
    parent_hops = len(current) - common
    if parent_hops > max_parent_hops:
        return None

    return (
        SELF_TOKEN
        + PARENT_ACCESSOR * parent_hops
        + "".join(format_segment(s) for s in target[common:])
    )
