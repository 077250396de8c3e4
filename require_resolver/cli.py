"""Command-line front end for resolving and searching Luau modules."""

from __future__ import annotations

import argparse
import logging
from pathlib import Path

from require_resolver.load_config import (
    fuzzy_options,
    load_config,
    require_path_options,
)
from require_resolver.module_index import ModuleIndex
from require_resolver.path_resolver import PathResolver
from require_resolver.scan_workspace import scan_workspace
from require_resolver.suggest_requires import RequireSuggester


def build_index(workspace: Path, config: dict) -> ModuleIndex:
    """Load the workspace's trees and index every module file in it."""
    resolver = PathResolver([workspace.as_posix()], config.get("convention_map"))
    resolver.reload_from_disk()
    index = ModuleIndex(resolver)
    index.rebuild(scan_workspace(workspace, config.get("exclude")))
    return index


def cmd_resolve(args: argparse.Namespace, config: dict) -> int:
    """Print the instance path of each given file."""
    resolver = PathResolver([args.workspace.as_posix()], config.get("convention_map"))
    resolver.reload_from_disk()
    for p in args.paths:
        path = p if p.is_absolute() else args.workspace / p
        res = resolver.resolve_with_tier(path.as_posix())
        print(f"{p}\t{res.logical_path}\t({res.tier})")
    return 0


def cmd_search(args: argparse.Namespace, config: dict) -> int:
    """Print ranked suggestions for a query."""
    index = build_index(args.workspace, config)
    suggester = RequireSuggester(
        index,
        max_suggestions=int(config["max_suggestions"]),
        fuzzy_options=fuzzy_options(config),
        path_options=require_path_options(config),
    )
    document_text = args.document.read_text(encoding="utf-8") if args.document else ""
    current = args.current or args.document
    current_path = None
    if current is not None:
        current = current if current.is_absolute() else args.workspace / current
        current_path = current.as_posix()

    suggestions = suggester.suggest(args.query, document_text, current_path)
    if not suggestions:
        print(f"No modules match {args.query!r}")
        return 1
    for s in suggestions:
        print(f"{s.score:.3f}  {s.tier.value:<11} {s.kind:<10} {s.statement}")
    return 0


def cmd_index(args: argparse.Namespace, config: dict) -> int:
    """Print every indexed module and its instance path."""
    index = build_index(args.workspace, config)
    for record in sorted(index.records, key=lambda r: r.relative_display_path.lower()):
        print(
            f"{record.display_name}\t{record.logical_path}\t"
            f"{record.relative_display_path}"
        )
    print(f"Indexed {len(index)} modules under {args.workspace}")
    return 0


def main(argv: list[str] | None = None) -> int:
    """Run the command-line interface."""
    ap = argparse.ArgumentParser(
        description=(
            "Resolve Luau module files to Roblox instance paths and suggest "
            "require statements."
        ),
    )
    ap.add_argument("--config", help="Path to a YAML configuration file")
    ap.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    sub = ap.add_subparsers(dest="command", required=True)

    p_resolve = sub.add_parser("resolve", help="Resolve files to instance paths")
    p_resolve.add_argument("workspace", type=Path, help="Workspace root")
    p_resolve.add_argument("paths", type=Path, nargs="+", help="Module files")
    p_resolve.set_defaults(func=cmd_resolve)

    p_search = sub.add_parser("search", help="Fuzzy-search modules and print requires")
    p_search.add_argument("workspace", type=Path, help="Workspace root")
    p_search.add_argument("query", help="Module name, typos allowed")
    p_search.add_argument(
        "--document",
        type=Path,
        help="Script being edited; its local aliases are reused",
    )
    p_search.add_argument(
        "--current",
        type=Path,
        help="File the require is inserted into (defaults to --document)",
    )
    p_search.set_defaults(func=cmd_search)

    p_index = sub.add_parser("index", help="List every indexed module")
    p_index.add_argument("workspace", type=Path, help="Workspace root")
    p_index.set_defaults(func=cmd_index)

    args = ap.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if not args.workspace.is_dir():
        msg = f"Workspace not found: {args.workspace}"
        raise SystemExit(msg)

    config = load_config(args.config, args.workspace)
    return args.func(args, config)


if __name__ == "__main__":
    raise SystemExit(main())
