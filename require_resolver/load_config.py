"""Logic for loading and merging configuration files."""

import copy
import logging
from pathlib import Path
from typing import Any

import yaml

from require_resolver.deep_merge import deep_merge
from require_resolver.fuzzy_matcher import FuzzyMatchOptions, fuzzy_options_for
from require_resolver.require_path_builder import RequirePathOptions

logger = logging.getLogger(__name__)

CONFIG_FILE = ".luau-require.yml"
PATH_STYLES = ("auto", "absolute", "relative")

DEFAULT_CONFIG: dict[str, Any] = {
    "max_suggestions": 20,
    "fuzzy_strength": "aggressive",
    "min_score": None,
    "allow_very_fuzzy": None,
    "path_style": "auto",
    "max_parent_hops": 3,
    "use_explicit_accessor": False,
    "convention_map": {},
    "exclude": ["**/node_modules/**"],
}


def load_config(
    path: str | None = None, workspace: Path | None = None
) -> dict[str, Any]:
    """Load configuration from a YAML file and merge it with defaults.

    Without an explicit path, `.luau-require.yml` in the workspace is used if
    present.
    """
    config = copy.deepcopy(DEFAULT_CONFIG)
    p = Path(path) if path else (workspace / CONFIG_FILE if workspace else None)
    if p is not None and p.exists():
        user_config = yaml.safe_load(p.read_text(encoding="utf-8")) or {}
        if not isinstance(user_config, dict):
            msg = f"Configuration in {p} must be a mapping"
            raise SystemExit(msg)
        config = deep_merge(config, user_config)
        logger.info("Loaded configuration from %s", p)
    elif path:
        logger.warning("Configuration file %s not found, using defaults", path)

    if config["path_style"] not in PATH_STYLES:
        msg = f"path_style must be one of {', '.join(PATH_STYLES)}"
        raise SystemExit(msg)
    return config


def fuzzy_options(config: dict[str, Any]) -> FuzzyMatchOptions:
    """Build fuzzy matching options from a loaded config."""
    try:
        return fuzzy_options_for(
            config["fuzzy_strength"],
            min_score=config.get("min_score"),
            allow_very_fuzzy=config.get("allow_very_fuzzy"),
        )
    except ValueError as e:
        raise SystemExit(str(e)) from e


def require_path_options(config: dict[str, Any]) -> RequirePathOptions:
    """Build require path options from a loaded config."""
    return RequirePathOptions(
        path_style=config["path_style"],
        max_parent_hops=int(config["max_parent_hops"]),
        use_explicit_accessor=bool(config["use_explicit_accessor"]),
    )
