"""Data models for path resolution results."""

from dataclasses import dataclass


@dataclass(frozen=True)
class PathResolution:
    """Represents the outcome of resolving a file to a Roblox instance path."""

    physical_path: str
    logical_path: str
    tier: str  # sourcemap/project/convention/filename
