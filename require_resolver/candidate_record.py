"""Data model for an indexed module."""

from dataclasses import dataclass


@dataclass(frozen=True)
class CandidateRecord:
    """Represents one requireable module file."""

    display_name: str
    physical_path: str
    logical_path: str  # e.g. game.ReplicatedStorage.Packages.Janitor
    relative_display_path: str
    origin_tag: str  # which scan produced it, e.g. the workspace root
