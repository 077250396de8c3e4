"""In-memory cache of physical path to instance path resolutions."""

import logging

from require_resolver.resolution_result import PathResolution

logger = logging.getLogger(__name__)


class ResolverCache:
    """Memoizes resolutions by physical path.

    Entries are only valid for the tree snapshots they were computed from; the
    owning resolver calls `invalidate` whenever a snapshot changes.
    """

    def __init__(self) -> None:
        """Initialize an empty cache."""
        self.mapping: dict[str, PathResolution] = {}
        self.hits = 0
        self.misses = 0

    def lookup(self, physical_path: str) -> PathResolution | None:
        """Return the cached resolution for a physical path, if any."""
        entry = self.mapping.get(physical_path)
        if entry is None:
            self.misses += 1
        else:
            self.hits += 1
        return entry

    def update(self, resolution: PathResolution) -> None:
        """Store a resolution under its physical path."""
        self.mapping[resolution.physical_path] = resolution

    def invalidate(self) -> None:
        """Drop every entry."""
        if self.mapping:
            logger.debug("Invalidating %s cached resolutions", len(self.mapping))
        self.mapping.clear()

    def __len__(self) -> int:
        return len(self.mapping)

    def __contains__(self, physical_path: object) -> bool:
        return physical_path in self.mapping
