"""Logic for building an index of requireable modules."""

import logging
import posixpath
import threading
import time
from collections.abc import Iterable

from require_resolver.candidate_record import CandidateRecord
from require_resolver.path_resolver import PathResolver, normalize_path
from require_resolver.path_segments import is_index_segment, strip_script_suffixes

logger = logging.getLogger(__name__)

# (raw file name, physical path, origin tag)
FileEntry = tuple[str, str, str]


def display_name_for(file_name: str, physical_path: str) -> str:
    """Return the module name; `init` files take their folder's name."""
    if is_index_segment(file_name):
        parent = posixpath.basename(posixpath.dirname(normalize_path(physical_path)))
        if parent:
            return parent
    return strip_script_suffixes(file_name)


class ModuleIndex:
    """Holds a CandidateRecord for every indexed module file."""

    def __init__(self, resolver: PathResolver) -> None:
        """Initialize an empty index backed by a resolver."""
        self.resolver = resolver
        self.records: list[CandidateRecord] = []
        self._rebuild_lock = threading.Lock()

    @property
    def is_rebuilding(self) -> bool:
        """True while a rebuild is in flight."""
        return self._rebuild_lock.locked()

    def rebuild(self, files: Iterable[FileEntry]) -> bool:
        """Replace the index with records for `files`.

        Returns False without doing anything if another rebuild is running.
        """
        if not self._rebuild_lock.acquire(blocking=False):
            logger.info("Index rebuild already in progress")
            return False
        try:
            start = time.time()
            records = []
            for entry in files:
                record = self._build_record(*entry)
                if record is not None:
                    records.append(record)
            self.records = records
            logger.info(
                "Indexed %s modules in %.0fms",
                len(records),
                (time.time() - start) * 1000,
            )
        finally:
            self._rebuild_lock.release()
        return True

    def add_file(
        self, file_name: str, physical_path: str, origin_tag: str
    ) -> CandidateRecord | None:
        """Index a single new file."""
        record = self._build_record(file_name, physical_path, origin_tag)
        if record is not None:
            self.records.append(record)
        return record

    def remove_file(self, physical_path: str) -> None:
        """Drop a file from the index."""
        self.records = [r for r in self.records if r.physical_path != physical_path]

    def replace_file(
        self, file_name: str, physical_path: str, origin_tag: str
    ) -> CandidateRecord | None:
        """Re-index a file whose contents or location changed."""
        self.remove_file(physical_path)
        return self.add_file(file_name, physical_path, origin_tag)

    def find_by_physical_path(self, physical_path: str) -> CandidateRecord | None:
        """Return the record for a file, if indexed."""
        for record in self.records:
            if record.physical_path == physical_path:
                return record
        return None

    def __len__(self) -> int:
        return len(self.records)

    def _build_record(
        self, file_name: str, physical_path: str, origin_tag: str
    ) -> CandidateRecord | None:
        if file_name.startswith("."):
            return None
        return CandidateRecord(
            display_name=display_name_for(file_name, physical_path),
            physical_path=physical_path,
            logical_path=self.resolver.resolve(physical_path),
            relative_display_path=self.resolver.relative_display_path(physical_path),
            origin_tag=origin_tag,
        )
