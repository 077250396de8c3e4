"""Logic for turning a typed `:query` into ready-to-insert require statements."""

import re
from dataclasses import dataclass

from require_resolver.alias_extractor import extract_aliases
from require_resolver.candidate_record import CandidateRecord
from require_resolver.fuzzy_matcher import FuzzyMatchOptions, MatchTier
from require_resolver.module_index import ModuleIndex
from require_resolver.module_kind import is_wally_package, module_kind
from require_resolver.require_path_builder import RequirePathOptions, build_require_path
from require_resolver.require_statement import require_statement
from require_resolver.search_modules import search_modules

TRIGGER_RE = re.compile(r"^(\s*):(.*)$")


@dataclass(frozen=True)
class Suggestion:
    """A ranked module together with the statement that would require it."""

    record: CandidateRecord
    score: float
    tier: MatchTier
    require_path: str
    statement: str
    kind: str


def parse_trigger(text_before_cursor: str) -> tuple[str, str] | None:
    """Return (indentation, query) if the line so far is `<indent>:<query>`."""
    match = TRIGGER_RE.match(text_before_cursor)
    if not match:
        return None
    return match.group(1), match.group(2)


class RequireSuggester:
    """Searches the module index and builds require statements for the hits."""

    def __init__(
        self,
        index: ModuleIndex,
        max_suggestions: int = 20,
        fuzzy_options: FuzzyMatchOptions | None = None,
        path_options: RequirePathOptions | None = None,
    ) -> None:
        """Initialize the suggester over an index."""
        self.index = index
        self.max_suggestions = max_suggestions
        self.fuzzy_options = fuzzy_options
        self.path_options = path_options

    def suggest(
        self,
        query: str,
        document_text: str = "",
        current_physical_path: str | None = None,
    ) -> list[Suggestion]:
        """Return suggestions for `query` as seen from the active document."""
        matches = search_modules(
            query, self.index.records, self.max_suggestions, self.fuzzy_options
        )
        if not matches:
            return []

        aliases = extract_aliases(document_text)
        current_path = self._current_logical_path(current_physical_path)

        suggestions = []
        for match in matches:
            record = match.item
            require_path = build_require_path(
                record.logical_path, aliases, current_path, self.path_options
            )
            suggestions.append(
                Suggestion(
                    record=record,
                    score=match.score,
                    tier=match.tier,
                    require_path=require_path,
                    statement=require_statement(
                        record.display_name,
                        require_path,
                        capitalize=is_wally_package(record),
                    ),
                    kind=module_kind(record),
                )
            )
        return suggestions

    def _current_logical_path(self, physical_path: str | None) -> str | None:
        if not physical_path:
            return None
        record = self.index.find_by_physical_path(physical_path)
        if record is not None:
            return record.logical_path
        # Files outside the index still resolve through the same tiers
        return self.index.resolver.resolve(physical_path)

    def suggest_at_line(
        self,
        text_before_cursor: str,
        document_text: str = "",
        current_physical_path: str | None = None,
    ) -> list[Suggestion]:
        """Suggest only when the line so far is a `:query` trigger."""
        trigger = parse_trigger(text_before_cursor)
        if trigger is None:
            return []
        return self.suggest(trigger[1], document_text, current_physical_path)
