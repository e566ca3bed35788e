"""Domain models for ex_search — pure dataclasses."""

from dataclasses import dataclass

from src.ex_common.enums import SearchKind


@dataclass(frozen=True)
class SearchCandidate:
    """The entity a free-text query resolved to. Only one kind per query."""

    kind: SearchKind
    link: str
