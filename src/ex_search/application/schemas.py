"""Pydantic schemas for ex_search responses."""

from pydantic import BaseModel

from src.ex_search.domain.models import SearchCandidate


class SearchResult(BaseModel):
    type: str
    link: str

    @classmethod
    def from_candidate(cls, candidate: SearchCandidate) -> "SearchResult":
        return cls(type=candidate.kind.value, link=candidate.link)
