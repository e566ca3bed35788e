"""Priority-ordered search resolution.

A strategy maps the query to a candidate of one kind, or None. resolve()
awaits them in order and returns the first hit; later strategies are never
awaited once one matches.
"""

import logging
from collections.abc import Awaitable, Callable, Sequence

from src.ex_common.enums import SearchKind
from src.ex_search.domain.models import SearchCandidate

logger = logging.getLogger(__name__)

SearchStrategy = Callable[[str], Awaitable[SearchCandidate | None]]
ExistsCheck = Callable[[str], Awaitable[bool]]


def exists_strategy(kind: SearchKind, exists: ExistsCheck) -> SearchStrategy:
    """Lift a storage existence check into a strategy tagged with ``kind``."""

    async def _strategy(query: str) -> SearchCandidate | None:
        if await exists(query):
            return SearchCandidate(kind=kind, link=query)
        return None

    return _strategy


async def resolve(query: str, strategies: Sequence[SearchStrategy]) -> SearchCandidate | None:
    for strategy in strategies:
        candidate = await strategy(query)
        if candidate is not None:
            logger.debug("Search hit: kind=%s query=%s", candidate.kind.value, query)
            return candidate
    return None
