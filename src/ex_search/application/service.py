"""SearchApplicationService — resolves a free-form value to an entity link.

Lookup order: transaction, account, macro-block, micro-block.
"""

from functools import partial

from sqlalchemy.ext.asyncio import AsyncSession

from src.ex_common.enums import SearchKind
from src.ex_search.application.schemas import SearchResult
from src.ex_search.domain.repository import SearchRepositoryProtocol
from src.ex_search.domain.resolver import SearchStrategy, exists_strategy, resolve
from src.ex_search.infrastructure.persistence import SearchRepository


class SearchApplicationService:
    def __init__(self, repo: SearchRepositoryProtocol | None = None) -> None:
        self._repo: SearchRepositoryProtocol = repo or SearchRepository()

    def _strategies(self, db: AsyncSession) -> list[SearchStrategy]:
        return [
            exists_strategy(SearchKind.TX, partial(self._repo.tx_exists, db)),
            exists_strategy(SearchKind.ACCOUNT, partial(self._repo.account_exists, db)),
            exists_strategy(SearchKind.MACROBLOCK, partial(self._repo.kblock_exists, db)),
            exists_strategy(SearchKind.MICROBLOCK, partial(self._repo.mblock_exists, db)),
        ]

    async def search(self, db: AsyncSession, value: str) -> SearchResult | None:
        candidate = await resolve(value, self._strategies(db))
        return SearchResult.from_candidate(candidate) if candidate else None
