"""TokenApplicationService — token catalog and holder rankings."""

import logging
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from config.settings import settings
from src.ex_common.amounts import LedgerAmount
from src.ex_common.enums import TokenListType
from src.ex_metrics.domain.shares import compute_shares
from src.ex_token.application.schemas import (
    CountResponse,
    TokenInfoPageResponse,
    TopAccount,
    TopAccountsResponse,
)
from src.ex_token.domain.repository import TokenRepositoryProtocol
from src.ex_token.infrastructure.persistence import TokenRepository

logger = logging.getLogger(__name__)


class TokenApplicationService:
    def __init__(self, repo: TokenRepositoryProtocol | None = None) -> None:
        self._repo: TokenRepositoryProtocol = repo or TokenRepository()

    async def get_top_accounts(
        self, db: AsyncSession, page: int, token_hash: str | None
    ) -> TopAccountsResponse:
        """Holders of a token, each annotated with its share of total supply."""
        token_hash = token_hash or settings.NATIVE_TOKEN_HASH
        holders = await self._repo.list_top_holders(
            db, token_hash, page, settings.LIST_PAGE_SIZE
        )
        if not holders.records:
            return TopAccountsResponse(accounts=[], page_count=holders.page_count)

        total = await self._repo.get_total_supply(db, token_hash)
        if total is None:
            logger.warning("Holders found for unknown token %s", token_hash)
            total = LedgerAmount.zero()
        shares = compute_shares(holders.records, total)
        return TopAccountsResponse(
            accounts=[TopAccount.from_share(s) for s in shares],
            page_count=holders.page_count,
        )

    async def get_token_info_page(
        self, db: AsyncSession, page: int, list_type: TokenListType | None
    ) -> TokenInfoPageResponse:
        result = await self._repo.get_token_info_page(
            db, page, settings.LIST_PAGE_SIZE, list_type
        )
        return TokenInfoPageResponse(
            tokens=result.records,
            page_size=settings.LIST_PAGE_SIZE,
            page_count=result.page_count,
        )

    async def list_tokens_by_owner(self, db: AsyncSession, owner: str) -> list[dict[str, Any]]:
        return await self._repo.list_tokens_by_owner(db, owner)

    async def get_token_info(self, db: AsyncSession, token_hash: str) -> list[dict[str, Any]]:
        return await self._repo.get_token_info(db, token_hash)

    async def count_tokens(self, db: AsyncSession) -> CountResponse:
        return CountResponse(count=await self._repo.count_tokens(db))

    async def count_holders(self, db: AsyncSession, token_hash: str | None) -> CountResponse:
        count = await self._repo.count_holders(db, token_hash or settings.NATIVE_TOKEN_HASH)
        return CountResponse(count=count)

    async def list_tickers(self, db: AsyncSession) -> list[dict[str, Any]]:
        return await self._repo.list_tickers(db)
