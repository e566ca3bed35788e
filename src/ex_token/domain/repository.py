"""Repository Protocol — dependency inversion for testability.

Unit tests inject a mock that conforms to this Protocol.
Infrastructure layer provides the real implementation.
"""

from typing import Any, Protocol

from sqlalchemy.ext.asyncio import AsyncSession

from src.ex_common.amounts import LedgerAmount
from src.ex_common.enums import TokenListType
from src.ex_common.pagination import Page


class TokenRepositoryProtocol(Protocol):
    async def list_top_holders(
        self, db: AsyncSession, token_hash: str, page: int, page_size: int
    ) -> Page:
        """Page of ShareEntry records, largest balance first."""
        ...

    async def get_total_supply(
        self, db: AsyncSession, token_hash: str
    ) -> LedgerAmount | None: ...

    async def get_token_info_page(
        self,
        db: AsyncSession,
        page: int,
        page_size: int,
        list_type: TokenListType | None,
    ) -> Page: ...

    async def list_tokens_by_owner(
        self, db: AsyncSession, owner: str
    ) -> list[dict[str, Any]]: ...

    async def get_token_info(self, db: AsyncSession, token_hash: str) -> list[dict[str, Any]]: ...

    async def count_tokens(self, db: AsyncSession) -> int: ...

    async def count_holders(self, db: AsyncSession, token_hash: str) -> int: ...

    async def list_tickers(self, db: AsyncSession) -> list[dict[str, Any]]: ...
