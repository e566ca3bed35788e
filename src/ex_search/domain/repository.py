"""Repository Protocol — existence checks backing the search strategies."""

from typing import Protocol

from sqlalchemy.ext.asyncio import AsyncSession


class SearchRepositoryProtocol(Protocol):
    async def tx_exists(self, db: AsyncSession, value: str) -> bool: ...

    async def account_exists(self, db: AsyncSession, value: str) -> bool: ...

    async def kblock_exists(self, db: AsyncSession, value: str) -> bool: ...

    async def mblock_exists(self, db: AsyncSession, value: str) -> bool: ...
