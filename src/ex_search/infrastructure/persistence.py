"""SearchRepository — concrete implementation of SearchRepositoryProtocol."""

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

_TX_EXISTS_SQL = text("SELECT EXISTS (SELECT 1 FROM transactions WHERE hash = :value)")
_ACCOUNT_EXISTS_SQL = text("SELECT EXISTS (SELECT 1 FROM ledger WHERE id = :value)")
_KBLOCK_EXISTS_SQL = text("SELECT EXISTS (SELECT 1 FROM kblocks WHERE hash = :value)")
_MBLOCK_EXISTS_SQL = text("SELECT EXISTS (SELECT 1 FROM mblocks WHERE hash = :value)")


class SearchRepository:
    async def tx_exists(self, db: AsyncSession, value: str) -> bool:
        return bool((await db.execute(_TX_EXISTS_SQL, {"value": value})).scalar_one())

    async def account_exists(self, db: AsyncSession, value: str) -> bool:
        return bool((await db.execute(_ACCOUNT_EXISTS_SQL, {"value": value})).scalar_one())

    async def kblock_exists(self, db: AsyncSession, value: str) -> bool:
        return bool((await db.execute(_KBLOCK_EXISTS_SQL, {"value": value})).scalar_one())

    async def mblock_exists(self, db: AsyncSession, value: str) -> bool:
        return bool((await db.execute(_MBLOCK_EXISTS_SQL, {"value": value})).scalar_one())
