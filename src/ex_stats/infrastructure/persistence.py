"""StatsRepository — concrete implementation of StatsRepositoryProtocol."""

from typing import Any

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from src.ex_common.amounts import LedgerAmount
from src.ex_common.rows import row_to_dict, rows_to_dicts
from src.ex_stats.domain.models import NativeSupply

_STATS_SQL = text("SELECT key, value FROM stat ORDER BY key")

_STAT_VALUE_SQL = text("SELECT value FROM stat WHERE key = :key")

_CLIENTS_SQL = text("""
    SELECT pub, ip, port, type, country, online FROM clients ORDER BY pub
""")

_POA_ONLINE_SQL = text("""
    SELECT pub, ip, port, country
    FROM clients
    WHERE type = 'poa' AND online = TRUE
    ORDER BY pub
""")

_AGENT_INFO_SQL = text("SELECT * FROM agents WHERE id = :agent_id")

_DIFFICULTY_SQL = text("""
    SELECT n AS height, time, target_diff
    FROM kblocks
    ORDER BY n DESC
    LIMIT :limit
""")

_NATIVE_SUPPLY_SQL = text("""
    SELECT decimals, total_supply, max_supply FROM tokens WHERE hash = :token_hash
""")


class StatsRepository:
    async def list_stats(self, db: AsyncSession) -> list[tuple[str, Any]]:
        rows = (await db.execute(_STATS_SQL)).fetchall()
        return [(r.key, r.value) for r in rows]

    async def get_stat(self, db: AsyncSession, key: str) -> str | None:
        value = (await db.execute(_STAT_VALUE_SQL, {"key": key})).scalar_one_or_none()
        return str(value) if value is not None else None

    async def list_clients(self, db: AsyncSession) -> list[dict[str, Any]]:
        return rows_to_dicts((await db.execute(_CLIENTS_SQL)).fetchall())

    async def list_poa_online(self, db: AsyncSession) -> list[dict[str, Any]]:
        return rows_to_dicts((await db.execute(_POA_ONLINE_SQL)).fetchall())

    async def get_agent_info(self, db: AsyncSession, agent_id: str) -> dict[str, Any] | None:
        row = (await db.execute(_AGENT_INFO_SQL, {"agent_id": agent_id})).fetchone()
        return row_to_dict(row) if row else None

    async def list_difficulty(self, db: AsyncSession, limit: int) -> list[dict[str, Any]]:
        return rows_to_dicts((await db.execute(_DIFFICULTY_SQL, {"limit": limit})).fetchall())

    async def get_native_supply(
        self, db: AsyncSession, token_hash: str
    ) -> NativeSupply | None:
        row = (await db.execute(_NATIVE_SUPPLY_SQL, {"token_hash": token_hash})).fetchone()
        if row is None:
            return None
        return NativeSupply(
            decimals=int(row.decimals or 0),
            total_supply=LedgerAmount.parse(row.total_supply or 0),
            max_supply=LedgerAmount.parse(row.max_supply or 0),
        )
