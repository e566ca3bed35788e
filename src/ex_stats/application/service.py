"""StatsApplicationService — network statistics and plain-text supply figures.

The stats map coerces node-maintained values to integers, truncating toward
zero; a few keys carry prices or fractional values and pass through as stored.
"""

import logging
from decimal import Decimal, InvalidOperation
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from config.settings import settings
from src.ex_common.amounts import LedgerAmount, format_units
from src.ex_common.errors import InternalError
from src.ex_stats.application.schemas import VersionResponse
from src.ex_stats.domain.models import (
    PASSTHROUGH_STAT_KEYS,
    STAT_CIRCULATING_SUPPLY,
    STAT_NETWORK_HASHRATE,
    STAT_VERSION,
    NativeSupply,
)
from src.ex_stats.domain.repository import StatsRepositoryProtocol
from src.ex_stats.infrastructure.persistence import StatsRepository

logger = logging.getLogger(__name__)


def coerce_stat(key: str, value: Any) -> Any:
    """Integer-valued stat, truncated; None when the stored value is not numeric."""
    if key in PASSTHROUGH_STAT_KEYS or value is None:
        return value
    try:
        number = Decimal(str(value).strip())
    except InvalidOperation:
        logger.warning("Non-numeric stat %s=%r", key, value)
        return None
    if not number.is_finite():
        return None
    return int(number)


class StatsApplicationService:
    def __init__(self, repo: StatsRepositoryProtocol | None = None) -> None:
        self._repo: StatsRepositoryProtocol = repo or StatsRepository()

    async def get_stats(self, db: AsyncSession) -> dict[str, Any]:
        return {key: coerce_stat(key, value) for key, value in await self._repo.list_stats(db)}

    async def get_version(self, db: AsyncSession) -> VersionResponse:
        return VersionResponse(ver=await self._repo.get_stat(db, STAT_VERSION))

    async def get_peer_map(self, db: AsyncSession) -> list[dict[str, Any]]:
        return await self._repo.list_clients(db)

    async def get_poa_nodes_online(self, db: AsyncSession) -> list[dict[str, Any]]:
        return await self._repo.list_poa_online(db)

    async def get_agent_info(self, db: AsyncSession, agent_id: str) -> dict[str, Any] | None:
        return await self._repo.get_agent_info(db, agent_id)

    async def get_difficulty(self, db: AsyncSession) -> list[dict[str, Any]]:
        return await self._repo.list_difficulty(db, settings.DIFFICULTY_WINDOW)

    # --- plain-text figures ----------------------------------------------

    async def _native_supply(self, db: AsyncSession) -> NativeSupply:
        supply = await self._repo.get_native_supply(db, settings.NATIVE_TOKEN_HASH)
        if supply is None:
            raise InternalError(f"native token {settings.NATIVE_TOKEN_HASH} not found")
        return supply

    async def get_circulating_supply(self, db: AsyncSession) -> str:
        supply = await self._native_supply(db)
        raw = await self._repo.get_stat(db, STAT_CIRCULATING_SUPPLY)
        if raw is None:
            raise InternalError("circulating supply stat is missing")
        return format_units(LedgerAmount.parse(raw), supply.decimals)

    async def get_total_supply(self, db: AsyncSession) -> str:
        supply = await self._native_supply(db)
        return format_units(supply.total_supply, supply.decimals)

    async def get_max_supply(self, db: AsyncSession) -> str:
        supply = await self._native_supply(db)
        return format_units(supply.max_supply, supply.decimals)

    async def get_hashrate(self, db: AsyncSession) -> str:
        raw = await self._repo.get_stat(db, STAT_NETWORK_HASHRATE)
        return str(coerce_stat(STAT_NETWORK_HASHRATE, raw) or 0)
