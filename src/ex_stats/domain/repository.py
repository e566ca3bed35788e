"""Repository Protocol — dependency inversion for testability."""

from typing import Any, Protocol

from sqlalchemy.ext.asyncio import AsyncSession

from src.ex_stats.domain.models import NativeSupply


class StatsRepositoryProtocol(Protocol):
    async def list_stats(self, db: AsyncSession) -> list[tuple[str, Any]]: ...

    async def get_stat(self, db: AsyncSession, key: str) -> str | None: ...

    async def list_clients(self, db: AsyncSession) -> list[dict[str, Any]]: ...

    async def list_poa_online(self, db: AsyncSession) -> list[dict[str, Any]]: ...

    async def get_agent_info(self, db: AsyncSession, agent_id: str) -> dict[str, Any] | None: ...

    async def list_difficulty(self, db: AsyncSession, limit: int) -> list[dict[str, Any]]: ...

    async def get_native_supply(
        self, db: AsyncSession, token_hash: str
    ) -> NativeSupply | None: ...
