"""Repository Protocol — dependency inversion for testability.

Unit tests inject a mock that conforms to this Protocol.
Infrastructure layer provides the real implementation.
"""

from typing import Any, Protocol

from sqlalchemy.ext.asyncio import AsyncSession

from src.ex_common.amounts import LedgerAmount
from src.ex_common.pagination import Page
from src.ex_metrics.domain.models import YieldCurvePoint
from src.ex_staking.domain.models import PosStake


class StakingRepositoryProtocol(Protocol):
    async def get_roi_curve(
        self, db: AsyncSession, token_hash: str
    ) -> list[YieldCurvePoint]: ...

    async def get_referrer_stake(
        self, db: AsyncSession, token_hash: str
    ) -> LedgerAmount | None: ...

    async def count_staking_poa(
        self, db: AsyncSession, token_hash: str, min_stake: LedgerAmount
    ) -> int: ...

    async def list_top_pos(self, db: AsyncSession, limit: int) -> list[PosStake]: ...

    async def get_total_pos_stake(self, db: AsyncSession) -> LedgerAmount: ...

    async def get_active_total_pos_stake(self, db: AsyncSession) -> LedgerAmount: ...

    async def count_pos(self, db: AsyncSession) -> int: ...

    async def get_pos_page(self, db: AsyncSession, page: int, page_size: int) -> Page: ...

    async def get_pos_info(self, db: AsyncSession, pos_id: str) -> dict[str, Any] | None: ...

    async def list_pos_all(self, db: AsyncSession) -> list[dict[str, Any]]: ...

    async def list_pos_by_owner(
        self, db: AsyncSession, owner: str
    ) -> list[dict[str, Any]]: ...

    async def list_pos_names(self, db: AsyncSession) -> list[dict[str, Any]]: ...

    async def list_delegated(
        self, db: AsyncSession, delegator: str, page: int | None, page_size: int
    ) -> Page: ...

    async def list_undelegated(
        self, db: AsyncSession, delegator: str, page: int | None, page_size: int
    ) -> Page: ...

    async def list_delegators(
        self, db: AsyncSession, pos_id: str, page: int | None, page_size: int
    ) -> Page: ...
