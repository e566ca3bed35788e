"""StakingApplicationService — yield projections, PoS contracts, delegation.

roi_by_stake runs the stored curve through the yield interpolator; get_top_pos
annotates each contract with its share of the total PoS stake. The rest is
repository pass-through or configured limits.
"""

import logging
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from config.settings import settings
from src.ex_common.amounts import LedgerAmount
from src.ex_common.errors import OutOfRangeError, StakeNotSpecifiedError
from src.ex_metrics.domain.shares import share_percentage
from src.ex_metrics.domain.yield_curve import project_yield
from src.ex_staking.application.schemas import (
    CountResponse,
    DelegatedPageResponse,
    DelegatorsPageResponse,
    MinStakeResponse,
    PosPageResponse,
    ReferrerStakeResponse,
    RoiPoint,
    RoiProjectionResponse,
    StakeLimitsResponse,
    TopPosItem,
    TopPosResponse,
    TotalStakeResponse,
    TransferLockResponse,
    UndelegatedPageResponse,
)
from src.ex_staking.domain.repository import StakingRepositoryProtocol
from src.ex_staking.infrastructure.persistence import StakingRepository

logger = logging.getLogger(__name__)

TOP_POS_LIMIT = 10


class StakingApplicationService:
    def __init__(self, repo: StakingRepositoryProtocol | None = None) -> None:
        self._repo: StakingRepositoryProtocol = repo or StakingRepository()

    # --- yield ------------------------------------------------------------

    async def roi_by_stake(
        self, db: AsyncSession, token_hash: str | None, stake: str | None
    ) -> RoiProjectionResponse:
        if stake is None:
            raise StakeNotSpecifiedError()
        amount = LedgerAmount.parse(stake)
        token_hash = token_hash or settings.NATIVE_TOKEN_HASH
        curve = await self._repo.get_roi_curve(db, token_hash)
        if not curve:
            # Unknown token or no staking curve: no stake is in range.
            raise OutOfRangeError(amount.value)
        return RoiProjectionResponse.from_projection(token_hash, project_yield(curve, amount))

    async def get_roi(self, db: AsyncSession, token_hash: str | None) -> list[RoiPoint]:
        curve = await self._repo.get_roi_curve(db, token_hash or settings.NATIVE_TOKEN_HASH)
        return [RoiPoint(stake=str(p.stake), roi=str(p.roi)) for p in curve]

    # --- limits -----------------------------------------------------------

    def get_min_stake(self) -> MinStakeResponse:
        return MinStakeResponse(min_stake=str(settings.MIN_STAKE))

    def get_stake_limits(self) -> StakeLimitsResponse:
        return StakeLimitsResponse(
            min_stake=str(settings.MIN_STAKE), max_stake=str(settings.MAX_STAKE)
        )

    def get_transfer_lock(self) -> TransferLockResponse:
        return TransferLockResponse(transfer_lock=settings.TRANSFER_LOCK)

    async def get_referrer_stake(self, db: AsyncSession) -> ReferrerStakeResponse:
        value = await self._repo.get_referrer_stake(db, settings.NATIVE_TOKEN_HASH)
        return ReferrerStakeResponse(referrer_stake=str(value) if value is not None else None)

    async def count_poa_with_stake(self, db: AsyncSession) -> CountResponse:
        count = await self._repo.count_staking_poa(
            db, settings.NATIVE_TOKEN_HASH, LedgerAmount(settings.MIN_STAKE)
        )
        return CountResponse(count=count)

    # --- PoS contracts ----------------------------------------------------

    async def get_top_pos(self, db: AsyncSession) -> TopPosResponse:
        top = await self._repo.list_top_pos(db, TOP_POS_LIMIT)
        total = await self._repo.get_total_pos_stake(db)
        logger.debug("Total PoS stake %s across top %d contracts", total, len(top))
        return TopPosResponse(
            top_pos=[
                TopPosItem(
                    pos_id=p.pos_id,
                    owner=p.owner,
                    name=p.name,
                    fee=p.fee,
                    stake=str(p.stake),
                    percent=share_percentage(p.stake, total),
                )
                for p in top
            ]
        )

    async def get_pos_total_stake(self, db: AsyncSession) -> TotalStakeResponse:
        total = await self._repo.get_total_pos_stake(db)
        return TotalStakeResponse(total_stake=str(total))

    async def get_pos_active_total_stake(self, db: AsyncSession) -> TotalStakeResponse:
        total = await self._repo.get_active_total_pos_stake(db)
        return TotalStakeResponse(total_stake=str(total))

    async def get_pos_count(self, db: AsyncSession) -> CountResponse:
        return CountResponse(count=await self._repo.count_pos(db))

    async def get_pos_page(self, db: AsyncSession, page: int) -> PosPageResponse:
        result = await self._repo.get_pos_page(db, page, settings.LIST_PAGE_SIZE)
        return PosPageResponse(pos_contracts=result.records, page_count=result.page_count)

    async def get_pos_info(self, db: AsyncSession, pos_id: str) -> dict[str, Any] | None:
        return await self._repo.get_pos_info(db, pos_id)

    async def list_pos_all(self, db: AsyncSession) -> list[dict[str, Any]]:
        return await self._repo.list_pos_all(db)

    async def list_pos_by_owner(self, db: AsyncSession, owner: str) -> list[dict[str, Any]]:
        return await self._repo.list_pos_by_owner(db, owner)

    async def list_pos_names(self, db: AsyncSession) -> list[dict[str, Any]]:
        return await self._repo.list_pos_names(db)

    # --- delegation -------------------------------------------------------

    async def list_delegated(self, db: AsyncSession, delegator: str) -> list[dict[str, Any]]:
        result = await self._repo.list_delegated(db, delegator, None, settings.LIST_PAGE_SIZE)
        return result.records

    async def get_delegated_page(
        self, db: AsyncSession, delegator: str, page: int
    ) -> DelegatedPageResponse:
        result = await self._repo.list_delegated(db, delegator, page, settings.LIST_PAGE_SIZE)
        return DelegatedPageResponse(pos_delegated=result.records, page_count=result.page_count)

    async def list_undelegated(self, db: AsyncSession, delegator: str) -> list[dict[str, Any]]:
        result = await self._repo.list_undelegated(db, delegator, None, settings.LIST_PAGE_SIZE)
        return result.records

    async def get_undelegated_page(
        self, db: AsyncSession, delegator: str, page: int
    ) -> UndelegatedPageResponse:
        result = await self._repo.list_undelegated(
            db, delegator, page, settings.LIST_PAGE_SIZE
        )
        return UndelegatedPageResponse(
            pos_undelegated=result.records, page_count=result.page_count
        )

    async def list_delegators(self, db: AsyncSession, pos_id: str) -> list[dict[str, Any]]:
        result = await self._repo.list_delegators(db, pos_id, None, settings.LIST_PAGE_SIZE)
        return result.records

    async def get_delegators_page(
        self, db: AsyncSession, pos_id: str, page: int
    ) -> DelegatorsPageResponse:
        result = await self._repo.list_delegators(db, pos_id, page, settings.LIST_PAGE_SIZE)
        return DelegatorsPageResponse(delegators=result.records, page_count=result.page_count)
