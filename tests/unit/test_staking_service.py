"""Unit tests for StakingApplicationService using a mock repository."""

from decimal import Decimal
from unittest.mock import AsyncMock, MagicMock

import pytest

from config.settings import settings
from src.ex_common.amounts import LedgerAmount
from src.ex_common.errors import (
    DivisionByZeroError,
    InvalidAmountError,
    OutOfRangeError,
    StakeNotSpecifiedError,
)
from src.ex_common.pagination import Page
from src.ex_metrics.domain.models import YieldCurvePoint
from src.ex_staking.application.service import TOP_POS_LIMIT, StakingApplicationService
from src.ex_staking.domain.models import PosStake


def _curve() -> list[YieldCurvePoint]:
    return [
        YieldCurvePoint(LedgerAmount(100), Decimal(110)),
        YieldCurvePoint(LedgerAmount(200), Decimal(230)),
    ]


def _pos(pos_id: str, stake: int) -> PosStake:
    return PosStake(pos_id=pos_id, owner="own", name=f"pos-{pos_id}", fee=500, stake=LedgerAmount(stake))


@pytest.fixture
def db():
    return MagicMock()


class TestRoiByStake:
    async def test_projection(self, db) -> None:
        repo = AsyncMock()
        repo.get_roi_curve.return_value = _curve()
        svc = StakingApplicationService(repo=repo)

        result = await svc.roi_by_stake(db, None, "100")

        assert result.hash == settings.NATIVE_TOKEN_HASH
        assert result.roi == "110"
        assert result.percent == [10.0, 70.0, 300.0, 3650.0]
        assert result.amount == [10.0, 70.0, 300.0, 3650.0]
        repo.get_roi_curve.assert_awaited_once_with(db, settings.NATIVE_TOKEN_HASH)

    async def test_interpolated_roi(self, db) -> None:
        repo = AsyncMock()
        repo.get_roi_curve.return_value = _curve()
        svc = StakingApplicationService(repo=repo)

        result = await svc.roi_by_stake(db, "tok", "150")

        assert result.hash == "tok"
        assert Decimal(result.roi) == Decimal(170)

    async def test_missing_stake(self, db) -> None:
        repo = AsyncMock()
        svc = StakingApplicationService(repo=repo)

        with pytest.raises(StakeNotSpecifiedError):
            await svc.roi_by_stake(db, None, None)
        repo.get_roi_curve.assert_not_awaited()

    async def test_invalid_stake(self, db) -> None:
        svc = StakingApplicationService(repo=AsyncMock())
        with pytest.raises(InvalidAmountError):
            await svc.roi_by_stake(db, None, "12.5")

    async def test_out_of_range(self, db) -> None:
        repo = AsyncMock()
        repo.get_roi_curve.return_value = _curve()
        svc = StakingApplicationService(repo=repo)

        with pytest.raises(OutOfRangeError):
            await svc.roi_by_stake(db, None, "1000")

    async def test_unknown_token_is_out_of_range(self, db) -> None:
        repo = AsyncMock()
        repo.get_roi_curve.return_value = []
        svc = StakingApplicationService(repo=repo)

        with pytest.raises(OutOfRangeError) as exc_info:
            await svc.roi_by_stake(db, "no-such-token", "100")
        assert not exc_info.value.is_internal
        repo.get_roi_curve.assert_awaited_once_with(db, "no-such-token")


class TestLimits:
    def test_stake_limits_from_settings(self) -> None:
        svc = StakingApplicationService(repo=AsyncMock())
        limits = svc.get_stake_limits()
        assert limits.min_stake == str(settings.MIN_STAKE)
        assert limits.max_stake == str(settings.MAX_STAKE)

    def test_transfer_lock(self) -> None:
        svc = StakingApplicationService(repo=AsyncMock())
        assert svc.get_transfer_lock().transfer_lock == settings.TRANSFER_LOCK

    async def test_referrer_stake_missing(self, db) -> None:
        repo = AsyncMock()
        repo.get_referrer_stake.return_value = None
        svc = StakingApplicationService(repo=repo)
        assert (await svc.get_referrer_stake(db)).referrer_stake is None

    async def test_poa_with_stake_uses_min_stake(self, db) -> None:
        repo = AsyncMock()
        repo.count_staking_poa.return_value = 4
        svc = StakingApplicationService(repo=repo)

        assert (await svc.count_poa_with_stake(db)).count == 4
        repo.count_staking_poa.assert_awaited_once_with(
            db, settings.NATIVE_TOKEN_HASH, LedgerAmount(settings.MIN_STAKE)
        )


class TestTopPos:
    async def test_percent_of_total(self, db) -> None:
        repo = AsyncMock()
        repo.list_top_pos.return_value = [_pos("a", 750), _pos("b", 250)]
        repo.get_total_pos_stake.return_value = LedgerAmount(1000)
        svc = StakingApplicationService(repo=repo)

        result = await svc.get_top_pos(db)

        assert [(p.pos_id, p.stake, p.percent) for p in result.top_pos] == [
            ("a", "750", 75.0),
            ("b", "250", 25.0),
        ]
        repo.list_top_pos.assert_awaited_once_with(db, TOP_POS_LIMIT)

    async def test_zero_total(self, db) -> None:
        repo = AsyncMock()
        repo.list_top_pos.return_value = [_pos("a", 0)]
        repo.get_total_pos_stake.return_value = LedgerAmount(0)
        svc = StakingApplicationService(repo=repo)

        with pytest.raises(DivisionByZeroError):
            await svc.get_top_pos(db)

    async def test_no_contracts(self, db) -> None:
        repo = AsyncMock()
        repo.list_top_pos.return_value = []
        repo.get_total_pos_stake.return_value = LedgerAmount(0)
        svc = StakingApplicationService(repo=repo)

        assert (await svc.get_top_pos(db)).top_pos == []


class TestDelegation:
    async def test_list_reads_whole_set(self, db) -> None:
        repo = AsyncMock()
        repo.list_delegated.return_value = Page(records=[{"pos_id": "p", "amount": "5"}], page_count=1)
        svc = StakingApplicationService(repo=repo)

        result = await svc.list_delegated(db, "d")

        assert result == [{"pos_id": "p", "amount": "5"}]
        repo.list_delegated.assert_awaited_once_with(db, "d", None, settings.LIST_PAGE_SIZE)

    async def test_page(self, db) -> None:
        repo = AsyncMock()
        repo.list_delegators.return_value = Page(records=[{"delegator": "x"}], page_count=4)
        svc = StakingApplicationService(repo=repo)

        result = await svc.get_delegators_page(db, "pos", 2)

        assert result.delegators == [{"delegator": "x"}]
        assert result.page_count == 4
        repo.list_delegators.assert_awaited_once_with(db, "pos", 2, settings.LIST_PAGE_SIZE)

    async def test_undelegated_page(self, db) -> None:
        repo = AsyncMock()
        repo.list_undelegated.return_value = Page(records=[], page_count=0)
        svc = StakingApplicationService(repo=repo)

        result = await svc.get_undelegated_page(db, "d", 1)

        assert result.model_dump() == {"pos_undelegated": [], "page_count": 0}
