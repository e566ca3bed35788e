"""AccountApplicationService — thin composition layer.

All methods are read-only; no commit/rollback needed. History pages get the
token's protocol fee deducted exactly once, when the response item is built
from the stored record.
"""

from sqlalchemy.ext.asyncio import AsyncSession

from config.settings import settings
from src.ex_account.application.schemas import (
    AccountHistoryItem,
    AccountHistoryResponse,
    BalanceResponse,
    PagedRecordsResponse,
)
from src.ex_account.domain.models import AccountHistoryRecord
from src.ex_account.domain.repository import AccountRepositoryProtocol
from src.ex_account.infrastructure.persistence import AccountRepository
from src.ex_common.enums import HistoryDirection, RewardType
from src.ex_metrics.domain.fee import net_of_fee


def _net_history_item(
    record: AccountHistoryRecord, direction: HistoryDirection
) -> AccountHistoryItem:
    """Deduct the fee from the transferred side of the record.

    ALL nets input when present, else output. IN/OUT only look at their side.
    """
    input_amount = record.input
    output_amount = record.output
    fee = None

    if direction != HistoryDirection.OUT and input_amount is not None:
        breakdown = net_of_fee(record.fee_schedule, input_amount)
        input_amount, fee = breakdown.net, breakdown.fee
    elif direction != HistoryDirection.IN and output_amount is not None:
        breakdown = net_of_fee(record.fee_schedule, output_amount)
        output_amount, fee = breakdown.net, breakdown.fee

    return AccountHistoryItem(
        hash=record.hash,
        time=record.time,
        token_hash=record.token_hash,
        ticker=record.ticker,
        input=str(input_amount) if input_amount is not None else None,
        output=str(output_amount) if output_amount is not None else None,
        fee=str(fee) if fee is not None else None,
    )


class AccountApplicationService:
    def __init__(self, repo: AccountRepositoryProtocol | None = None) -> None:
        self._repo: AccountRepositoryProtocol = repo or AccountRepository()

    async def get_history(
        self,
        db: AsyncSession,
        account_id: str,
        page: int,
        direction: HistoryDirection = HistoryDirection.ALL,
    ) -> AccountHistoryResponse:
        result = await self._repo.list_history(
            db, account_id, direction, page, settings.PAGE_SIZE
        )
        return AccountHistoryResponse(
            records=[_net_history_item(r, direction) for r in result.records],
            page_count=result.page_count,
        )

    async def list_transactions(
        self, db: AsyncSession, account_id: str, page: int
    ) -> PagedRecordsResponse:
        result = await self._repo.list_transactions(
            db, account_id, page, settings.PAGE_SIZE
        )
        return PagedRecordsResponse(records=result.records, page_count=result.page_count)

    async def list_rewards(
        self,
        db: AsyncSession,
        account_id: str,
        page: int,
        reward_type: RewardType | None = None,
    ) -> PagedRecordsResponse:
        result = await self._repo.list_rewards(
            db, account_id, reward_type, page, settings.PAGE_SIZE
        )
        return PagedRecordsResponse(records=result.records, page_count=result.page_count)

    async def get_balance(
        self, db: AsyncSession, account_id: str, token_hash: str | None
    ) -> BalanceResponse:
        token = token_hash or settings.NATIVE_TOKEN_HASH
        balance = await self._repo.get_balance(db, account_id, token)
        delegated = await self._repo.get_delegated_balance(db, account_id)
        transit = await self._repo.get_transit_balance(db, account_id)
        undelegated = await self._repo.get_undelegated_balance(db, account_id)
        return BalanceResponse.compose(
            account_id, token, balance, delegated, transit, undelegated
        )

    async def list_balances(
        self,
        db: AsyncSession,
        account_id: str,
        minable_only: bool = False,
        reissuable_only: bool = False,
    ) -> list[dict]:
        return await self._repo.list_balances(
            db, account_id, minable_only=minable_only, reissuable_only=reissuable_only
        )
