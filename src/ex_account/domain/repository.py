"""Repository Protocol — dependency inversion for testability.

Unit tests inject a mock that conforms to this Protocol.
Infrastructure layer provides the real implementation.
"""

from typing import Any, Protocol

from sqlalchemy.ext.asyncio import AsyncSession

from src.ex_account.domain.models import DelegatedBalance, TokenBalance
from src.ex_common.amounts import LedgerAmount
from src.ex_common.enums import HistoryDirection, RewardType
from src.ex_common.pagination import Page


class AccountRepositoryProtocol(Protocol):
    async def list_history(
        self,
        db: AsyncSession,
        account_id: str,
        direction: HistoryDirection,
        page: int,
        page_size: int,
    ) -> Page: ...

    async def list_transactions(
        self, db: AsyncSession, account_id: str, page: int, page_size: int
    ) -> Page: ...

    async def list_rewards(
        self,
        db: AsyncSession,
        account_id: str,
        reward_type: RewardType | None,
        page: int,
        page_size: int,
    ) -> Page: ...

    async def get_balance(
        self, db: AsyncSession, account_id: str, token_hash: str
    ) -> TokenBalance | None: ...

    async def get_delegated_balance(
        self, db: AsyncSession, account_id: str
    ) -> DelegatedBalance: ...

    async def get_transit_balance(
        self, db: AsyncSession, account_id: str
    ) -> LedgerAmount: ...

    async def get_undelegated_balance(
        self, db: AsyncSession, account_id: str
    ) -> LedgerAmount: ...

    async def list_balances(
        self,
        db: AsyncSession,
        account_id: str,
        minable_only: bool = False,
        reissuable_only: bool = False,
    ) -> list[dict[str, Any]]: ...
