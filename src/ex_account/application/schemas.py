"""Pydantic schemas for ex_account API responses.

Amounts are decimal strings (arbitrary precision); fee-netted history items
carry the net amount in input/output and the deducted fee in fee.
"""

from typing import Any

from pydantic import BaseModel

from src.ex_account.domain.models import DelegatedBalance, TokenBalance
from src.ex_common.amounts import LedgerAmount


class AccountHistoryItem(BaseModel):
    hash: str
    time: int | None
    token_hash: str
    ticker: str | None
    input: str | None
    output: str | None
    fee: str | None


class AccountHistoryResponse(BaseModel):
    records: list[AccountHistoryItem]
    page_count: int


class PagedRecordsResponse(BaseModel):
    records: list[dict[str, Any]]
    page_count: int


class BalanceResponse(BaseModel):
    id: str
    token: str
    ticker: str | None
    decimals: int | None
    amount: str
    delegated: str
    reward: str
    transit: str
    undelegated: str

    @classmethod
    def compose(
        cls,
        account_id: str,
        token_hash: str,
        balance: TokenBalance | None,
        delegated: DelegatedBalance,
        transit: LedgerAmount,
        undelegated: LedgerAmount,
    ) -> "BalanceResponse":
        # An account that never held the token still has a (zero) balance.
        return cls(
            id=account_id,
            token=token_hash,
            ticker=balance.ticker if balance else None,
            decimals=balance.decimals if balance else None,
            amount=str(balance.amount if balance else LedgerAmount.zero()),
            delegated=str(delegated.delegated),
            reward=str(delegated.reward),
            transit=str(transit),
            undelegated=str(undelegated),
        )
