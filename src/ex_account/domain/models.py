"""Domain models for ex_account — pure dataclasses, no SQLAlchemy dependency."""

from dataclasses import dataclass

from src.ex_common.amounts import LedgerAmount
from src.ex_metrics.domain.models import TokenFeeSchedule


@dataclass(frozen=True)
class AccountHistoryRecord:
    """One ledger movement of an account, as stored (gross, fee not deducted)."""

    hash: str
    time: int | None
    token_hash: str
    ticker: str | None
    input: LedgerAmount | None     # received by the account
    output: LedgerAmount | None    # sent by the account
    fee_schedule: TokenFeeSchedule


@dataclass(frozen=True)
class TokenBalance:
    account_id: str
    token_hash: str
    ticker: str | None
    decimals: int
    amount: LedgerAmount


@dataclass(frozen=True)
class DelegatedBalance:
    delegated: LedgerAmount
    reward: LedgerAmount
