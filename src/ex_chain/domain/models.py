"""Domain models for ex_chain — pure dataclasses, no business logic."""

from dataclasses import dataclass
from typing import Any

from src.ex_common.amounts import LedgerAmount
from src.ex_metrics.domain.models import TokenFeeSchedule


@dataclass(frozen=True)
class TransactionRecord:
    """A stored transaction. total_amount is gross: the fee is still inside it."""

    hash: str
    from_id: str
    to_id: str
    total_amount: LedgerAmount
    token_hash: str
    ticker: str | None
    status: int | None
    mblocks_hash: str | None
    height: int | None
    time: int | None
    nonce: int | None
    data: str | None
    sign: str | None
    fee_schedule: TokenFeeSchedule


@dataclass(frozen=True)
class AdmissionResult:
    """What the admission service answered for a submitted transaction."""

    err: int
    body: dict[str, Any]

    @property
    def accepted(self) -> bool:
        return self.err == 0
