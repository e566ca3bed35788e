"""Domain models for ex_staking — pure dataclasses."""

from dataclasses import dataclass

from src.ex_common.amounts import LedgerAmount


@dataclass(frozen=True)
class PosStake:
    """A PoS contract with its current delegated stake."""

    pos_id: str
    owner: str | None
    name: str | None
    fee: int | None
    stake: LedgerAmount
