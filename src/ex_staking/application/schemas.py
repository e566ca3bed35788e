"""Pydantic schemas for ex_staking API responses."""

from typing import Any

from pydantic import BaseModel

from src.ex_metrics.domain.models import YieldProjection


class RoiProjectionResponse(BaseModel):
    """Interpolated roi and its 1/7/30/365-period projections.

    roi is a decimal string; the projections are JSON numbers.
    """

    hash: str
    roi: str
    percent: list[float]
    amount: list[float]

    @classmethod
    def from_projection(cls, token_hash: str, p: YieldProjection) -> "RoiProjectionResponse":
        return cls(
            hash=token_hash,
            roi=str(p.roi),
            percent=[float(v) for v in p.percent],
            amount=[float(v) for v in p.amount],
        )


class RoiPoint(BaseModel):
    stake: str
    roi: str


class MinStakeResponse(BaseModel):
    min_stake: str


class StakeLimitsResponse(BaseModel):
    min_stake: str
    max_stake: str


class ReferrerStakeResponse(BaseModel):
    referrer_stake: str | None


class CountResponse(BaseModel):
    count: int


class TransferLockResponse(BaseModel):
    transfer_lock: int


class TotalStakeResponse(BaseModel):
    total_stake: str


class TopPosItem(BaseModel):
    pos_id: str
    owner: str | None
    name: str | None
    fee: int | None
    stake: str
    percent: float


class TopPosResponse(BaseModel):
    top_pos: list[TopPosItem]


class PosPageResponse(BaseModel):
    pos_contracts: list[dict[str, Any]]
    page_count: int


class DelegatedPageResponse(BaseModel):
    pos_delegated: list[dict[str, Any]]
    page_count: int


class UndelegatedPageResponse(BaseModel):
    pos_undelegated: list[dict[str, Any]]
    page_count: int


class DelegatorsPageResponse(BaseModel):
    delegators: list[dict[str, Any]]
    page_count: int
