"""Pydantic schemas for ex_token API responses."""

from typing import Any

from pydantic import BaseModel

from src.ex_metrics.domain.models import ShareResult


class TopAccount(BaseModel):
    id: str
    amount: str
    percentage: float

    @classmethod
    def from_share(cls, share: ShareResult) -> "TopAccount":
        return cls(id=share.subject_id, amount=str(share.amount), percentage=share.percentage)


class TopAccountsResponse(BaseModel):
    accounts: list[TopAccount]
    page_count: int


class TokenInfoPageResponse(BaseModel):
    tokens: list[dict[str, Any]]
    page_size: int
    page_count: int


class CountResponse(BaseModel):
    count: int
