"""Pydantic schemas for ex_chain requests and responses."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from src.ex_chain.domain.models import TransactionRecord
from src.ex_metrics.domain.fee import net_of_fee

# ---------------------------------------------------------------------------
# Request schemas
# ---------------------------------------------------------------------------


class TxSubmission(BaseModel):
    """A signed transaction as sent by wallets. Validated by the admission service."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    from_: str = Field(..., alias="from", min_length=1)
    to: str = Field(..., min_length=1)
    amount: int | str
    ticker: str = Field(..., min_length=1)
    nonce: int
    sign: str = Field(..., min_length=1)
    data: str | None = None

    def to_payload(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True)


# ---------------------------------------------------------------------------
# Response schemas
# ---------------------------------------------------------------------------


class TransactionDetail(BaseModel):
    """Stored transaction with the token fee split out of total_amount."""

    hash: str
    from_: str = Field(serialization_alias="from")
    to: str
    total_amount: str
    amount: str
    fee: str
    token_hash: str
    ticker: str | None
    status: int | None
    mblocks_hash: str | None
    height: int | None
    time: int | None
    nonce: int | None
    data: str | None
    sign: str | None

    @classmethod
    def from_record(cls, tx: TransactionRecord) -> "TransactionDetail":
        breakdown = net_of_fee(tx.fee_schedule, tx.total_amount)
        return cls(
            hash=tx.hash,
            from_=tx.from_id,
            to=tx.to_id,
            total_amount=str(breakdown.gross),
            amount=str(breakdown.net),
            fee=str(breakdown.fee),
            token_hash=tx.token_hash,
            ticker=tx.ticker,
            status=tx.status,
            mblocks_hash=tx.mblocks_hash,
            height=tx.height,
            time=tx.time,
            nonce=tx.nonce,
            data=tx.data,
            sign=tx.sign,
        )


class KblockPageResponse(BaseModel):
    kblocks: list[dict[str, Any]]
    page_count: int


class LastBlocksResponse(BaseModel):
    blocks: list[dict[str, Any]]


class TpsResponse(BaseModel):
    tps: int


class HeightResponse(BaseModel):
    height: int | None


class PendingSizeResponse(BaseModel):
    size: int
