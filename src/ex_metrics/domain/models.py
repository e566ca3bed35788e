"""Value types consumed by the derived-metrics functions — pure dataclasses."""

from dataclasses import dataclass
from decimal import Decimal

from src.ex_common.amounts import LedgerAmount
from src.ex_common.enums import FeeType
from src.ex_common.errors import PreconditionViolatedError

# Node rows encode fee_type as 0/1; newer rows use the names.
_FEE_TYPE_CODES = {0: FeeType.FLAT, 1: FeeType.PERCENT}


@dataclass(frozen=True)
class TokenFeeSchedule:
    fee_type: FeeType
    fee_value: Decimal
    fee_min: Decimal = Decimal(0)

    @classmethod
    def from_row(cls, fee_type: object, fee_value: object, fee_min: object) -> "TokenFeeSchedule":
        return cls(
            fee_type=parse_fee_type(fee_type),
            fee_value=Decimal(str(fee_value if fee_value is not None else 0)),
            fee_min=Decimal(str(fee_min if fee_min is not None else 0)),
        )


def parse_fee_type(raw: object) -> FeeType:
    if isinstance(raw, FeeType):
        return raw
    if isinstance(raw, int) and not isinstance(raw, bool) and raw in _FEE_TYPE_CODES:
        return _FEE_TYPE_CODES[raw]
    if isinstance(raw, str):
        text = raw.strip()
        if text.isdigit() and int(text) in _FEE_TYPE_CODES:
            return _FEE_TYPE_CODES[int(text)]
        try:
            return FeeType(text.upper())
        except ValueError:
            pass
    raise PreconditionViolatedError(f"unknown fee_type {raw!r}")


@dataclass(frozen=True)
class FeeBreakdown:
    gross: LedgerAmount
    fee: LedgerAmount
    net: LedgerAmount


@dataclass(frozen=True)
class YieldCurvePoint:
    stake: LedgerAmount
    roi: Decimal


@dataclass(frozen=True)
class YieldProjection:
    """Interpolated roi and its 1/7/30/365-period projections."""

    roi: Decimal
    percent: tuple[Decimal, ...]
    amount: tuple[Decimal, ...]


@dataclass(frozen=True)
class ShareEntry:
    subject_id: str
    amount: LedgerAmount


@dataclass(frozen=True)
class ShareResult:
    subject_id: str
    amount: LedgerAmount
    percentage: float
