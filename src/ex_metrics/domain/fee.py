"""Protocol fee netting on ledger amounts.

FLAT:    fee = fee_value
PERCENT: fee = max(fee_min, floor(gross * fee_value))

Both are floored at 0 and clamped to gross, so net = gross - fee >= 0.
The clamp is policy: a fee can never take more than was sent. Raw amount
subtraction elsewhere is not clamped and raises on underflow.
"""

import math
from decimal import Decimal
from fractions import Fraction

from src.ex_common.amounts import LedgerAmount
from src.ex_common.enums import FeeType
from src.ex_common.errors import PreconditionViolatedError
from src.ex_metrics.domain.models import FeeBreakdown, TokenFeeSchedule


def _units(value: Decimal) -> int:
    """Whole token units of a schedule value, floored at zero."""
    return max(0, math.floor(Fraction(value)))


def calc_fee(schedule: TokenFeeSchedule, gross: LedgerAmount) -> LedgerAmount:
    if schedule.fee_type == FeeType.FLAT:
        fee = _units(schedule.fee_value)
    elif schedule.fee_type == FeeType.PERCENT:
        # Exact rational product: gross may exceed Decimal's default precision.
        proportional = math.floor(gross.value * Fraction(schedule.fee_value))
        fee = max(_units(schedule.fee_min), proportional, 0)
    else:
        raise PreconditionViolatedError(f"unknown fee_type {schedule.fee_type!r}")
    return LedgerAmount(min(fee, gross.value))


def net_of_fee(schedule: TokenFeeSchedule, gross: LedgerAmount) -> FeeBreakdown:
    fee = calc_fee(schedule, gross)
    return FeeBreakdown(gross=gross, fee=fee, net=gross - fee)
