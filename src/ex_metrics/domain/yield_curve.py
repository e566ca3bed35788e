"""Staking yield interpolation over a per-token breakpoint curve.

The curve maps a staked amount to the expected return after one period. It
must arrive sorted ascending by stake; the walk below relies on that and does
not sort or validate the order.
"""

from collections.abc import Sequence
from decimal import Decimal

from src.ex_common.amounts import LedgerAmount
from src.ex_common.errors import (
    DivisionByZeroError,
    OutOfRangeError,
    PreconditionViolatedError,
)
from src.ex_metrics.domain.models import YieldCurvePoint, YieldProjection

PROJECTION_PERIODS: tuple[int, ...] = (1, 7, 30, 365)


def interpolate_roi(curve: Sequence[YieldCurvePoint], stake: LedgerAmount) -> Decimal:
    """Return the roi at ``stake``: exact at breakpoints, linear in between.

    Raises OutOfRangeError when stake lies outside [first.stake, last.stake].
    """
    if not curve:
        raise PreconditionViolatedError("yield curve is empty")
    if stake < curve[0].stake or stake > curve[-1].stake:
        raise OutOfRangeError(stake.value)

    for i, point in enumerate(curve):
        if stake == point.stake:
            return point.roi
        if stake < point.stake:
            if i == 0:
                break
            lower = curve[i - 1]
            width = point.stake.value - lower.stake.value
            if width == 0:
                raise PreconditionViolatedError(
                    f"duplicate breakpoint at stake {point.stake}"
                )
            offset = Decimal(stake.value - lower.stake.value) / Decimal(width)
            return lower.roi + offset * (point.roi - lower.roi)

    raise PreconditionViolatedError(f"yield curve does not bracket stake {stake}")


def project_yield(curve: Sequence[YieldCurvePoint], stake: LedgerAmount) -> YieldProjection:
    roi = interpolate_roi(curve, stake)
    if stake.value == 0:
        raise DivisionByZeroError("yield ratio")
    stake_dec = Decimal(stake.value)
    ratio = (roi - stake_dec) / stake_dec
    return YieldProjection(
        roi=roi,
        percent=tuple(ratio * 100 * m for m in PROJECTION_PERIODS),
        amount=tuple(ratio * stake_dec * m for m in PROJECTION_PERIODS),
    )
