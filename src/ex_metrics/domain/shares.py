"""Percentage shares of a total (top holders, top PoS contracts)."""

from collections.abc import Iterable
from fractions import Fraction

from src.ex_common.amounts import LedgerAmount
from src.ex_common.errors import DivisionByZeroError
from src.ex_metrics.domain.models import ShareEntry, ShareResult


def share_percentage(amount: LedgerAmount, total: LedgerAmount) -> float:
    """amount * 100 / total, exact until the final conversion to float."""
    if total.value == 0:
        raise DivisionByZeroError("share percentage")
    return float(Fraction(amount.value * 100, total.value))


def compute_shares(entries: Iterable[ShareEntry], total: LedgerAmount) -> list[ShareResult]:
    if total.value == 0:
        raise DivisionByZeroError("share percentage")
    return [
        ShareResult(
            subject_id=e.subject_id,
            amount=e.amount,
            percentage=share_percentage(e.amount, total),
        )
        for e in entries
    ]
