"""Tests for ex_metrics.domain.shares."""

import pytest

from src.ex_common.amounts import LedgerAmount
from src.ex_common.errors import DivisionByZeroError
from src.ex_metrics.domain.models import ShareEntry
from src.ex_metrics.domain.shares import compute_shares, share_percentage


class TestComputeShares:
    def test_two_holders(self) -> None:
        entries = [ShareEntry("A", LedgerAmount(30)), ShareEntry("B", LedgerAmount(70))]
        results = compute_shares(entries, LedgerAmount(100))
        assert [(r.subject_id, r.percentage) for r in results] == [("A", 30.0), ("B", 70.0)]

    def test_sum_equals_hundred_when_total_matches(self) -> None:
        entries = [ShareEntry(str(i), LedgerAmount(1)) for i in range(3)]
        results = compute_shares(entries, LedgerAmount(3))
        assert sum(r.percentage for r in results) == pytest.approx(100.0)

    def test_keeps_amount(self) -> None:
        big = LedgerAmount(2**70)
        (result,) = compute_shares([ShareEntry("A", big)], LedgerAmount(2**71))
        assert result.amount == big
        assert result.percentage == 50.0

    def test_zero_total(self) -> None:
        with pytest.raises(DivisionByZeroError):
            compute_shares([ShareEntry("A", LedgerAmount(1))], LedgerAmount(0))

    def test_zero_total_with_no_entries(self) -> None:
        with pytest.raises(DivisionByZeroError):
            compute_shares([], LedgerAmount(0))


class TestSharePercentage:
    def test_exact_until_conversion(self) -> None:
        assert share_percentage(LedgerAmount(1), LedgerAmount(3)) == pytest.approx(33.3333333333)

    def test_zero_total(self) -> None:
        with pytest.raises(DivisionByZeroError):
            share_percentage(LedgerAmount(0), LedgerAmount(0))
