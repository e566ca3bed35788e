"""Tests for ex_common.pagination and ex_common.rows."""

from datetime import UTC, datetime
from decimal import Decimal
from types import SimpleNamespace

from src.ex_common.pagination import page_count, page_offset
from src.ex_common.rows import json_value, row_to_dict


class TestPagination:
    def test_first_page_offset(self) -> None:
        assert page_offset(1, 10) == 0

    def test_third_page_offset(self) -> None:
        assert page_offset(3, 20) == 40

    def test_page_below_one_reads_first_page(self) -> None:
        assert page_offset(0, 10) == 0

    def test_page_count(self) -> None:
        assert page_count(0, 10) == 0
        assert page_count(10, 10) == 1
        assert page_count(11, 10) == 2


class TestRows:
    def test_integral_decimal_becomes_string(self) -> None:
        assert json_value(Decimal("123456789012345678901234567890")) == (
            "123456789012345678901234567890"
        )

    def test_fractional_decimal(self) -> None:
        assert json_value(Decimal("0.25")) == "0.25"

    def test_datetime_iso(self) -> None:
        ts = datetime(2024, 1, 2, 3, 4, 5, tzinfo=UTC)
        assert json_value(ts) == ts.isoformat()

    def test_passthrough(self) -> None:
        assert json_value(7) == 7
        assert json_value(None) is None

    def test_row_to_dict(self) -> None:
        row = SimpleNamespace(_mapping={"hash": "ab", "amount": Decimal(5)})
        assert row_to_dict(row) == {"hash": "ab", "amount": "5"}
