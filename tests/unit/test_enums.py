"""Tests for ex_common.enums wire values."""

from src.ex_common.enums import (
    FeeType,
    PendingFilter,
    RewardType,
    SearchKind,
    TokenListType,
    TxStatus,
)


class TestEnums:
    def test_search_kind_wire_tags(self) -> None:
        assert [k.value for k in SearchKind] == ["tx", "account", "kblock", "mblock"]

    def test_fee_type(self) -> None:
        assert FeeType("PERCENT") is FeeType.PERCENT

    def test_pending_filter(self) -> None:
        assert PendingFilter("from") is PendingFilter.FROM

    def test_reward_type(self) -> None:
        assert RewardType.REFERRAL.value == "ref"

    def test_token_list_type(self) -> None:
        assert {t.value for t in TokenListType} == {"minable", "reissuable"}

    def test_tx_status_success(self) -> None:
        assert TxStatus.SUCCESS == 3
