"""Tests for ex_common.errors and ex_common.response."""

from unittest.mock import MagicMock

from src.ex_common.errors import (
    AppError,
    ArithmeticUnderflowError,
    DivisionByZeroError,
    InternalError,
    InvalidAmountError,
    OutOfRangeError,
    PreconditionViolatedError,
    StakeNotSpecifiedError,
    TransactionNotFoundError,
    TxBatchSizeError,
)
from src.ex_common.response import ApiResponse, error_response, respond, success_response


class TestAppError:
    def test_base_error(self) -> None:
        err = AppError(code=9002, message="Internal error")
        assert err.code == 9002
        assert err.message == "Internal error"
        assert err.http_status == 500
        assert err.is_internal

    def test_custom_http_status(self) -> None:
        err = AppError(code=1001, message="bad", http_status=200)
        assert err.http_status == 200
        assert not err.is_internal

    def test_is_exception(self) -> None:
        assert isinstance(AppError(code=1, message="x"), Exception)


class TestSpecificErrors:
    def test_client_visible_errors(self) -> None:
        for err, code in [
            (InvalidAmountError("x"), 1001),
            (TxBatchSizeError(), 3002),
            (OutOfRangeError(50), 4001),
            (StakeNotSpecifiedError(), 4002),
            (DivisionByZeroError("share"), 5001),
        ]:
            assert err.code == code
            assert err.http_status == 200
            assert not err.is_internal

    def test_tx_not_found(self) -> None:
        err = TransactionNotFoundError("ab12")
        assert err.code == 3001
        assert err.http_status == 404
        assert "ab12" in err.message

    def test_internal_faults(self) -> None:
        for err in [
            ArithmeticUnderflowError(1, 2),
            PreconditionViolatedError("empty curve"),
            InternalError(),
        ]:
            assert err.is_internal

    def test_messages(self) -> None:
        assert TxBatchSizeError().message == "Only 1 TX can be sent"
        assert StakeNotSpecifiedError().message == "Stake not specified"
        assert "50" in OutOfRangeError(50).message


class TestApiResponse:
    def test_success_response(self) -> None:
        resp = success_response({"tps": 3})
        assert resp.code == 0
        assert resp.message == "success"
        assert resp.data == {"tps": 3}
        assert resp.request_id.startswith("req_")

    def test_error_response(self) -> None:
        resp = error_response(4002, "Stake not specified")
        assert resp.code == 4002
        assert resp.data is None

    def test_respond_uses_request_id_from_state(self) -> None:
        request = MagicMock()
        request.state.request_id = "req_fixed"
        resp = respond(request, [1, 2])
        assert isinstance(resp, ApiResponse)
        assert resp.request_id == "req_fixed"
        assert resp.data == [1, 2]
