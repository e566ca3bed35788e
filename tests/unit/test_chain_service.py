"""Unit tests for ChainApplicationService using mock collaborators."""

import logging
from decimal import Decimal
from unittest.mock import AsyncMock, MagicMock

import pytest
from redis.exceptions import RedisError
from sqlalchemy.exc import SQLAlchemyError

from src.ex_chain.application.schemas import TxSubmission
from src.ex_chain.application.service import ChainApplicationService
from src.ex_chain.domain.models import AdmissionResult, TransactionRecord
from src.ex_common.amounts import LedgerAmount
from src.ex_common.enums import FeeType
from src.ex_common.errors import TransactionNotFoundError, TxBatchSizeError
from src.ex_metrics.domain.models import TokenFeeSchedule


def _tx(total: int = 1000, schedule: TokenFeeSchedule | None = None) -> TransactionRecord:
    return TransactionRecord(
        hash="tx-1",
        from_id="alice",
        to_id="bob",
        total_amount=LedgerAmount(total),
        token_hash="0" * 64,
        ticker="ENQ",
        status=3,
        mblocks_hash="mb-1",
        height=42,
        time=1700000000,
        nonce=7,
        data=None,
        sign="sig",
        fee_schedule=schedule or TokenFeeSchedule(FeeType.PERCENT, Decimal("0.01"), Decimal(5)),
    )


def _submission(**overrides) -> TxSubmission:
    body = {
        "from": "alice",
        "to": "bob",
        "amount": "1000",
        "ticker": "0" * 64,
        "nonce": 1,
        "sign": "sig",
    }
    body.update(overrides)
    return TxSubmission.model_validate(body)


def _service(repo=None, admission=None, broadcaster=None) -> ChainApplicationService:
    return ChainApplicationService(
        repo=repo or AsyncMock(),
        admission=admission or AsyncMock(),
        broadcaster=broadcaster or AsyncMock(),
    )


@pytest.fixture
def db():
    session = MagicMock()
    session.commit = AsyncMock()
    return session


class TestGetTx:
    async def test_fee_netted(self, db) -> None:
        repo = AsyncMock()
        repo.get_tx.return_value = _tx(total=1000)
        svc = _service(repo=repo)

        result = await svc.get_tx(db, "tx-1")

        # max(5, floor(1000 * 0.01)) = 10
        assert result.total_amount == "1000"
        assert result.fee == "10"
        assert result.amount == "990"
        assert result.model_dump(by_alias=True)["from"] == "alice"

    async def test_fee_min_applies(self, db) -> None:
        repo = AsyncMock()
        repo.get_tx.return_value = _tx(total=100)
        svc = _service(repo=repo)

        result = await svc.get_tx(db, "tx-1")

        assert result.fee == "5"
        assert result.amount == "95"

    async def test_not_found(self, db) -> None:
        repo = AsyncMock()
        repo.get_tx.return_value = None
        svc = _service(repo=repo)

        with pytest.raises(TransactionNotFoundError):
            await svc.get_tx(db, "missing")


class TestMblocks:
    async def test_limit_capped(self, db) -> None:
        repo = AsyncMock()
        repo.list_mblocks.return_value = []
        svc = _service(repo=repo)

        await svc.list_mblocks(db, 5, 50)

        repo.list_mblocks.assert_awaited_once_with(db, 5, 10)

    async def test_zero_limit_skips_query(self, db) -> None:
        repo = AsyncMock()
        svc = _service(repo=repo)

        assert await svc.list_mblocks(db, 0, 0) == []
        repo.list_mblocks.assert_not_awaited()


class TestTps:
    async def test_rounds_and_records_observation(self, db) -> None:
        repo = AsyncMock()
        repo.get_tps.return_value = 2.5
        svc = _service(repo=repo)

        result = await svc.get_tps(db)

        assert result.tps == 3
        repo.update_max_tps.assert_awaited_once_with(db, 3)
        db.commit.assert_awaited_once()

    async def test_rounds_down(self, db) -> None:
        repo = AsyncMock()
        repo.get_tps.return_value = 1.49
        svc = _service(repo=repo)

        assert (await svc.get_tps(db)).tps == 1

    async def test_failed_max_tps_write_still_returns_tps(self, db) -> None:
        repo = AsyncMock()
        repo.get_tps.return_value = 4.4
        repo.update_max_tps.side_effect = SQLAlchemyError("permission denied for table stat")
        db.rollback = AsyncMock()
        svc = _service(repo=repo)

        result = await svc.get_tps(db)

        assert result.tps == 4
        db.commit.assert_not_awaited()
        db.rollback.assert_awaited_once()


class TestHeight:
    async def test_missing_height(self, db) -> None:
        repo = AsyncMock()
        repo.get_mblocks_height.return_value = None
        svc = _service(repo=repo)

        assert (await svc.get_height(db)).height is None


class TestSubmitTx:
    async def test_accepted_is_broadcast(self) -> None:
        admission = AsyncMock()
        admission.post_tx.return_value = AdmissionResult(err=0, body={"err": 0, "result": [{"hash": "h"}]})
        broadcaster = AsyncMock()
        svc = _service(admission=admission, broadcaster=broadcaster)
        tx = _submission()

        result = await svc.submit_tx([tx])

        assert result == {"err": 0, "result": [{"hash": "h"}]}
        payload = admission.post_tx.await_args.args[0]
        assert payload["from"] == "alice"
        assert "data" not in payload
        broadcaster.broadcast.assert_awaited_once_with("post_tx", payload)

    async def test_rejected_not_broadcast(self) -> None:
        admission = AsyncMock()
        admission.post_tx.return_value = AdmissionResult(err=1, body={"err": 1, "message": "bad sign"})
        broadcaster = AsyncMock()
        svc = _service(admission=admission, broadcaster=broadcaster)

        result = await svc.submit_tx([_submission()])

        assert result == {"err": 1, "message": "bad sign"}
        broadcaster.broadcast.assert_not_awaited()

    async def test_broadcast_failure_keeps_admission_result(self) -> None:
        admission = AsyncMock()
        admission.post_tx.return_value = AdmissionResult(err=0, body={"err": 0, "result": [{"hash": "h"}]})
        broadcaster = AsyncMock()
        broadcaster.broadcast.side_effect = ConnectionError("redis down")
        svc = _service(admission=admission, broadcaster=broadcaster)

        result = await svc.submit_tx([_submission()])

        assert result == {"err": 0, "result": [{"hash": "h"}]}
        broadcaster.broadcast.assert_awaited_once()

    async def test_redis_error_on_broadcast_is_logged(self, caplog) -> None:
        admission = AsyncMock()
        admission.post_tx.return_value = AdmissionResult(err=0, body={"err": 0})
        broadcaster = AsyncMock()
        broadcaster.broadcast.side_effect = RedisError("publish failed")
        svc = _service(admission=admission, broadcaster=broadcaster)

        with caplog.at_level(logging.ERROR, logger="src.ex_chain.application.service"):
            assert await svc.submit_tx([_submission()]) == {"err": 0}
        assert "Broadcast of accepted transaction failed" in caplog.text

    @pytest.mark.parametrize("count", [0, 2])
    async def test_batch_size(self, count) -> None:
        admission = AsyncMock()
        svc = _service(admission=admission)

        with pytest.raises(TxBatchSizeError):
            await svc.submit_tx([_submission() for _ in range(count)])
        admission.post_tx.assert_not_awaited()

    async def test_extra_fields_forwarded(self) -> None:
        admission = AsyncMock()
        admission.post_tx.return_value = AdmissionResult(err=0, body={"err": 0})
        svc = _service(admission=admission)

        await svc.submit_tx([_submission(data="memo", fee_hint="x")])

        payload = admission.post_tx.await_args.args[0]
        assert payload["data"] == "memo"
        assert payload["fee_hint"] == "x"
