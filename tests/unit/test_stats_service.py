"""Unit tests for StatsApplicationService using a mock repository."""

from unittest.mock import AsyncMock, MagicMock

import pytest

from config.settings import settings
from src.ex_common.amounts import LedgerAmount
from src.ex_common.errors import InternalError
from src.ex_stats.application.service import StatsApplicationService, coerce_stat
from src.ex_stats.domain.models import NativeSupply


@pytest.fixture
def db():
    return MagicMock()


def _supply() -> NativeSupply:
    return NativeSupply(
        decimals=10,
        total_supply=LedgerAmount(250050000000),
        max_supply=LedgerAmount(10**18),
    )


class TestCoerceStat:
    def test_truncates(self) -> None:
        assert coerce_stat("tps", "12.9") == 12

    def test_integer_string(self) -> None:
        assert coerce_stat("height", "123456") == 123456

    def test_passthrough_keys(self) -> None:
        assert coerce_stat("cg_usd", "0.0421") == "0.0421"
        assert coerce_stat("difficulty", "25.4") == "25.4"

    def test_non_numeric(self) -> None:
        assert coerce_stat("height", "n/a") is None

    def test_none(self) -> None:
        assert coerce_stat("height", None) is None


class TestGetStats:
    async def test_map(self, db) -> None:
        repo = AsyncMock()
        repo.list_stats.return_value = [("tps", "3.7"), ("cg_btc", "0.000001")]
        svc = StatsApplicationService(repo=repo)

        assert await svc.get_stats(db) == {"tps": 3, "cg_btc": "0.000001"}

    async def test_difficulty_window(self, db) -> None:
        repo = AsyncMock()
        repo.list_difficulty.return_value = []
        svc = StatsApplicationService(repo=repo)

        await svc.get_difficulty(db)

        repo.list_difficulty.assert_awaited_once_with(db, settings.DIFFICULTY_WINDOW)


class TestPlainFigures:
    async def test_total_supply(self, db) -> None:
        repo = AsyncMock()
        repo.get_native_supply.return_value = _supply()
        svc = StatsApplicationService(repo=repo)

        assert await svc.get_total_supply(db) == "25.005"

    async def test_max_supply(self, db) -> None:
        repo = AsyncMock()
        repo.get_native_supply.return_value = _supply()
        svc = StatsApplicationService(repo=repo)

        assert await svc.get_max_supply(db) == "100000000"

    async def test_circulating_supply(self, db) -> None:
        repo = AsyncMock()
        repo.get_native_supply.return_value = _supply()
        repo.get_stat.return_value = "15000000000"
        svc = StatsApplicationService(repo=repo)

        assert await svc.get_circulating_supply(db) == "1.5"

    async def test_missing_native_token(self, db) -> None:
        repo = AsyncMock()
        repo.get_native_supply.return_value = None
        svc = StatsApplicationService(repo=repo)

        with pytest.raises(InternalError):
            await svc.get_total_supply(db)

    async def test_hashrate_defaults_to_zero(self, db) -> None:
        repo = AsyncMock()
        repo.get_stat.return_value = None
        svc = StatsApplicationService(repo=repo)

        assert await svc.get_hashrate(db) == "0"
