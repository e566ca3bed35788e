"""Tests for ex_search.domain.resolver and SearchApplicationService."""

from unittest.mock import AsyncMock, MagicMock

from src.ex_common.enums import SearchKind
from src.ex_search.application.service import SearchApplicationService
from src.ex_search.domain.models import SearchCandidate
from src.ex_search.domain.resolver import exists_strategy, resolve


class TestResolve:
    async def test_first_hit_wins(self) -> None:
        first = AsyncMock(return_value=None)
        second = AsyncMock(return_value=SearchCandidate(SearchKind.ACCOUNT, "q"))
        third = AsyncMock(return_value=SearchCandidate(SearchKind.MACROBLOCK, "q"))

        result = await resolve("q", [first, second, third])

        assert result == SearchCandidate(SearchKind.ACCOUNT, "q")
        third.assert_not_awaited()

    async def test_no_hit(self) -> None:
        strategies = [AsyncMock(return_value=None) for _ in range(4)]
        assert await resolve("q", strategies) is None
        for s in strategies:
            s.assert_awaited_once_with("q")

    async def test_empty_strategy_list(self) -> None:
        assert await resolve("q", []) is None

    async def test_strategy_tags_kind(self) -> None:
        strategy = exists_strategy(SearchKind.TX, AsyncMock(return_value=True))
        assert await strategy("ab") == SearchCandidate(SearchKind.TX, "ab")

    async def test_strategy_miss(self) -> None:
        strategy = exists_strategy(SearchKind.TX, AsyncMock(return_value=False))
        assert await strategy("ab") is None


class TestSearchService:
    def _repo(self, **hits: bool) -> AsyncMock:
        repo = AsyncMock()
        repo.tx_exists.return_value = hits.get("tx", False)
        repo.account_exists.return_value = hits.get("account", False)
        repo.kblock_exists.return_value = hits.get("kblock", False)
        repo.mblock_exists.return_value = hits.get("mblock", False)
        return repo

    async def test_tx_has_priority(self) -> None:
        repo = self._repo(tx=True, account=True)
        svc = SearchApplicationService(repo=repo)

        result = await svc.search(MagicMock(), "abc")

        assert result.type == "tx"
        assert result.link == "abc"
        repo.account_exists.assert_not_awaited()
        repo.kblock_exists.assert_not_awaited()

    async def test_account_before_blocks(self) -> None:
        svc = SearchApplicationService(repo=self._repo(account=True, mblock=True))
        result = await svc.search(MagicMock(), "abc")
        assert result.type == "account"

    async def test_mblock_last(self) -> None:
        svc = SearchApplicationService(repo=self._repo(mblock=True))
        result = await svc.search(MagicMock(), "abc")
        assert result.model_dump() == {"type": "mblock", "link": "abc"}

    async def test_nothing_found(self) -> None:
        repo = self._repo()
        svc = SearchApplicationService(repo=repo)
        assert await svc.search(MagicMock(), "abc") is None
        repo.mblock_exists.assert_awaited_once()
