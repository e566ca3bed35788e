"""Tests for the admission client (httpx) and the Redis peer broadcaster."""

import json
from unittest.mock import AsyncMock, patch

import httpx
import pytest

from config.settings import settings
from src.ex_chain.infrastructure import admission_client
from src.ex_chain.infrastructure.admission_client import NodeAdmissionClient
from src.ex_chain.infrastructure.broadcaster import RedisPeerBroadcaster
from src.ex_common import redis_client
from src.ex_common.errors import InternalError

_RealAsyncClient = httpx.AsyncClient


def _client_with(handler):
    def factory(**kwargs):
        return _RealAsyncClient(transport=httpx.MockTransport(handler), **kwargs)

    return factory


class TestNodeAdmissionClient:
    async def test_posts_single_tx_list(self) -> None:
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["url"] = str(request.url)
            seen["body"] = json.loads(request.content)
            return httpx.Response(200, json={"err": 0, "result": [{"hash": "h"}]})

        with patch.object(admission_client.httpx, "AsyncClient", _client_with(handler)):
            result = await NodeAdmissionClient(base_url="http://node/api/v1/").post_tx({"to": "b"})

        assert result.accepted
        assert result.body == {"err": 0, "result": [{"hash": "h"}]}
        assert seen["url"] == "http://node/api/v1/tx"
        assert seen["body"] == [{"to": "b"}]

    async def test_rejection_is_returned(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json={"err": 1, "message": "bad nonce"})

        with patch.object(admission_client.httpx, "AsyncClient", _client_with(handler)):
            result = await NodeAdmissionClient(base_url="http://node").post_tx({})

        assert not result.accepted
        assert result.err == 1

    async def test_http_error_is_internal(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(503)

        with patch.object(admission_client.httpx, "AsyncClient", _client_with(handler)):
            with pytest.raises(InternalError):
                await NodeAdmissionClient(base_url="http://node").post_tx({})

    async def test_malformed_body_is_internal(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json=["no", "err"])

        with patch.object(admission_client.httpx, "AsyncClient", _client_with(handler)):
            with pytest.raises(InternalError):
                await NodeAdmissionClient(base_url="http://node").post_tx({})


class TestRedisPeerBroadcaster:
    async def test_publishes_method_and_data(self) -> None:
        redis = AsyncMock()
        redis.publish.return_value = 2
        with patch(
            "src.ex_chain.infrastructure.broadcaster.get_broadcast_redis",
            AsyncMock(return_value=redis),
        ):
            await RedisPeerBroadcaster(channel="chan").broadcast("post_tx", {"to": "b"})

        channel, message = redis.publish.await_args.args
        assert channel == "chan"
        assert json.loads(message) == {"method": "post_tx", "data": {"to": "b"}}


class TestBroadcastRedisPool:
    async def test_pool_created_once_and_closed(self) -> None:
        pool = AsyncMock()
        with patch.object(redis_client.aioredis, "from_url", return_value=pool) as from_url:
            first = await redis_client.get_broadcast_redis()
            second = await redis_client.get_broadcast_redis()
            await redis_client.close_broadcast_redis()

        assert first is second is pool
        from_url.assert_called_once()
        assert from_url.call_args.kwargs["socket_timeout"] == settings.REDIS_SOCKET_TIMEOUT
        pool.aclose.assert_awaited_once()

    async def test_close_without_pool_is_noop(self) -> None:
        await redis_client.close_broadcast_redis()
