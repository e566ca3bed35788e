"""RedisPeerBroadcaster — publishes accepted transactions for the peer transport.

Message format on the channel:
    {"method": "post_tx", "data": {...tx...}}
"""

import json
import logging
from typing import Any

from config.settings import settings
from src.ex_common.redis_client import get_broadcast_redis

logger = logging.getLogger(__name__)


class RedisPeerBroadcaster:
    def __init__(self, channel: str | None = None) -> None:
        self._channel = channel or settings.BROADCAST_CHANNEL

    async def broadcast(self, method: str, payload: dict[str, Any]) -> None:
        redis = await get_broadcast_redis()
        receivers = await redis.publish(
            self._channel, json.dumps({"method": method, "data": payload})
        )
        logger.info(
            "Broadcast %s on %s (receivers=%d)", method, self._channel, receivers
        )
