"""NodeAdmissionClient — forwards a submitted transaction to the node API.

The node validates and queues the transaction; its JSON answer (err=0 on
acceptance) is returned unchanged to the caller.
"""

import logging
from typing import Any

import httpx

from config.settings import settings
from src.ex_chain.domain.models import AdmissionResult
from src.ex_common.errors import InternalError

logger = logging.getLogger(__name__)


class NodeAdmissionClient:
    def __init__(self, base_url: str | None = None, timeout: float | None = None) -> None:
        self._base_url = (base_url or settings.NODE_API_URL).rstrip("/")
        self._timeout = timeout if timeout is not None else settings.NODE_API_TIMEOUT

    async def post_tx(self, tx: dict[str, Any]) -> AdmissionResult:
        try:
            async with httpx.AsyncClient(timeout=self._timeout) as client:
                resp = await client.post(f"{self._base_url}/tx", json=[tx])
                resp.raise_for_status()
                body = resp.json()
        except (httpx.HTTPError, ValueError) as exc:
            logger.error("Admission request failed: %s", exc)
            raise InternalError(f"Admission service unavailable: {exc}") from exc

        if not isinstance(body, dict) or "err" not in body:
            raise InternalError(f"Unexpected admission response: {body!r}")
        return AdmissionResult(err=int(body["err"]), body=body)
