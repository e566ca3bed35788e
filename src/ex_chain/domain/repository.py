"""Protocols for ex_chain collaborators.

ChainRepositoryProtocol — node database reads (plus the max-TPS observation).
TxAdmissionProtocol     — validates and queues a submitted transaction.
PeerBroadcastProtocol   — propagates an accepted transaction to peers.
"""

from typing import Any, Protocol

from sqlalchemy.ext.asyncio import AsyncSession

from src.ex_chain.domain.models import AdmissionResult, TransactionRecord
from src.ex_common.enums import PendingFilter
from src.ex_common.pagination import Page


class ChainRepositoryProtocol(Protocol):
    async def get_kblock_page(
        self, db: AsyncSession, page: int, page_size: int
    ) -> Page: ...

    async def get_kblock(self, db: AsyncSession, block_hash: str) -> dict[str, Any] | None: ...

    async def get_kblock_by_height(
        self, db: AsyncSession, height: int
    ) -> dict[str, Any] | None: ...

    async def get_mblock(self, db: AsyncSession, block_hash: str) -> dict[str, Any] | None: ...

    async def get_sblock(self, db: AsyncSession, block_hash: str) -> dict[str, Any] | None: ...

    async def list_last_kblocks(self, db: AsyncSession, limit: int) -> list[dict[str, Any]]: ...

    async def list_last_txs(self, db: AsyncSession, limit: int) -> list[dict[str, Any]]: ...

    async def get_tx(self, db: AsyncSession, tx_hash: str) -> TransactionRecord | None: ...

    async def list_success_txs_by_height(
        self, db: AsyncSession, height: int
    ) -> list[dict[str, Any]]: ...

    async def list_mblocks(
        self, db: AsyncSession, offset: int, limit: int
    ) -> list[dict[str, Any]]: ...

    async def get_mblocks_height(self, db: AsyncSession) -> int | None: ...

    async def get_tps(self, db: AsyncSession, window_seconds: int) -> float: ...

    async def update_max_tps(self, db: AsyncSession, tps: int) -> None: ...

    async def get_pending_size(self, db: AsyncSession) -> int: ...

    async def get_pending_by_hash(
        self, db: AsyncSession, tx_hash: str
    ) -> dict[str, Any] | None: ...

    async def list_pending_by_account(
        self, db: AsyncSession, account_id: str, pending_filter: PendingFilter
    ) -> list[dict[str, Any]]: ...


class TxAdmissionProtocol(Protocol):
    async def post_tx(self, tx: dict[str, Any]) -> AdmissionResult: ...


class PeerBroadcastProtocol(Protocol):
    async def broadcast(self, method: str, payload: dict[str, Any]) -> None: ...
