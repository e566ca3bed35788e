"""ChainApplicationService — blocks, transactions, pending pool, submission.

Reads are plain repository pass-through except the transaction detail, which
nets the token fee out of the stored total. Submission hands the transaction
to the admission collaborator and, only when it was accepted, to the peer
broadcast collaborator.
"""

import logging
import math
from typing import Any

from redis.exceptions import RedisError
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from config.settings import settings
from src.ex_chain.application.schemas import (
    HeightResponse,
    KblockPageResponse,
    LastBlocksResponse,
    PendingSizeResponse,
    TpsResponse,
    TransactionDetail,
    TxSubmission,
)
from src.ex_chain.domain.repository import (
    ChainRepositoryProtocol,
    PeerBroadcastProtocol,
    TxAdmissionProtocol,
)
from src.ex_chain.infrastructure.admission_client import NodeAdmissionClient
from src.ex_chain.infrastructure.broadcaster import RedisPeerBroadcaster
from src.ex_chain.infrastructure.persistence import ChainRepository
from src.ex_common.enums import PendingFilter
from src.ex_common.errors import TransactionNotFoundError, TxBatchSizeError

logger = logging.getLogger(__name__)

BROADCAST_METHOD_POST_TX = "post_tx"


class ChainApplicationService:
    def __init__(
        self,
        repo: ChainRepositoryProtocol | None = None,
        admission: TxAdmissionProtocol | None = None,
        broadcaster: PeerBroadcastProtocol | None = None,
    ) -> None:
        self._repo: ChainRepositoryProtocol = repo or ChainRepository()
        self._admission: TxAdmissionProtocol = admission or NodeAdmissionClient()
        self._broadcaster: PeerBroadcastProtocol = broadcaster or RedisPeerBroadcaster()

    # --- blocks -----------------------------------------------------------

    async def get_kblock_page(self, db: AsyncSession, page: int) -> KblockPageResponse:
        result = await self._repo.get_kblock_page(db, page, settings.PAGE_SIZE)
        return KblockPageResponse(kblocks=result.records, page_count=result.page_count)

    async def get_kblock(self, db: AsyncSession, block_hash: str) -> dict[str, Any] | None:
        return await self._repo.get_kblock(db, block_hash)

    async def get_kblock_by_height(
        self, db: AsyncSession, height: int
    ) -> dict[str, Any] | None:
        return await self._repo.get_kblock_by_height(db, height)

    async def get_mblock(self, db: AsyncSession, block_hash: str) -> dict[str, Any] | None:
        return await self._repo.get_mblock(db, block_hash)

    async def get_sblock(self, db: AsyncSession, block_hash: str) -> dict[str, Any] | None:
        return await self._repo.get_sblock(db, block_hash)

    async def get_last_blocks(self, db: AsyncSession) -> LastBlocksResponse:
        blocks = await self._repo.list_last_kblocks(db, settings.PAGE_SIZE)
        return LastBlocksResponse(blocks=blocks)

    async def list_mblocks(
        self, db: AsyncSession, offset: int, limit: int
    ) -> list[dict[str, Any]]:
        limit = min(limit, settings.MBLOCKS_MAX_LIMIT)
        if limit <= 0:
            return []
        return await self._repo.list_mblocks(db, offset, limit)

    async def get_height(self, db: AsyncSession) -> HeightResponse:
        height = await self._repo.get_mblocks_height(db)
        return HeightResponse(height=int(height) if height is not None else None)

    # --- transactions -----------------------------------------------------

    async def get_last_txs(self, db: AsyncSession) -> list[dict[str, Any]]:
        return await self._repo.list_last_txs(db, settings.PAGE_SIZE)

    async def get_tx(self, db: AsyncSession, tx_hash: str) -> TransactionDetail:
        tx = await self._repo.get_tx(db, tx_hash)
        if tx is None:
            raise TransactionNotFoundError(tx_hash)
        return TransactionDetail.from_record(tx)

    async def list_success_txs_by_height(
        self, db: AsyncSession, height: int
    ) -> list[dict[str, Any]]:
        return await self._repo.list_success_txs_by_height(db, height)

    async def get_tps(self, db: AsyncSession) -> TpsResponse:
        raw = await self._repo.get_tps(db, settings.TPS_WINDOW_SECONDS)
        tps = math.floor(raw + 0.5)
        # Observation only: the running maximum is the node's state, never read back here.
        try:
            await self._repo.update_max_tps(db, tps)
            await db.commit()
        except SQLAlchemyError as exc:
            logger.warning("Could not record max tps %d: %s", tps, exc)
            await db.rollback()
        return TpsResponse(tps=tps)

    # --- pending pool -----------------------------------------------------

    async def get_pending_size(self, db: AsyncSession) -> PendingSizeResponse:
        return PendingSizeResponse(size=await self._repo.get_pending_size(db))

    async def get_pending_by_hash(
        self, db: AsyncSession, tx_hash: str
    ) -> dict[str, Any] | None:
        return await self._repo.get_pending_by_hash(db, tx_hash)

    async def list_pending_by_account(
        self, db: AsyncSession, account_id: str, pending_filter: PendingFilter
    ) -> list[dict[str, Any]]:
        return await self._repo.list_pending_by_account(db, account_id, pending_filter)

    # --- submission -------------------------------------------------------

    async def submit_tx(self, txs: list[TxSubmission]) -> dict[str, Any]:
        if len(txs) != 1:
            raise TxBatchSizeError()
        payload = txs[0].to_payload()
        result = await self._admission.post_tx(payload)
        if result.accepted:
            # Admission already queued the transaction; its result is returned regardless.
            try:
                await self._broadcaster.broadcast(BROADCAST_METHOD_POST_TX, payload)
            except (RedisError, OSError):
                logger.exception("Broadcast of accepted transaction failed")
        else:
            logger.info("Transaction rejected by admission: %s", result.body)
        return result.body
