"""ex_chain REST endpoints.

GET  /page, /macroblock, /macroblock_by_height, /mblock, /sblock, /lastblocks
GET  /mblocks, /height
GET  /lasttxs, /tx, /success_tx_by_height, /tps
GET  /pending_size, /pending_tx_hash, /pending_tx_account
POST /tx                     — submit exactly one signed transaction
"""

from typing import Annotated

from fastapi import APIRouter, Body, Depends, Query, Request
from sqlalchemy.ext.asyncio import AsyncSession

from src.ex_chain.application.schemas import TxSubmission
from src.ex_chain.application.service import ChainApplicationService
from src.ex_common.database import get_db_session
from src.ex_common.enums import PendingFilter
from src.ex_common.response import ApiResponse, respond

router = APIRouter(tags=["chain"])

_service = ChainApplicationService()

Db = Annotated[AsyncSession, Depends(get_db_session)]
BlockHash = Annotated[str, Query(alias="hash", min_length=1)]
Height = Annotated[int, Query(ge=0)]


@router.get("/page")
async def get_page(
    request: Request, db: Db, n: int = Query(1, ge=1, description="1-based page number")
) -> ApiResponse:
    result = await _service.get_kblock_page(db, n)
    return respond(request, result.model_dump())


@router.get("/macroblock")
async def get_macroblock(request: Request, db: Db, block_hash: BlockHash) -> ApiResponse:
    return respond(request, await _service.get_kblock(db, block_hash))


@router.get("/macroblock_by_height")
async def get_macroblock_by_height(request: Request, db: Db, height: Height) -> ApiResponse:
    return respond(request, await _service.get_kblock_by_height(db, height))


@router.get("/mblock")
async def get_mblock(request: Request, db: Db, block_hash: BlockHash) -> ApiResponse:
    return respond(request, await _service.get_mblock(db, block_hash))


@router.get("/sblock")
async def get_sblock(request: Request, db: Db, block_hash: BlockHash) -> ApiResponse:
    return respond(request, await _service.get_sblock(db, block_hash))


@router.get("/lastblocks")
async def get_lastblocks(request: Request, db: Db) -> ApiResponse:
    result = await _service.get_last_blocks(db)
    return respond(request, result.model_dump())


@router.get("/mblocks")
async def get_mblocks(
    request: Request,
    db: Db,
    offset: int = Query(0, ge=0),
    limit: int = Query(0, ge=0, description="Capped at MBLOCKS_MAX_LIMIT"),
) -> ApiResponse:
    return respond(request, await _service.list_mblocks(db, offset, limit))


@router.get("/height")
async def get_height(request: Request, db: Db) -> ApiResponse:
    result = await _service.get_height(db)
    return respond(request, result.model_dump())


@router.get("/lasttxs")
async def get_lasttxs(request: Request, db: Db) -> ApiResponse:
    return respond(request, await _service.get_last_txs(db))


@router.get("/tx")
async def get_tx(request: Request, db: Db, tx_hash: BlockHash) -> ApiResponse:
    result = await _service.get_tx(db, tx_hash)
    return respond(request, result.model_dump(by_alias=True))


@router.get("/success_tx_by_height")
async def get_success_tx_by_height(request: Request, db: Db, height: Height) -> ApiResponse:
    return respond(request, await _service.list_success_txs_by_height(db, height))


@router.get("/tps")
async def get_tps(request: Request, db: Db) -> ApiResponse:
    result = await _service.get_tps(db)
    return respond(request, result.model_dump())


@router.get("/pending_size")
async def get_pending_size(request: Request, db: Db) -> ApiResponse:
    result = await _service.get_pending_size(db)
    return respond(request, result.model_dump())


@router.get("/pending_tx_hash")
async def get_pending_tx_hash(request: Request, db: Db, tx_hash: BlockHash) -> ApiResponse:
    return respond(request, await _service.get_pending_by_hash(db, tx_hash))


@router.get("/pending_tx_account")
async def get_pending_tx_account(
    request: Request,
    db: Db,
    account_id: str = Query(..., alias="id", min_length=1),
    pending_filter: PendingFilter = Query(PendingFilter.ALL, alias="filter"),
) -> ApiResponse:
    return respond(
        request, await _service.list_pending_by_account(db, account_id, pending_filter)
    )


@router.post("/tx")
async def post_tx(
    request: Request, txs: Annotated[list[TxSubmission], Body()]
) -> ApiResponse:
    return respond(request, await _service.submit_tx(txs))
