"""ex_staking REST endpoints.

GET /roi_by_stake, /roi, /get_min_stake, /get_stake_limits, /referrer_stake
GET /poa_with_stake, /get_transfer_lock
GET /get_top_pos, /get_pos_total_stake, /get_pos_active_total_stake
GET /get_pos_list_count, /get_pos_list_page, /get_pos_info, /get_pos_list_all
GET /get_pos_list, /get_pos_names
GET /get_delegated_list, /get_delegated_page
GET /get_undelegated_list, /get_undelegated_page
GET /get_delegators_list, /get_delegators_page
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request
from sqlalchemy.ext.asyncio import AsyncSession

from src.ex_common.database import get_db_session
from src.ex_common.response import ApiResponse, respond
from src.ex_staking.application.service import StakingApplicationService

router = APIRouter(tags=["staking"])

_service = StakingApplicationService()

Db = Annotated[AsyncSession, Depends(get_db_session)]
PageNum = Annotated[int, Query(ge=1, description="1-based page number")]
Delegator = Annotated[str, Query(min_length=1)]
PosId = Annotated[str, Query(min_length=1)]


# ---------------------------------------------------------------------------
# Yield and limits
# ---------------------------------------------------------------------------


@router.get("/roi_by_stake")
async def roi_by_stake(
    request: Request,
    db: Db,
    token_hash: str | None = Query(None, alias="hash"),
    stake: str | None = Query(None, description="Stake in smallest token units"),
) -> ApiResponse:
    result = await _service.roi_by_stake(db, token_hash, stake)
    return respond(request, result.model_dump())


@router.get("/roi")
async def get_roi(
    request: Request, db: Db, token_hash: str | None = Query(None, alias="hash")
) -> ApiResponse:
    points = await _service.get_roi(db, token_hash)
    return respond(request, [p.model_dump() for p in points])


@router.get("/get_min_stake")
async def get_min_stake(request: Request) -> ApiResponse:
    return respond(request, _service.get_min_stake().model_dump())


@router.get("/get_stake_limits")
async def get_stake_limits(request: Request) -> ApiResponse:
    return respond(request, _service.get_stake_limits().model_dump())


@router.get("/get_transfer_lock")
async def get_transfer_lock(request: Request) -> ApiResponse:
    return respond(request, _service.get_transfer_lock().model_dump())


@router.get("/referrer_stake")
async def get_referrer_stake(request: Request, db: Db) -> ApiResponse:
    result = await _service.get_referrer_stake(db)
    return respond(request, result.model_dump())


@router.get("/poa_with_stake")
async def get_poa_with_stake(request: Request, db: Db) -> ApiResponse:
    result = await _service.count_poa_with_stake(db)
    return respond(request, result.model_dump())


# ---------------------------------------------------------------------------
# PoS contracts
# ---------------------------------------------------------------------------


@router.get("/get_top_pos")
async def get_top_pos(request: Request, db: Db) -> ApiResponse:
    result = await _service.get_top_pos(db)
    return respond(request, result.model_dump())


@router.get("/get_pos_total_stake")
async def get_pos_total_stake(request: Request, db: Db) -> ApiResponse:
    result = await _service.get_pos_total_stake(db)
    return respond(request, result.model_dump())


@router.get("/get_pos_active_total_stake")
async def get_pos_active_total_stake(request: Request, db: Db) -> ApiResponse:
    result = await _service.get_pos_active_total_stake(db)
    return respond(request, result.model_dump())


@router.get("/get_pos_list_count")
async def get_pos_list_count(request: Request, db: Db) -> ApiResponse:
    result = await _service.get_pos_count(db)
    return respond(request, result.model_dump())


@router.get("/get_pos_list_page")
async def get_pos_list_page(request: Request, db: Db, page: PageNum = 1) -> ApiResponse:
    result = await _service.get_pos_page(db, page)
    return respond(request, result.model_dump())


@router.get("/get_pos_info")
async def get_pos_info(request: Request, db: Db, pos_id: PosId) -> ApiResponse:
    return respond(request, await _service.get_pos_info(db, pos_id))


@router.get("/get_pos_list_all")
async def get_pos_list_all(request: Request, db: Db) -> ApiResponse:
    return respond(request, await _service.list_pos_all(db))


@router.get("/get_pos_list")
async def get_pos_list(
    request: Request, db: Db, owner: str = Query(..., min_length=1)
) -> ApiResponse:
    return respond(request, await _service.list_pos_by_owner(db, owner))


@router.get("/get_pos_names")
async def get_pos_names(request: Request, db: Db) -> ApiResponse:
    return respond(request, await _service.list_pos_names(db))


# ---------------------------------------------------------------------------
# Delegation
# ---------------------------------------------------------------------------


@router.get("/get_delegated_list")
async def get_delegated_list(request: Request, db: Db, delegator: Delegator) -> ApiResponse:
    return respond(request, await _service.list_delegated(db, delegator))


@router.get("/get_delegated_page")
async def get_delegated_page(
    request: Request, db: Db, delegator: Delegator, page: PageNum = 1
) -> ApiResponse:
    result = await _service.get_delegated_page(db, delegator, page)
    return respond(request, result.model_dump())


@router.get("/get_undelegated_list")
async def get_undelegated_list(request: Request, db: Db, delegator: Delegator) -> ApiResponse:
    return respond(request, await _service.list_undelegated(db, delegator))


@router.get("/get_undelegated_page")
async def get_undelegated_page(
    request: Request, db: Db, delegator: Delegator, page: PageNum = 1
) -> ApiResponse:
    result = await _service.get_undelegated_page(db, delegator, page)
    return respond(request, result.model_dump())


@router.get("/get_delegators_list")
async def get_delegators_list(request: Request, db: Db, pos_id: PosId) -> ApiResponse:
    return respond(request, await _service.list_delegators(db, pos_id))


@router.get("/get_delegators_page")
async def get_delegators_page(
    request: Request, db: Db, pos_id: PosId, page: PageNum = 1
) -> ApiResponse:
    result = await _service.get_delegators_page(db, pos_id, page)
    return respond(request, result.model_dump())
