"""ex_stats REST endpoints.

GET /stats, /ver, /peer_map, /poa_nodes_online, /stat/agent_info, /difficulty
GET /ext/plain/circ_supply, /ext/plain/total_supply, /ext/plain/max_supply,
    /ext/plain/hashrate   — text/plain bodies for listing sites
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import PlainTextResponse
from sqlalchemy.ext.asyncio import AsyncSession

from src.ex_common.database import get_db_session
from src.ex_common.response import ApiResponse, respond
from src.ex_stats.application.service import StatsApplicationService

router = APIRouter(tags=["stats"])

_service = StatsApplicationService()

Db = Annotated[AsyncSession, Depends(get_db_session)]


@router.get("/stats")
async def get_stats(request: Request, db: Db) -> ApiResponse:
    return respond(request, await _service.get_stats(db))


@router.get("/ver")
async def get_ver(request: Request, db: Db) -> ApiResponse:
    result = await _service.get_version(db)
    return respond(request, result.model_dump())


@router.get("/peer_map")
async def get_peer_map(request: Request, db: Db) -> ApiResponse:
    return respond(request, await _service.get_peer_map(db))


@router.get("/poa_nodes_online")
async def get_poa_nodes_online(request: Request, db: Db) -> ApiResponse:
    return respond(request, await _service.get_poa_nodes_online(db))


@router.get("/stat/agent_info")
async def get_agent_info(
    request: Request, db: Db, agent_id: str = Query(..., alias="id", min_length=1)
) -> ApiResponse:
    return respond(request, await _service.get_agent_info(db, agent_id))


@router.get("/difficulty")
async def get_difficulty(request: Request, db: Db) -> ApiResponse:
    return respond(request, await _service.get_difficulty(db))


# ---------------------------------------------------------------------------
# Plain-text figures
# ---------------------------------------------------------------------------


@router.get("/ext/plain/circ_supply", response_class=PlainTextResponse)
async def get_circ_supply(db: Db) -> str:
    return await _service.get_circulating_supply(db)


@router.get("/ext/plain/total_supply", response_class=PlainTextResponse)
async def get_total_supply(db: Db) -> str:
    return await _service.get_total_supply(db)


@router.get("/ext/plain/max_supply", response_class=PlainTextResponse)
async def get_max_supply(db: Db) -> str:
    return await _service.get_max_supply(db)


@router.get("/ext/plain/hashrate", response_class=PlainTextResponse)
async def get_hashrate(db: Db) -> str:
    return await _service.get_hashrate(db)
