"""ex_search REST endpoints.

GET /search?value   — {type, link} of the first matching entity, or null
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request
from sqlalchemy.ext.asyncio import AsyncSession

from src.ex_common.database import get_db_session
from src.ex_common.response import ApiResponse, respond
from src.ex_search.application.service import SearchApplicationService

router = APIRouter(tags=["search"])

_service = SearchApplicationService()


@router.get("/search")
async def search(
    request: Request,
    db: Annotated[AsyncSession, Depends(get_db_session)],
    value: str = Query(..., min_length=1, max_length=256),
) -> ApiResponse:
    result = await _service.search(db, value.strip())
    return respond(request, result.model_dump() if result else None)
