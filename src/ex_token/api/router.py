"""ex_token REST endpoints.

GET /top_accounts, /get_token_info_page, /get_tokens_by_owner, /token_info
GET /get_tokens_count, /get_token_holder_count, /get_tickers_all
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request
from sqlalchemy.ext.asyncio import AsyncSession

from src.ex_common.database import get_db_session
from src.ex_common.enums import TokenListType
from src.ex_common.response import ApiResponse, respond
from src.ex_token.application.service import TokenApplicationService

router = APIRouter(tags=["token"])

_service = TokenApplicationService()

Db = Annotated[AsyncSession, Depends(get_db_session)]


@router.get("/top_accounts")
async def get_top_accounts(
    request: Request,
    db: Db,
    page: int = Query(1, ge=1),
    token_hash: str | None = Query(None),
) -> ApiResponse:
    result = await _service.get_top_accounts(db, page, token_hash)
    return respond(request, result.model_dump())


@router.get("/get_token_info_page")
async def get_token_info_page(
    request: Request,
    db: Db,
    page: int = Query(1, ge=1),
    list_type: TokenListType | None = Query(None, alias="type"),
) -> ApiResponse:
    result = await _service.get_token_info_page(db, page, list_type)
    return respond(request, result.model_dump())


@router.get("/get_tokens_by_owner")
async def get_tokens_by_owner(
    request: Request, db: Db, owner: str = Query(..., min_length=1)
) -> ApiResponse:
    return respond(request, await _service.list_tokens_by_owner(db, owner))


@router.get("/token_info")
async def get_token_info(
    request: Request, db: Db, token_hash: str = Query(..., alias="hash", min_length=1)
) -> ApiResponse:
    return respond(request, await _service.get_token_info(db, token_hash))


@router.get("/get_tokens_count")
async def get_tokens_count(request: Request, db: Db) -> ApiResponse:
    result = await _service.count_tokens(db)
    return respond(request, result.model_dump())


@router.get("/get_token_holder_count")
async def get_token_holder_count(
    request: Request, db: Db, token_hash: str | None = Query(None)
) -> ApiResponse:
    result = await _service.count_holders(db, token_hash)
    return respond(request, result.model_dump())


@router.get("/get_tickers_all")
async def get_tickers_all(request: Request, db: Db) -> ApiResponse:
    return respond(request, await _service.list_tickers(db))
