"""ex_account REST endpoints — account history and balances.

GET /account            — all movements, fee-netted
GET /account_in         — inbound movements, fee-netted
GET /account_out        — outbound movements, fee-netted
GET /account_transactions, /account_rewards, /account_{m,s,ref,k}reward
GET /balance, /balance_all, /balance_mineable, /balance_reissuable
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request
from sqlalchemy.ext.asyncio import AsyncSession

from src.ex_account.application.service import AccountApplicationService
from src.ex_common.database import get_db_session
from src.ex_common.enums import HistoryDirection, RewardType
from src.ex_common.response import ApiResponse, respond

router = APIRouter(tags=["account"])

_service = AccountApplicationService()

AccountId = Annotated[str, Query(alias="id", min_length=1, description="Account public key")]
PageNo = Annotated[int, Query(ge=1, description="1-based page number")]
Db = Annotated[AsyncSession, Depends(get_db_session)]


@router.get("/account")
async def get_account(
    request: Request, db: Db, account_id: AccountId, page: PageNo = 1
) -> ApiResponse:
    result = await _service.get_history(db, account_id, page, HistoryDirection.ALL)
    return respond(request, result.model_dump())


@router.get("/account_in")
async def get_account_in(
    request: Request, db: Db, account_id: AccountId, page: PageNo = 1
) -> ApiResponse:
    result = await _service.get_history(db, account_id, page, HistoryDirection.IN)
    return respond(request, result.model_dump())


@router.get("/account_out")
async def get_account_out(
    request: Request, db: Db, account_id: AccountId, page: PageNo = 1
) -> ApiResponse:
    result = await _service.get_history(db, account_id, page, HistoryDirection.OUT)
    return respond(request, result.model_dump())


@router.get("/account_transactions")
async def get_account_transactions(
    request: Request, db: Db, account_id: AccountId, page: PageNo = 1
) -> ApiResponse:
    result = await _service.list_transactions(db, account_id, page)
    return respond(request, result.model_dump())


@router.get("/account_rewards")
async def get_account_rewards(
    request: Request, db: Db, account_id: AccountId, page: PageNo = 1
) -> ApiResponse:
    result = await _service.list_rewards(db, account_id, page)
    return respond(request, result.model_dump())


@router.get("/account_mreward")
async def get_account_mreward(
    request: Request, db: Db, account_id: AccountId, page: PageNo = 1
) -> ApiResponse:
    result = await _service.list_rewards(db, account_id, page, RewardType.MBLOCK)
    return respond(request, result.model_dump())


@router.get("/account_sreward")
async def get_account_sreward(
    request: Request, db: Db, account_id: AccountId, page: PageNo = 1
) -> ApiResponse:
    result = await _service.list_rewards(db, account_id, page, RewardType.SBLOCK)
    return respond(request, result.model_dump())


@router.get("/account_refreward")
async def get_account_refreward(
    request: Request, db: Db, account_id: AccountId, page: PageNo = 1
) -> ApiResponse:
    result = await _service.list_rewards(db, account_id, page, RewardType.REFERRAL)
    return respond(request, result.model_dump())


@router.get("/account_kreward")
async def get_account_kreward(
    request: Request, db: Db, account_id: AccountId, page: PageNo = 1
) -> ApiResponse:
    result = await _service.list_rewards(db, account_id, page, RewardType.KBLOCK)
    return respond(request, result.model_dump())


@router.get("/balance")
async def get_balance(
    request: Request,
    db: Db,
    account_id: AccountId,
    token: str | None = Query(None, description="Token hash. Default: native token"),
) -> ApiResponse:
    result = await _service.get_balance(db, account_id, token)
    return respond(request, result.model_dump())


@router.get("/balance_all")
async def get_balance_all(request: Request, db: Db, account_id: AccountId) -> ApiResponse:
    return respond(request, await _service.list_balances(db, account_id))


@router.get("/balance_mineable")
async def get_balance_mineable(
    request: Request, db: Db, account_id: AccountId
) -> ApiResponse:
    return respond(request, await _service.list_balances(db, account_id, minable_only=True))


@router.get("/balance_reissuable")
async def get_balance_reissuable(
    request: Request, db: Db, account_id: AccountId
) -> ApiResponse:
    return respond(
        request, await _service.list_balances(db, account_id, reissuable_only=True)
    )
