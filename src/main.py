"""FastAPI application entry point.

Run with: uvicorn src.main:app --port 8000
"""

# ruff: noqa: E402  -- uvloop.install() must run before other imports

import uvloop

uvloop.install()

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.routing import APIRoute
from sqlalchemy import text

from config.settings import settings
from src.ex_account.api.router import router as account_router
from src.ex_chain.api.router import router as chain_router
from src.ex_common.database import engine
from src.ex_common.errors import AppError
from src.ex_common.redis_client import close_broadcast_redis, get_broadcast_redis
from src.ex_common.request_log import RequestLogMiddleware
from src.ex_common.response import (
    GENERIC_ERROR_MESSAGE,
    ApiResponse,
    error_response,
    respond,
)
from src.ex_search.api.router import router as search_router
from src.ex_staking.api.router import router as staking_router
from src.ex_stats.api.router import router as stats_router
from src.ex_token.api.router import router as token_router

logger = logging.getLogger(__name__)

API_PREFIX = "/api/v1"
INTERNAL_ERROR_CODE = 9001


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Startup: verify DB + Redis connections. Shutdown: dispose."""
    # Startup
    async with engine.connect() as conn:
        await conn.execute(text("SELECT 1"))
    await (await get_broadcast_redis()).ping()
    yield
    # Shutdown
    await engine.dispose()
    await close_broadcast_redis()


app = FastAPI(
    title=settings.APP_NAME,
    version="0.1.0",
    debug=settings.DEBUG,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_methods=["GET", "POST"],
    allow_headers=["*"],
)
app.add_middleware(RequestLogMiddleware)


def _error_json(request: Request, status_code: int, code: int, message: str) -> JSONResponse:
    resp = error_response(code, message)
    resp.request_id = getattr(request.state, "request_id", resp.request_id)
    return JSONResponse(status_code=status_code, content=resp.model_dump())


@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    if exc.is_internal:
        logger.error(
            "Internal fault %d on %s %s: %s",
            exc.code, request.method, request.url.path, exc.message,
        )
        return _error_json(request, exc.http_status, exc.code, GENERIC_ERROR_MESSAGE)
    return _error_json(request, exc.http_status, exc.code, exc.message)


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return _error_json(request, 500, INTERNAL_ERROR_CODE, GENERIC_ERROR_MESSAGE)


app.include_router(chain_router, prefix=API_PREFIX)
app.include_router(account_router, prefix=API_PREFIX)
app.include_router(staking_router, prefix=API_PREFIX)
app.include_router(token_router, prefix=API_PREFIX)
app.include_router(search_router, prefix=API_PREFIX)
app.include_router(stats_router, prefix=API_PREFIX)


@app.get(f"{API_PREFIX}/list")
async def list_routes(request: Request) -> ApiResponse:
    return respond(request, [r.path for r in app.routes if isinstance(r, APIRoute)])


@app.get("/health")
async def health() -> dict[str, str]:
    return {"status": "ok", "version": "0.1.0"}
