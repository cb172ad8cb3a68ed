"""FastAPI application entry point.

Run with: uvicorn src.main:app --reload --port 8000
"""

# ruff: noqa: E402  -- uvloop.install() must run before other imports

import uvloop

uvloop.install()

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy import text

from config.settings import settings
from src.bt_account.api.router import admin_router as admin_users_router
from src.bt_account.api.router import router as account_router
from src.bt_common.database import engine
from src.bt_common.errors import AppError, BadRequestError, InternalError
from src.bt_common.logging_config import configure_logging
from src.bt_common.redis_client import close_redis, ping_redis
from src.bt_common.response import error_response
from src.bt_gateway.middleware.request_log import RequestLogMiddleware
from src.bt_order.api.admin_router import (
    admin_inspections_router,
    admin_trade_orders_router,
)
from src.bt_order.api.router import inspections_router, trade_orders_router
from src.bt_pricing.api.router import admin_router as admin_pricing_router
from src.bt_pricing.api.router import router as pricing_router

configure_logging(settings.LOG_LEVEL)
logger = logging.getLogger("bt.app")


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Startup: verify the DB connection and ping Redis. Shutdown: dispose."""
    async with engine.connect() as conn:
        await conn.execute(text("SELECT 1"))
    await ping_redis()
    logger.info("%s started", settings.APP_NAME)
    yield
    await engine.dispose()
    await close_redis()


app = FastAPI(
    title=settings.APP_NAME,
    version="0.1.0",
    lifespan=lifespan,
)


app.add_middleware(RequestLogMiddleware)


def _envelope(
    request: Request, status_code: int, code: int, message: str, error: str
) -> JSONResponse:
    resp = error_response(code, message, error, request)
    return JSONResponse(status_code=status_code, content=resp.model_dump())


@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    return _envelope(request, exc.http_status, exc.code, exc.message, exc.error)


@app.exception_handler(RequestValidationError)
async def validation_error_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    first = exc.errors()[0] if exc.errors() else {}
    field = ".".join(str(p) for p in first.get("loc", ()) if p != "body")
    message = f"{field}: {first.get('msg', 'invalid value')}" if field else "Invalid request"
    err = BadRequestError(message)
    return _envelope(request, err.http_status, err.code, err.message, err.error)


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    err = InternalError()
    return _envelope(request, err.http_status, err.code, err.message, err.error)


app.include_router(inspections_router, prefix="/api")
app.include_router(trade_orders_router, prefix="/api")
app.include_router(pricing_router, prefix="/api")
app.include_router(account_router, prefix="/api")
app.include_router(admin_inspections_router, prefix="/api")
app.include_router(admin_trade_orders_router, prefix="/api")
app.include_router(admin_pricing_router, prefix="/api")
app.include_router(admin_users_router, prefix="/api")


@app.get("/health")
async def health() -> dict[str, str]:
    return {"status": "ok", "version": "0.1.0"}
