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
from fastapi.responses import JSONResponse
from redis.exceptions import RedisError
from sqlalchemy import text

from config.settings import settings
from src.ms_account.api.router import router as account_router
from src.ms_common.database import engine
from src.ms_common.errors import AppError
from src.ms_common.logging_config import configure_logging
from src.ms_common.redis_client import close_redis, get_redis
from src.ms_common.request_context import current_request_context
from src.ms_common.response import error_response
from src.ms_gateway.middleware.customer_context import CustomerContextMiddleware
from src.ms_gateway.middleware.request_log import RequestLogMiddleware

configure_logging(settings.LOG_LEVEL)

logger = logging.getLogger("ms.errors")


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Startup: verify DB, open Redis pool. Shutdown: dispose."""
    # Startup
    async with engine.connect() as conn:
        await conn.execute(text("SELECT 1"))
    redis = await get_redis()
    try:
        await redis.ping()
    except RedisError as exc:
        # Cache is advisory; serve straight from the database until Redis is back.
        logging.getLogger("ms.account.cache").warning("Redis unreachable at startup: %s", exc)
    yield
    # Shutdown
    await engine.dispose()
    await close_redis()


app = FastAPI(
    title=settings.APP_NAME,
    version="0.1.0",
    lifespan=lifespan,
)


# Last added runs outermost: the customer context wraps request logging.
app.add_middleware(RequestLogMiddleware)
app.add_middleware(CustomerContextMiddleware)


@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    customer_id = current_request_context().get()
    logger.error("Error [%d] for customer ID [%s]: %s", exc.code, customer_id, exc.message)
    resp = error_response(exc.code, f"{exc.message} for customer ID: {customer_id}")
    resp.request_id = getattr(request.state, "request_id", resp.request_id)
    return JSONResponse(
        status_code=exc.http_status,
        content=resp.model_dump(),
    )


app.include_router(account_router, prefix="/api/v1")


@app.get("/health")
async def health() -> dict[str, str]:
    return {"status": "ok", "version": "0.1.0"}
