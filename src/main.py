"""FastAPI application entry point.

Run with: uvicorn src.main:app --reload --port 8080
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
from pydantic.alias_generators import to_camel
from redis.exceptions import RedisError
from sqlalchemy.exc import IntegrityError

from config.settings import settings
from src.us_card.api.router import router as card_router
from src.us_common.database import engine, ping_database
from src.us_common.errors import (
    AppError,
    DataIntegrityError,
    MalformedRequestBodyError,
    ValidationFailedError,
)
from src.us_common.redis_client import close_redis, ping_redis
from src.us_common.response import error_body
from src.us_gateway.middleware.gateway_auth import GatewayAuthMiddleware
from src.us_gateway.middleware.request_log import RequestLogMiddleware
from src.us_user.api.internal_router import router as internal_user_router
from src.us_user.api.router import router as user_router

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s %(message)s",
)
logger = logging.getLogger("us.errors")


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Startup: verify DB + Redis connections. Shutdown: dispose."""
    await ping_database()
    try:
        await ping_redis()
    except RedisError:
        # reads fall back to the store while Redis is down
        logging.getLogger("us.cache").warning("Redis unreachable at startup", exc_info=True)
    yield
    await engine.dispose()
    await close_redis()


app = FastAPI(
    title=settings.APP_NAME,
    version="0.1.0",
    lifespan=lifespan,
)


# Last added runs first: the principal must be resolved before the log line reads it.
app.add_middleware(RequestLogMiddleware)
app.add_middleware(GatewayAuthMiddleware)


def _error_response(request: Request, exc: AppError) -> JSONResponse:
    field_errors = exc.field_errors if isinstance(exc, ValidationFailedError) else None
    logger.warning(
        "%s %s -> %d %s", request.method, request.url.path, exc.http_status, exc.message
    )
    return JSONResponse(
        status_code=exc.http_status,
        content=error_body(exc.message, str(request.url), exc.http_status, field_errors),
    )


@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    return _error_response(request, exc)


def _wire_name(loc_part: object) -> str:
    """Parameter names go out camelCase, like body fields (user_id -> userId)."""
    name = str(loc_part)
    return to_camel(name) if "_" in name else name


@app.exception_handler(RequestValidationError)
async def request_validation_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    errors = exc.errors()
    if any(err.get("type") == "json_invalid" for err in errors):
        return _error_response(request, MalformedRequestBodyError())

    field_errors: dict[str, str] = {}
    for err in errors:
        loc = err.get("loc") or ("request",)
        field_errors.setdefault(_wire_name(loc[-1]), err.get("msg", "Invalid value"))
    return _error_response(request, ValidationFailedError(field_errors))


@app.exception_handler(IntegrityError)
async def integrity_error_handler(request: Request, exc: IntegrityError) -> JSONResponse:
    return _error_response(request, DataIntegrityError())


app.include_router(user_router, prefix="/api")
app.include_router(card_router, prefix="/api")
app.include_router(internal_user_router, prefix="/api")


@app.get("/health")
async def health() -> dict[str, str]:
    return {"status": "ok"}
