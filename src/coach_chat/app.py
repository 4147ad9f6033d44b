from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from coach_chat.api.middleware.correlation_id import CorrelationIdMiddleware
from coach_chat.api.middleware.metrics import RequestTimingMiddleware
from coach_chat.api.v1.routers import chats, coaches, health, profiles, text, ws
from coach_chat.application.exceptions import (
    AppError,
    NotFoundError,
    StoreError,
    UpstreamError,
    ValidationError,
)
from coach_chat.config import settings
from coach_chat.infrastructure.db.record_store import SqlAlchemyRecordStore
from coach_chat.infrastructure.db.session import build_engine, build_sessionmaker
from coach_chat.infrastructure.ws.manager import ConnectionManager

logger = logging.getLogger(__name__)

_STATUS_BY_ERROR: dict[type[AppError], int] = {
    NotFoundError: 404,
    ValidationError: 400,
    StoreError: 500,
    UpstreamError: 500,
}


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Startup / shutdown lifecycle."""
    engine = build_engine(settings)
    app.state.store = SqlAlchemyRecordStore(build_sessionmaker(engine))
    logger.info("Database engine created for %s:%s", settings.DB_HOST, settings.DB_PORT)

    yield

    await engine.dispose()
    logger.info("Database engine disposed")


def create_app() -> FastAPI:
    app = FastAPI(
        title="Coach Chat Service",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.state.manager = ConnectionManager()

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(RequestTimingMiddleware)
    app.add_middleware(CorrelationIdMiddleware)

    _register_exception_handlers(app)

    app.include_router(health.router)
    app.include_router(profiles.router)
    app.include_router(coaches.router)
    app.include_router(chats.router)
    app.include_router(text.router)
    app.include_router(ws.router)

    return app


def _register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(AppError)
    async def _app_error(_req: Request, exc: AppError) -> JSONResponse:
        status_code = next(
            (code for cls, code in _STATUS_BY_ERROR.items() if isinstance(exc, cls)),
            500,
        )
        if status_code >= 500:
            logger.error("%s: %s", type(exc).__name__, exc.detail)
        return JSONResponse(status_code=status_code, content={"message": exc.detail})

    @app.exception_handler(RequestValidationError)
    async def _invalid_request(_req: Request, exc: RequestValidationError) -> JSONResponse:
        return JSONResponse(status_code=400, content={"errors": jsonable_encoder(exc.errors())})
