from __future__ import annotations

from fastapi import APIRouter
from fastapi.responses import JSONResponse

from coach_chat.api.deps import StoreDep
from coach_chat.application.exceptions import StoreError

router = APIRouter(tags=["health"])


@router.get("/")
async def root() -> dict[str, str]:
    return {"status": "ok"}


@router.get("/healthz")
async def healthz() -> dict[str, str]:
    return {"status": "ok"}


@router.get("/readyz")
async def readyz(store: StoreDep) -> JSONResponse:
    try:
        await store.ping()
    except StoreError as exc:
        return JSONResponse(
            status_code=503,
            content={"status": "unavailable", "errors": [f"postgres: {exc.detail}"]},
        )
    return JSONResponse(content={"status": "ready"})


@router.get("/api/v1/hello")
async def hello() -> dict[str, str]:
    return {"message": "hello world"}
