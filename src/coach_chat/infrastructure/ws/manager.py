"""In-process WebSocket connection registry."""
from __future__ import annotations

import logging

from fastapi import WebSocket
from pydantic import BaseModel
from starlette.websockets import WebSocketState

logger = logging.getLogger(__name__)


def _encode(payload: BaseModel | str) -> str:
    if isinstance(payload, BaseModel):
        return payload.model_dump_json()
    return payload


class ConnectionManager:
    """Tracks every open realtime connection; there is no room partitioning."""

    def __init__(self) -> None:
        self._connections: set[WebSocket] = set()

    def __len__(self) -> int:
        return len(self._connections)

    async def connect(self, ws: WebSocket) -> None:
        await ws.accept()
        self._connections.add(ws)
        logger.info("WS connected (total=%d)", len(self._connections))

    def disconnect(self, ws: WebSocket) -> None:
        if ws in self._connections:
            self._connections.discard(ws)
            logger.info("WS disconnected (total=%d)", len(self._connections))

    def snapshot(self) -> tuple[WebSocket, ...]:
        return tuple(self._connections)

    @staticmethod
    def is_open(ws: WebSocket) -> bool:
        return (
            ws.client_state == WebSocketState.CONNECTED
            and ws.application_state == WebSocketState.CONNECTED
        )

    async def send(self, ws: WebSocket, payload: BaseModel | str) -> bool:
        """Send to one connection. Closed or failing connections are dropped, never raised."""
        if not self.is_open(ws):
            return False
        try:
            await ws.send_text(_encode(payload))
        except Exception:
            logger.warning("WS send failed, dropping connection", exc_info=True)
            self.disconnect(ws)
            return False
        return True

    async def broadcast(
        self,
        payload: BaseModel | str,
        *,
        exclude: WebSocket | None = None,
    ) -> int:
        """Send to every open connection except ``exclude``; returns the number reached."""
        raw = _encode(payload)
        delivered = 0
        for ws in self.snapshot():
            if ws is exclude:
                continue
            if await self.send(ws, raw):
                delivered += 1
        return delivered
