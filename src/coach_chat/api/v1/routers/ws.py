from __future__ import annotations

import logging

from fastapi import APIRouter, WebSocket, WebSocketDisconnect

from coach_chat.api.deps import ManagerDep, StoreDep
from coach_chat.application.exceptions import AppError, StoreError
from coach_chat.application.ports.record_store import RecordStore
from coach_chat.config import settings
from coach_chat.infrastructure.ws.manager import ConnectionManager
from coach_chat.infrastructure.ws.protocol import (
    PERSIST_FAILED,
    ChatFrame,
    ErrorFrame,
    FrameError,
    ReactionFrame,
    ReactionUpdateFrame,
    TypingFrame,
    decode_frame,
)
from coach_chat.services import message_service, reaction_service

logger = logging.getLogger(__name__)
router = APIRouter(tags=["websocket"])


@router.websocket(settings.WS_PATH)
async def ws_gateway(
    websocket: WebSocket,
    manager: ManagerDep,
    store: StoreDep,
) -> None:
    await manager.connect(websocket)
    try:
        while True:
            raw = await _receive(websocket)
            await handle_frame(websocket, raw, manager, store)
    except WebSocketDisconnect:
        pass
    except Exception:
        logger.exception("WS error")
    finally:
        manager.disconnect(websocket)


async def _receive(ws: WebSocket) -> str:
    message = await ws.receive()
    if message["type"] == "websocket.disconnect":
        raise WebSocketDisconnect(message.get("code", 1000))
    if message.get("text") is not None:
        return message["text"]
    return (message.get("bytes") or b"").decode("utf-8", errors="replace")


async def handle_frame(
    ws: WebSocket,
    raw: str,
    manager: ConnectionManager,
    store: RecordStore,
) -> None:
    """Classify one inbound frame and apply its side effect and broadcast."""
    try:
        frame = decode_frame(raw)
    except FrameError as exc:
        logger.warning("Rejected WS frame: %s", exc.detail)
        await manager.send(ws, ErrorFrame(error=exc.detail))
        return

    try:
        if isinstance(frame, ReactionFrame):
            await _handle_reaction(ws, frame, manager, store)
        elif isinstance(frame, TypingFrame):
            await _handle_typing(ws, frame, manager)
        else:
            await _handle_chat(ws, frame, raw, manager, store)
    except Exception:
        # a failed frame is reported to its sender; the connection stays up
        logger.exception("Unhandled error processing %s frame", type(frame).__name__)
        await manager.send(ws, ErrorFrame(error=PERSIST_FAILED))


async def _handle_reaction(
    ws: WebSocket,
    frame: ReactionFrame,
    manager: ConnectionManager,
    store: RecordStore,
) -> None:
    try:
        reactions = await reaction_service.add_reaction(
            frame.messageId, frame.reaction, frame.senderId, store,
        )
    except AppError as exc:
        await manager.send(ws, ErrorFrame(error=exc.detail))
        return

    await manager.broadcast(ReactionUpdateFrame.build(frame.messageId, reactions))


async def _handle_typing(
    ws: WebSocket,
    frame: TypingFrame,
    manager: ConnectionManager,
) -> None:
    logger.info(
        "Received typing event from %s in chat %s: %s",
        frame.senderId, frame.chat_id, frame.type,
    )
    recipients = await manager.broadcast(frame, exclude=ws)
    logger.info(
        "Typing event %s from %s was sent to %d other clients.",
        frame.type, frame.senderId, recipients,
    )


async def _handle_chat(
    ws: WebSocket,
    frame: ChatFrame,
    raw: str,
    manager: ConnectionManager,
    store: RecordStore,
) -> None:
    try:
        await message_service.persist_chat_message(
            frame.chat_id, frame.author_id, frame.content, store,
        )
    except StoreError as exc:
        logger.error("Failed to insert message: %s", exc.detail)
        await manager.send(ws, ErrorFrame(error=PERSIST_FAILED))
        return

    # echo the frame as received, not the stored row
    await manager.broadcast(raw)
