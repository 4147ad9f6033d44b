from __future__ import annotations

from typing import Any

from fastapi import APIRouter

from coach_chat.api.deps import StoreDep
from coach_chat.api.v1.schemas.chat import (
    CreateChatWithUserRequest,
    LinkUsersRequest,
    NewChatResponse,
    SendMessageRequest,
)
from coach_chat.api.v1.schemas.common import SuccessResponse
from coach_chat.services import chat_service, message_service

router = APIRouter(prefix="/api/v1", tags=["chats"])


@router.get("/fetch-chat-history/{chat_id}")
async def fetch_chat_history(chat_id: str, store: StoreDep) -> list[dict[str, Any]]:
    return await message_service.chat_history(chat_id, store)


@router.post("/create-chat", response_model=NewChatResponse)
async def create_chat(store: StoreDep) -> NewChatResponse:
    chat_id = await chat_service.create_chat(store)
    return NewChatResponse(new_chat_id=chat_id)


@router.post("/create-chat-with-user", response_model=NewChatResponse)
async def create_chat_with_user(
    body: CreateChatWithUserRequest,
    store: StoreDep,
) -> NewChatResponse:
    chat_id = await chat_service.create_chat_with_user(body.user_id, body.other_user_id, store)
    return NewChatResponse(new_chat_id=chat_id)


@router.post("/link-users-to-chat", response_model=SuccessResponse)
async def link_users_to_chat(body: LinkUsersRequest, store: StoreDep) -> SuccessResponse:
    await chat_service.link_users(body.chat_id, body.user_ids, store)
    return SuccessResponse()


@router.post("/send-message", response_model=SuccessResponse)
async def send_message(body: SendMessageRequest, store: StoreDep) -> SuccessResponse:
    await message_service.send_message(body.chat_id, body.author_id, body.content, store)
    return SuccessResponse()
