from __future__ import annotations

import logging
from typing import Any

from coach_chat.application.exceptions import NotFoundError, StoreError, ValidationError
from coach_chat.application.ports.record_store import RecordStore, Row
from coach_chat.domain.value_objects import collections
from coach_chat.domain.value_objects.enums import MessageStatus, UserRole

logger = logging.getLogger(__name__)


async def persist_chat_message(
    chat_id: Any,
    author_id: Any,
    content: Any,
    store: RecordStore,
) -> Row:
    """Store a realtime chat message as-is with status ``sent``."""
    rows = await store.insert(
        collections.MESSAGES,
        [
            {
                "chat_id": chat_id,
                "author_id": author_id,
                "content": content,
                "status": MessageStatus.SENT.value,
            }
        ],
    )
    return rows[0]


async def resolve_status(chat_id: str, author_id: str, store: RecordStore) -> MessageStatus:
    """A message waits for the coach when another participant of the chat is a coach."""
    if await store.select_one(collections.CHATS, {"id": chat_id}, columns=["id"]) is None:
        raise NotFoundError("Failed to fetch chat details")

    members = await store.select(
        collections.CHATS_USERS, columns=["user_id"], filters={"chat_id": chat_id},
    )
    for member in members:
        if member["user_id"] == author_id:
            continue
        profile = await store.select_one(
            collections.PROFILES, {"id": member["user_id"]}, columns=["id", "role"],
        )
        if profile is not None and profile.get("role") == UserRole.COACH:
            return MessageStatus.WAITING_FOR_COACH
    return MessageStatus.SENT


async def send_message(
    chat_id: str,
    author_id: str,
    content: str,
    store: RecordStore,
) -> Row:
    """REST send path: trims content and routes coach-bound messages to ``waiting_for_coach``."""
    trimmed = content.strip()
    if not trimmed:
        raise ValidationError("Message content cannot be empty")

    status = await resolve_status(chat_id, author_id, store)
    try:
        rows = await store.insert(
            collections.MESSAGES,
            [
                {
                    "chat_id": chat_id,
                    "author_id": author_id,
                    "content": trimmed,
                    "status": status.value,
                }
            ],
        )
    except StoreError as exc:
        raise StoreError("Failed to send message") from exc
    logger.info("Message stored in chat %s with status %s", chat_id, status)
    return rows[0]


async def chat_history(chat_id: str, store: RecordStore) -> list[Row]:
    try:
        return await store.select(
            collections.MESSAGES, filters={"chat_id": chat_id}, order_by="created_at",
        )
    except StoreError as exc:
        raise StoreError(f"Failed to fetch chat history: {exc.detail}") from exc
