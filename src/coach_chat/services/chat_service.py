from __future__ import annotations

import logging
import uuid
from collections.abc import Sequence

from coach_chat.application.exceptions import StoreError
from coach_chat.application.ports.record_store import RecordStore
from coach_chat.domain.value_objects import collections

logger = logging.getLogger(__name__)


async def create_chat(store: RecordStore) -> str:
    chat_id = str(uuid.uuid4())
    try:
        await store.insert(collections.CHATS, [{"id": chat_id}])
    except StoreError as exc:
        raise StoreError("Failed to create chat") from exc
    logger.info("Chat %s created", chat_id)
    return chat_id


async def link_users(chat_id: str, user_ids: Sequence[str], store: RecordStore) -> None:
    """Attach users to a chat, one row each."""
    if not user_ids:
        return
    try:
        await store.insert(
            collections.CHATS_USERS,
            [{"chat_id": chat_id, "user_id": user_id} for user_id in user_ids],
        )
    except StoreError as exc:
        raise StoreError("Failed to link chat with users") from exc


async def create_chat_with_user(user_id: str, other_user_id: str, store: RecordStore) -> str:
    chat_id = await create_chat(store)
    await link_users(chat_id, [user_id, other_user_id], store)
    return chat_id
