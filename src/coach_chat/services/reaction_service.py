from __future__ import annotations

import logging
from typing import Any

from coach_chat.application.exceptions import NotFoundError, StoreError
from coach_chat.application.ports.record_store import RecordStore
from coach_chat.domain.entities.message import Reaction, StoredMessage
from coach_chat.domain.reactions import merge_reaction
from coach_chat.domain.value_objects import collections

logger = logging.getLogger(__name__)


async def add_reaction(
    message_id: Any,
    emoji: str | None,
    user_id: Any,
    store: RecordStore,
) -> list[Reaction]:
    """Merge one reaction into a stored message and persist the whole list.

    Fetch and update are two independent store calls with no locking, so
    concurrent reactions on the same message can overwrite each other
    (last write wins).

    Raises NotFoundError when the message does not exist and StoreError when
    either store call fails. Error details are safe to show to clients.
    """
    try:
        row = await store.select_one(collections.MESSAGES, {"id": message_id})
    except StoreError as exc:
        logger.error("Failed to fetch message %s for reaction: %s", message_id, exc.detail)
        raise StoreError("Failed to fetch message") from exc
    if row is None:
        logger.error("Failed to fetch message %s for reaction: not found", message_id)
        raise NotFoundError("Failed to fetch message")

    message = StoredMessage.from_row(row)
    updated = merge_reaction(message.reactions, emoji, user_id)

    try:
        await store.update(
            collections.MESSAGES,
            {"id": message_id},
            {"reactions": [r.to_dict() for r in updated]},
        )
    except StoreError as exc:
        logger.error("Failed to update reactions on %s: %s", message_id, exc.detail)
        raise StoreError("Failed to update reactions") from exc

    logger.debug("Reaction %s by %s on %s", emoji, user_id, message_id)
    return updated
