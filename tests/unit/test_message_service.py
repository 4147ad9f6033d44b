from __future__ import annotations

import pytest

from coach_chat.application.exceptions import NotFoundError, StoreError, ValidationError
from coach_chat.domain.value_objects.enums import MessageStatus
from coach_chat.services import message_service


def _chat_with(store, chat_id: str, *members: tuple[str, str]) -> None:
    store.seed("chats", {"id": chat_id})
    for user_id, role in members:
        store.seed("profiles", {"id": user_id, "name": user_id, "role": role})
        store.seed("chats_users", {"chat_id": chat_id, "user_id": user_id})


@pytest.mark.asyncio
async def test_persist_chat_message_is_sent(store):
    row = await message_service.persist_chat_message("c1", "u1", "hi", store)

    assert row["status"] == "sent"
    assert store.tables["messages"][0]["content"] == "hi"


@pytest.mark.asyncio
async def test_persist_chat_message_propagates_store_failure(store):
    store.fail_on.add("insert")

    with pytest.raises(StoreError):
        await message_service.persist_chat_message("c1", "u1", "hi", store)


@pytest.mark.asyncio
async def test_send_message_to_coach_waits_for_coach(store):
    _chat_with(store, "c1", ("client", "user"), ("coach", "coach"))

    await message_service.send_message("c1", "client", "  need help  ", store)

    stored = store.tables["messages"][0]
    assert stored["status"] == MessageStatus.WAITING_FOR_COACH
    assert stored["content"] == "need help"


@pytest.mark.asyncio
async def test_send_message_from_coach_is_sent(store):
    _chat_with(store, "c1", ("client", "user"), ("coach", "coach"))

    await message_service.send_message("c1", "coach", "hello", store)

    assert store.tables["messages"][0]["status"] == MessageStatus.SENT


@pytest.mark.asyncio
async def test_send_message_rejects_blank_content(store):
    _chat_with(store, "c1", ("client", "user"))

    with pytest.raises(ValidationError):
        await message_service.send_message("c1", "client", "   ", store)
    assert store.tables["messages"] == []


@pytest.mark.asyncio
async def test_send_message_unknown_chat(store):
    with pytest.raises(NotFoundError):
        await message_service.send_message("missing", "client", "hi", store)


@pytest.mark.asyncio
async def test_chat_history_is_chronological(store):
    store.seed(
        "messages",
        {"chat_id": "c1", "author_id": "u1", "content": "first"},
        {"chat_id": "c2", "author_id": "u1", "content": "other chat"},
        {"chat_id": "c1", "author_id": "u2", "content": "second"},
    )

    history = await message_service.chat_history("c1", store)

    assert [m["content"] for m in history] == ["first", "second"]
