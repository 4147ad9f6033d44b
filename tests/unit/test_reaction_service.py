from __future__ import annotations

import pytest

from coach_chat.application.exceptions import NotFoundError, StoreError
from coach_chat.domain.entities.message import Reaction
from coach_chat.services import reaction_service
from tests.conftest import make_message


@pytest.mark.asyncio
async def test_add_reaction_persists_whole_list(store):
    store.seed("messages", make_message(message_id="m1"))

    reactions = await reaction_service.add_reaction("m1", "👍", "u1", store)

    assert reactions == [Reaction(emoji="👍", user_id="u1", count=1)]
    assert store.tables["messages"][0]["reactions"] == [{"emoji": "👍", "userId": "u1", "count": 1}]


@pytest.mark.asyncio
async def test_repeat_reaction_increments_count(store):
    store.seed(
        "messages",
        make_message(message_id="m1", reactions=[{"emoji": "👍", "userId": "u1", "count": 1}]),
    )

    reactions = await reaction_service.add_reaction("m1", "👍", "u1", store)

    assert [r.to_dict() for r in reactions] == [{"emoji": "👍", "userId": "u1", "count": 2}]


@pytest.mark.asyncio
async def test_null_reactions_column_is_treated_as_empty(store):
    store.seed("messages", {**make_message(message_id="m1"), "reactions": None})

    reactions = await reaction_service.add_reaction("m1", "🔥", "u2", store)

    assert len(reactions) == 1


@pytest.mark.asyncio
async def test_missing_message(store):
    with pytest.raises(NotFoundError) as exc_info:
        await reaction_service.add_reaction("nope", "👍", "u1", store)

    assert exc_info.value.detail == "Failed to fetch message"


@pytest.mark.asyncio
async def test_fetch_failure(store):
    store.seed("messages", make_message(message_id="m1"))
    store.fail_on.add("select:messages")

    with pytest.raises(StoreError) as exc_info:
        await reaction_service.add_reaction("m1", "👍", "u1", store)

    assert exc_info.value.detail == "Failed to fetch message"


@pytest.mark.asyncio
async def test_update_failure_leaves_row_untouched(store):
    store.seed("messages", make_message(message_id="m1"))
    store.fail_on.add("update:messages")

    with pytest.raises(StoreError) as exc_info:
        await reaction_service.add_reaction("m1", "👍", "u1", store)

    assert exc_info.value.detail == "Failed to update reactions"
    assert store.tables["messages"][0]["reactions"] == []


@pytest.mark.asyncio
async def test_null_stored_count_is_repaired_on_next_reaction(store):
    store.seed(
        "messages",
        make_message(message_id="m1", reactions=[{"emoji": "x", "userId": "u9", "count": None}]),
    )

    await reaction_service.add_reaction("m1", "x", "u9", store)

    assert store.tables["messages"][0]["reactions"] == [{"emoji": "x", "userId": "u9", "count": 1}]


@pytest.mark.asyncio
async def test_unknown_entry_keys_are_written_back(store):
    store.seed(
        "messages",
        make_message(
            message_id="m1",
            reactions=[{"emoji": "👍", "userId": "u1", "count": 1, "createdAt": "2024-01-01"}],
        ),
    )

    await reaction_service.add_reaction("m1", "❤️", "u2", store)

    assert store.tables["messages"][0]["reactions"] == [
        {"emoji": "👍", "userId": "u1", "count": 1, "createdAt": "2024-01-01"},
        {"emoji": "❤️", "userId": "u2", "count": 1},
    ]
