from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from coach_chat.application.exceptions import NotFoundError
from coach_chat.application.ports.record_store import RecordStore, Row
from coach_chat.domain.value_objects import collections
from coach_chat.domain.value_objects.enums import UserRole


async def submit_vetting_form(user_id: str, answers: Mapping[str, Any], store: RecordStore) -> None:
    await store.insert(collections.COACH_VET, [{"userId": user_id, **answers}])


async def list_coaches(store: RecordStore) -> list[Row]:
    return await store.select(
        collections.PROFILES, columns=["id", "name"], filters={"role": UserRole.COACH.value},
    )


async def select_coach(user_id: str, coach_id: str, store: RecordStore) -> None:
    await store.insert(
        collections.USER_COACH_RELATIONSHIPS, [{"user_id": user_id, "coach_id": coach_id}],
    )


async def get_coach_bio(coach_id: str, store: RecordStore) -> Row:
    row = await store.select_one(collections.COACH_BIO, {"userId": coach_id})
    if row is None:
        raise NotFoundError("Coach bio not found")
    return row


async def corresponding_users(user_id: str, role: str, store: RecordStore) -> list[Row]:
    """Coaches see their users; everyone else sees their coaches."""
    if role == UserRole.COACH:
        return await store.select(
            collections.USER_COACH_RELATIONSHIPS,
            columns=["user_id"],
            filters={"coach_id": user_id},
        )
    return await store.select(
        collections.USER_COACH_RELATIONSHIPS,
        columns=["coach_id"],
        filters={"user_id": user_id},
    )
