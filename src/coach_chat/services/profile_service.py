from __future__ import annotations

import re
from dataclasses import dataclass
from urllib.parse import quote

from coach_chat.application.exceptions import NotFoundError, ValidationError
from coach_chat.application.ports.record_store import RecordStore, Row
from coach_chat.domain.value_objects import collections

BIO_COLUMNS = ["name", "jobTitle", "bio", "email", "phone", "location", "userId", "imageUrl"]
SEARCH_COLUMNS = ["id", "name", "email", "phone", "focusCareer", "focusLife", "type", "company"]
SEARCHABLE_SORTS = frozenset(SEARCH_COLUMNS)
SUGGESTION_LIMIT = 5

_WORD_DOC = re.compile(r"\.(doc|docx)$", re.IGNORECASE)
_DOCS_VIEWER = "https://docs.google.com/gview?url={url}&embedded=true"


@dataclass(frozen=True, slots=True)
class SearchPage:
    profiles: list[Row]
    has_more: bool


def viewer_url(resume_url: str) -> str:
    """Word documents open through the Google Docs viewer; other URLs pass through."""
    if _WORD_DOC.search(resume_url):
        return _DOCS_VIEWER.format(url=quote(resume_url, safe="-_.!~*'()"))
    return resume_url


async def get_user_bio(user_id: str, store: RecordStore) -> Row:
    row = await store.select_one(collections.USER_BIO, {"userId": user_id}, columns=BIO_COLUMNS)
    if row is None:
        raise NotFoundError("User bio not found.")
    return row


async def get_resume_url(user_id: str, store: RecordStore, *, coach: bool = False) -> str:
    collection = collections.COACH_BIO if coach else collections.USER_BIO
    row = await store.select_one(collection, {"userId": user_id}, columns=["resumeUrl"])
    if row is None or not row.get("resumeUrl"):
        raise NotFoundError("Resume URL not found.")
    return viewer_url(row["resumeUrl"])


async def get_profile_by_name(name: str, store: RecordStore, *, not_found: str) -> Row:
    row = await store.select_one(collections.PROFILES, {"name": name})
    if row is None:
        raise NotFoundError(not_found)
    return row


async def search_users(
    query: str,
    store: RecordStore,
    *,
    page: int = 1,
    limit: int = 10,
    sort: str = "name",
    ascending: bool = True,
) -> SearchPage:
    if sort not in SEARCHABLE_SORTS:
        raise ValidationError(f"Cannot sort by {sort}")
    offset = (page - 1) * limit
    search = ("name", query)
    rows = await store.select(
        collections.PROFILES,
        columns=SEARCH_COLUMNS,
        search=search,
        order_by=sort,
        descending=not ascending,
        limit=limit,
        offset=offset,
    )
    total = await store.count(collections.PROFILES, search=search)
    return SearchPage(profiles=rows, has_more=offset + limit < total)


async def search_suggestions(query: str, store: RecordStore) -> list[str]:
    rows = await store.select(
        collections.PROFILES, columns=["name"], search=("name", query), limit=SUGGESTION_LIMIT,
    )
    return [r["name"] for r in rows]
