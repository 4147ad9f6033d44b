"""Shared test fixtures."""
from __future__ import annotations

import copy
import uuid
from collections import defaultdict
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import Any, Mapping, Sequence

import pytest

from coach_chat.application.exceptions import StoreError

_EPOCH = datetime(2024, 1, 1, tzinfo=timezone.utc)


@dataclass
class FakeRecordStore:
    """In-memory RecordStore for unit and API tests.

    ``fail_on`` holds operation names ("insert", "select", "update", "count",
    "ping") or "<operation>:<collection>" pairs that should raise StoreError.
    """

    tables: dict[str, list[dict[str, Any]]] = field(default_factory=lambda: defaultdict(list))
    fail_on: set[str] = field(default_factory=set)
    _seq: int = 0

    def _check(self, op: str, collection: str = "") -> None:
        if op in self.fail_on or f"{op}:{collection}" in self.fail_on:
            raise StoreError(f"{op} on {collection} failed")

    def seed(self, collection: str, *rows: dict[str, Any]) -> None:
        for row in rows:
            self.tables[collection].append(self._with_defaults(collection, row))

    def _with_defaults(self, collection: str, row: Mapping[str, Any]) -> dict[str, Any]:
        self._seq += 1
        stored: dict[str, Any] = {
            "id": str(uuid.uuid4()),
            "created_at": _EPOCH + timedelta(seconds=self._seq),
        }
        if collection == "messages":
            stored.update({"status": "sent", "reactions": []})
        stored.update(copy.deepcopy(dict(row)))
        return stored

    @staticmethod
    def _matches(
        row: Mapping[str, Any],
        filters: Mapping[str, Any] | None,
        search: tuple[str, str] | None,
    ) -> bool:
        for key, value in (filters or {}).items():
            if row.get(key) != value:
                return False
        if search is not None:
            column, term = search
            if term.lower() not in str(row.get(column) or "").lower():
                return False
        return True

    async def insert(self, collection: str, rows: Sequence[Mapping[str, Any]]) -> list[dict[str, Any]]:
        self._check("insert", collection)
        stored = [self._with_defaults(collection, r) for r in rows]
        self.tables[collection].extend(stored)
        return copy.deepcopy(stored)

    async def select(
        self,
        collection: str,
        *,
        columns: Sequence[str] | None = None,
        filters: Mapping[str, Any] | None = None,
        search: tuple[str, str] | None = None,
        order_by: str | None = None,
        descending: bool = False,
        limit: int | None = None,
        offset: int = 0,
    ) -> list[dict[str, Any]]:
        self._check("select", collection)
        rows = [r for r in self.tables[collection] if self._matches(r, filters, search)]
        if order_by is not None:
            rows.sort(key=lambda r: (r.get(order_by) is None, r.get(order_by) or ""), reverse=descending)
        rows = rows[offset:]
        if limit is not None:
            rows = rows[:limit]
        if columns:
            rows = [{c: r.get(c) for c in columns} for r in rows]
        return copy.deepcopy(rows)

    async def select_one(
        self,
        collection: str,
        filters: Mapping[str, Any],
        *,
        columns: Sequence[str] | None = None,
    ) -> dict[str, Any] | None:
        rows = await self.select(collection, columns=columns, filters=filters, limit=1)
        return rows[0] if rows else None

    async def update(
        self,
        collection: str,
        filters: Mapping[str, Any],
        values: Mapping[str, Any],
    ) -> int:
        self._check("update", collection)
        affected = 0
        for row in self.tables[collection]:
            if self._matches(row, filters, None):
                row.update(copy.deepcopy(dict(values)))
                affected += 1
        return affected

    async def count(
        self,
        collection: str,
        *,
        filters: Mapping[str, Any] | None = None,
        search: tuple[str, str] | None = None,
    ) -> int:
        self._check("count", collection)
        return sum(1 for r in self.tables[collection] if self._matches(r, filters, search))

    async def ping(self) -> None:
        self._check("ping")


@dataclass
class FakeTextGenerator:
    reply: str = "generated"
    error: Exception | None = None
    prompts: list[str] = field(default_factory=list)

    async def generate(self, prompt: str) -> str:
        self.prompts.append(prompt)
        if self.error is not None:
            raise self.error
        return self.reply


@pytest.fixture
def store() -> FakeRecordStore:
    return FakeRecordStore()


def make_message(
    *,
    message_id: str = "m1",
    chat_id: str = "c1",
    author_id: str = "u1",
    content: str = "hello",
    reactions: list[dict[str, Any]] | None = None,
) -> dict[str, Any]:
    return {
        "id": message_id,
        "chat_id": chat_id,
        "author_id": author_id,
        "content": content,
        "status": "sent",
        "reactions": reactions if reactions is not None else [],
    }
