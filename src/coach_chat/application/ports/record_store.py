from __future__ import annotations

from typing import Any, Mapping, Protocol, Sequence

Row = dict[str, Any]


class RecordStore(Protocol):
    """Collection-oriented persistence.

    Every call is its own transaction. Failures surface as
    ``application.exceptions.StoreError``.
    """

    async def insert(
        self, collection: str, rows: Sequence[Mapping[str, Any]],
    ) -> list[Row]:
        """Insert rows and return them as stored (defaults filled in)."""
        ...

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
    ) -> list[Row]:
        """Equality ``filters``; ``search`` is a case-insensitive substring match on one column."""
        ...

    async def select_one(
        self,
        collection: str,
        filters: Mapping[str, Any],
        *,
        columns: Sequence[str] | None = None,
    ) -> Row | None: ...

    async def update(
        self,
        collection: str,
        filters: Mapping[str, Any],
        values: Mapping[str, Any],
    ) -> int:
        """Return the number of rows updated."""
        ...

    async def count(
        self,
        collection: str,
        *,
        filters: Mapping[str, Any] | None = None,
        search: tuple[str, str] | None = None,
    ) -> int: ...

    async def ping(self) -> None: ...
