"""SQLAlchemy implementation of the RecordStore port.

Collections are resolved by table name from ``Base.metadata``; every call
opens its own session and commits (or rolls back) before returning.
"""
from __future__ import annotations

import logging
from typing import Any, Mapping, Sequence

from sqlalchemy import Column, Table, func, insert, select, text, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker
from sqlalchemy.sql import Select

from coach_chat.application.exceptions import StoreError
from coach_chat.application.ports.record_store import Row
from coach_chat.infrastructure.db import models  # noqa: F401  (registers tables)
from coach_chat.infrastructure.db.base import Base

logger = logging.getLogger(__name__)

# asyncpg surfaces refused connections as plain OSError
_DB_ERRORS = (SQLAlchemyError, OSError)


def _escape_like(term: str) -> str:
    return term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


class SqlAlchemyRecordStore:
    def __init__(self, sessionmaker: async_sessionmaker[AsyncSession]) -> None:
        self._sessionmaker = sessionmaker

    def _table(self, collection: str) -> Table:
        try:
            return Base.metadata.tables[collection]
        except KeyError:
            raise StoreError(f"Unknown collection: {collection}") from None

    @staticmethod
    def _column(table: Table, name: str) -> Column[Any]:
        try:
            return table.c[name]
        except KeyError:
            raise StoreError(f"Unknown column {name!r} in {table.name}") from None

    def _where(
        self,
        stmt: Any,
        table: Table,
        filters: Mapping[str, Any] | None,
        search: tuple[str, str] | None,
    ) -> Any:
        for name, value in (filters or {}).items():
            stmt = stmt.where(self._column(table, name) == value)
        if search is not None:
            name, term = search
            stmt = stmt.where(
                self._column(table, name).ilike(f"%{_escape_like(term)}%", escape="\\")
            )
        return stmt

    async def insert(
        self, collection: str, rows: Sequence[Mapping[str, Any]],
    ) -> list[Row]:
        table = self._table(collection)
        if not rows:
            return []
        stmt = insert(table).values([dict(r) for r in rows]).returning(*table.c)
        async with self._sessionmaker() as session:
            try:
                result = await session.execute(stmt)
                inserted = [dict(r._mapping) for r in result.all()]
                await session.commit()
            except _DB_ERRORS as exc:
                await session.rollback()
                logger.error("insert into %s failed: %s", collection, exc)
                raise StoreError(f"Failed to insert into {collection}") from exc
        return inserted

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
        table = self._table(collection)
        cols = [self._column(table, c) for c in columns] if columns else list(table.c)
        stmt: Select[Any] = self._where(select(*cols), table, filters, search)
        if order_by is not None:
            col = self._column(table, order_by)
            stmt = stmt.order_by(col.desc() if descending else col.asc())
        if offset:
            stmt = stmt.offset(offset)
        if limit is not None:
            stmt = stmt.limit(limit)
        async with self._sessionmaker() as session:
            try:
                result = await session.execute(stmt)
            except _DB_ERRORS as exc:
                logger.error("select from %s failed: %s", collection, exc)
                raise StoreError(f"Failed to read {collection}") from exc
            return [dict(r._mapping) for r in result.all()]

    async def select_one(
        self,
        collection: str,
        filters: Mapping[str, Any],
        *,
        columns: Sequence[str] | None = None,
    ) -> Row | None:
        rows = await self.select(collection, columns=columns, filters=filters, limit=1)
        return rows[0] if rows else None

    async def update(
        self,
        collection: str,
        filters: Mapping[str, Any],
        values: Mapping[str, Any],
    ) -> int:
        table = self._table(collection)
        for name in values:
            self._column(table, name)
        stmt = self._where(update(table).values(**values), table, filters, None)
        async with self._sessionmaker() as session:
            try:
                result = await session.execute(stmt)
                await session.commit()
            except _DB_ERRORS as exc:
                await session.rollback()
                logger.error("update of %s failed: %s", collection, exc)
                raise StoreError(f"Failed to update {collection}") from exc
        return result.rowcount

    async def count(
        self,
        collection: str,
        *,
        filters: Mapping[str, Any] | None = None,
        search: tuple[str, str] | None = None,
    ) -> int:
        table = self._table(collection)
        stmt = self._where(select(func.count()).select_from(table), table, filters, search)
        async with self._sessionmaker() as session:
            try:
                result = await session.execute(stmt)
            except _DB_ERRORS as exc:
                logger.error("count of %s failed: %s", collection, exc)
                raise StoreError(f"Failed to count {collection}") from exc
            return int(result.scalar_one())

    async def ping(self) -> None:
        async with self._sessionmaker() as session:
            try:
                await session.execute(text("SELECT 1"))
            except _DB_ERRORS as exc:
                raise StoreError(str(exc)) from exc
