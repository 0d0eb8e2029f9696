"""
Record Store.

A narrow CRUD interface over named tables with equality filters, ordering
and limits. Services depend on ``RecordStore`` only; the SQLAlchemy
implementation is the one wired into the application.
"""

from typing import Any, NamedTuple, Optional, Sequence

from sqlalchemy import Table, delete, insert, select, update
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError

from app.core.errors import StoreError
from app.core.logging_config import get_logger
from app.db.base import Base
# Registers the tables on Base.metadata
from app import models  # noqa: F401

logger = get_logger("record_store")

# Driver-level binding errors (e.g. an integer too large for the column) are
# not wrapped by SQLAlchemy
STORE_FAILURES = (SQLAlchemyError, OverflowError, ValueError, TypeError)

Row = dict[str, Any]


class Order(NamedTuple):
    """Sort key for ``RecordStore.select``."""

    column: str
    ascending: bool = True


class RecordStore:
    """
    Interface for the record store.

    Every method raises ``StoreError`` on any store-level failure.
    """

    def insert(self, table: str, rows: Sequence[Row]) -> list[Row]:
        raise NotImplementedError

    def select(
        self,
        table: str,
        columns: Optional[Sequence[str]] = None,
        filters: Optional[Row] = None,
        order_by: Optional[Sequence[Order]] = None,
        limit: Optional[int] = None,
    ) -> list[Row]:
        raise NotImplementedError

    def update(self, table: str, values: Row, filters: Row) -> int:
        raise NotImplementedError

    def delete(self, table: str, filters: Row, columns: Optional[Sequence[str]] = None) -> list[Row]:
        raise NotImplementedError


class SQLAlchemyRecordStore(RecordStore):
    """
    Record store backed by SQLAlchemy Core tables registered on ``Base``.

    Each call runs in its own transaction on the shared engine.
    """

    def __init__(self, engine: Engine):
        self.engine = engine

    def _table(self, name: str) -> Table:
        try:
            return Base.metadata.tables[name]
        except KeyError:
            raise StoreError(f"Unknown table '{name}'") from None

    def _columns(self, table: Table, names: Optional[Sequence[str]]) -> list:
        if not names:
            return list(table.c)
        try:
            return [table.c[name] for name in names]
        except KeyError as e:
            raise StoreError(f"Unknown column {e} on '{table.name}'") from None

    def _where(self, table: Table, filters: Optional[Row]) -> list:
        if not filters:
            return []
        try:
            return [table.c[name] == value for name, value in filters.items()]
        except KeyError as e:
            raise StoreError(f"Unknown column {e} on '{table.name}'") from None

    def _fail(self, operation: str, table: str, exc: Exception) -> StoreError:
        logger.error(f"{operation} on '{table}' failed: {exc}")
        return StoreError(f"Store {operation} on '{table}' failed", cause=exc)

    def insert(self, table: str, rows: Sequence[Row]) -> list[Row]:
        t = self._table(table)
        inserted: list[Row] = []
        try:
            with self.engine.begin() as connection:
                for row in rows:
                    result = connection.execute(insert(t).values(**row))
                    pk = dict(zip((c.name for c in t.primary_key.columns), result.inserted_primary_key))
                    inserted.append({**row, **pk})
        except STORE_FAILURES as e:
            raise self._fail("insert", table, e) from e

        logger.debug(f"Inserted {len(inserted)} row(s) into '{table}'")
        return inserted

    def select(
        self,
        table: str,
        columns: Optional[Sequence[str]] = None,
        filters: Optional[Row] = None,
        order_by: Optional[Sequence[Order]] = None,
        limit: Optional[int] = None,
    ) -> list[Row]:
        t = self._table(table)
        stmt = select(*self._columns(t, columns)).where(*self._where(t, filters))

        for order in order_by or []:
            column = self._columns(t, [order.column])[0]
            stmt = stmt.order_by(column.asc() if order.ascending else column.desc())

        if limit is not None:
            stmt = stmt.limit(limit)

        try:
            with self.engine.connect() as connection:
                return [dict(row) for row in connection.execute(stmt).mappings()]
        except STORE_FAILURES as e:
            raise self._fail("select", table, e) from e

    def update(self, table: str, values: Row, filters: Row) -> int:
        t = self._table(table)
        if not filters:
            raise StoreError(f"Refusing to update every row of '{table}'")
        stmt = update(t).where(*self._where(t, filters)).values(**values)
        try:
            with self.engine.begin() as connection:
                return connection.execute(stmt).rowcount
        except STORE_FAILURES as e:
            raise self._fail("update", table, e) from e

    def delete(self, table: str, filters: Row, columns: Optional[Sequence[str]] = None) -> list[Row]:
        """Delete matching rows and return them as they were before deletion."""
        t = self._table(table)
        if not filters:
            raise StoreError(f"Refusing to delete every row of '{table}'")
        where = self._where(t, filters)
        try:
            with self.engine.begin() as connection:
                rows = [
                    dict(row)
                    for row in connection.execute(select(*self._columns(t, columns)).where(*where)).mappings()
                ]
                connection.execute(delete(t).where(*where))
        except STORE_FAILURES as e:
            raise self._fail("delete", table, e) from e

        logger.debug(f"Deleted {len(rows)} row(s) from '{table}'")
        return rows
