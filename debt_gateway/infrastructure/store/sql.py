"""Record store backed by the hosted relational database via SQLAlchemy"""

import logging
from typing import List, Optional, Sequence

from sqlalchemy import Table, func, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import sessionmaker

from debt_gateway.domain.exceptions import StoreError
from debt_gateway.domain.store import EQ, GTE, IN, Filter, Row, SelectResult
from debt_gateway.infrastructure.database.models import Base
from debt_gateway.infrastructure.observability.metrics import store_failures_counter

logger = logging.getLogger(__name__)


class SqlRecordStore:
    """Translates store primitives into SQLAlchemy Core statements, one session per call"""

    backend = "sql"

    def __init__(self, session_factory: sessionmaker):
        self.session_factory = session_factory

    def select(
        self,
        table: str,
        columns: Optional[Sequence[str]] = None,
        filters: Sequence[Filter] = (),
        exact_count: bool = False,
        head: bool = False,
    ) -> SelectResult:
        tbl = self._table(table)
        conditions = self._conditions(tbl, filters)

        try:
            with self.session_factory() as db:
                count = None
                if exact_count or head:
                    count_stmt = select(func.count()).select_from(tbl).where(*conditions)
                    count = db.execute(count_stmt).scalar_one()
                rows: List[Row] = []
                if not head:
                    stmt = select(*self._columns(tbl, columns)).where(*conditions)
                    rows = [dict(r) for r in db.execute(stmt).mappings().all()]
        except SQLAlchemyError as e:
            raise self._store_error("select", table, e) from e

        return SelectResult(rows=rows, count=count)

    def select_range(
        self,
        table: str,
        columns: Optional[Sequence[str]] = None,
        filters: Sequence[Filter] = (),
        offset: int = 0,
        limit: int = 20,
        order_by: str = "id",
    ) -> List[Row]:
        tbl = self._table(table)
        stmt = (
            select(*self._columns(tbl, columns))
            .where(*self._conditions(tbl, filters))
            .order_by(self._column(tbl, order_by))
            .offset(offset)
            .limit(limit)
        )

        try:
            with self.session_factory() as db:
                return [dict(r) for r in db.execute(stmt).mappings().all()]
        except SQLAlchemyError as e:
            raise self._store_error("select_range", table, e) from e

    def update(
        self,
        table: str,
        patch: Row,
        filters: Sequence[Filter],
        returning: Sequence[str] = ("id",),
    ) -> List[Row]:
        tbl = self._table(table)
        for name in patch:
            self._column(tbl, name)
        conditions = self._conditions(tbl, filters)
        returned = self._columns(tbl, returning)

        try:
            with self.session_factory() as db:
                if db.get_bind().dialect.update_returning:
                    stmt = update(tbl).where(*conditions).values(**patch).returning(*returned)
                    rows = [dict(r) for r in db.execute(stmt).mappings().all()]
                else:
                    # No RETURNING support: read the matching rows inside the same transaction
                    rows = [dict(r) for r in db.execute(select(*returned).where(*conditions)).mappings().all()]
                    db.execute(update(tbl).where(*conditions).values(**patch))
                db.commit()
        except SQLAlchemyError as e:
            raise self._store_error("update", table, e) from e

        return rows

    def _table(self, name: str) -> Table:
        try:
            return Base.metadata.tables[name]
        except KeyError:
            raise StoreError(f"Unknown table: {name}")

    def _column(self, tbl: Table, name: str):
        try:
            return tbl.c[name]
        except KeyError:
            raise StoreError(f"Unknown column {tbl.name}.{name}")

    def _columns(self, tbl: Table, names: Optional[Sequence[str]]) -> list:
        if not names:
            return list(tbl.c)
        return [self._column(tbl, n) for n in names]

    def _conditions(self, tbl: Table, filters: Sequence[Filter]) -> list:
        conditions = []
        for f in filters:
            column = self._column(tbl, f.column)
            if f.op == EQ:
                conditions.append(column == f.value)
            elif f.op == GTE:
                conditions.append(column >= f.value)
            elif f.op == IN:
                conditions.append(column.in_(f.value))
            else:
                raise StoreError(f"Unsupported filter operator: {f.op}")
        return conditions

    def _store_error(self, operation: str, table: str, error: SQLAlchemyError) -> StoreError:
        store_failures_counter.labels(operation=operation).inc()
        message = str(getattr(error, "orig", None) or error)
        logger.error(f"Store {operation} on {table} failed: {message}")
        return StoreError(message)
