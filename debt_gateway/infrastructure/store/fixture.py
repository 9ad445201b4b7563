"""In-memory record store loaded from a static JSON fixture (mock mode)"""

import copy
import json
import logging
import threading
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

from debt_gateway.domain.exceptions import ConfigurationError, StoreError
from debt_gateway.domain.store import EQ, GTE, IN, Filter, Row, SelectResult
from debt_gateway.infrastructure.observability.metrics import store_failures_counter
from debt_gateway.utils.date_utils import to_iso

logger = logging.getLogger(__name__)


class FixtureRecordStore:
    """
    Serves the same primitives as the SQL store from a dict of table -> rows.

    The fixture file is a JSON object whose keys are table names and whose
    values are lists of row objects, e.g. ``{"accounts": [...], "debt": [...]}``.
    Updates mutate the in-memory copy only; the file on disk is never rewritten.
    """

    backend = "fixture"

    def __init__(self, tables: Dict[str, List[Row]]):
        self._tables = {name: [dict(row) for row in rows] for name, rows in tables.items()}
        self._lock = threading.Lock()

    @classmethod
    def from_file(cls, path: str | Path) -> "FixtureRecordStore":
        fixture = Path(path)
        if not fixture.exists():
            raise ConfigurationError(f"Fixture file not found: {fixture}")
        try:
            data = json.loads(fixture.read_text(encoding="utf-8"))
        except ValueError as e:
            raise ConfigurationError(f"Fixture file {fixture} is not valid JSON: {e}") from e
        if not isinstance(data, dict) or not all(isinstance(v, list) for v in data.values()):
            raise ConfigurationError(f"Fixture file {fixture} must map table names to lists of rows")

        logger.info(f"Loaded fixture store from {fixture}", extra={"tables": sorted(data)})
        return cls(data)

    def select(
        self,
        table: str,
        columns: Optional[Sequence[str]] = None,
        filters: Sequence[Filter] = (),
        exact_count: bool = False,
        head: bool = False,
    ) -> SelectResult:
        with self._lock:
            matched = self._match(table, filters, "select")
            rows = [] if head else [self._project(r, columns) for r in matched]
        count = len(matched) if (exact_count or head) else None
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
        with self._lock:
            matched = self._match(table, filters, "select_range")
            try:
                ordered = sorted(matched, key=lambda r: (r.get(order_by) is None, r.get(order_by)))
            except TypeError as e:
                raise self._store_error("select_range", f"Cannot order {table} by {order_by}: {e}") from e
            return [self._project(r, columns) for r in ordered[offset:offset + limit]]

    def update(
        self,
        table: str,
        patch: Row,
        filters: Sequence[Filter],
        returning: Sequence[str] = ("id",),
    ) -> List[Row]:
        values = {k: to_iso(v) if isinstance(v, datetime) else v for k, v in patch.items()}
        with self._lock:
            matched = self._match(table, filters, "update")
            for row in matched:
                row.update(values)
            return [self._project(r, returning) for r in matched]

    def _match(self, table: str, filters: Sequence[Filter], operation: str) -> List[Row]:
        if table not in self._tables:
            raise self._store_error(operation, f"Unknown table: {table}")
        try:
            return [row for row in self._tables[table] if all(_matches(row, f) for f in filters)]
        except TypeError as e:
            raise self._store_error(operation, f"Invalid filter value for {table}: {e}") from e

    @staticmethod
    def _project(row: Row, columns: Optional[Sequence[str]]) -> Row:
        if not columns:
            return copy.deepcopy(row)
        return {c: copy.deepcopy(row.get(c)) for c in columns}

    @staticmethod
    def _store_error(operation: str, message: str) -> StoreError:
        store_failures_counter.labels(operation=operation).inc()
        logger.error(f"Fixture store {operation} failed: {message}")
        return StoreError(message)


def _matches(row: Row, f: Filter) -> bool:
    value: Any = row.get(f.column)
    if f.op == EQ:
        return value == f.value
    if f.op == GTE:
        return value is not None and value >= f.value
    if f.op == IN:
        return value in f.value
    raise TypeError(f"unsupported filter operator {f.op}")
