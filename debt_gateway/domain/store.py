"""Record store interface the domain layer depends on.

Implementations live under ``infrastructure/store``. Every method may raise
``StoreError``; callers never see driver-specific exceptions.
"""

from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Protocol, Sequence

Row = Dict[str, Any]

EQ = "eq"
GTE = "gte"
IN = "in"


@dataclass(frozen=True)
class Filter:
    """Single column predicate"""

    column: str
    op: str  # "eq" | "gte" | "in"
    value: Any


def eq(column: str, value: Any) -> Filter:
    return Filter(column, EQ, value)


def gte(column: str, value: Any) -> Filter:
    return Filter(column, GTE, value)


def in_(column: str, values: Sequence[Any]) -> Filter:
    return Filter(column, IN, list(values))


@dataclass
class SelectResult:
    """Rows from a select, plus the exact match count when requested"""

    rows: List[Row]
    count: Optional[int] = None


class RecordStore(Protocol):
    """Filtered select, windowed select and conditional update over named tables"""

    backend: str

    def select(
        self,
        table: str,
        columns: Optional[Sequence[str]] = None,
        filters: Sequence[Filter] = (),
        exact_count: bool = False,
        head: bool = False,
    ) -> SelectResult:
        """Rows matching all filters; ``head`` skips the rows and only counts"""
        ...

    def select_range(
        self,
        table: str,
        columns: Optional[Sequence[str]] = None,
        filters: Sequence[Filter] = (),
        offset: int = 0,
        limit: int = 20,
        order_by: str = "id",
    ) -> List[Row]:
        """Window of matching rows in stable ``order_by`` order"""
        ...

    def update(
        self,
        table: str,
        patch: Row,
        filters: Sequence[Filter],
        returning: Sequence[str] = ("id",),
    ) -> List[Row]:
        """Apply ``patch`` to every matching row and return the affected rows"""
        ...
