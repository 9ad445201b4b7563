"""Page window arithmetic for listing endpoints"""

import math
from dataclasses import dataclass
from typing import Any, Optional

from debt_gateway.domain.exceptions import ClientInputError

DEFAULT_PAGE_SIZE = 20
MIN_PAGE_SIZE = 1
MAX_PAGE_SIZE = 100


def _to_int(value: Any) -> Optional[int]:
    """Lenient integer parse: ints, finite floats (truncated) and numeric strings"""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if math.isfinite(value) else None
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            return None
    return None


def effective_page_size(value: Any) -> int:
    """
    Clamp the requested page size to [1, 100].

    Anything that does not parse as a number falls back to 20.
    """
    size = _to_int(value)
    if size is None:
        size = DEFAULT_PAGE_SIZE
    return max(MIN_PAGE_SIZE, min(size, MAX_PAGE_SIZE))


def effective_page(value: Any) -> int:
    """Zero-based page number; missing means the first page"""
    if value is None:
        return 0
    if isinstance(value, float) and not value.is_integer():
        raise ClientInputError("page must be a non-negative integer")
    page = _to_int(value)
    if page is None or page < 0:
        raise ClientInputError("page must be a non-negative integer")
    return page


@dataclass(frozen=True)
class PageWindow:
    """Inclusive row range ``[start, end]`` for one page"""

    page: int
    size: int

    @property
    def start(self) -> int:
        return self.page * self.size

    @property
    def end(self) -> int:
        return self.start + self.size - 1

    def row_index(self, position: int) -> int:
        """1-based absolute index of the row at ``position`` within this page"""
        return self.start + position + 1
