"""Domain models - pure Python dataclasses representing business entities"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional


class Stage(str, Enum):
    """Lifecycle marker on a debt record"""

    CANDIDATES = "candidates"
    NEW = "new"


class FilterMode(str, Enum):
    """How house membership and debt qualification combine"""

    ALL = "all"  # intersection
    ANY = "any"  # union


@dataclass
class FilterCriteria:
    """Validated listing request parameters"""

    house_ids: List[Any] = field(default_factory=list)
    min_debt: Optional[float] = None
    min_term: Optional[int] = None
    filter_mode: FilterMode = FilterMode.ALL
    page: int = 0
    page_size: int = 20


@dataclass(frozen=True)
class ListingProfile:
    """Which debt stage a listing reads and whether amount/term filters apply"""

    name: str
    stage: Stage
    amount_filters: bool
    modes: tuple = (FilterMode.ALL, FilterMode.ANY)


CANDIDATES_LISTING = ListingProfile(name="candidates", stage=Stage.CANDIDATES, amount_filters=True)
NEW_LISTING = ListingProfile(name="new", stage=Stage.NEW, amount_filters=False, modes=(FilterMode.ALL,))


@dataclass
class ListingPage:
    """One page of enriched account rows"""

    rows: List[Dict[str, Any]]
    total: int
    page: int
    page_size: int


@dataclass
class TransitionResult:
    """Outcome of a guarded bulk stage move"""

    to_stage: Stage
    moved_ids: List[Any]
    requested_count: int

    @property
    def moved_count(self) -> int:
        return len(self.moved_ids)

    @property
    def unchanged_count(self) -> int:
        # Wrong stage, unknown id and duplicate id all land here
        return self.requested_count - self.moved_count
