"""Filter compiler - turns listing request parameters into record store queries"""

import math
from dataclasses import dataclass, field
from typing import Any, List, Optional

from debt_gateway.domain.exceptions import ClientInputError
from debt_gateway.domain.models import FilterCriteria, FilterMode, ListingProfile
from debt_gateway.domain.pager import effective_page, effective_page_size
from debt_gateway.domain.store import Filter, eq, gte, in_

DEBT_COLUMNS = ("account_id", "amount", "penalty", "debt_term_months", "stage")


@dataclass
class QueryPlan:
    """Filters for the debt query and the house restriction for the accounts query"""

    debt_filters: List[Filter] = field(default_factory=list)
    house_filters: List[Filter] = field(default_factory=list)


def _is_number(value: Any) -> bool:
    if not isinstance(value, (int, float)) or isinstance(value, bool):
        return False
    try:
        return math.isfinite(value)
    except OverflowError:
        # ints too large to convert to float
        return False


def effective_min_debt(value: Any) -> Optional[float]:
    """Minimum amount filter; zero, negative and non-numeric values mean no filter"""
    if _is_number(value) and value > 0:
        return value
    return None


def effective_min_term(value: Any) -> Optional[int]:
    """Minimum term filter; only positive whole numbers apply"""
    if _is_number(value) and value > 0 and float(value).is_integer():
        return int(value)
    return None


def effective_house_ids(value: Any) -> List[Any]:
    """House ids when a non-empty list was sent, otherwise no restriction"""
    if isinstance(value, list):
        return list(value)
    return []


def parse_filter_mode(value: Any, profile: ListingProfile) -> FilterMode:
    """
    Resolve the combination mode for a listing.

    Callers pass "all" when the field was omitted; an explicit null is
    rejected like any other unsupported value.

    Raises:
        ClientInputError: value is not one of the modes the listing supports
    """
    allowed = [m.value for m in profile.modes]
    if value not in allowed:
        quoted = " or ".join(f"'{m}'" for m in allowed)
        raise ClientInputError(f"filterMode must be {quoted}")
    return FilterMode(value)


def build_criteria(
    profile: ListingProfile,
    house_ids: Any = None,
    min_debt: Any = None,
    min_term: Any = None,
    filter_mode: Any = FilterMode.ALL.value,
    page: Any = None,
    page_size: Any = None,
) -> FilterCriteria:
    """Validate raw request values into FilterCriteria for ``profile``"""
    mode = parse_filter_mode(filter_mode, profile)
    criteria = FilterCriteria(
        house_ids=effective_house_ids(house_ids),
        filter_mode=mode,
        page=effective_page(page),
        page_size=effective_page_size(page_size),
    )
    if profile.amount_filters:
        criteria.min_debt = effective_min_debt(min_debt)
        criteria.min_term = effective_min_term(min_term)
    return criteria


def compile_query_plan(profile: ListingProfile, criteria: FilterCriteria) -> QueryPlan:
    """Debt filters for the listing stage plus the optional house restriction"""
    plan = QueryPlan(debt_filters=[eq("stage", profile.stage.value)])

    if profile.amount_filters:
        if criteria.min_debt is not None:
            plan.debt_filters.append(gte("amount", criteria.min_debt))
        if criteria.min_term is not None:
            plan.debt_filters.append(gte("debt_term_months", criteria.min_term))

    if criteria.house_ids:
        plan.house_filters.append(in_("house_id", criteria.house_ids))

    return plan
