"""Unit tests for the filter compiler"""

import pytest
from debt_gateway.domain.exceptions import ClientInputError
from debt_gateway.domain.filters import (
    build_criteria,
    compile_query_plan,
    effective_house_ids,
    effective_min_debt,
    effective_min_term,
    parse_filter_mode,
)
from debt_gateway.domain.models import CANDIDATES_LISTING, NEW_LISTING, FilterMode
from debt_gateway.domain.store import eq, gte, in_


@pytest.mark.parametrize("value, expected", [(100, 100), (0.5, 0.5), (2500.75, 2500.75)])
def test_positive_min_debt_applies(value, expected):
    assert effective_min_debt(value) == expected


@pytest.mark.parametrize("value", [0, -10, None, "500", True, float("inf"), 10**400])
def test_zero_or_invalid_min_debt_is_ignored(value):
    assert effective_min_debt(value) is None


def test_min_term_requires_positive_integer():
    assert effective_min_term(6) == 6
    assert effective_min_term(6.0) == 6
    assert effective_min_term(2.5) is None
    assert effective_min_term(0) is None
    assert effective_min_term(-3) is None
    assert effective_min_term("6") is None
    assert effective_min_term(10**400) is None


def test_house_ids_only_from_list():
    assert effective_house_ids(["h1", "h2"]) == ["h1", "h2"]
    assert effective_house_ids([]) == []
    assert effective_house_ids("h1") == []
    assert effective_house_ids(None) == []


def test_filter_mode_defaults_to_all():
    assert build_criteria(CANDIDATES_LISTING).filter_mode is FilterMode.ALL
    assert parse_filter_mode("all", CANDIDATES_LISTING) is FilterMode.ALL
    assert parse_filter_mode("any", CANDIDATES_LISTING) is FilterMode.ANY


@pytest.mark.parametrize("value", ["ALL", "both", "", 1, None])
def test_unknown_filter_mode_is_client_error(value):
    with pytest.raises(ClientInputError, match="filterMode must be 'all' or 'any'"):
        parse_filter_mode(value, CANDIDATES_LISTING)


def test_new_listing_only_supports_all_mode():
    with pytest.raises(ClientInputError):
        build_criteria(NEW_LISTING, filter_mode="any")


def test_candidates_plan_includes_amount_and_term_filters():
    criteria = build_criteria(CANDIDATES_LISTING, house_ids=["h1"], min_debt=100, min_term=3)

    plan = compile_query_plan(CANDIDATES_LISTING, criteria)

    assert plan.debt_filters == [
        eq("stage", "candidates"),
        gte("amount", 100),
        gte("debt_term_months", 3),
    ]
    assert plan.house_filters == [in_("house_id", ["h1"])]


def test_candidates_plan_skips_unset_filters():
    criteria = build_criteria(CANDIDATES_LISTING, min_debt=0, min_term="abc")

    plan = compile_query_plan(CANDIDATES_LISTING, criteria)

    assert plan.debt_filters == [eq("stage", "candidates")]
    assert plan.house_filters == []


def test_new_plan_ignores_amount_and_term():
    criteria = build_criteria(NEW_LISTING, min_debt=100, min_term=3)

    plan = compile_query_plan(NEW_LISTING, criteria)

    assert criteria.min_debt is None
    assert criteria.min_term is None
    assert plan.debt_filters == [eq("stage", "new")]


def test_criteria_normalizes_paging():
    criteria = build_criteria(CANDIDATES_LISTING, page="1", page_size=1000)

    assert criteria.page == 1
    assert criteria.page_size == 100
