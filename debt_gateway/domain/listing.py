"""Debt listing flow shared by the candidates and new endpoints"""

from debt_gateway.domain.combinator import enrich_page, index_debts, retain_union
from debt_gateway.domain.filters import DEBT_COLUMNS, compile_query_plan
from debt_gateway.domain.models import FilterCriteria, FilterMode, ListingPage, ListingProfile
from debt_gateway.domain.pager import PageWindow
from debt_gateway.domain.store import RecordStore, in_


def list_debt_accounts(store: RecordStore, profile: ListingProfile, criteria: FilterCriteria) -> ListingPage:
    """
    Fetch one page of accounts enriched with their qualifying debt.

    Flow:
    1. Select debts in the listing's stage (plus amount/term filters)
    2. all: restrict accounts to debt owners and count them; stop early if there are none
       any: fetch the house-filtered page (no debt restriction), keep house members OR debt owners
    3. Enrich rows with debt fields and absolute rowIndex

    The debt query, count and page fetch are separate round-trips with no
    transaction around them.
    """
    window = PageWindow(page=criteria.page, size=criteria.page_size)
    plan = compile_query_plan(profile, criteria)

    debts = index_debts(store.select("debt", DEBT_COLUMNS, plan.debt_filters).rows)

    if criteria.filter_mode is FilterMode.ALL:
        if not debts:
            return ListingPage(rows=[], total=0, page=criteria.page, page_size=window.size)

        account_filters = plan.house_filters + [in_("id", list(debts))]
        total = store.select("accounts", filters=account_filters, exact_count=True, head=True).count or 0
        accounts = store.select_range("accounts", filters=account_filters, offset=window.start, limit=window.size)
    else:
        page_accounts = store.select_range(
            "accounts", filters=plan.house_filters, offset=window.start, limit=window.size
        )
        accounts = retain_union(page_accounts, criteria.house_ids, debts)
        # Page-local: rows surviving the union filter on this page only
        total = len(accounts)

    return ListingPage(
        rows=enrich_page(accounts, debts, window),
        total=total,
        page=criteria.page,
        page_size=window.size,
    )
