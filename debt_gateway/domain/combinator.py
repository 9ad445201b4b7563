"""
Combinator/enricher - correlates accounts with their debt records in memory.

The store cannot express "in one of these houses OR owns a qualifying debt"
in a single query because the two predicates live on different tables, so
both sets are fetched separately and joined here. Memory use is
O(qualifying debts + accounts on the page).
"""

from typing import Any, Dict, List, Optional, Sequence

from debt_gateway.domain.pager import PageWindow
from debt_gateway.domain.store import Row

DebtIndex = Dict[Any, Row]


def index_debts(debts: Sequence[Row]) -> DebtIndex:
    """Map account_id -> debt row; a later row for the same account wins"""
    index: DebtIndex = {}
    for debt in debts:
        index[debt["account_id"]] = debt
    return index


def retain_union(accounts: Sequence[Row], house_ids: Sequence[Any], debts: DebtIndex) -> List[Row]:
    """
    Keep accounts that are in one of ``house_ids`` or own a qualifying debt.

    An empty ``house_ids`` puts every account in scope.
    """
    retained = []
    for account in accounts:
        in_house = not house_ids or account.get("house_id") in house_ids
        if in_house or account.get("id") in debts:
            retained.append(account)
    return retained


def enrich(account: Row, debt: Optional[Row]) -> Row:
    """Account row with the correlated debt's fields, or their empty defaults"""
    row = dict(account)
    if debt is None:
        row.update(debt=0, penalty=0, debt_term_months=None, debt_stage=None)
    else:
        row.update(
            debt=debt.get("amount") or 0,
            penalty=debt.get("penalty") or 0,
            debt_term_months=debt.get("debt_term_months"),
            debt_stage=debt.get("stage"),
        )
    return row


def enrich_page(accounts: Sequence[Row], debts: DebtIndex, window: PageWindow) -> List[Row]:
    """Enrich every account and stamp its absolute rowIndex"""
    rows = []
    for position, account in enumerate(accounts):
        row = enrich(account, debts.get(account.get("id")))
        row["rowIndex"] = window.row_index(position)
        rows.append(row)
    return rows
