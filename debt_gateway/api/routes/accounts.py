"""GET /accounts and GET /accounts/{account_id}"""

from fastapi import APIRouter, Depends

from debt_gateway.api.dependencies import get_record_store
from debt_gateway.domain.exceptions import NotFoundError
from debt_gateway.domain.models import Stage
from debt_gateway.domain.store import RecordStore, eq

router = APIRouter()


@router.get("/accounts")
def list_accounts(store: RecordStore = Depends(get_record_store)):
    return store.select("accounts").rows


@router.get("/accounts/{account_id}")
def get_account(account_id: str, store: RecordStore = Depends(get_record_store)):
    """
    Retrieve one account with its active debt.

    Returns:
        Account columns plus ``active_debt``: the account's debt in the 'new'
        stage, or null when it has none
    """
    accounts = store.select("accounts", filters=[eq("id", account_id)]).rows
    if not accounts:
        raise NotFoundError("Account not found")

    debts = store.select("debt", filters=[eq("account_id", account_id), eq("stage", Stage.NEW.value)]).rows

    return {**accounts[0], "active_debt": debts[0] if debts else None}
