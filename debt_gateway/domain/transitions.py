"""Guarded bulk moves of debt records between lifecycle stages"""

from datetime import datetime
from typing import Any, Dict, Optional

from debt_gateway.domain.exceptions import ClientInputError
from debt_gateway.domain.models import Stage, TransitionResult
from debt_gateway.domain.store import RecordStore, eq, in_
from debt_gateway.utils.date_utils import utc_now

# target stage -> stage a record must currently be in to move
SOURCE_STAGE: Dict[Stage, Stage] = {
    Stage.NEW: Stage.CANDIDATES,
    Stage.CANDIDATES: Stage.NEW,
}


def validate_account_ids(account_ids: Any) -> list:
    if not isinstance(account_ids, list) or not account_ids:
        raise ClientInputError("accountIds must be a non-empty array")
    return account_ids


def transition_stage(
    store: RecordStore,
    account_ids: Any,
    to_stage: Stage,
    now: Optional[datetime] = None,
) -> TransitionResult:
    """
    Move debts of ``account_ids`` to ``to_stage`` when they sit in its source stage.

    One update statement; rows in any other stage are untouched. Only the ids
    the store reports back as updated count as moved.

    Raises:
        ClientInputError: account_ids is not a non-empty list (no store call is made)
        StoreError: the update failed
    """
    ids = validate_account_ids(account_ids)
    source = SOURCE_STAGE[to_stage]

    updated = store.update(
        "debt",
        {"stage": to_stage.value, "updated_at": now or utc_now()},
        [in_("account_id", ids), eq("stage", source.value)],
        returning=("account_id",),
    )

    return TransitionResult(
        to_stage=to_stage,
        moved_ids=[row["account_id"] for row in updated],
        requested_count=len(ids),
    )
