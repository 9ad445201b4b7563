"""Unit tests for guarded stage transitions"""

from datetime import datetime, timezone
from unittest.mock import MagicMock

import pytest
from debt_gateway.domain.exceptions import ClientInputError, StoreError
from debt_gateway.domain.models import Stage
from debt_gateway.domain.store import eq
from debt_gateway.domain.transitions import transition_stage


def _stage_of(store, account_id):
    return store.select("debt", filters=[eq("account_id", account_id)]).rows[0]["stage"]


def test_only_records_in_source_stage_move(fixture_store):
    """a01 is a candidate, a03 has no debt, a05 is already new"""
    result = transition_stage(fixture_store, ["a01", "a03", "a05"], Stage.NEW)

    assert result.moved_ids == ["a01"]
    assert result.moved_count == 1
    assert result.unchanged_count == 2
    assert _stage_of(fixture_store, "a01") == "new"
    assert _stage_of(fixture_store, "a05") == "new"


def test_transition_stamps_updated_at(fixture_store):
    now = datetime(2026, 10, 18, 9, 30, tzinfo=timezone.utc)

    transition_stage(fixture_store, ["a02"], Stage.NEW, now=now)

    row = fixture_store.select("debt", filters=[eq("account_id", "a02")]).rows[0]
    assert row["updated_at"] == "2026-10-18T09:30:00+00:00"


def test_second_identical_call_moves_nothing(fixture_store):
    transition_stage(fixture_store, ["a01", "a02"], Stage.NEW)

    again = transition_stage(fixture_store, ["a01", "a02"], Stage.NEW)

    assert again.moved_count == 0
    assert again.unchanged_count == 2


def test_back_to_candidates_requires_new_stage(fixture_store):
    result = transition_stage(fixture_store, ["a05", "a01"], Stage.CANDIDATES)

    assert result.moved_ids == ["a05"]
    assert _stage_of(fixture_store, "a05") == "candidates"
    assert _stage_of(fixture_store, "a01") == "candidates"


def test_duplicate_ids_count_as_unchanged(fixture_store):
    result = transition_stage(fixture_store, ["a01", "a01"], Stage.NEW)

    assert result.moved_count == 1
    assert result.unchanged_count == 1


@pytest.mark.parametrize("account_ids", [[], None, "a01", {"ids": ["a01"]}])
def test_invalid_account_ids_make_no_store_call(account_ids):
    store = MagicMock()

    with pytest.raises(ClientInputError, match="accountIds must be a non-empty array"):
        transition_stage(store, account_ids, Stage.NEW)

    store.update.assert_not_called()


def test_store_failure_propagates():
    store = MagicMock()
    store.update.side_effect = StoreError("connection reset")

    with pytest.raises(StoreError, match="connection reset"):
        transition_stage(store, ["a01"], Stage.NEW)
