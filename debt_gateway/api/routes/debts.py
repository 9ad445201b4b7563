"""Debt listing and stage transition endpoints"""

import time
import logging
from typing import Optional
from fastapi import APIRouter, Depends, Request

from debt_gateway.api.routes.schemas import (
    BatchTransitionRequest,
    CandidatesRequest,
    ListingResponse,
    NewDebtsRequest,
    TransitionResponse,
)
from debt_gateway.api.dependencies import get_record_store, get_request_id
from debt_gateway.api.errors import error_response
from debt_gateway.domain.exceptions import DomainException
from debt_gateway.domain.filters import build_criteria
from debt_gateway.domain.listing import list_debt_accounts
from debt_gateway.domain.models import CANDIDATES_LISTING, NEW_LISTING, FilterCriteria, ListingProfile, Stage
from debt_gateway.domain.store import RecordStore
from debt_gateway.domain.transitions import transition_stage
from debt_gateway.infrastructure.observability.logging import log_listing, log_transition
from debt_gateway.infrastructure.observability.metrics import record_listing, record_transition

router = APIRouter()


def _serve_listing(
    request: Request,
    store: RecordStore,
    profile: ListingProfile,
    criteria: FilterCriteria,
) -> ListingResponse:
    start_time = time.time()

    page = list_debt_accounts(store, profile, criteria)

    duration_ms = (time.time() - start_time) * 1000
    record_listing(profile.name, criteria.filter_mode.value, len(page.rows))
    log_listing(
        get_request_id(request),
        profile.name,
        criteria.filter_mode.value,
        page.page,
        page.page_size,
        len(page.rows),
        page.total,
        duration_ms,
    )

    return ListingResponse(data=page.rows, total=page.total, page=page.page, page_size=page.page_size)


@router.post("/debts/candidates", response_model=ListingResponse)
def list_candidates(
    request: Request,
    request_body: Optional[CandidatesRequest] = None,
    store: RecordStore = Depends(get_record_store),
):
    """
    Accounts owning a debt in the 'candidates' stage.

    filterMode 'all' keeps accounts that match the house filter AND own a
    qualifying debt; 'any' keeps accounts matching either one. In 'any' mode
    ``total`` only counts the rows on the returned page.
    """
    body = request_body or CandidatesRequest()
    criteria = build_criteria(
        CANDIDATES_LISTING,
        house_ids=body.house_ids,
        min_debt=body.min_debt,
        min_term=body.min_term,
        filter_mode=body.filter_mode,
        page=body.page,
        page_size=body.page_size,
    )
    return _serve_listing(request, store, CANDIDATES_LISTING, criteria)


@router.post("/debts/new", response_model=ListingResponse)
def list_new(
    request: Request,
    request_body: Optional[NewDebtsRequest] = None,
    store: RecordStore = Depends(get_record_store),
):
    """Accounts owning a debt in the 'new' stage, optionally restricted to houses"""
    body = request_body or NewDebtsRequest()
    criteria = build_criteria(NEW_LISTING, house_ids=body.house_ids, page=body.page, page_size=body.page_size)
    return _serve_listing(request, store, NEW_LISTING, criteria)


def _run_transition(
    request: Request,
    store: RecordStore,
    request_body: Optional[BatchTransitionRequest],
    to_stage: Stage,
):
    start_time = time.time()
    request_id = get_request_id(request)
    account_ids = request_body.account_ids if request_body else None

    try:
        result = transition_stage(store, account_ids, to_stage)

    except DomainException as e:
        if e.status_code >= 500:
            logging.error(f"Update to '{to_stage.value}' failed: {e}", extra={"request_id": request_id})
        else:
            logging.warning(f"Rejected batch to '{to_stage.value}': {e}", extra={"request_id": request_id})
        return error_response(e.status_code, str(e), success=False)

    except Exception as e:
        logging.exception(f"Unexpected error moving debts to '{to_stage.value}': {e}", extra={"request_id": request_id})
        return error_response(500, "Internal server error", success=False)

    duration_ms = (time.time() - start_time) * 1000
    record_transition(to_stage.value, result.moved_count, result.unchanged_count)
    log_transition(request_id, to_stage.value, result.requested_count, result.moved_ids, duration_ms)

    return TransitionResponse(
        to_stage=result.to_stage.value,
        moved_count=result.moved_count,
        unchanged_count=result.unchanged_count,
        moved_ids=result.moved_ids,
    )


@router.post("/debts/batch-to-new", response_model=TransitionResponse)
def batch_to_new(
    request: Request,
    request_body: Optional[BatchTransitionRequest] = None,
    store: RecordStore = Depends(get_record_store),
):
    """Move 'candidates' debts of the given accounts to 'new'"""
    return _run_transition(request, store, request_body, Stage.NEW)


@router.post("/debts/batch-to-candidates", response_model=TransitionResponse)
def batch_to_candidates(
    request: Request,
    request_body: Optional[BatchTransitionRequest] = None,
    store: RecordStore = Depends(get_record_store),
):
    """Move 'new' debts of the given accounts back to 'candidates'"""
    return _run_transition(request, store, request_body, Stage.CANDIDATES)
