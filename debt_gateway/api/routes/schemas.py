"""Pydantic schemas for API request/response validation"""

from pydantic import BaseModel, ConfigDict, Field
from typing import Any, List, Optional

# Listing parameters stay loosely typed: zero, negative or non-numeric
# filter values are ignored by the filter compiler instead of rejected here.


class CandidatesRequest(BaseModel):
    """Request body for POST /debts/candidates"""

    model_config = ConfigDict(populate_by_name=True)

    house_ids: Any = Field(None, alias="houseIds", description="Restrict to accounts in these houses")
    min_debt: Any = Field(None, alias="minDebt", description="Minimum debt amount, applied when > 0")
    min_term: Any = Field(None, alias="minTerm", description="Minimum term in months, applied when a positive integer")
    filter_mode: Any = Field("all", alias="filterMode", description="'all' (intersection) or 'any' (union)")
    page: Any = Field(0, description="Zero-based page number")
    page_size: Any = Field(20, alias="pageSize", description="Rows per page, clamped to 1..100")


class NewDebtsRequest(BaseModel):
    """Request body for POST /debts/new"""

    model_config = ConfigDict(populate_by_name=True)

    house_ids: Any = Field(None, alias="houseIds")
    page: Any = 0
    page_size: Any = Field(20, alias="pageSize")


class EnrichedAccountRow(BaseModel):
    """Account columns plus the correlated debt fields"""

    model_config = ConfigDict(extra="allow")

    id: Any
    house_id: Any = None
    debt: float = 0
    penalty: float = 0
    debt_term_months: Optional[int] = None
    debt_stage: Optional[str] = None
    rowIndex: int


class ListingResponse(BaseModel):
    """Response for the debt listing endpoints"""

    model_config = ConfigDict(populate_by_name=True)

    data: List[EnrichedAccountRow]
    total: int
    page: int
    page_size: int = Field(..., alias="pageSize")


class BatchTransitionRequest(BaseModel):
    """Request body for the batch stage transition endpoints"""

    model_config = ConfigDict(populate_by_name=True)

    account_ids: Any = Field(None, alias="accountIds", description="Accounts whose debts should move")


class TransitionResponse(BaseModel):
    """Response for POST /debts/batch-to-new and /debts/batch-to-candidates"""

    success: bool = True
    to_stage: str
    moved_count: int
    unchanged_count: int
    moved_ids: List[Any]


class LoginRequest(BaseModel):
    """Request body for POST /login"""

    user_name: Optional[str] = None
    password: Optional[str] = None
