"""User, house and login endpoints"""

from typing import Optional
from fastapi import APIRouter, Depends

from debt_gateway.api.dependencies import get_record_store
from debt_gateway.api.routes.schemas import LoginRequest
from debt_gateway.domain.exceptions import AuthenticationError, ClientInputError, NotFoundError
from debt_gateway.domain.store import RecordStore, Row, eq

router = APIRouter()


def _public(user: Row) -> Row:
    return {k: v for k, v in user.items() if k != "password"}


@router.get("/users")
def list_users(store: RecordStore = Depends(get_record_store)):
    return [_public(u) for u in store.select("users").rows]


@router.get("/users/{user_id}")
def get_user(user_id: str, store: RecordStore = Depends(get_record_store)):
    if not user_id.strip():
        raise ClientInputError("User ID is required")

    users = store.select("users", filters=[eq("id", user_id)]).rows
    if not users:
        raise NotFoundError("User not found")
    return _public(users[0])


@router.get("/houses")
def list_houses(store: RecordStore = Depends(get_record_store)):
    return store.select("houses").rows


@router.post("/login")
def login(request_body: Optional[LoginRequest] = None, store: RecordStore = Depends(get_record_store)):
    """Plain credential lookup; any mismatch is a 403"""
    if not request_body or not request_body.user_name or not request_body.password:
        raise AuthenticationError("User not found")

    users = store.select(
        "users",
        filters=[eq("user_name", request_body.user_name), eq("password", request_body.password)],
    ).rows
    if len(users) != 1:
        raise AuthenticationError("User not found")
    return _public(users[0])
