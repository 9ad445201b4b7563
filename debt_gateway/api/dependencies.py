"""Dependency injection for FastAPI endpoints"""

from fastapi import Request
from debt_gateway.domain.store import RecordStore


def get_request_id(request: Request) -> str:
    """Extract request ID from request state"""
    return getattr(request.state, "request_id", "unknown")


def get_record_store(request: Request) -> RecordStore:
    """Provide the record store built at application startup"""
    return request.app.state.record_store
