"""Pytest fixtures for testing"""

import os
from pathlib import Path

# Module-level app creation reads these; the sql backend would require DATABASE_URL
ROOT = Path(__file__).resolve().parents[1]
os.environ["STORE_BACKEND"] = "fixture"
os.environ["FIXTURE_PATH"] = str(ROOT / "mock" / "db.json")

import pytest  # noqa: E402
from typing import Any, Dict, Generator, List  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy import insert  # noqa: E402
from sqlalchemy.engine import Engine  # noqa: E402
from debt_gateway.api.main import create_app  # noqa: E402
from debt_gateway.config import Settings  # noqa: E402
from debt_gateway.infrastructure.database.models import Base  # noqa: E402
from debt_gateway.infrastructure.database.session import create_db_engine, create_session_factory  # noqa: E402
from debt_gateway.infrastructure.store.fixture import FixtureRecordStore  # noqa: E402
from debt_gateway.infrastructure.store.sql import SqlRecordStore  # noqa: E402


def seed_tables() -> Dict[str, List[Dict[str, Any]]]:
    """
    Small dataset shared by store, domain and API tests.

    candidates debts: a01 (1000, 6m), a02 (200, 1m), a04 (5000, 12m), a07 (1500, 0m)
    new debts:        a05, a06
    no debt:          a03
    """
    return {
        "houses": [
            {"id": "h1", "name": "Lenina 12", "address": "12 Lenina St"},
            {"id": "h2", "name": "Mira 4", "address": "4 Mira Ave"},
            {"id": "h3", "name": "Sadovaya 7", "address": "7 Sadovaya St"},
        ],
        "accounts": [
            {"id": "a01", "house_id": "h1", "account_number": "1001", "owner_name": "Ivanova", "address": None},
            {"id": "a02", "house_id": "h1", "account_number": "1002", "owner_name": "Petrov", "address": None},
            {"id": "a03", "house_id": "h1", "account_number": "1003", "owner_name": "Sidorova", "address": None},
            {"id": "a04", "house_id": "h2", "account_number": "2001", "owner_name": "Kuznetsov", "address": None},
            {"id": "a05", "house_id": "h2", "account_number": "2002", "owner_name": "Smirnova", "address": None},
            {"id": "a06", "house_id": "h3", "account_number": "3001", "owner_name": "Volkov", "address": None},
            {"id": "a07", "house_id": "h3", "account_number": "3002", "owner_name": "Morozova", "address": None},
        ],
        "debt": [
            {"id": 1, "account_id": "a01", "amount": 1000.0, "penalty": 50.0, "debt_term_months": 6, "stage": "candidates", "updated_at": None},
            {"id": 2, "account_id": "a02", "amount": 200.0, "penalty": 0.0, "debt_term_months": 1, "stage": "candidates", "updated_at": None},
            {"id": 3, "account_id": "a04", "amount": 5000.0, "penalty": 300.0, "debt_term_months": 12, "stage": "candidates", "updated_at": None},
            {"id": 4, "account_id": "a05", "amount": 700.0, "penalty": 20.0, "debt_term_months": 3, "stage": "new", "updated_at": None},
            {"id": 5, "account_id": "a07", "amount": 1500.0, "penalty": 0.0, "debt_term_months": 0, "stage": "candidates", "updated_at": None},
            {"id": 6, "account_id": "a06", "amount": 300.0, "penalty": 10.0, "debt_term_months": 2, "stage": "new", "updated_at": None},
        ],
        "users": [
            {"id": "u1", "user_name": "operator", "password": "secret", "full_name": "Operator", "role": "operator"},
        ],
    }


@pytest.fixture
def tables() -> Dict[str, List[Dict[str, Any]]]:
    return seed_tables()


@pytest.fixture
def fixture_store(tables) -> FixtureRecordStore:
    """In-memory store seeded with the shared dataset"""
    return FixtureRecordStore(tables)


@pytest.fixture
def client(fixture_store: FixtureRecordStore) -> TestClient:
    """Create FastAPI test client backed by the fixture store"""
    return TestClient(create_app(store=fixture_store))


@pytest.fixture
def engine(tmp_path) -> Generator[Engine, None, None]:
    """SQLite database file with the schema created and the shared dataset loaded"""
    engine = create_db_engine(f"sqlite:///{tmp_path / 'test.db'}", Settings())
    Base.metadata.create_all(bind=engine)

    data = seed_tables()
    with engine.begin() as conn:
        for name in ("houses", "accounts", "debt", "users"):
            conn.execute(insert(Base.metadata.tables[name]), data[name])

    try:
        yield engine
    finally:
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture
def sql_store(engine: Engine) -> SqlRecordStore:
    return SqlRecordStore(create_session_factory(engine))


@pytest.fixture
def sql_client(sql_store: SqlRecordStore) -> TestClient:
    """Create FastAPI test client backed by the SQLite store"""
    return TestClient(create_app(store=sql_store))
