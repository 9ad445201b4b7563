"""Builds the configured record store once at startup"""

import logging

from debt_gateway.config import Settings
from debt_gateway.domain.exceptions import ConfigurationError
from debt_gateway.domain.store import RecordStore
from debt_gateway.infrastructure.database.session import create_db_engine, create_session_factory
from debt_gateway.infrastructure.store.fixture import FixtureRecordStore
from debt_gateway.infrastructure.store.sql import SqlRecordStore


def build_record_store(settings: Settings) -> RecordStore:
    """
    Construct the store selected by ``settings.store_backend``.

    Raises:
        ConfigurationError: sql backend without DATABASE_URL, or an unreadable fixture file
    """
    if settings.store_backend == "fixture":
        return FixtureRecordStore.from_file(settings.fixture_path)

    if not settings.database_url:
        raise ConfigurationError("DATABASE_URL is required when STORE_BACKEND=sql")

    engine = create_db_engine(settings.database_url, settings)
    logging.info("SQL record store configured", extra={"dialect": engine.dialect.name})
    return SqlRecordStore(create_session_factory(engine))
