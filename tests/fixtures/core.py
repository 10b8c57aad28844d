from __future__ import annotations

from collections.abc import Generator

import pytest
from sqlalchemy.engine import Engine
from sqlmodel import Session

from src.storefront.core.services import DbManageService, DbSessionService
from src.storefront.core.services.database.db_session import build_engine
from src.storefront.runtime.config.config_data import ConfigData, DatabaseConfig


@pytest.fixture
def engine() -> Generator[Engine]:
    """Fresh in-memory database with every table created and foreign keys enforced."""
    engine = build_engine(ConfigData(database=DatabaseConfig(url="sqlite:///:memory:")))
    DbManageService(engine).create_all()
    yield engine
    engine.dispose()


@pytest.fixture
def db_service(engine: Engine) -> DbSessionService:
    return DbSessionService(engine=engine)


@pytest.fixture
def session(db_service: DbSessionService) -> Generator[Session]:
    """Create a fresh database session for testing."""
    session = db_service.get_session()
    try:
        yield session
    finally:
        session.rollback()
        session.close()
