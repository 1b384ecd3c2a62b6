"""Shared pytest fixtures for user directory test suites."""

from collections.abc import Generator
import os
from pathlib import Path
import sys

import pytest
from argon2 import PasswordHasher
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

os.environ.setdefault("USERDIR_DATABASE_URL", "sqlite+pysqlite:///:memory:")


@pytest.fixture
def engine() -> Generator[Engine, None, None]:
    """In-memory database with the full schema, shared across threads."""
    from app.db.models import User

    engine = create_engine(
        "sqlite+pysqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    User.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine: Engine) -> sessionmaker[Session]:
    return sessionmaker(bind=engine, autoflush=False, expire_on_commit=False, class_=Session)


@pytest.fixture
def db_session(session_factory: sessionmaker[Session]) -> Generator[Session, None, None]:
    with session_factory() as session:
        yield session


@pytest.fixture
def response_service():
    """Response service over the bundled English catalog."""
    from app.core.config import DEFAULT_LOCALES_DIR
    from app.language.service import LanguageService
    from app.response.constants import get_status_registry
    from app.response.service import ResponseService

    return ResponseService(LanguageService("en", DEFAULT_LOCALES_DIR), get_status_registry())


@pytest.fixture
def client(session_factory: sessionmaker[Session]) -> Generator[TestClient, None, None]:
    """Provide an API test client bound to the in-memory database."""
    from app.core.security import PasswordService
    from app.core.security import get_password_service
    from app.db.base import get_db_session
    from app.main import app

    def _session() -> Generator[Session, None, None]:
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    fast_hasher = PasswordService(PasswordHasher(time_cost=1, memory_cost=8, parallelism=1))
    app.dependency_overrides[get_db_session] = _session
    app.dependency_overrides[get_password_service] = lambda: fast_hasher

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()
