"""
Central pytest configuration for the barbershop tests.

This file provides common fixtures, test markers, and setup
for both unit and integration tests.
"""

import os
import sys
from pathlib import Path

import pytest

# Add backend directory to sys.path so `barbershop` and `tests` import
backend_root = Path(__file__).parent.parent
if str(backend_root) not in sys.path:
    sys.path.insert(0, str(backend_root))

# Test environment (set early so import-time configuration uses it)
os.environ["DATABASE_URL"] = "sqlite:///:memory:"
os.environ["BARBERSHOP_STORAGE"] = "memory"

from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from barbershop.db import base  # noqa: E402,F401  (populates Base.metadata)
from barbershop.db.session import Base  # noqa: E402
from barbershop.domain.entities import Client, Service  # noqa: E402
from barbershop.repositories import InMemoryStore, SqlAlchemyStore  # noqa: E402
from tests.config import REFERENCE_NOW, TEST_DATABASE_URL  # noqa: E402
from tests.config.markers import (  # noqa: E402,F401
    pytest_collection_modifyitems,
    pytest_configure,
)


# =====================================================
# CLOCK FIXTURES
# =====================================================


@pytest.fixture
def reference_now():
    """Fixed reference instant: 2025-10-22 10:00:00."""
    return REFERENCE_NOW


# =====================================================
# STORE FIXTURES
# =====================================================


@pytest.fixture
def memory_store():
    """Fresh in-memory store per test."""
    return InMemoryStore()


@pytest.fixture
def sql_engine():
    """Isolated in-memory SQLite engine with all tables created."""
    engine = create_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def db_session(sql_engine):
    """Provide a database session bound to the test engine."""
    TestSessionLocal = sessionmaker(bind=sql_engine, autoflush=False)
    session = TestSessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def sql_store(db_session):
    return SqlAlchemyStore(db_session)


@pytest.fixture(params=["memory", "sql"])
def store(request):
    """Run a test against every storage backend."""
    if request.param == "memory":
        return InMemoryStore()
    return SqlAlchemyStore(request.getfixturevalue("db_session"))


# =====================================================
# DOMAIN FIXTURES
# =====================================================


@pytest.fixture
def client_mario():
    return Client(name="Mario")


@pytest.fixture
def service_barba():
    return Service(name="Barba", price=2500)


@pytest.fixture
def service_corte():
    return Service(name="Corte", price=3500)
