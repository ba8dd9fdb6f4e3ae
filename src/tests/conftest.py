"""Pytest configuration and fixtures for service layer tests."""

from contextlib import contextmanager

import pytest
from sqlalchemy import create_engine
from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import sessionmaker, scoped_session
from sqlalchemy.pool import StaticPool

import src.models  # noqa: F401 - registers every table on Base
from src.models.base import Base
from src.services import store_gateway
from src.services.auth_service import _placeholder_hash
from src.utils.config import reset_config


@pytest.fixture(autouse=True)
def test_config(monkeypatch):
    """Point configuration at an in-memory store with cheap password hashing."""
    monkeypatch.setenv("PARCEL_TRACKER_ENV", "development")
    monkeypatch.setenv("PARCEL_TRACKER_DATABASE_URL", "sqlite:///:memory:")
    monkeypatch.setenv("PARCEL_TRACKER_PASSWORD_ITERATIONS", "1000")
    monkeypatch.delenv("PARCEL_TRACKER_STRICT_TRANSITIONS", raising=False)
    reset_config()
    store_gateway.reset_gateway()
    _placeholder_hash.cache_clear()

    yield

    reset_config()
    store_gateway.reset_gateway()
    _placeholder_hash.cache_clear()


@pytest.fixture(scope="function")
def test_db():
    """Provide a clean test database for each test function.

    This fixture:
    1. Creates an in-memory SQLite database
    2. Creates all tables
    3. Provides the session factory to the test
    4. Drops all tables after the test completes
    """
    engine = create_engine(
        "sqlite:///:memory:",
        echo=False,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    Base.metadata.create_all(engine)

    session_factory = sessionmaker(bind=engine, expire_on_commit=False)
    Session = scoped_session(session_factory)

    # Monkey-patch the global session factory for tests
    import src.services.database as db_module

    original_get_session_factory = db_module.get_session_factory
    db_module.get_session_factory = lambda: Session

    yield Session

    Session.remove()
    Base.metadata.drop_all(engine)
    engine.dispose()

    db_module.get_session_factory = original_get_session_factory


@pytest.fixture
def broken_store(monkeypatch):
    """Make every gateway round trip fail as if the database were locked.

    Returns the list of attempted round trips.
    """
    calls = []

    @contextmanager
    def failing_scope():
        calls.append(1)
        raise OperationalError("SELECT 1", {}, Exception("database is locked"))
        yield  # pragma: no cover

    monkeypatch.setattr(store_gateway, "session_scope", failing_scope)
    return calls


@pytest.fixture
def courier(test_db):
    """Provide a delivery person with a known password."""
    from src.services import delivery_person_service

    return delivery_person_service.create_delivery_person(
        name="Luis Pérez",
        phone="555-0101",
        email="luis@example.com",
        password="secret1",
    )


@pytest.fixture
def admin_account(test_db):
    """Provide a non-delivery account inserted straight through the gateway."""
    from src.services.auth_service import hash_password
    from src.services.store_gateway import get_gateway

    return get_gateway().insert(
        "persons",
        {
            "name": "Dispatch Admin",
            "phone": None,
            "email": "admin@example.com",
            "role": "admin",
            "status": "available",
            "password_hash": hash_password("adminpass"),
        },
    )


@pytest.fixture
def pending_package(test_db):
    """Provide an unassigned package in PENDING status."""
    from src.services import package_service

    return package_service.create_package("Ana", "Calle 1")
