"""
Pytest configuration and fixtures
"""
import os

# Keep the app off the on-disk database while tests import it
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("SEED_DEMO_DATA", "false")
os.environ.setdefault("EXPIRY_REMINDER_INTERVAL_MINUTES", "0")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session, sessionmaker

from app.core.database import build_engine, drop_all_tables, get_db, init_db
from app.core.seed import seed_demo_data
from app.main import create_app


@pytest.fixture(scope="function")
def engine():
    """Fresh in-memory database per test"""
    test_engine = build_engine("sqlite://")
    init_db(bind=test_engine)
    yield test_engine
    drop_all_tables(bind=test_engine)
    test_engine.dispose()


@pytest.fixture(scope="function")
def session_factory(engine):
    return sessionmaker(bind=engine, autocommit=False, autoflush=False, expire_on_commit=False)


@pytest.fixture(scope="function")
def db(session_factory) -> Session:
    """Database session loaded with the demo fixtures"""
    session = session_factory()
    seed_demo_data(session)
    yield session
    session.close()


@pytest.fixture(scope="function")
def client(db, session_factory):
    """TestClient whose requests share the seeded in-memory database"""
    app = create_app()

    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    return TestClient(app)