import os

os.environ.setdefault("ENV", "test")
os.environ.setdefault("DATABASE_URL", "sqlite+pysqlite:///:memory:")

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from order_engine.core.database import Base, get_db  # noqa: E402
from order_engine.core.metrics import request_metrics  # noqa: E402
import order_engine.models  # noqa: E402,F401
from tests.fixtures_data import seed_catalog  # noqa: E402


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite+pysqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def db(engine):
    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def seed(db):
    return seed_catalog(db)


@pytest.fixture
def api_client(db, seed, monkeypatch):
    from order_engine import main

    monkeypatch.setattr(main, "_startup_tasks", lambda: None)
    main.app.dependency_overrides[get_db] = lambda: db
    request_metrics.reset()
    with TestClient(main.app) as client:
        yield client
    main.app.dependency_overrides.clear()
