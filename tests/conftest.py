"""Pytest fixtures for testing"""

import os

# Point settings at SQLite before the app (and its engine) is imported
os.environ.setdefault("DATABASE_URL", "sqlite:///./test.db")

import pytest
from datetime import date, datetime, timezone
from typing import Generator
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker, Session
from pocketledger.api.main import create_app
from pocketledger.api.dependencies import get_now
from pocketledger.infrastructure.database.models import Base
from pocketledger.infrastructure.database.session import build_engine, get_db
from pocketledger.domain.models import TransactionRecord


# Test database
TEST_DATABASE_URL = "sqlite:///./test.db"
engine = build_engine(TEST_DATABASE_URL)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# Pinned clock: mid-afternoon UTC on 2024-03-20
FIXED_NOW = datetime(2024, 3, 20, 15, 30, tzinfo=timezone.utc)


@pytest.fixture
def db() -> Generator[Session, None, None]:
    """Create test database and session"""
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client(db: Session) -> TestClient:
    """Create FastAPI test client with test database and a pinned clock"""
    app = create_app()

    def override_get_db():
        try:
            yield db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_now] = lambda: FIXED_NOW
    return TestClient(app)


@pytest.fixture
def march_transactions() -> list[TransactionRecord]:
    """A March 2024 month with salary, rent and groceries plus February spill-over"""
    return [
        TransactionRecord(type="income", amount_cents=300000, category="Salary", date=date(2024, 3, 1)),
        TransactionRecord(type="expense", amount_cents=120000, category="Rent", date=date(2024, 3, 2)),
        TransactionRecord(type="expense", amount_cents=2000, category="Food", date=date(2024, 3, 5)),
        TransactionRecord(type="expense", amount_cents=3000, category="Food", date=date(2024, 3, 18)),
        TransactionRecord(type="expense", amount_cents=1000, category="Gas", date=date(2024, 3, 31)),
        TransactionRecord(type="income", amount_cents=250000, category="Salary", date=date(2024, 2, 1)),
        TransactionRecord(type="expense", amount_cents=9900, category="Food", date=date(2024, 2, 29)),
        TransactionRecord(type="expense", amount_cents=4500, category="Food", date=date(2024, 4, 1)),
    ]
