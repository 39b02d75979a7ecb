"""Pytest fixtures for testing"""

import pytest
from typing import Generator
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session
from budget_forecaster.api.main import create_app
from budget_forecaster.api.dependencies import get_now
from budget_forecaster.infrastructure.database.models import Base
from budget_forecaster.infrastructure.database.session import get_db
from budget_forecaster.domain.models import Transaction
from factories import NOW, make_transaction, month_start


# Test database
TEST_DATABASE_URL = "sqlite:///./test.db"
engine = create_engine(TEST_DATABASE_URL, connect_args={"check_same_thread": False})
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


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
    """Create FastAPI test client with test database and a fixed clock"""
    app = create_app()

    def override_get_db():
        try:
            yield db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_now] = lambda: NOW
    return TestClient(app)


@pytest.fixture
def sample_transactions() -> list[Transaction]:
    """Four months of salary plus rising grocery spend, January to April 2026"""
    transactions = []
    for month, spend in zip(range(1, 5), [100.0, 200.0, 300.0, 240.0]):
        transactions.append(
            make_transaction(3000.0, month_start(2026, month), type="income", category="salary")
        )
        transactions.append(make_transaction(spend, month_start(2026, month, 10), category="groceries"))
    return transactions

