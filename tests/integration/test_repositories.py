"""Integration tests for the persistence layer"""

import pytest
from datetime import datetime
from sqlalchemy.orm import Session
from budget_forecaster.domain.models import Budget
from budget_forecaster.domain.exceptions import InvalidTransactionDataError
from budget_forecaster.infrastructure.database.models import TransactionRecord
from budget_forecaster.infrastructure.database.repositories import (
    BudgetRepository,
    TransactionFilter,
    TransactionRepository,
    to_transaction,
)
from factories import make_transaction, month_start

pytestmark = pytest.mark.integration


def test_transactions_roundtrip_sorted(db: Session):
    """Test stored transactions come back as domain objects in date order"""
    repo = TransactionRepository(db)
    repo.create_transaction(make_transaction(20.0, month_start(2026, 2)))
    repo.create_transaction(make_transaction(10.0, month_start(2026, 1)))
    repo.create_transaction(make_transaction(500.0, month_start(2026, 1, 2), type="income", category="salary"))
    db.commit()

    ascending = repo.list_transactions(ascending=True)
    descending = repo.list_transactions()

    assert [t.amount for t in ascending] == [10.0, 500.0, 20.0]
    assert [t.amount for t in descending] == [20.0, 500.0, 10.0]
    assert ascending[0].category == "food"


def test_transaction_filter(db: Session):
    repo = TransactionRepository(db)
    repo.create_transaction(make_transaction(20.0, month_start(2026, 2)))
    repo.create_transaction(make_transaction(500.0, month_start(2026, 2), type="income", category="salary"))
    db.commit()

    expenses = repo.list_transactions(TransactionFilter(type="expense"))
    salary = repo.list_transactions(TransactionFilter(category="salary"))

    assert [t.amount for t in expenses] == [20.0]
    assert [t.type for t in salary] == ["income"]


def test_date_filter_needs_both_bounds(db: Session):
    """Test a single date bound is ignored"""
    repo = TransactionRepository(db)
    repo.create_transaction(make_transaction(20.0, month_start(2026, 1)))
    repo.create_transaction(make_transaction(30.0, month_start(2026, 3)))
    db.commit()

    only_start = repo.list_transactions(TransactionFilter(start_date=month_start(2026, 2)))
    both = repo.list_transactions(
        TransactionFilter(start_date=month_start(2026, 2), end_date=month_start(2026, 4))
    )

    assert len(only_start) == 2
    assert [t.amount for t in both] == [30.0]


def test_budgets_keep_insertion_order(db: Session):
    repo = BudgetRepository(db)
    repo.create_budget(Budget(category="rent", amount=1000.0))
    repo.create_budget(Budget(category="food", amount=300.0))
    db.commit()

    assert repo.list_budgets() == [
        Budget(category="rent", amount=1000.0),
        Budget(category="food", amount=300.0),
    ]


def test_to_transaction_rejects_incomplete_row():
    row = TransactionRecord(id=7, type="expense", amount=None, category="food", date=datetime(2026, 1, 1))

    with pytest.raises(InvalidTransactionDataError):
        to_transaction(row)
