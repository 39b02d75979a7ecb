"""Data access layer for transactions and budgets"""

from dataclasses import dataclass
from datetime import datetime
from typing import List, Optional
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from budget_forecaster.infrastructure.database.models import TransactionRecord, BudgetRecord
from budget_forecaster.domain.models import Transaction, Budget
from budget_forecaster.domain.exceptions import InvalidTransactionDataError, PersistenceError


@dataclass
class TransactionFilter:
    """Optional query constraints; date bounds apply only when both are set"""

    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None
    category: Optional[str] = None
    type: Optional[str] = None


def to_transaction(row: TransactionRecord) -> Transaction:
    """Map ORM row to domain transaction"""
    if row.amount is None or row.date is None or not row.type:
        raise InvalidTransactionDataError(f"Transaction {row.id} is missing required fields")
    return Transaction(
        type=row.type,
        amount=float(row.amount),
        category=row.category,
        date=row.date,
        description=row.description,
    )


def to_budget(row: BudgetRecord) -> Budget:
    """Map ORM row to domain budget"""
    if row.amount is None or not row.category:
        raise InvalidTransactionDataError(f"Budget {row.id} is missing required fields")
    return Budget(category=row.category, amount=float(row.amount), type=row.type or "expense")


class TransactionRepository:
    """Repository for income and expense transactions"""

    def __init__(self, db: Session):
        self.db = db

    def create_transaction(self, transaction: Transaction) -> TransactionRecord:
        """Persist transaction; caller commits"""
        db_transaction = TransactionRecord(
            type=transaction.type,
            amount=transaction.amount,
            category=transaction.category,
            description=transaction.description,
            date=transaction.date,
        )
        try:
            self.db.add(db_transaction)
            self.db.flush()  # Get ID without committing
        except SQLAlchemyError as e:
            raise PersistenceError(f"Could not save transaction: {e}") from e
        return db_transaction

    def list_records(
        self,
        filters: Optional[TransactionFilter] = None,
        ascending: bool = False,
        limit: Optional[int] = None,
        offset: int = 0,
    ) -> List[TransactionRecord]:
        """Fetch rows matching filters, ordered by date; no limit returns every match"""
        query = self.db.query(TransactionRecord)

        if filters:
            if filters.start_date and filters.end_date:
                query = query.filter(
                    TransactionRecord.date >= filters.start_date,
                    TransactionRecord.date <= filters.end_date,
                )
            if filters.category:
                query = query.filter(TransactionRecord.category == filters.category)
            if filters.type:
                query = query.filter(TransactionRecord.type == filters.type)

        if ascending:
            query = query.order_by(TransactionRecord.date.asc(), TransactionRecord.id.asc())
        else:
            query = query.order_by(TransactionRecord.date.desc(), TransactionRecord.id.desc())
        if offset:
            query = query.offset(offset)
        if limit:
            query = query.limit(limit)

        try:
            return query.all()
        except SQLAlchemyError as e:
            raise PersistenceError(f"Could not fetch transactions: {e}") from e

    def list_transactions(
        self,
        filters: Optional[TransactionFilter] = None,
        ascending: bool = False,
    ) -> List[Transaction]:
        """Fetch domain transactions matching filters, ordered by date"""
        return [to_transaction(row) for row in self.list_records(filters, ascending)]


class BudgetRepository:
    """Repository for category budgets"""

    def __init__(self, db: Session):
        self.db = db

    def create_budget(self, budget: Budget) -> BudgetRecord:
        """Persist budget; caller commits"""
        db_budget = BudgetRecord(
            category=budget.category,
            amount=budget.amount,
            type=budget.type,
        )
        try:
            self.db.add(db_budget)
            self.db.flush()
        except SQLAlchemyError as e:
            raise PersistenceError(f"Could not save budget: {e}") from e
        return db_budget

    def list_records(self) -> List[BudgetRecord]:
        """All budget rows in insertion order"""
        try:
            return self.db.query(BudgetRecord).order_by(BudgetRecord.id.asc()).all()
        except SQLAlchemyError as e:
            raise PersistenceError(f"Could not fetch budgets: {e}") from e

    def list_budgets(self) -> List[Budget]:
        """All budgets as domain objects"""
        return [to_budget(row) for row in self.list_records()]
