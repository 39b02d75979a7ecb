"""SQLAlchemy ORM models for transactions and budgets"""

from sqlalchemy import Column, String, Float, DateTime, Integer, Text
from sqlalchemy.orm import declarative_base
from sqlalchemy.sql import func

Base = declarative_base()


class TransactionRecord(Base):
    """Income or expense entry"""

    __tablename__ = "transactions"

    id = Column(Integer, primary_key=True, autoincrement=True)
    type = Column(String(16), nullable=False, index=True)
    amount = Column(Float, nullable=False)
    category = Column(Text, nullable=False, index=True)
    description = Column(Text, nullable=True)
    date = Column(DateTime(timezone=True), nullable=False, index=True)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())


class BudgetRecord(Base):
    """Per-category spending limit"""

    __tablename__ = "budgets"

    id = Column(Integer, primary_key=True, autoincrement=True)
    category = Column(Text, nullable=False, index=True)
    amount = Column(Float, nullable=False)
    type = Column(String(16), nullable=False, default="expense")
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
