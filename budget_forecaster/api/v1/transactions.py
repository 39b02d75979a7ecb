"""GET/POST /api/transactions - record and query income and expenses"""

import logging
from datetime import datetime
from typing import List, Optional
from fastapi import APIRouter, Depends, HTTPException, Query, Request
from sqlalchemy.orm import Session

from budget_forecaster.api.v1.schemas import TransactionCreate, TransactionResponse
from budget_forecaster.api.dependencies import get_now, get_request_id
from budget_forecaster.domain.models import Transaction
from budget_forecaster.domain.exceptions import PersistenceError
from budget_forecaster.infrastructure.database.session import get_db
from budget_forecaster.infrastructure.database.repositories import TransactionRepository, TransactionFilter
from budget_forecaster.infrastructure.observability.metrics import (
    transactions_recorded_counter,
    persistence_failures_counter,
)
from budget_forecaster.utils.date_utils import as_utc
from budget_forecaster.utils.text_utils import sanitize_text

router = APIRouter()


@router.get("/transactions", response_model=List[TransactionResponse])
def list_transactions(
    request: Request,
    start_date: Optional[datetime] = Query(None, alias="startDate"),
    end_date: Optional[datetime] = Query(None, alias="endDate"),
    category: Optional[str] = Query(None),
    type: Optional[str] = Query(None),
    limit: Optional[int] = Query(None, ge=1, description="Page size, all matches when omitted"),
    offset: int = Query(0, ge=0, description="Rows to skip"),
    db: Session = Depends(get_db),
):
    """
    List transactions, newest first.

    The date range applies only when both bounds are given. Without `limit`
    every match is returned.
    """
    request_id = get_request_id(request)
    filters = TransactionFilter(
        start_date=as_utc(start_date) if start_date else None,
        end_date=as_utc(end_date) if end_date else None,
        category=sanitize_text(category).lower() if category else None,
        type=sanitize_text(type).lower() if type else None,
    )

    try:
        return TransactionRepository(db).list_records(filters, limit=limit, offset=offset)

    except PersistenceError as e:
        persistence_failures_counter.inc()
        logging.error(f"Transaction query failed: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=503, detail="Database unavailable")

    except Exception as e:
        db.rollback()
        logging.error(f"Unexpected error: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=500, detail="Internal server error")


@router.post("/transactions", response_model=TransactionResponse, status_code=201)
def create_transaction(
    request_body: TransactionCreate,
    request: Request,
    db: Session = Depends(get_db),
    now: datetime = Depends(get_now),
):
    """Store a validated, sanitised transaction"""
    request_id = get_request_id(request)
    transaction = Transaction(
        type=request_body.type,
        amount=request_body.amount,
        category=request_body.category,
        date=request_body.date or now,
        description=request_body.description,
    )

    try:
        record = TransactionRepository(db).create_transaction(transaction)
        db.commit()
        db.refresh(record)
    except PersistenceError as e:
        db.rollback()
        persistence_failures_counter.inc()
        logging.error(f"Could not store transaction: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=503, detail="Database unavailable")

    except Exception as e:
        db.rollback()
        logging.error(f"Unexpected error: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=500, detail="Internal server error")

    transactions_recorded_counter.labels(type=transaction.type).inc()
    return record
