"""GET/POST /api/budgets - per-category spending limits"""

import logging
from typing import List
from fastapi import APIRouter, Depends, HTTPException, Request
from sqlalchemy.orm import Session

from budget_forecaster.api.v1.schemas import BudgetCreate, BudgetResponse
from budget_forecaster.api.dependencies import get_request_id
from budget_forecaster.domain.models import Budget
from budget_forecaster.domain.exceptions import PersistenceError
from budget_forecaster.infrastructure.database.session import get_db
from budget_forecaster.infrastructure.database.repositories import BudgetRepository
from budget_forecaster.infrastructure.observability.metrics import persistence_failures_counter

router = APIRouter()


@router.get("/budgets", response_model=List[BudgetResponse])
def list_budgets(request: Request, db: Session = Depends(get_db)):
    request_id = get_request_id(request)

    try:
        return BudgetRepository(db).list_records()

    except PersistenceError as e:
        persistence_failures_counter.inc()
        logging.error(f"Budget query failed: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=503, detail="Database unavailable")

    except Exception as e:
        db.rollback()
        logging.error(f"Unexpected error: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=500, detail="Internal server error")


@router.post("/budgets", response_model=BudgetResponse, status_code=201)
def create_budget(request_body: BudgetCreate, request: Request, db: Session = Depends(get_db)):
    request_id = get_request_id(request)
    budget = Budget(category=request_body.category, amount=request_body.amount, type=request_body.type)

    try:
        record = BudgetRepository(db).create_budget(budget)
        db.commit()
        db.refresh(record)

    except PersistenceError as e:
        db.rollback()
        persistence_failures_counter.inc()
        logging.error(f"Could not store budget: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=503, detail="Database unavailable")

    except Exception as e:
        db.rollback()
        logging.error(f"Unexpected error: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=500, detail="Internal server error")

    return record
