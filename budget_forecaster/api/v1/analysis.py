"""GET /api/analysis and /api/recommendations/surplus - forecast and budget advice"""

import time
import logging
from datetime import datetime
from typing import Optional
from fastapi import APIRouter, Depends, HTTPException, Query, Request
from sqlalchemy.orm import Session

from budget_forecaster.api.v1.schemas import (
    AnalysisResponse,
    PredictionSchema,
    RecommendationSchema,
    MonthBucketSchema,
    SurplusResponse,
)
from budget_forecaster.api.dependencies import get_now, get_request_id
from budget_forecaster.config import settings
from budget_forecaster.domain.aggregation import aggregate_by_month
from budget_forecaster.domain.prediction import PredictionStrategy, predict_next_month_spending
from budget_forecaster.domain.recommendations import recommend_budget_compliance, recommend_surplus_allocation
from budget_forecaster.domain.exceptions import InvalidTransactionDataError, PersistenceError
from budget_forecaster.infrastructure.database.session import get_db
from budget_forecaster.infrastructure.database.repositories import TransactionRepository, BudgetRepository
from budget_forecaster.infrastructure.observability.metrics import record_analysis, persistence_failures_counter
from budget_forecaster.infrastructure.observability.logging import log_analysis
from budget_forecaster.utils.date_utils import month_key

router = APIRouter()


@router.get("/analysis", response_model=AnalysisResponse)
def get_analysis(
    request: Request,
    strategy: Optional[PredictionStrategy] = Query(None, description="Forecast strategy override"),
    db: Session = Depends(get_db),
    now: datetime = Depends(get_now),
):
    """
    Forecast next month's spending and check budgets.

    Flow:
    1. Fetch all transactions and budgets
    2. Aggregate into month buckets
    3. Predict with the selected strategy (None with under 3 months of data)
    4. Emit budget compliance recommendations for the current month
    """
    start_time = time.time()
    request_id = get_request_id(request)
    selected = strategy or PredictionStrategy(settings.prediction_strategy)

    try:
        transactions = TransactionRepository(db).list_transactions()
        budgets = BudgetRepository(db).list_budgets()

        monthly = aggregate_by_month(transactions)
        prediction = predict_next_month_spending(monthly, selected, settings.forecast_window_months)
        recommendations = recommend_budget_compliance(
            transactions,
            budgets,
            now,
            monthly=monthly,
            increase_threshold=settings.spending_increase_threshold,
        )

    except PersistenceError as e:
        persistence_failures_counter.inc()
        logging.error(f"Database error: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=503, detail="Database unavailable")

    except InvalidTransactionDataError as e:
        logging.error(f"Corrupt stored data: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=500, detail="Stored data is invalid")

    except Exception as e:
        db.rollback()
        logging.error(f"Unexpected error: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=500, detail="Internal server error")

    duration_ms = (time.time() - start_time) * 1000
    record_analysis(selected.value, prediction, recommendations)
    log_analysis(
        request_id,
        selected.value,
        prediction.prediction if prediction else None,
        len(recommendations),
        len(monthly),
        duration_ms,
    )

    return AnalysisResponse(
        prediction=(
            PredictionSchema(prediction=prediction.prediction, confidence=prediction.confidence)
            if prediction
            else None
        ),
        recommendations=[
            RecommendationSchema(category=r.category, message=r.message, priority=r.priority)
            for r in recommendations
        ],
        monthly_trends={
            key: MonthBucketSchema(income=bucket.income, expenses=bucket.expenses)
            for key, bucket in monthly.items()
        },
    )


@router.get("/recommendations/surplus", response_model=SurplusResponse)
def get_surplus_recommendation(
    request: Request,
    monthly_budget: float = Query(
        ..., alias="monthlyBudget", gt=0, allow_inf_nan=False, description="Total budget for the month"
    ),
    month: Optional[str] = Query(None, pattern=r"^\d{4}-\d{2}$", description="YYYY-MM, defaults to current month"),
    db: Session = Depends(get_db),
    now: datetime = Depends(get_now),
):
    """Compare one month's total spending against a single monthly budget"""
    request_id = get_request_id(request)
    target_month = month or month_key(now)

    try:
        transactions = TransactionRepository(db).list_transactions()
        month_transactions = [t for t in transactions if month_key(t.date) == target_month]
        advice = recommend_surplus_allocation(month_transactions, monthly_budget)

    except PersistenceError as e:
        persistence_failures_counter.inc()
        logging.error(f"Database error: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=503, detail="Database unavailable")

    except InvalidTransactionDataError as e:
        logging.error(f"Corrupt stored data: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=500, detail="Stored data is invalid")

    except Exception as e:
        db.rollback()
        logging.error(f"Unexpected error: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=500, detail="Internal server error")

    return SurplusResponse(
        month=target_month,
        type=advice.type,
        message=advice.message,
        surplus=advice.surplus,
        category=advice.category,
    )
