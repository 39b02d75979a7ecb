"""GET /api/accuracy - rolling backtest of the moving-average forecast"""

import time
import logging
from fastapi import APIRouter, Depends, HTTPException, Request
from sqlalchemy.orm import Session

from budget_forecaster.api.v1.schemas import AccuracyResponse, AccuracyRecordSchema
from budget_forecaster.api.dependencies import get_request_id
from budget_forecaster.config import settings
from budget_forecaster.domain.aggregation import aggregate_by_month
from budget_forecaster.domain.backtesting import backtest_moving_average
from budget_forecaster.domain.exceptions import InvalidTransactionDataError, PersistenceError
from budget_forecaster.infrastructure.database.session import get_db
from budget_forecaster.infrastructure.database.repositories import TransactionRepository, TransactionFilter
from budget_forecaster.infrastructure.observability.metrics import backtest_accuracy_gauge, persistence_failures_counter
from budget_forecaster.infrastructure.observability.logging import log_backtest
from budget_forecaster.utils.number_utils import round_half_up

router = APIRouter()


@router.get("/accuracy", response_model=AccuracyResponse)
def get_accuracy(request: Request, db: Session = Depends(get_db)):
    """
    Score past forecasts against realised spending.

    Returns:
        The most recent backtested months, mean accuracy over every
        backtested month (rounded to a whole percent) and the record count
    """
    start_time = time.time()
    request_id = get_request_id(request)

    try:
        transactions = TransactionRepository(db).list_transactions(
            TransactionFilter(type="expense"), ascending=True
        )
        report = backtest_moving_average(aggregate_by_month(transactions), settings.forecast_window_months)

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
    backtest_accuracy_gauge.set(report.average_accuracy)
    log_backtest(request_id, report.total_predictions, report.average_accuracy, duration_ms)

    return AccuracyResponse(
        predictions=[
            AccuracyRecordSchema(
                month=r.month,
                predicted=r.predicted,
                actual=r.actual,
                accuracy=r.accuracy,
            )
            for r in report.recent(settings.accuracy_report_size)
        ],
        average_accuracy=int(round_half_up(report.average_accuracy, 0)),
        total_predictions=report.total_predictions,
    )
