"""Prometheus metrics for monitoring forecasts, recommendations and persistence"""

from typing import List, Optional
from prometheus_client import Counter, Histogram, Gauge
from budget_forecaster.domain.models import PredictionResult, Recommendation

# Ingestion metrics
transactions_recorded_counter = Counter(
    "budget_transactions_recorded_total",
    "Transactions stored",
    ["type"],  # income | expense
)

# Forecast metrics
prediction_counter = Counter(
    "budget_predictions_total",
    "Spending forecasts requested",
    ["strategy", "outcome"],  # outcome: predicted | unavailable
)

recommendation_counter = Counter(
    "budget_recommendations_total",
    "Recommendations emitted",
    ["priority"],  # high | medium
)

backtest_accuracy_gauge = Gauge(
    "budget_backtest_average_accuracy",
    "Average accuracy of the latest moving-average backtest (0-100)",
)

# Persistence metrics
persistence_failures_counter = Counter(
    "budget_persistence_failures_total",
    "Failed database operations",
)

# Service health
request_duration_histogram = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency",
    ["method", "endpoint", "status"],
)


def record_analysis(
    strategy: str,
    prediction: Optional[PredictionResult],
    recommendations: List[Recommendation],
) -> None:
    """Record forecast outcome and recommendation volume by priority"""
    outcome = "unavailable" if prediction is None else "predicted"
    prediction_counter.labels(strategy=strategy, outcome=outcome).inc()

    for rec in recommendations:
        recommendation_counter.labels(priority=rec.priority).inc()
