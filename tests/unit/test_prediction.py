"""Unit tests for next-month spending prediction"""

import pytest
from budget_forecaster.domain.models import MonthBucket
from budget_forecaster.domain.prediction import (
    PredictionStrategy,
    calculate_confidence,
    fit_linear_trend,
    linear_regression_forecast,
    predict_linear_regression,
    predict_moving_average,
    predict_next_month_spending,
)


def buckets(*expenses: float) -> dict[str, MonthBucket]:
    """Consecutive 2026 months with the given expense totals"""
    return {f"2026-{i + 1:02d}": MonthBucket(expenses=e) for i, e in enumerate(expenses)}


def test_moving_average_three_months():
    """Test forecast is the mean of the last three months"""
    result = predict_moving_average(buckets(100.0, 200.0, 300.0))

    assert result is not None
    assert result.prediction == 200.0
    assert result.strategy == "moving_average"
    # pstdev(100, 200, 300) / 200 = 0.4082
    assert result.confidence == pytest.approx(59.175, abs=0.01)


def test_moving_average_uses_most_recent_window():
    """Test only the latest three months count"""
    result = predict_moving_average(buckets(5000.0, 100.0, 100.0, 100.0))

    assert result.prediction == 100.0
    assert result.confidence == 100.0  # no variation


def test_moving_average_insufficient_history():
    """Test fewer than three months gives no forecast"""
    assert predict_moving_average({}) is None
    assert predict_moving_average(buckets(100.0, 200.0)) is None


def test_moving_average_unordered_keys():
    """Test window is chosen by month key, not insertion order"""
    monthly = {
        "2026-04": MonthBucket(expenses=400.0),
        "2026-01": MonthBucket(expenses=9999.0),
        "2026-03": MonthBucket(expenses=300.0),
        "2026-02": MonthBucket(expenses=200.0),
    }

    assert predict_moving_average(monthly).prediction == 300.0


def test_calculate_confidence_bounds():
    """Test confidence clamps to 0 and handles a zero mean"""
    assert calculate_confidence([0.0, 0.0, 0.0]) == 0.0
    assert calculate_confidence([10.0, 10.0, 1000.0]) == 0.0  # cv > 1
    assert calculate_confidence([50.0]) == 0.0
    assert calculate_confidence([80.0, 80.0, 80.0]) == 100.0


def test_fit_linear_trend():
    """Test OLS slope and intercept over x = 0..n-1"""
    slope, intercept = fit_linear_trend([10.0, 20.0, 30.0])

    assert slope == pytest.approx(10.0)
    assert intercept == pytest.approx(10.0)


def test_linear_regression_forecast_next_point():
    """Test forecast is the trend value at x = n"""
    assert linear_regression_forecast([10.0, 20.0, 30.0]) == 40.0


def test_linear_regression_forecast_rounds_to_cents():
    # slope 10.5, intercept 9.8333 -> 41.3333
    assert linear_regression_forecast([10.0, 20.0, 31.0]) == 41.33


def test_linear_regression_forecast_clamps_negative():
    """Test a falling trend never forecasts negative spend"""
    assert linear_regression_forecast([300.0, 200.0, 50.0]) == 0.0


def test_linear_regression_forecast_degenerate():
    """Test a zero denominator gives 0 instead of raising"""
    assert fit_linear_trend([]) is None
    assert fit_linear_trend([42.0]) is None
    assert linear_regression_forecast([]) == 0.0
    assert linear_regression_forecast([42.0]) == 0.0


def test_predict_linear_regression_from_buckets():
    """Test strategy wrapper feeds chronological monthly expenses"""
    result = predict_linear_regression(buckets(10.0, 20.0, 30.0))

    assert result.prediction == 40.0
    assert result.confidence is None
    assert result.strategy == "linear_regression"
    assert predict_linear_regression(buckets(10.0, 20.0)) is None


@pytest.mark.parametrize(
    "strategy,expected",
    [
        (PredictionStrategy.MOVING_AVERAGE, 200.0),
        ("moving_average", 200.0),
        (PredictionStrategy.LINEAR_REGRESSION, 400.0),
        ("linear_regression", 400.0),
    ],
)
def test_predict_next_month_spending_dispatch(strategy, expected):
    """Test strategy selection by enum or name"""
    result = predict_next_month_spending(buckets(100.0, 200.0, 300.0), strategy)

    assert result.prediction == expected


def test_predict_next_month_spending_unknown_strategy():
    with pytest.raises(ValueError):
        predict_next_month_spending(buckets(100.0, 200.0, 300.0), "arima")


def test_predict_next_month_spending_is_idempotent():
    monthly = buckets(120.0, 80.0, 100.0)

    first = predict_next_month_spending(monthly)
    second = predict_next_month_spending(monthly)

    assert first == second
    assert monthly == buckets(120.0, 80.0, 100.0)
