"""Next-month spending prediction - moving average and linear trend strategies"""

from enum import Enum
from statistics import mean, pstdev
from typing import Callable, Dict, List, Optional, Sequence, Tuple
from budget_forecaster.domain.models import MonthBucket, PredictionResult
from budget_forecaster.domain.aggregation import monthly_expense_series
from budget_forecaster.utils.number_utils import round_half_up

MIN_HISTORY_MONTHS = 3


class PredictionStrategy(str, Enum):
    """Selectable forecasting methods"""

    MOVING_AVERAGE = "moving_average"
    LINEAR_REGRESSION = "linear_regression"


def calculate_confidence(values: Sequence[float]) -> float:
    """
    Inverse coefficient of variation as a 0-100 score.

    confidence = clamp(0, 100, (1 - stdev/mean) * 100), using the population
    standard deviation. A zero mean (or fewer than 2 values) scores 0.
    """
    if len(values) < 2:
        return 0.0

    avg = mean(values)
    if avg == 0:
        return 0.0

    coefficient_of_variation = pstdev(values) / avg
    return max(0.0, min(100.0, (1 - coefficient_of_variation) * 100))


def predict_moving_average(
    monthly: Dict[str, MonthBucket],
    window: int = MIN_HISTORY_MONTHS,
) -> Optional[PredictionResult]:
    """
    Average expenses of the most recent `window` months.

    Returns None when fewer than `window` months have data.
    """
    if len(monthly) < window:
        return None

    recent_months = sorted(monthly)[-window:]
    recent_expenses = [monthly[m].expenses for m in recent_months]

    return PredictionResult(
        prediction=sum(recent_expenses) / window,
        confidence=calculate_confidence(recent_expenses),
        strategy=PredictionStrategy.MOVING_AVERAGE.value,
    )


def fit_linear_trend(amounts: Sequence[float]) -> Optional[Tuple[float, float]]:
    """
    Ordinary least squares fit of y = slope * x + intercept over x = 0..n-1.

    Returns (slope, intercept), or None when the fit is degenerate
    (n * sum(x^2) - sum(x)^2 == 0, i.e. fewer than 2 points).
    """
    n = len(amounts)
    x_values = range(n)

    sum_x = sum(x_values)
    sum_y = sum(amounts)
    sum_xy = sum(x * y for x, y in zip(x_values, amounts))
    sum_xx = sum(x * x for x in x_values)

    denominator = n * sum_xx - sum_x * sum_x
    if denominator == 0:
        return None

    slope = (n * sum_xy - sum_x * sum_y) / denominator
    intercept = (sum_y - slope * sum_x) / n
    return slope, intercept


def linear_regression_forecast(amounts: Sequence[float]) -> float:
    """Trend value at x = n, floored at 0 and rounded to cents. Degenerate fits give 0."""
    fit = fit_linear_trend(amounts)
    if fit is None:
        return 0.0

    slope, intercept = fit
    next_prediction = slope * len(amounts) + intercept
    return max(0.0, round_half_up(next_prediction))


def predict_linear_regression(
    monthly: Dict[str, MonthBucket],
    min_months: int = MIN_HISTORY_MONTHS,
) -> Optional[PredictionResult]:
    """Extrapolate the monthly expense trend one month ahead"""
    if len(monthly) < min_months:
        return None

    series: List[float] = monthly_expense_series(monthly)
    return PredictionResult(
        prediction=linear_regression_forecast(series),
        confidence=None,
        strategy=PredictionStrategy.LINEAR_REGRESSION.value,
    )


_STRATEGIES: Dict[PredictionStrategy, Callable[..., Optional[PredictionResult]]] = {
    PredictionStrategy.MOVING_AVERAGE: predict_moving_average,
    PredictionStrategy.LINEAR_REGRESSION: predict_linear_regression,
}


def predict_next_month_spending(
    monthly: Dict[str, MonthBucket],
    strategy: PredictionStrategy | str = PredictionStrategy.MOVING_AVERAGE,
    window: int = MIN_HISTORY_MONTHS,
) -> Optional[PredictionResult]:
    """
    Main entry point: forecast next month's expenses with the chosen strategy.

    Returns None when there is not enough history for a forecast.
    """
    return _STRATEGIES[PredictionStrategy(strategy)](monthly, window)
