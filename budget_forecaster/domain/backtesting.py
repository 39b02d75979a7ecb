"""Rolling backtest of the moving-average forecast"""

from typing import Dict, List
from budget_forecaster.domain.models import MonthBucket, AccuracyRecord, AccuracyReport
from budget_forecaster.domain.prediction import MIN_HISTORY_MONTHS
from budget_forecaster.utils.number_utils import round_half_up


def calculate_accuracy(predicted: float, actual: float) -> float:
    """
    Percentage accuracy of a forecast, clamped to 0-100.

    accuracy = (1 - |predicted - actual| / actual) * 100. A month with zero
    actual spending scores 0 whatever was predicted.
    """
    if actual == 0:
        return 0.0
    accuracy = (1 - abs(predicted - actual) / actual) * 100
    return min(100.0, max(0.0, accuracy))


def backtest_moving_average(
    monthly: Dict[str, MonthBucket],
    window: int = MIN_HISTORY_MONTHS,
) -> AccuracyReport:
    """
    Replay the moving-average forecast over history.

    Every month after the first `window` is predicted from the `window`
    months before it. The average is taken over unrounded accuracies of all
    records; it is 0 when the history is too short to produce any.
    """
    months = sorted(monthly)
    records: List[AccuracyRecord] = []
    total_accuracy = 0.0

    for i in range(window, len(months)):
        preceding = months[i - window:i]
        predicted = sum(monthly[m].expenses for m in preceding) / window
        actual = monthly[months[i]].expenses

        accuracy = calculate_accuracy(predicted, actual)
        records.append(
            AccuracyRecord(
                month=months[i],
                predicted=round_half_up(predicted),
                actual=round_half_up(actual),
                accuracy=round_half_up(accuracy),
            )
        )
        total_accuracy += accuracy

    average = total_accuracy / len(records) if records else 0.0

    return AccuracyReport(
        records=records,
        average_accuracy=average,
        total_predictions=len(records),
    )
