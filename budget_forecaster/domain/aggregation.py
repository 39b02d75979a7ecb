"""Monthly aggregation of transactions into income/expense buckets"""

from typing import Dict, Iterable
from budget_forecaster.domain.models import Transaction, MonthBucket
from budget_forecaster.utils.date_utils import month_key


def aggregate_by_month(transactions: Iterable[Transaction]) -> Dict[str, MonthBucket]:
    """
    Group transactions into calendar-month buckets.

    Expenses add to `expenses`, anything else to `income`. Months without
    transactions get no bucket. Result is ordered by ascending month key.
    """
    buckets: Dict[str, MonthBucket] = {}
    for txn in transactions:
        key = month_key(txn.date)
        bucket = buckets.setdefault(key, MonthBucket())
        if txn.type == "expense":
            bucket.expenses += txn.amount
        else:
            bucket.income += txn.amount

    return {key: buckets[key] for key in sorted(buckets)}


def monthly_expense_series(monthly: Dict[str, MonthBucket]) -> list[float]:
    """Expense totals in chronological order"""
    return [monthly[key].expenses for key in sorted(monthly)]
