"""Budget recommendations - per-category compliance and surplus allocation modes"""

from datetime import datetime
from typing import Dict, List, Optional, Sequence
from budget_forecaster.domain.models import (
    Budget,
    MonthBucket,
    Recommendation,
    SurplusAdvice,
    Transaction,
)
from budget_forecaster.domain.aggregation import aggregate_by_month
from budget_forecaster.utils.date_utils import month_key, previous_month_key
from budget_forecaster.utils.number_utils import format_amount

SPENDING_INCREASE_THRESHOLD = 1.1
GENERAL_CATEGORY = "general"
GENERAL_MESSAGE = "Overall spending is higher than last month. Consider reducing expenses."


def recommend_budget_compliance(
    transactions: Sequence[Transaction],
    budgets: Sequence[Budget],
    now: datetime,
    monthly: Optional[Dict[str, MonthBucket]] = None,
    increase_threshold: float = SPENDING_INCREASE_THRESHOLD,
) -> List[Recommendation]:
    """
    Compare this month's spending with category budgets and with last month.

    Rules:
    - Category spend above its budget: high priority, one per budget, in
      budget order
    - Month total above `increase_threshold` x the previous month with data:
      one medium priority general recommendation, always last
    """
    if monthly is None:
        monthly = aggregate_by_month(transactions)

    current_month = month_key(now)
    recommendations: List[Recommendation] = []

    for budget in budgets:
        category_spending = sum(
            t.amount
            for t in transactions
            if t.category == budget.category
            and t.type == "expense"
            and month_key(t.date) == current_month
        )

        if category_spending > budget.amount:
            overspend = category_spending - budget.amount
            recommendations.append(
                Recommendation(
                    category=budget.category,
                    message=f"Reduce spending in {budget.category} by ${overspend:.2f}",
                    priority="high",
                )
            )

    current_bucket = monthly.get(current_month)
    current_spending = current_bucket.expenses if current_bucket else 0.0
    prev_month = previous_month_key(current_month, monthly)

    if prev_month and current_spending > monthly[prev_month].expenses * increase_threshold:
        recommendations.append(
            Recommendation(
                category=GENERAL_CATEGORY,
                message=GENERAL_MESSAGE,
                priority="medium",
            )
        )

    return recommendations


def find_top_expense_category(transactions: Sequence[Transaction]) -> Optional[str]:
    """Category with the highest total expense; ties go to the first one seen"""
    category_totals: Dict[str, float] = {}
    for txn in transactions:
        if txn.type == "expense":
            category_totals[txn.category] = category_totals.get(txn.category, 0.0) + txn.amount

    if not category_totals:
        return None

    # max() keeps the first of equal keys in insertion order
    return max(category_totals, key=category_totals.get)


def recommend_surplus_allocation(
    transactions: Sequence[Transaction],
    monthly_budget: float,
) -> SurplusAdvice:
    """
    Compare total spending against a single monthly budget.

    A surplus gets a 70/30 savings/emergency-fund split suggestion; an
    overspend names the largest expense category.
    """
    total_spent = sum(t.amount for t in transactions if t.type == "expense")
    surplus = monthly_budget - total_spent

    if surplus > 0:
        return SurplusAdvice(
            type="positive",
            message=(
                f"You have a surplus of ${format_amount(surplus)}. "
                "Recommend: 70% to savings, 30% to emergency fund."
            ),
            surplus=surplus,
        )

    top_category = find_top_expense_category(transactions)
    message = f"Over budget by ${format_amount(abs(surplus))}."
    if top_category:
        message += f" Consider reducing spending in {top_category}."

    return SurplusAdvice(
        type="warning",
        message=message,
        surplus=surplus,
        category=top_category,
    )
