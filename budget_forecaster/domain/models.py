"""Domain models - pure Python dataclasses representing business entities"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional


@dataclass(frozen=True)
class Transaction:
    """Recorded income or expense"""

    type: str  # "income" or "expense"
    amount: float
    category: str
    date: datetime
    description: Optional[str] = None


@dataclass(frozen=True)
class Budget:
    """Spending limit for one category"""

    category: str
    amount: float
    type: str = "expense"


@dataclass
class MonthBucket:
    """Income and expense totals for one calendar month"""

    income: float = 0.0
    expenses: float = 0.0


@dataclass
class PredictionResult:
    """Next-month spending estimate"""

    prediction: float
    confidence: Optional[float]  # 0-100, None when the strategy has no confidence measure
    strategy: str


@dataclass
class Recommendation:
    """Advisory message emitted by budget compliance checks"""

    category: str
    message: str
    priority: str  # "high" or "medium"


@dataclass
class SurplusAdvice:
    """Outcome of comparing total spending against one monthly budget"""

    type: str  # "positive" or "warning"
    message: str
    surplus: float
    category: Optional[str] = None


@dataclass
class AccuracyRecord:
    """Backtested prediction for one month"""

    month: str
    predicted: float
    actual: float
    accuracy: float


@dataclass
class AccuracyReport:
    """Rolling backtest output"""

    records: List[AccuracyRecord] = field(default_factory=list)
    average_accuracy: float = 0.0
    total_predictions: int = 0

    def recent(self, count: int = 3) -> List[AccuracyRecord]:
        """Most recent records, oldest first"""
        if count <= 0:
            return []
        return self.records[-count:]
