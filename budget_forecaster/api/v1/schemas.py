"""Pydantic schemas for API request/response validation"""

from datetime import datetime
from typing import Dict, List, Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from budget_forecaster.utils.date_utils import as_utc
from budget_forecaster.utils.text_utils import sanitize_text

TRANSACTION_TYPES = ("income", "expense")


class CamelModel(BaseModel):
    """Serialises snake_case fields as camelCase JSON keys"""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)


class TransactionCreate(BaseModel):
    """Request body for POST /api/transactions"""

    type: str = Field(..., description="income or expense")
    amount: float = Field(..., gt=0, allow_inf_nan=False, description="Positive amount")
    category: str = Field(..., min_length=1, description="Spending or income category")
    description: Optional[str] = None
    date: Optional[datetime] = Field(None, description="Defaults to now")

    @field_validator("type", "category", mode="before")
    @classmethod
    def normalise_label(cls, value):
        if isinstance(value, str):
            return sanitize_text(value).lower()
        return value

    @field_validator("description", mode="before")
    @classmethod
    def clean_description(cls, value):
        if isinstance(value, str):
            return sanitize_text(value)
        return value

    @field_validator("type")
    @classmethod
    def check_type(cls, value: str) -> str:
        if value not in TRANSACTION_TYPES:
            raise ValueError('Type must be "income" or "expense"')
        return value

    @field_validator("date")
    @classmethod
    def normalise_date(cls, value: Optional[datetime]) -> Optional[datetime]:
        return as_utc(value) if value else value


class TransactionResponse(CamelModel):
    """Stored transaction"""

    id: int
    type: str
    amount: float
    category: str
    description: Optional[str] = None
    date: datetime


class BudgetCreate(BaseModel):
    """Request body for POST /api/budgets"""

    category: str = Field(..., min_length=1)
    amount: float = Field(..., gt=0, allow_inf_nan=False)
    type: str = "expense"

    @field_validator("category", "type", mode="before")
    @classmethod
    def normalise_label(cls, value):
        if isinstance(value, str):
            return sanitize_text(value).lower()
        return value


class BudgetResponse(CamelModel):
    """Stored budget"""

    id: int
    category: str
    amount: float
    type: str


class PredictionSchema(CamelModel):
    """Next-month spending forecast"""

    prediction: float
    confidence: Optional[float] = None


class RecommendationSchema(CamelModel):
    """Single budget recommendation"""

    category: str
    message: str
    priority: str


class MonthBucketSchema(CamelModel):
    """Income/expense totals for one month"""

    income: float
    expenses: float


class AnalysisResponse(CamelModel):
    """Response for GET /api/analysis"""

    prediction: Optional[PredictionSchema] = None
    recommendations: List[RecommendationSchema]
    monthly_trends: Dict[str, MonthBucketSchema]


class AccuracyRecordSchema(CamelModel):
    """Backtested forecast for one month"""

    month: str
    predicted: float
    actual: float
    accuracy: float


class AccuracyResponse(CamelModel):
    """Response for GET /api/accuracy"""

    predictions: List[AccuracyRecordSchema]
    average_accuracy: int
    total_predictions: int


class SurplusResponse(CamelModel):
    """Response for GET /api/recommendations/surplus"""

    month: str
    type: str
    message: str
    surplus: float
    category: Optional[str] = None


class DatabaseHealth(CamelModel):
    connected: bool
    collections: int


class SystemInfo(CamelModel):
    uptime: float


class SystemHealthResponse(CamelModel):
    """Response for GET /api/system/health"""

    status: str
    timestamp: datetime
    database: DatabaseHealth
    system: SystemInfo
