"""Insight data models: AI response shapes and the payloads built from them."""

from typing import Any, List, Optional
from datetime import datetime

from pydantic import Field, field_validator

from analytics.models import TrendPoint
from shared import config
from shared.models import CamelModel
from shared.validators import validate_category

RATINGS = ('Excellent', 'Good', 'Average', 'Poor', 'High')


class AICategorization(CamelModel):
    """Categorization object the model is asked to return."""

    category: str
    confidence: float = config.DEFAULT_AI_CONFIDENCE
    reasoning: str = 'AI categorization'

    @field_validator('category', mode='before')
    @classmethod
    def _category(cls, value):
        return validate_category(value)

    @field_validator('confidence', mode='before')
    @classmethod
    def _confidence(cls, value):
        if value is None:
            return config.DEFAULT_AI_CONFIDENCE
        # Clamp to [0, 1]
        return max(0.0, min(1.0, float(value)))

    @field_validator('reasoning', mode='before')
    @classmethod
    def _reasoning(cls, value):
        return value or 'AI categorization'


class CategorizationResult(CamelModel):
    """Outcome of categorizing one expense, from the AI or the keyword fallback."""

    category: str
    confidence: float
    reasoning: str
    success: bool
    source: str
    original_response: Optional[str] = None
    error: Optional[str] = None


class AIMonthlyInsights(CamelModel):
    """Monthly narrative object the model is asked to return."""

    summary: str
    top_categories: List[str] = Field(default_factory=list)
    insights: List[str] = Field(default_factory=list)
    budgeting_tips: List[str] = Field(default_factory=list)
    alerts: List[str] = Field(default_factory=list)
    overall_rating: str

    @field_validator('overall_rating', mode='before')
    @classmethod
    def _rating(cls, value):
        if value not in RATINGS:
            raise ValueError(f"Rating must be one of: {', '.join(RATINGS)}")
        return value


class MonthlyNarrative(AIMonthlyInsights):
    """Monthly narrative returned to the client."""

    generated_at: datetime
    success: bool
    source: str


class BudgetAllocation(CamelModel):
    """Suggested split of income, as percentages or ranges (e.g. "50-60%")."""

    needs: str
    wants: str
    savings: str

    @field_validator('needs', 'wants', 'savings', mode='before')
    @classmethod
    def _as_text(cls, value):
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return f"{value:g}%"
        return value


class AIBudgetingTips(CamelModel):
    """Budgeting tips object the model is asked to return."""

    tips: List[str] = Field(min_length=1)
    savings_opportunities: List[str] = Field(default_factory=list)
    budget_allocation: Optional[BudgetAllocation] = None


class BudgetingTips(AIBudgetingTips):
    """Budgeting tips returned to the client."""

    success: bool
    source: str


class BulkItemResult(CamelModel):
    """Categorization of one item of a bulk request, aligned by index."""

    index: int
    original_expense: Any = None
    categorization: CategorizationResult
    error: Optional[str] = None


class BulkCategorizationResult(CamelModel):
    processed: int
    results: List[BulkItemResult] = Field(default_factory=list)


class SpendingAnalytics(CamelModel):
    total_spending: float
    avg_monthly_spending: float
    last_month_spending: float


class SpendingInsights(CamelModel):
    """Rule-based observations over a spending trend."""

    period: Optional[str] = None
    trends: Optional[List[TrendPoint]] = None
    analytics: Optional[SpendingAnalytics] = None
    insights: List[str] = Field(default_factory=list)
    recommendations: List[str] = Field(default_factory=list)
