"""Insight service: AI categorization, narratives and tips with deterministic fallback."""

import time
import logging
from typing import Any, Dict, List, Optional

from shared import config
from shared.dates import utc_now
from shared.exceptions import AIResponseParseError, AIServiceError, ValidationError
from shared.validators import DEFAULT_CATEGORY, validate_amount, validate_title
from analytics.aggregation import sum_totals
from analytics.models import CategorySummary, TrendPoint
from insights.fallback import (
    fallback_budgeting_tips,
    fallback_categorization,
    fallback_monthly_summary,
    starter_spending_insights,
    trend_observations
)
from insights.gemini_client import GeminiClient
from insights.models import (
    AIBudgetingTips,
    AICategorization,
    AIMonthlyInsights,
    BudgetingTips,
    BulkCategorizationResult,
    BulkItemResult,
    CategorizationResult,
    MonthlyNarrative,
    SpendingAnalytics,
    SpendingInsights
)
from insights.parser import parse_structured_response
from insights.prompts import (
    budgeting_tips_prompt,
    categorization_prompt,
    monthly_summary_prompt
)

logger = logging.getLogger(__name__)

TOP_CATEGORIES_FOR_TIPS = 5


class InsightService:
    """
    Augments expense data with Gemini output.

    Every AI-backed operation degrades to a deterministic result when the
    model is unreachable or answers with something that does not parse.
    """

    def __init__(self, ai_client: Optional[GeminiClient] = None, bulk_delay: Optional[float] = None):
        """
        Initialize insight service.

        Args:
            ai_client: Client used for generation (default: configured GeminiClient)
            bulk_delay: Seconds to wait between bulk items (default: BULK_CATEGORIZE_DELAY)
        """
        self.ai_client = ai_client or GeminiClient()
        self.bulk_delay = config.BULK_CATEGORIZE_DELAY if bulk_delay is None else bulk_delay

    def categorize_expense(
        self,
        title: Any,
        description: Optional[str] = None,
        amount: Any = None
    ) -> CategorizationResult:
        """
        Suggest a category for an expense.

        Args:
            title: Expense title (required)
            description: Optional description
            amount: Optional amount, included in the prompt

        Returns:
            AI result, or the keyword fallback when the AI fails

        Raises:
            ValidationError: If title is missing or amount is invalid
        """
        title = validate_title(title)
        if amount is not None:
            amount = float(validate_amount(amount))

        prompt = categorization_prompt(title, description, amount)

        try:
            text = self.ai_client.generate_text(prompt)
        except AIServiceError as e:
            logger.warning(f"Categorization falling back after AI error: {e.message}")
            return fallback_categorization(
                title,
                description,
                confidence=config.FALLBACK_ERROR_CONFIDENCE,
                reasoning='Fallback categorization due to AI service error',
                error=e.message
            )

        try:
            parsed = parse_structured_response(text, AICategorization)
        except AIResponseParseError as e:
            logger.warning(f"Categorization falling back after parse error: {e.message}")
            return fallback_categorization(
                title,
                description,
                confidence=config.FALLBACK_PARSE_CONFIDENCE,
                reasoning='Fallback categorization due to AI parsing error',
                original_response=text
            )

        return CategorizationResult(
            category=parsed.category,
            confidence=parsed.confidence,
            reasoning=parsed.reasoning,
            success=True,
            source='ai'
        )

    def generate_monthly_summary(
        self,
        summary: List[CategorySummary],
        month_label: str
    ) -> MonthlyNarrative:
        """
        Narrate a month's category summary.

        Args:
            summary: Category summaries ordered by descending total
            month_label: Human-readable month, e.g. "May 2024"

        Returns:
            AI narrative, or the arithmetic fallback
        """
        total_amount, total_transactions = sum_totals(summary)
        prompt = monthly_summary_prompt(summary, month_label, total_amount, total_transactions)

        try:
            text = self.ai_client.generate_text(prompt)
            parsed = parse_structured_response(text, AIMonthlyInsights)
        except (AIServiceError, AIResponseParseError) as e:
            logger.warning(f"Monthly summary falling back: {e.message}")
            return fallback_monthly_summary(summary, total_amount, total_transactions)

        return MonthlyNarrative(
            **parsed.model_dump(),
            generated_at=utc_now(),
            success=True,
            source='ai'
        )

    def get_budgeting_tips(
        self,
        summary: List[CategorySummary],
        profile: Optional[Dict[str, Any]] = None
    ) -> BudgetingTips:
        """
        Personalized budgeting tips from the top spending categories.

        Args:
            summary: Category summaries for the analysis window
            profile: Optional ``income`` and ``savings_goal``

        Returns:
            AI tips, or the static fallback
        """
        top = sorted(summary, key=lambda row: (-row.total_amount, row.category))
        prompt = budgeting_tips_prompt(top[:TOP_CATEGORIES_FOR_TIPS], profile)

        try:
            text = self.ai_client.generate_text(prompt)
            parsed = parse_structured_response(text, AIBudgetingTips)
        except (AIServiceError, AIResponseParseError) as e:
            logger.warning(f"Budgeting tips falling back: {e.message}")
            return fallback_budgeting_tips()

        return BudgetingTips(**parsed.model_dump(), success=True, source='ai')

    def bulk_categorize(self, expenses: Any) -> BulkCategorizationResult:
        """
        Categorize a batch of expenses one at a time.

        Items are processed sequentially with a fixed pause between them. A
        failing item yields an ``Other`` result carrying the error; the rest
        of the batch continues.

        Args:
            expenses: List of ``{title, description?, amount?}`` objects

        Returns:
            Results aligned with the input by index

        Raises:
            ValidationError: If the list is missing, empty or too long
        """
        if not isinstance(expenses, list) or not expenses:
            raise ValidationError("Expenses array is required")

        if len(expenses) > config.BULK_CATEGORIZE_MAX_ITEMS:
            raise ValidationError(
                f"At most {config.BULK_CATEGORIZE_MAX_ITEMS} expenses can be categorized at once"
            )

        results = []
        for index, expense in enumerate(expenses):
            try:
                if not isinstance(expense, dict):
                    raise ValidationError("Expense must be an object")

                categorization = self.categorize_expense(
                    expense.get('title'),
                    expense.get('description'),
                    expense.get('amount')
                )
                results.append(BulkItemResult(
                    index=index,
                    original_expense=expense,
                    categorization=categorization
                ))
            except Exception as e:
                logger.warning(f"Bulk item {index} failed: {str(e)}")
                results.append(BulkItemResult(
                    index=index,
                    original_expense=expense,
                    error=str(e),
                    categorization=CategorizationResult(
                        category=DEFAULT_CATEGORY,
                        confidence=config.BULK_FAILURE_CONFIDENCE,
                        reasoning='Failed to categorize due to error',
                        success=False,
                        source='fallback'
                    )
                ))

            if index < len(expenses) - 1 and self.bulk_delay:
                time.sleep(self.bulk_delay)

        return BulkCategorizationResult(processed=len(results), results=results)

    def spending_insights(self, trends: List[TrendPoint], period: int) -> SpendingInsights:
        """
        Rule-based observations over a monthly trend.

        Args:
            trends: Trend points, oldest first
            period: Window length in months

        Returns:
            Insights and recommendations, or a starter payload when there is no data
        """
        if not trends:
            return starter_spending_insights()

        total_spending = round(sum(point.total_amount for point in trends), 2)
        avg_monthly_spending = total_spending / len(trends)
        last_month_spending = trends[-1].total_amount

        insights, recommendations = trend_observations(avg_monthly_spending, last_month_spending)

        return SpendingInsights(
            period=f"{period} months",
            trends=trends,
            analytics=SpendingAnalytics(
                total_spending=total_spending,
                avg_monthly_spending=round(avg_monthly_spending, 2),
                last_month_spending=last_month_spending
            ),
            insights=insights,
            recommendations=recommendations
        )
