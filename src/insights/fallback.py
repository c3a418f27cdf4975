"""
Deterministic fallbacks used when the AI service is unavailable or its
response cannot be parsed.
"""

from typing import Any, Dict, List, Optional, Sequence, Tuple

from analytics.models import CategorySummary
from shared import config
from shared.dates import utc_now
from shared.validators import DEFAULT_CATEGORY
from insights.models import (
    BudgetAllocation,
    BudgetingTips,
    CategorizationResult,
    MonthlyNarrative,
    SpendingInsights
)

# Checked in order; the first category with a keyword hit wins.
CATEGORY_KEYWORDS = [
    ('Food & Dining', ['restaurant', 'food', 'dining', 'meal', 'lunch', 'dinner',
                       'breakfast', 'cafe', 'pizza', 'burger']),
    ('Transportation', ['fuel', 'gas', 'petrol', 'diesel', 'taxi', 'uber', 'ola',
                        'bus', 'train', 'metro', 'auto']),
    ('Groceries', ['grocery', 'vegetables', 'fruits', 'supermarket', 'market',
                   'provisions', 'milk', 'bread']),
    ('Shopping', ['shopping', 'clothes', 'clothing', 'shoes', 'accessories',
                  'electronics', 'gadget']),
    ('Bills & Utilities', ['electricity', 'water', 'internet', 'mobile', 'phone',
                           'wifi', 'bill', 'utility']),
    ('Healthcare', ['medicine', 'doctor', 'hospital', 'medical', 'pharmacy',
                    'health', 'clinic']),
    ('Entertainment', ['movie', 'game', 'entertainment', 'subscription', 'netflix',
                       'spotify', 'music']),
    ('Education', ['education', 'course', 'book', 'school', 'college', 'tuition',
                   'fees']),
    ('Travel', ['travel', 'trip', 'hotel', 'flight', 'vacation', 'tourism',
                'booking']),
    ('Personal Care', ['salon', 'haircut', 'spa', 'grooming', 'cosmetics',
                       'skincare']),
    ('Home & Garden', ['furniture', 'garden', 'plumber', 'hardware', 'decor',
                       'appliance']),
    ('Insurance', ['insurance', 'premium', 'policy']),
    ('Investments', ['investment', 'mutual fund', 'stocks', 'shares',
                     'fixed deposit', 'brokerage']),
    ('Gifts & Donations', ['gift', 'donation', 'charity']),
    ('Business', ['business', 'office', 'client', 'coworking', 'conference']),
]

DEFAULT_BUDGET_ALLOCATION = BudgetAllocation(needs="50-60%", wants="20-30%", savings="20%")


def keyword_category(title: str, description: Optional[str] = None) -> str:
    """Pick a category by keyword match on the lower-cased title and description."""
    text = f"{title or ''} {description or ''}".lower()

    for category, keywords in CATEGORY_KEYWORDS:
        if any(keyword in text for keyword in keywords):
            return category

    return DEFAULT_CATEGORY


def fallback_categorization(
    title: str,
    description: Optional[str],
    confidence: float,
    reasoning: str,
    original_response: Optional[str] = None,
    error: Optional[str] = None
) -> CategorizationResult:
    """Keyword categorization marked as a fallback result."""
    return CategorizationResult(
        category=keyword_category(title, description),
        confidence=confidence,
        reasoning=reasoning,
        success=False,
        source='fallback',
        original_response=original_response,
        error=error
    )


def _rating(total_amount: float) -> str:
    if total_amount < config.RATING_GOOD_THRESHOLD:
        return 'Good'
    if total_amount < config.RATING_AVERAGE_THRESHOLD:
        return 'Average'
    return 'High'


def fallback_monthly_summary(
    summary: Sequence[CategorySummary],
    total_amount: float,
    total_transactions: int
) -> MonthlyNarrative:
    """
    Arithmetic narrative for a month.

    Args:
        summary: Category summaries ordered by descending total
        total_amount: Sum of category totals
        total_transactions: Sum of category counts

    Returns:
        Narrative with ``success=False`` and ``source='fallback'``
    """
    symbol = config.CURRENCY_SYMBOL
    top_category = summary[0].category if summary else 'None'

    insights = [
        f"Your highest spending category was {top_category}",
        f"You made {total_transactions} transactions this month",
    ]
    if len(summary) > 1:
        insights.append(f"You spent across {len(summary)} different categories")
    else:
        insights.append("Consider diversifying your expense tracking")

    alerts = []
    if total_amount > config.HIGH_SPENDING_THRESHOLD:
        alerts.append(f"High spending detected: {symbol}{total_amount:,.2f}")

    return MonthlyNarrative(
        summary=f"You spent {symbol}{total_amount:,.2f} across {total_transactions} transactions this month.",
        top_categories=[row.category for row in summary[:3]],
        insights=insights,
        budgeting_tips=[
            "Review your spending patterns regularly",
            "Set monthly budgets for each category",
            "Look for areas where you can reduce expenses"
        ],
        alerts=alerts,
        overall_rating=_rating(total_amount),
        generated_at=utc_now(),
        success=False,
        source='fallback'
    )


def fallback_budgeting_tips() -> BudgetingTips:
    """Static tips used when the AI cannot produce them."""
    return BudgetingTips(
        tips=[
            "Track your expenses daily for better awareness",
            "Set spending limits for discretionary categories",
            "Review and optimize recurring expenses monthly"
        ],
        savings_opportunities=[
            "Reduce dining out expenses by cooking more at home",
            "Compare prices before making purchases"
        ],
        budget_allocation=DEFAULT_BUDGET_ALLOCATION,
        success=False,
        source='fallback'
    )


def starter_budgeting_tips() -> BudgetingTips:
    """Tips for a user with no expenses in the analysis window."""
    return BudgetingTips(
        tips=[
            "Start tracking your daily expenses",
            "Set monthly spending limits for different categories",
            "Review your expenses weekly"
        ],
        savings_opportunities=[
            "Begin with small savings goals",
            "Track your income and expenses"
        ],
        budget_allocation=DEFAULT_BUDGET_ALLOCATION,
        success=True,
        source='fallback'
    )


def no_data_summary() -> Dict[str, Any]:
    """Narrative payload for a month without expenses."""
    return {
        'summary': 'No expenses recorded for this month',
        'insights': ['Start tracking your expenses to get insights'],
        'budgetingTips': ['Begin by recording your daily expenses'],
        'overallRating': 'No Data'
    }


def starter_spending_insights() -> SpendingInsights:
    """Insights for a user without any trend data."""
    return SpendingInsights(
        insights=['Start tracking expenses to see spending trends'],
        recommendations=['Begin recording your daily expenses']
    )


def trend_observations(
    avg_monthly_spending: float,
    last_month_spending: float
) -> Tuple[List[str], List[str]]:
    """
    Rule-based insights and recommendations for a spending trend.

    Returns:
        (insights, recommendations)
    """
    insights = []
    recommendations = []

    if last_month_spending > avg_monthly_spending * 1.2:
        insights.append('Your spending increased significantly last month')
        recommendations.append('Review your recent expenses for any unusual purchases')
    elif last_month_spending < avg_monthly_spending * 0.8:
        insights.append('Your spending decreased compared to your average')
        recommendations.append('Great job on controlling expenses this month!')

    insights.append(
        f"Your average monthly spending is {config.CURRENCY_SYMBOL}{avg_monthly_spending:.2f}"
    )
    recommendations.append('Set monthly budgets based on your spending patterns')

    return insights, recommendations
