"""Prompt templates for the Gemini-backed insight operations."""

from typing import Any, Dict, List, Optional

from analytics.models import CategorySummary
from shared import config
from shared.validators import VALID_CATEGORIES


def _money(amount: float) -> str:
    return f"{config.CURRENCY_SYMBOL}{amount:,.2f}"


def categorization_prompt(
    title: str,
    description: Optional[str] = None,
    amount: Optional[float] = None
) -> str:
    lines = [
        "Analyze this expense and categorize it into one of these categories:",
        f"Categories: {', '.join(VALID_CATEGORIES)}",
        "",
        "Expense Details:",
        f'- Title: "{title}"',
        f'- Description: "{description or ""}"',
    ]
    if amount is not None:
        lines.append(f"- Amount: {_money(amount)}")

    lines.extend([
        "",
        "Please respond in this exact JSON format:",
        "{",
        '  "category": "exact category name from the list above",',
        '  "confidence": 0.95,',
        '  "reasoning": "brief explanation for the categorization"',
        "}",
        "",
        "Be very specific with the category name. Only use categories from the provided list.",
    ])
    return "\n".join(lines)


def monthly_summary_prompt(
    summary: List[CategorySummary],
    month_label: str,
    total_amount: float,
    total_transactions: int
) -> str:
    breakdown = "\n".join(
        f"- {row.category}: {_money(row.total_amount)} "
        f"({row.count} transactions, avg {_money(row.avg_amount)})"
        for row in summary
    )

    return f"""Analyze this monthly expense data and provide insights:

Month: {month_label}
Total Amount: {_money(total_amount)}
Total Transactions: {total_transactions}

Category-wise breakdown:
{breakdown}

Please provide a JSON response with these insights:
{{
  "summary": "Brief overview of spending patterns",
  "topCategories": ["category1", "category2", "category3"],
  "insights": [
    "insight 1 about spending patterns",
    "insight 2 about potential savings",
    "insight 3 about financial habits"
  ],
  "budgetingTips": [
    "tip 1 for better budgeting",
    "tip 2 for savings",
    "tip 3 for financial management"
  ],
  "alerts": [
    "alert about high spending in specific categories if any"
  ],
  "overallRating": "Excellent/Good/Average/Poor"
}}

Focus on actionable insights and be specific about amounts and categories."""


def budgeting_tips_prompt(
    top_categories: List[CategorySummary],
    profile: Optional[Dict[str, Any]] = None
) -> str:
    profile = profile or {}
    categories = "\n".join(
        f"- {row.category}: {_money(row.total_amount)}" for row in top_categories
    )
    income = profile.get('income')
    savings_goal = profile.get('savings_goal')

    income_line = f"Monthly Income: {_money(income)}" if income else "Income not specified"
    goal_line = f"Savings Goal: {_money(savings_goal)}" if savings_goal else "No savings goal"

    return f"""Provide personalized budgeting tips based on this spending pattern:

Top spending categories:
{categories}

User profile:
{income_line}
{goal_line}

Please provide practical budgeting tips in JSON format:
{{
  "tips": ["tip 1", "tip 2", "tip 3"],
  "savingsOpportunities": ["opportunity 1", "opportunity 2"],
  "budgetAllocation": {{
    "needs": "percentage for needs",
    "wants": "percentage for wants",
    "savings": "percentage for savings"
  }}
}}"""
