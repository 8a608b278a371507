"""Rule-based financial insights and recommendations.

Rules read recent transactions, bills, investments, goals and bank accounts
and emit achievements, warnings and suggestions. No text generation is
involved: every message is a fixed template filled with computed figures.
"""

import re
from collections.abc import Sequence
from datetime import date
from decimal import ROUND_HALF_UP, Decimal

from src.domain.models import (
    BankAccountRecord,
    BillRecord,
    FinancialGoalRecord,
    Insight,
    InsightsReport,
    InvestmentRecord,
    Recommendation,
    TransactionRecord,
)
from src.domain.services.finance import overdue_bills
from src.utils.decimal_utils import coerce_decimal, first_nonzero

ZERO = Decimal("0")
HUNDRED = Decimal("100")

INSIGHT_TRANSACTION_WINDOW = 50
RECOMMENDATION_TRANSACTION_WINDOW = 100
RECENT_TRANSACTIONS = 10
HIGH_AVERAGE_EXPENSE = Decimal("200")
DOMINANT_CATEGORY_SHARE = Decimal("0.4")
SIGNIFICANT_CATEGORY_AMOUNT = Decimal("500")
SIGNIFICANT_CATEGORY_PERCENT = Decimal("25")
HIGH_PRIORITY_CATEGORY_PERCENT = Decimal("40")
HIGH_VALUE_BILL = Decimal("200")
EMERGENCY_FUND_THRESHOLD = Decimal("5000")
EMERGENCY_FUND_CAP = Decimal("15000")
DIVERSIFY_THRESHOLD = Decimal("10000")

SUBSCRIPTION_KEYWORDS = (
    "netflix",
    "spotify",
    "amazon",
    "prime",
    "assinatura",
    "streaming",
    "youtube",
    "google",
    "microsoft",
)
EMERGENCY_KEYWORDS = ("emergência", "emergencia", "emergency")

BASE_SCORE = 75
ACHIEVEMENT_POINTS = 5
MAX_RECOMMENDATION_POINTS = 10
APPLIED_RECOMMENDATION_POINTS = 8


def _round_whole(value: Decimal) -> Decimal:
    return value.quantize(Decimal("1"), rounding=ROUND_HALF_UP)


def _expenses(transactions: Sequence[TransactionRecord]) -> list[TransactionRecord]:
    return [item for item in transactions if item.type == "expense"]


def _totals_by_category(
    transactions: Sequence[TransactionRecord],
) -> list[tuple[str, Decimal]]:
    totals: dict[str, Decimal] = {}
    for item in transactions:
        label = item.category or ""
        totals[label] = totals.get(label, ZERO) + coerce_decimal(item.amount)
    return sorted(totals.items(), key=lambda entry: entry[1], reverse=True)


def _invested_total(investments: Sequence[InvestmentRecord]) -> Decimal:
    return sum(
        (first_nonzero(item.current_value, item.amount) for item in investments),
        ZERO,
    )


def _investment_types(investments: Sequence[InvestmentRecord]) -> list[str]:
    types: list[str] = []
    for item in investments:
        label = item.type or ""
        if label not in types:
            types.append(label)
    return types


def _goal_progress(goal: FinancialGoalRecord) -> Decimal | None:
    target = coerce_decimal(goal.target_amount)
    if target <= 0:
        return None
    return coerce_decimal(goal.current_amount) / target * HUNDRED


def _is_subscription(item: TransactionRecord) -> bool:
    description = (item.description or "").lower()
    category = (item.category or "").lower()
    if "assinatura" in category or "streaming" in category:
        return True
    return any(keyword in description for keyword in SUBSCRIPTION_KEYWORDS)


def _has_emergency_goal(goals: Sequence[FinancialGoalRecord]) -> bool:
    for goal in goals:
        text = f"{goal.name or ''} {goal.description or ''}".lower()
        if any(keyword in text for keyword in EMERGENCY_KEYWORDS):
            return True
    return False


def _slug(label: str) -> str:
    return re.sub(r"\s+", "_", label.lower())


def _transaction_insights(
    transactions: Sequence[TransactionRecord],
) -> list[Insight]:
    if len(transactions) < 5:
        return []
    insights = []
    recent = list(transactions[:RECENT_TRANSACTIONS])
    incomes = [item for item in recent if item.type == "income"]
    expenses = _expenses(recent)

    if incomes:
        insights.append(
            Insight(
                key="achievement-income",
                type="achievement",
                title="Income recorded",
                description=(
                    f"You recorded {len(incomes)} income transaction(s) "
                    "recently. Tracking what comes in is the base of a "
                    "healthy budget."
                ),
                impact="medium",
                action_path="transactions",
                action_label="View transactions",
            )
        )

    if len(expenses) < 5:
        return insights

    total = sum((coerce_decimal(item.amount) for item in expenses), ZERO)
    average = total / len(expenses)
    if average > HIGH_AVERAGE_EXPENSE:
        insights.append(
            Insight(
                key="warning-high-expenses",
                type="warning",
                title="High spending detected",
                description=(
                    f"Your last {len(expenses)} expenses add up to "
                    f"{total:.2f}, averaging {average:.2f} per transaction."
                ),
                impact="medium",
                action_path="transactions",
                action_label="Review expenses",
            )
        )

    category, amount = _totals_by_category(expenses)[0]
    if amount > total * DOMINANT_CATEGORY_SHARE:
        insights.append(
            Insight(
                key="suggestion-category",
                type="suggestion",
                title=f"{category} dominates your spending",
                description=(
                    f"{category} accounts for {amount:.2f} of your recent "
                    "expenses. Consider ways to cut it down."
                ),
                impact="high",
                action_path="budget",
                action_label="Create budget",
                potential_savings=_round_whole(amount * Decimal("0.15")),
            )
        )
    return insights


def _bill_insights(bills: Sequence[BillRecord], today: date) -> list[Insight]:
    active = [bill for bill in bills if bill.is_active]
    overdue = overdue_bills(active, today)
    if overdue:
        return [
            Insight(
                key="warning-overdue-bills",
                type="warning",
                title=f"{len(overdue)} overdue bill(s)",
                description=(
                    "Some bills are past due and may accrue interest and "
                    "fees. Pay them as soon as possible."
                ),
                impact="high",
                action_path="bills",
                action_label="Pay bills",
            )
        ]
    if not active:
        return []
    total = sum((coerce_decimal(bill.amount) for bill in active), ZERO)
    return [
        Insight(
            key="achievement-bills-organized",
            type="achievement",
            title="Bills organized",
            description=(
                f"You have {len(active)} bill(s) registered and up to date, "
                f"totalling {total:.2f}."
            ),
            impact="medium",
            action_path="bills",
            action_label="View bills",
        )
    ]


def _investment_insights(investments: Sequence[InvestmentRecord]) -> list[Insight]:
    if not investments:
        return []
    total = _invested_total(investments)
    insights = [
        Insight(
            key="achievement-investor",
            type="achievement",
            title="You are an investor",
            description=(
                f"You hold {total:.2f} across {len(investments)} "
                "investment(s). Keep building your wealth."
            ),
            impact="high",
            action_path="investments",
            action_label="View investments",
        )
    ]
    types = _investment_types(investments)
    if len(types) == 1 and total > EMERGENCY_FUND_THRESHOLD:
        insights.append(
            Insight(
                key="suggestion-diversify",
                type="suggestion",
                title="Consider diversifying your investments",
                description=(
                    f"Your investments are concentrated in {types[0]}. "
                    "Diversifying can reduce risk."
                ),
                impact="medium",
                action_path="investments",
                action_label="Diversify",
            )
        )
    return insights


def _goal_insights(
    goals: Sequence[FinancialGoalRecord],
    transactions: Sequence[TransactionRecord],
) -> list[Insight]:
    if not goals:
        if len(transactions) < 10:
            return []
        return [
            Insight(
                key="suggestion-create-goal",
                type="suggestion",
                title="Set a financial goal",
                description=(
                    "You have regular financial activity. A clear goal "
                    "helps keep the discipline."
                ),
                impact="high",
                action_path="financial-goals",
                action_label="Create goal",
            )
        ]

    insights = []
    for goal in goals:
        if goal.status != "active":
            continue
        progress = _goal_progress(goal)
        if progress is None:
            continue
        if progress >= 100:
            insights.append(
                Insight(
                    key=f"achievement-goal-{goal.id}",
                    type="achievement",
                    title=f"Goal reached: {goal.name}",
                    description=f'You reached 100% of "{goal.name}".',
                    impact="high",
                    action_path="financial-goals",
                    action_label="View goals",
                )
            )
        elif progress >= 75:
            remaining = coerce_decimal(goal.target_amount) - coerce_decimal(
                goal.current_amount
            )
            insights.append(
                Insight(
                    key=f"achievement-goal-progress-{goal.id}",
                    type="achievement",
                    title=f'Almost there: "{goal.name}" - {_round_whole(progress)}%',
                    description=f"Only {remaining:.2f} left to reach it.",
                    impact="medium",
                    action_path="financial-goals",
                    action_label="View progress",
                )
            )
    return insights


def generate_insights(
    *,
    transactions: Sequence[TransactionRecord] = (),
    bills: Sequence[BillRecord] = (),
    investments: Sequence[InvestmentRecord] = (),
    goals: Sequence[FinancialGoalRecord] = (),
    today: date,
) -> list[Insight]:
    """Generate insights from the household data.

    Args:
        transactions: Transactions, most recent first.
        bills: Bill reminders.
        investments: Investment positions.
        goals: Savings goals.
        today: Reference date for overdue detection.

    Returns:
        list[Insight]: Feature insight first, then data-driven insights.
    """
    insights = [
        Insight(
            key="feature-recommendations",
            type="feature",
            title="Automatic recommendations",
            description=(
                "Recommendations are generated from your own financial "
                "behaviour to help you save more."
            ),
            impact="high",
            action_path="insights",
            action_label="View recommendations",
        )
    ]
    insights.extend(_transaction_insights(transactions))
    insights.extend(_bill_insights(bills, today))
    insights.extend(_investment_insights(investments))
    insights.extend(_goal_insights(goals, transactions))

    if len(transactions) < 5 and not bills and not investments:
        insights.append(
            Insight(
                key="feature-getting-started",
                type="feature",
                title="Start your financial journey",
                description=(
                    "Add your first transactions, bills and investments to "
                    "get personalised insights."
                ),
                impact="high",
                action_path="transactions",
                action_label="Add transaction",
            )
        )
    return insights


def _spending_recommendations(
    transactions: Sequence[TransactionRecord],
) -> list[Recommendation]:
    expenses = _expenses(transactions)
    total = sum((coerce_decimal(item.amount) for item in expenses), ZERO)
    recommendations = []
    significant = [
        entry
        for entry in _totals_by_category(expenses)
        if entry[1] > SIGNIFICANT_CATEGORY_AMOUNT
    ]
    for category, amount in significant[:2]:
        percentage = amount / total * HUNDRED if total else ZERO
        if percentage <= SIGNIFICANT_CATEGORY_PERCENT:
            continue
        savings = _round_whole(amount * Decimal("0.15"))
        recommendations.append(
            Recommendation(
                type=f"reduce_{_slug(category)}",
                title=f"Cut spending on {category}",
                description=(
                    f"You spent {amount:.2f} on {category.lower()} "
                    f"({_round_whole(percentage)}% of the total). A 15% cut "
                    f"saves {savings:.2f} per month."
                ),
                potential_savings=savings,
                priority=(
                    "high"
                    if percentage > HIGH_PRIORITY_CATEGORY_PERCENT
                    else "medium"
                ),
                difficulty="medium",
                category="expense_optimization",
                action_data={
                    "category": category,
                    "current_amount": amount,
                    "suggested_limit": amount * Decimal("0.85"),
                    "percentage_of_total": percentage,
                },
            )
        )

    subscriptions = [item for item in expenses if _is_subscription(item)]
    if len(subscriptions) >= 3:
        subscription_total = sum(
            (coerce_decimal(item.amount) for item in subscriptions),
            ZERO,
        )
        savings = _round_whole(subscription_total * Decimal("0.3"))
        recommendations.append(
            Recommendation(
                type="optimize_subscriptions",
                title="Review your subscriptions",
                description=(
                    f"{len(subscriptions)} subscriptions found, totalling "
                    f"{subscription_total:.2f}. Cancelling the least used "
                    f"ones could save up to {savings:.2f}."
                ),
                potential_savings=savings,
                priority="high",
                difficulty="easy",
                category="subscription_management",
                action_data={
                    "subscription_count": len(subscriptions),
                    "total_amount": subscription_total,
                    "detected_services": [
                        item.description for item in subscriptions[:5]
                    ],
                },
            )
        )
    return recommendations


def _bill_recommendations(bills: Sequence[BillRecord]) -> list[Recommendation]:
    high_value = [
        bill
        for bill in bills
        if bill.is_active and coerce_decimal(bill.amount) > HIGH_VALUE_BILL
    ]
    if len(high_value) < 2:
        return []
    total = sum((coerce_decimal(bill.amount) for bill in high_value), ZERO)
    savings = _round_whole(total * Decimal("0.1"))
    names = [bill.name for bill in high_value]
    return [
        Recommendation(
            type="negotiate_bills",
            title="Negotiate your fixed bills",
            description=(
                f"{len(high_value)} high-value bills ({', '.join(names)}) "
                f"total {total:.2f}. Negotiating could save {savings:.2f} "
                "per month."
            ),
            potential_savings=savings,
            priority="medium",
            difficulty="medium",
            category="bill_optimization",
            action_data={
                "high_value_bills": len(high_value),
                "total_amount": total,
                "bill_names": names,
            },
        )
    ]


def _investment_recommendations(
    investments: Sequence[InvestmentRecord],
    goals: Sequence[FinancialGoalRecord],
) -> list[Recommendation]:
    if not investments:
        return []
    total = _invested_total(investments)
    types = _investment_types(investments)
    recommendations = []

    if total > EMERGENCY_FUND_THRESHOLD and not _has_emergency_goal(goals):
        reserve = min(total * Decimal("0.2"), EMERGENCY_FUND_CAP)
        recommendations.append(
            Recommendation(
                type="emergency_fund",
                title="Build an emergency fund",
                description=(
                    f"With {total:.2f} invested, keep an emergency reserve "
                    f"of {reserve:.2f} in a liquid account."
                ),
                potential_savings=_round_whole(reserve * Decimal("0.05")),
                priority="high",
                difficulty="medium",
                category="investment_optimization",
                action_data={
                    "recommended_amount": reserve,
                    "current_invested": total,
                    "current_types": types,
                },
            )
        )

    if len(types) < 3 and total > DIVERSIFY_THRESHOLD:
        recommendations.append(
            Recommendation(
                type="diversify_portfolio",
                title="Diversify your portfolio",
                description=(
                    f"Your {total:.2f} are concentrated in {len(types)} "
                    f"type(s): {', '.join(types)}."
                ),
                potential_savings=_round_whole(total * Decimal("0.02")),
                priority="medium",
                difficulty="hard",
                category="investment_optimization",
                action_data={
                    "current_types": len(types),
                    "total_invested": total,
                    "current_type_names": types,
                },
            )
        )
    return recommendations


def generate_recommendations(
    *,
    transactions: Sequence[TransactionRecord] = (),
    bills: Sequence[BillRecord] = (),
    investments: Sequence[InvestmentRecord] = (),
    goals: Sequence[FinancialGoalRecord] = (),
    bank_accounts: Sequence[BankAccountRecord] = (),
) -> list[Recommendation]:
    """Generate personalised recommendations.

    Nothing is recommended until there are at least five transactions, two
    bills or one investment.

    Args:
        transactions: Transactions, most recent first.
        bills: Bill reminders.
        investments: Investment positions.
        goals: Savings goals.
        bank_accounts: Bank accounts.

    Returns:
        list[Recommendation]: Recommendations in rule order.
    """
    if len(transactions) < 5 and len(bills) < 2 and not investments:
        return []

    recommendations = []
    if len(transactions) >= 10:
        recommendations.extend(_spending_recommendations(transactions))
    if len(bills) >= 2:
        recommendations.extend(_bill_recommendations(bills))
    recommendations.extend(_investment_recommendations(investments, goals))

    if not goals and (len(transactions) > 10 or investments):
        income = sum(
            (
                coerce_decimal(item.amount)
                for item in transactions
                if item.type == "income"
            ),
            ZERO,
        )
        recommendations.append(
            Recommendation(
                type="create_financial_goal",
                title="Set a financial goal",
                description=(
                    "You are financially active but have no goal yet. Clear "
                    "objectives improve discipline."
                ),
                potential_savings=Decimal("300"),
                priority="high",
                difficulty="easy",
                category="goal_setting",
                action_data={
                    "has_investments": bool(investments),
                    "has_transactions": len(transactions) > 10,
                    "suggested_goal_amount": _round_whole(
                        (income or Decimal("5000")) * Decimal("0.1")
                    ),
                },
            )
        )

    if len(bank_accounts) > 1 or len(transactions) > 20:
        recommendations.append(
            Recommendation(
                type="optimize_cash_flow",
                title="Streamline your cash flow",
                description=(
                    f"With {len(bank_accounts)} account(s) and "
                    f"{len(transactions)} transactions, automating transfers "
                    "and alerts simplifies your routine."
                ),
                potential_savings=Decimal("150"),
                priority="low",
                difficulty="easy",
                category="cash_flow",
                action_data={
                    "account_count": len(bank_accounts),
                    "transaction_count": len(transactions),
                },
            )
        )
    return recommendations


def compute_insights_score(
    insights: Sequence[Insight],
    recommendations: Sequence[Recommendation],
) -> int:
    """Return a 0-100 score rewarding achievements and applied advice."""
    achievements = sum(1 for item in insights if item.type == "achievement")
    applied = sum(1 for item in recommendations if item.is_applied)
    score = (
        BASE_SCORE
        + achievements * ACHIEVEMENT_POINTS
        + min(len(recommendations), MAX_RECOMMENDATION_POINTS)
        + applied * APPLIED_RECOMMENDATION_POINTS
    )
    return max(0, min(100, score))


def build_insights_report(
    *,
    transactions: Sequence[TransactionRecord] = (),
    bills: Sequence[BillRecord] = (),
    investments: Sequence[InvestmentRecord] = (),
    goals: Sequence[FinancialGoalRecord] = (),
    bank_accounts: Sequence[BankAccountRecord] = (),
    today: date,
) -> InsightsReport:
    """Run every rule and bundle insights, recommendations and score."""
    insights = generate_insights(
        transactions=transactions[:INSIGHT_TRANSACTION_WINDOW],
        bills=bills,
        investments=investments,
        goals=goals,
        today=today,
    )
    recommendations = generate_recommendations(
        transactions=transactions[:RECOMMENDATION_TRANSACTION_WINDOW],
        bills=bills,
        investments=investments,
        goals=goals,
        bank_accounts=bank_accounts,
    )
    return InsightsReport(
        insights=insights,
        recommendations=recommendations,
        score=compute_insights_score(insights, recommendations),
    )


__all__ = [
    "INSIGHT_TRANSACTION_WINDOW",
    "RECOMMENDATION_TRANSACTION_WINDOW",
    "generate_insights",
    "generate_recommendations",
    "compute_insights_score",
    "build_insights_report",
]
