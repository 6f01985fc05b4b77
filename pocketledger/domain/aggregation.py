"""Aggregation views over income/expense records - dashboard, trends, budgets"""

from collections import defaultdict
from datetime import date
from decimal import Decimal
from typing import Dict, List, Sequence, Union

from pocketledger.domain.exceptions import InvalidInputError
from pocketledger.domain.models import (
    Budget,
    BudgetProgress,
    CategoryTotal,
    DashboardSummary,
    MonthlySummary,
    TransactionRecord,
    TrendPoint,
)
from pocketledger.utils.date_utils import month_bounds, trailing_months
from pocketledger.utils.money import round_percentage

# Budget status thresholds, percent of budget spent
WARNING_THRESHOLD = 80
OVER_THRESHOLD = 100


def _in_month(transactions: Sequence[TransactionRecord], year: int, month: int) -> List[TransactionRecord]:
    if not 1 <= month <= 12:
        raise InvalidInputError(f"Month must be between 1 and 12, got {month}")
    start, end = month_bounds(year, month)
    return [t for t in transactions if start <= t.date < end]


def _total(transactions: Sequence[TransactionRecord], txn_type: str) -> int:
    return sum(t.amount_cents for t in transactions if t.type == txn_type)


def monthly_summary(transactions: Sequence[TransactionRecord], year: int, month: int) -> MonthlySummary:
    """Income and expenses within [year-month-01, next-month-01)"""
    in_month = _in_month(transactions, year, month)
    return MonthlySummary(
        income_cents=_total(in_month, "income"),
        expenses_cents=_total(in_month, "expense"),
    )


def dashboard_summary(transactions: Sequence[TransactionRecord], today: date) -> DashboardSummary:
    """
    Headline figures: all-time totals plus the current calendar month.

    Savings rate is the share of this month's income not spent, in percent,
    rounded to 2 decimals; 0 when there is no income this month.
    """
    total_income = _total(transactions, "income")
    total_expenses = _total(transactions, "expense")
    current = monthly_summary(transactions, today.year, today.month)

    if current.income_cents > 0:
        saved = Decimal(current.income_cents - current.expenses_cents)
        savings_rate = round_percentage(saved / current.income_cents * 100)
    else:
        savings_rate = 0.0

    return DashboardSummary(
        total_balance_cents=total_income - total_expenses,
        monthly_income_cents=current.income_cents,
        monthly_expenses_cents=current.expenses_cents,
        savings_rate=savings_rate,
        total_income_cents=total_income,
        total_expenses_cents=total_expenses,
    )


def spending_trend(
    transactions: Sequence[TransactionRecord],
    today: date,
    months_back: int = 6,
) -> List[TrendPoint]:
    """One point per trailing calendar month (current month last), oldest first"""
    if months_back < 1:
        raise InvalidInputError(f"months_back must be at least 1, got {months_back}")

    trend = []
    for year, month in trailing_months(today, months_back):
        summary = monthly_summary(transactions, year, month)
        trend.append(
            TrendPoint(
                month=f"{year:04d}-{month:02d}",
                income_cents=summary.income_cents,
                expenses_cents=summary.expenses_cents,
                net_cents=summary.income_cents - summary.expenses_cents,
            )
        )
    return trend


def category_spending(transactions: Sequence[TransactionRecord], year: int, month: int) -> List[CategoryTotal]:
    """Expense totals per category for a month, largest first"""
    totals: Dict[str, int] = defaultdict(int)
    for txn in _in_month(transactions, year, month):
        if txn.type == "expense":
            totals[txn.category] += txn.amount_cents

    # sorted() is stable: ties keep first-seen order
    ranked = sorted(totals.items(), key=lambda item: item[1], reverse=True)
    return [CategoryTotal(category=category, total_cents=total) for category, total in ranked]


def budget_status(percentage: Union[Decimal, float]) -> str:
    if percentage > OVER_THRESHOLD:
        return "over"
    if percentage > WARNING_THRESHOLD:
        return "warning"
    return "good"


def budget_progress(
    budgets: Sequence[Budget],
    transactions: Sequence[TransactionRecord],
    today: date,
) -> List[BudgetProgress]:
    """
    Spend against each active budget whose window overlaps the current month.

    Spent counts expenses in the budget's category dated inside the budget
    window (both ends inclusive), not just the current month.

    Raises:
        InvalidInputError: a considered budget has a non-positive amount
    """
    month_start, next_month_start = month_bounds(today.year, today.month)
    progress = []

    for budget in budgets:
        if budget.status != "active":
            continue
        if budget.start_date >= next_month_start or budget.end_date < month_start:
            continue
        if budget.amount_cents <= 0:
            raise InvalidInputError(f"Budget amount must be positive, got {budget.amount_cents} for {budget.category!r}")

        spent = sum(
            t.amount_cents
            for t in transactions
            if t.type == "expense"
            and t.category == budget.category
            and budget.start_date <= t.date <= budget.end_date
        )
        # Status comes from the exact ratio; only the reported figure is rounded
        percentage = Decimal(spent) / budget.amount_cents * 100

        progress.append(
            BudgetProgress(
                category=budget.category,
                spent_cents=spent,
                budget_cents=budget.amount_cents,
                remaining_cents=budget.amount_cents - spent,
                percentage=round_percentage(percentage),
                status=budget_status(percentage),
                budget_id=budget.budget_id,
                name=budget.name,
            )
        )

    return progress
