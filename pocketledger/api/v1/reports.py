"""Dashboard and report views over income/expense transactions"""

from datetime import datetime
from typing import List, Optional
from fastapi import APIRouter, Depends, Query, Request
from sqlalchemy.orm import Session

from pocketledger.api.v1.schemas import (
    CategoryTotalSchema,
    DashboardResponse,
    MonthlySummaryResponse,
    TrendPointSchema,
)
from pocketledger.api.dependencies import get_now, get_request_id
from pocketledger.api.errors import to_http_error
from pocketledger.config import settings
from pocketledger.domain.aggregation import category_spending, dashboard_summary, monthly_summary, spending_trend
from pocketledger.domain.exceptions import DomainException
from pocketledger.infrastructure.database.session import get_db
from pocketledger.infrastructure.database.repositories import TransactionRepository, transaction_to_domain
from pocketledger.utils.date_utils import calendar_date

router = APIRouter()


def _load_transactions(db: Session):
    return [transaction_to_domain(t) for t in TransactionRepository(db).list_transactions()]


@router.get("/reports/dashboard", response_model=DashboardResponse)
def get_dashboard(
    request: Request,
    db: Session = Depends(get_db),
    now: datetime = Depends(get_now),
):
    """All-time balance plus this month's income, expenses and savings rate"""
    try:
        summary = dashboard_summary(_load_transactions(db), calendar_date(now))
    except DomainException as e:
        raise to_http_error(e, get_request_id(request))

    return DashboardResponse(
        total_balance_cents=summary.total_balance_cents,
        monthly_income_cents=summary.monthly_income_cents,
        monthly_expenses_cents=summary.monthly_expenses_cents,
        savings_rate=summary.savings_rate,
        total_income_cents=summary.total_income_cents,
        total_expenses_cents=summary.total_expenses_cents,
    )


@router.get("/reports/monthly", response_model=MonthlySummaryResponse)
def get_monthly_summary(
    request: Request,
    year: Optional[int] = Query(None, ge=1, le=9998, description="Defaults to the current year"),
    month: Optional[int] = Query(None, description="1-12, defaults to the current month"),
    db: Session = Depends(get_db),
    now: datetime = Depends(get_now),
):
    today = calendar_date(now)
    year = year if year is not None else today.year
    month = month if month is not None else today.month

    try:
        summary = monthly_summary(_load_transactions(db), year, month)
    except DomainException as e:
        raise to_http_error(e, get_request_id(request))

    return MonthlySummaryResponse(
        year=year,
        month=month,
        income_cents=summary.income_cents,
        expenses_cents=summary.expenses_cents,
    )


@router.get("/reports/trend", response_model=List[TrendPointSchema])
def get_spending_trend(
    request: Request,
    months: int = Query(settings.default_trend_months, le=settings.max_trend_months),
    db: Session = Depends(get_db),
    now: datetime = Depends(get_now),
):
    """Income, expenses and net for the trailing months, oldest first"""
    try:
        trend = spending_trend(_load_transactions(db), calendar_date(now), months_back=months)
    except DomainException as e:
        raise to_http_error(e, get_request_id(request))

    return [
        TrendPointSchema(
            month=point.month,
            income_cents=point.income_cents,
            expenses_cents=point.expenses_cents,
            net_cents=point.net_cents,
        )
        for point in trend
    ]


@router.get("/reports/categories", response_model=List[CategoryTotalSchema])
def get_category_spending(
    request: Request,
    year: Optional[int] = Query(None, ge=1, le=9998),
    month: Optional[int] = Query(None),
    db: Session = Depends(get_db),
    now: datetime = Depends(get_now),
):
    """Expense totals per category for a month, largest first"""
    today = calendar_date(now)
    year = year if year is not None else today.year
    month = month if month is not None else today.month

    try:
        totals = category_spending(_load_transactions(db), year, month)
    except DomainException as e:
        raise to_http_error(e, get_request_id(request))

    return [CategoryTotalSchema(category=t.category, total_cents=t.total_cents) for t in totals]
