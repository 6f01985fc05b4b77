"""Interest and balance engine for loans and informal borrower ledgers"""

from datetime import date
from decimal import Decimal
from typing import Iterable, List, Optional

from pocketledger.domain.exceptions import InvalidInputError
from pocketledger.domain.models import (
    BorrowerSummary,
    Loan,
    LoanBalance,
    LoanPortfolioSummary,
    LoanTransaction,
    PaymentRecord,
)
from pocketledger.utils.date_utils import calendar_date, elapsed_days
from pocketledger.utils.money import round_cents, to_decimal

INTEREST_TYPES = ("simple", "compound")
DAYS_PER_YEAR = 365


def _daily_rate(annual_rate_percent: float) -> Decimal:
    return to_decimal(annual_rate_percent) / 100 / DAYS_PER_YEAR


def compute_owed(
    principal_cents: int,
    annual_rate_percent: float,
    interest_type: str,
    days_elapsed: int,
) -> int:
    """
    Amount owed after `days_elapsed` days of daily-rate interest.

    Formulas (daily_rate = annual_rate_percent / 100 / 365):
    - simple:   principal * (1 + daily_rate * days)
    - compound: principal * (1 + daily_rate) ** days

    Negative day counts are treated as zero, so day 0 always returns the
    principal. Result is rounded half-up to the cent.

    Raises:
        InvalidInputError: negative principal or rate, unknown interest type
    """
    if principal_cents < 0:
        raise InvalidInputError(f"Principal must be non-negative, got {principal_cents}")
    if annual_rate_percent < 0:
        raise InvalidInputError(f"Interest rate must be non-negative, got {annual_rate_percent}")
    if interest_type not in INTEREST_TYPES:
        raise InvalidInputError(f"Unknown interest type: {interest_type!r}")

    days = max(days_elapsed, 0)
    daily_rate = _daily_rate(annual_rate_percent)

    if interest_type == "compound":
        factor = (1 + daily_rate) ** days
    else:
        factor = 1 + daily_rate * days

    return round_cents(principal_cents * factor)


def compute_balance(loan: Loan, payments: Iterable[PaymentRecord], as_of: date) -> LoanBalance:
    """
    Outstanding balance of a loan at `as_of`.

    Days are counted with floor, so a loan started today has accrued nothing
    until a full day has passed. Overpayment yields a negative balance.

    Raises:
        InvalidInputError: as_of precedes the loan start date, or invalid loan terms
    """
    if calendar_date(as_of) < loan.start_date:
        raise InvalidInputError(f"As-of date {as_of} is before loan start {loan.start_date}")

    days = elapsed_days(loan.start_date, as_of)
    total_owed = compute_owed(loan.principal_cents, loan.annual_rate_percent, loan.interest_type, days)
    total_paid = sum(p.amount_cents for p in payments)

    return LoanBalance(
        original_cents=loan.principal_cents,
        total_owed_cents=total_owed,
        total_paid_cents=total_paid,
        balance_cents=total_owed - total_paid,
        days_elapsed=days,
    )


def compute_interest_earned(transaction: LoanTransaction, as_of: date) -> Optional[int]:
    """
    Simple interest earned on a "given" ledger entry; None for "received".

    Days are counted with ceiling: any part of a day since the entry date
    counts as a full day.
    """
    if transaction.kind != "given":
        return None
    if transaction.amount_cents < 0:
        raise InvalidInputError(f"Amount must be non-negative, got {transaction.amount_cents}")
    if transaction.annual_rate_percent < 0:
        raise InvalidInputError(f"Interest rate must be non-negative, got {transaction.annual_rate_percent}")

    days = elapsed_days(transaction.date, as_of, round_up=True)
    rate = to_decimal(transaction.annual_rate_percent) / 100
    years = Decimal(days) / DAYS_PER_YEAR

    return round_cents(transaction.amount_cents * rate * years)


def summarize_borrower(transactions: Iterable[LoanTransaction], as_of: date) -> BorrowerSummary:
    """
    Totals for one borrower's ledger.

    Outstanding is lent minus received and ignores interest. Interest is
    rounded per entry before summing.
    """
    total_lent = 0
    total_received = 0
    total_interest = 0

    for txn in transactions:
        if txn.kind == "given":
            total_lent += txn.amount_cents
            total_interest += compute_interest_earned(txn, as_of)
        elif txn.kind == "received":
            total_received += txn.amount_cents
        else:
            raise InvalidInputError(f"Unknown loan transaction kind: {txn.kind!r}")

    return BorrowerSummary(
        total_lent_cents=total_lent,
        total_received_cents=total_received,
        outstanding_cents=total_lent - total_received,
        total_interest_cents=total_interest,
    )


def summarize_portfolio(summaries: List[BorrowerSummary]) -> LoanPortfolioSummary:
    """Totals across borrowers; a borrower is active while they owe something"""
    return LoanPortfolioSummary(
        total_lent_cents=sum(s.total_lent_cents for s in summaries),
        total_outstanding_cents=sum(s.outstanding_cents for s in summaries),
        total_interest_cents=sum(s.total_interest_cents for s in summaries),
        active_borrowers=sum(1 for s in summaries if s.outstanding_cents > 0),
    )
