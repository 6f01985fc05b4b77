"""Domain models - pure Python dataclasses representing business entities"""

from dataclasses import dataclass
from datetime import date
from typing import Optional


@dataclass
class Loan:
    """Formal loan to a contact, accruing simple or compound daily interest"""

    principal_cents: int
    annual_rate_percent: float
    interest_type: str  # "simple" or "compound"
    start_date: date


@dataclass
class PaymentRecord:
    """Repayment against a loan"""

    amount_cents: int
    date: date


@dataclass
class LoanTransaction:
    """Entry in an informal borrower ledger"""

    kind: str  # "given" or "received"
    amount_cents: int
    annual_rate_percent: float
    date: date


@dataclass
class TransactionRecord:
    """Income or expense ledger entry"""

    type: str  # "income" or "expense"
    amount_cents: int
    category: str
    date: date


@dataclass
class Budget:
    """Spending limit for a category over a date window"""

    category: str
    amount_cents: int
    start_date: date
    end_date: date
    status: str = "active"  # "active", "paused" or "completed"
    name: Optional[str] = None
    period: str = "monthly"
    budget_id: Optional[int] = None


@dataclass
class LoanBalance:
    """Outstanding position of a loan at a point in time"""

    original_cents: int
    total_owed_cents: int
    total_paid_cents: int
    balance_cents: int
    days_elapsed: int


@dataclass
class BorrowerSummary:
    total_lent_cents: int
    total_received_cents: int
    outstanding_cents: int
    total_interest_cents: int


@dataclass
class LoanPortfolioSummary:
    """Totals across every borrower"""

    total_lent_cents: int
    total_outstanding_cents: int
    total_interest_cents: int
    active_borrowers: int


@dataclass
class MonthlySummary:
    income_cents: int
    expenses_cents: int


@dataclass
class DashboardSummary:
    """Headline figures for the dashboard"""

    total_balance_cents: int
    monthly_income_cents: int
    monthly_expenses_cents: int
    savings_rate: float
    total_income_cents: int
    total_expenses_cents: int


@dataclass
class TrendPoint:
    """Income and expenses for one calendar month"""

    month: str  # "YYYY-MM"
    income_cents: int
    expenses_cents: int
    net_cents: int


@dataclass
class CategoryTotal:
    category: str
    total_cents: int


@dataclass
class BudgetProgress:
    """Spend against a single budget"""

    category: str
    spent_cents: int
    budget_cents: int
    remaining_cents: int
    percentage: float
    status: str  # "good", "warning" or "over"
    budget_id: Optional[int] = None
    name: Optional[str] = None
