"""Pydantic schemas for API request/response validation"""

from datetime import date, datetime
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

InterestType = Literal["simple", "compound"]
TransactionType = Literal["income", "expense"]
LoanTransactionType = Literal["given", "received"]
BudgetPeriod = Literal["weekly", "monthly", "quarterly", "yearly"]
BudgetStatus = Literal["active", "paused", "completed"]


class ORMSchema(BaseModel):
    """Base for responses built straight from ORM rows"""

    model_config = ConfigDict(from_attributes=True)


class CreatedResponse(BaseModel):
    """Response for POST endpoints"""

    id: int


class DeletedResponse(BaseModel):
    success: bool = True


# Contacts

class ContactCreate(BaseModel):
    """Request body for POST /contacts"""

    name: str = Field(..., min_length=1)
    phone: Optional[str] = None
    email: Optional[str] = None
    address: Optional[str] = None


class ContactSchema(ORMSchema):
    id: int
    name: str
    phone: Optional[str] = None
    email: Optional[str] = None
    address: Optional[str] = None
    created_at: datetime


# Loans and payments

class LoanCreate(BaseModel):
    """Request body for POST /loans"""

    contact_id: int
    amount_cents: int = Field(..., gt=0, description="Principal in cents")
    interest_rate: float = Field(0.0, ge=0, description="Annual interest rate in percent")
    interest_type: InterestType = "simple"
    start_date: date
    due_date: Optional[date] = None
    notes: Optional[str] = None


class LoanSchema(ORMSchema):
    id: int
    contact_id: int
    contact_name: Optional[str] = None
    amount_cents: int
    interest_rate: float
    interest_type: str
    start_date: date
    due_date: Optional[date] = None
    status: str
    notes: Optional[str] = None
    created_at: datetime


class LoanBalanceResponse(BaseModel):
    """Response for GET /loans/{loan_id}/balance"""

    loan_id: int
    original_cents: int
    total_owed_cents: int
    total_paid_cents: int
    balance_cents: int
    days_elapsed: int


class PaymentCreate(BaseModel):
    """Request body for POST /payments"""

    loan_id: int
    amount_cents: int = Field(..., gt=0)
    payment_date: date
    payment_method: Optional[str] = None
    notes: Optional[str] = None


class PaymentSchema(ORMSchema):
    id: int
    loan_id: int
    amount_cents: int
    payment_date: date
    payment_method: Optional[str] = None
    notes: Optional[str] = None
    created_at: datetime


# Income/expense transactions

class TransactionCreate(BaseModel):
    """Request body for POST /transactions"""

    type: TransactionType
    amount_cents: int = Field(..., gt=0)
    category: str = Field(..., min_length=1)
    description: Optional[str] = None
    payment_method: Optional[str] = None
    transaction_date: date


class TransactionUpdate(BaseModel):
    """Request body for PUT /transactions/{id}; omitted or null fields are left unchanged"""

    type: Optional[TransactionType] = None
    amount_cents: Optional[int] = Field(None, gt=0)
    category: Optional[str] = Field(None, min_length=1)
    description: Optional[str] = None
    payment_method: Optional[str] = None
    transaction_date: Optional[date] = None


class TransactionSchema(ORMSchema):
    id: int
    type: str
    amount_cents: int
    category: str
    description: Optional[str] = None
    payment_method: Optional[str] = None
    transaction_date: date
    created_at: datetime
    updated_at: Optional[datetime] = None


# Categories and budgets

class CategoryCreate(BaseModel):
    """Request body for POST /categories"""

    name: str = Field(..., min_length=1)
    icon: Optional[str] = None
    color: Optional[str] = None
    budget_limit_cents: int = Field(0, ge=0)
    type: TransactionType = "expense"


class CategorySchema(ORMSchema):
    id: int
    name: str
    icon: Optional[str] = None
    color: Optional[str] = None
    budget_limit_cents: int
    type: str
    created_at: datetime


class BudgetCreate(BaseModel):
    """Request body for POST /budgets"""

    category_id: int
    name: str = Field(..., min_length=1)
    amount_cents: int = Field(..., gt=0)
    period: BudgetPeriod = "monthly"
    start_date: date
    end_date: date
    status: BudgetStatus = "active"
    notes: Optional[str] = None

    @model_validator(mode="after")
    def check_window(self) -> "BudgetCreate":
        if self.end_date < self.start_date:
            raise ValueError("end_date must not be before start_date")
        return self


class BudgetSchema(BaseModel):
    id: int
    category_id: int
    category_name: str
    name: str
    amount_cents: int
    period: str
    start_date: date
    end_date: date
    status: str
    notes: Optional[str] = None
    created_at: datetime


class BudgetProgressItem(BaseModel):
    """Single budget in GET /budgets/progress"""

    budget_id: Optional[int] = None
    name: Optional[str] = None
    category: str
    spent_cents: int
    budget_cents: int
    remaining_cents: int
    percentage: float
    status: str


# Borrowers

class BorrowerCreate(BaseModel):
    """Request body for POST /borrowers"""

    name: str = Field(..., min_length=1)
    contact: Optional[str] = None
    notes: Optional[str] = None


class BorrowerUpdate(BorrowerCreate):
    """Request body for PUT /borrowers/{id}; replaces name, contact and notes"""


class LoanTransactionCreate(BaseModel):
    """Request body for POST /loan-transactions"""

    borrower_id: int
    type: LoanTransactionType
    amount_cents: int = Field(..., gt=0)
    interest_rate: float = Field(0.0, ge=0, description="Annual interest rate in percent")
    transaction_date: date
    due_date: Optional[date] = None
    description: Optional[str] = None


class LoanTransactionSchema(BaseModel):
    id: int
    borrower_id: int
    type: str
    amount_cents: int
    interest_rate: float
    transaction_date: date
    due_date: Optional[date] = None
    description: Optional[str] = None
    interest_earned_cents: Optional[int] = None
    created_at: datetime


class BorrowerResponse(BaseModel):
    """Borrower with ledger totals"""

    id: int
    name: str
    contact: Optional[str] = None
    notes: Optional[str] = None
    total_lent_cents: int
    total_received_cents: int
    outstanding_cents: int
    total_interest_cents: int
    transactions: List[LoanTransactionSchema] = []
    created_at: datetime


class PortfolioSummaryResponse(BaseModel):
    """Response for GET /loans/summary"""

    total_lent_cents: int
    total_outstanding_cents: int
    total_interest_cents: int
    active_borrowers: int


# Reports

class DashboardResponse(BaseModel):
    """Response for GET /reports/dashboard"""

    total_balance_cents: int
    monthly_income_cents: int
    monthly_expenses_cents: int
    savings_rate: float
    total_income_cents: int
    total_expenses_cents: int


class MonthlySummaryResponse(BaseModel):
    year: int
    month: int
    income_cents: int
    expenses_cents: int


class TrendPointSchema(BaseModel):
    month: str
    income_cents: int
    expenses_cents: int
    net_cents: int


class CategoryTotalSchema(BaseModel):
    category: str
    total_cents: int
