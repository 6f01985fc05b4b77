"""Formal loans: CRUD, payments, outstanding balance and portfolio totals"""

from datetime import datetime
from typing import List
from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session

from pocketledger.api.v1.schemas import (
    CreatedResponse,
    LoanBalanceResponse,
    LoanCreate,
    LoanSchema,
    PaymentCreate,
    PaymentSchema,
    PortfolioSummaryResponse,
)
from pocketledger.api.dependencies import get_now, get_request_id
from pocketledger.api.errors import committing, to_http_error
from pocketledger.infrastructure.database.session import get_db
from pocketledger.infrastructure.database.repositories import (
    BorrowerRepository,
    ContactRepository,
    LoanRepository,
    loan_to_domain,
    loan_transaction_to_domain,
    payment_to_domain,
)
from pocketledger.domain.interest import compute_balance, summarize_borrower, summarize_portfolio
from pocketledger.domain.exceptions import DomainException, NotFoundError
from pocketledger.infrastructure.observability.logging import log_record_change
from pocketledger.infrastructure.observability.metrics import record_created

router = APIRouter()


@router.get("/loans", response_model=List[LoanSchema])
def list_loans(db: Session = Depends(get_db)):
    """All loans, newest first, with the contact's name"""
    return LoanRepository(db).list_loans()


@router.post("/loans", response_model=CreatedResponse)
def create_loan(request_body: LoanCreate, request: Request, db: Session = Depends(get_db)):
    request_id = get_request_id(request)

    if ContactRepository(db).get_contact(request_body.contact_id) is None:
        raise to_http_error(NotFoundError(f"Contact {request_body.contact_id} not found"), request_id)

    with committing(db, request_id):
        loan = LoanRepository(db).create_loan(**request_body.model_dump())

    record_created("loan")
    log_record_change(
        request_id, "loan", "created", loan.id,
        amount_cents=loan.amount_cents, interest_type=loan.interest_type,
    )
    return CreatedResponse(id=loan.id)


@router.get("/loans/summary", response_model=PortfolioSummaryResponse)
def get_portfolio_summary(
    request: Request,
    db: Session = Depends(get_db),
    now: datetime = Depends(get_now),
):
    """Lent, outstanding and interest totals across every borrower"""
    try:
        summaries = [
            summarize_borrower([loan_transaction_to_domain(t) for t in borrower.transactions], now)
            for borrower in BorrowerRepository(db).list_borrowers()
        ]
        portfolio = summarize_portfolio(summaries)
    except DomainException as e:
        raise to_http_error(e, get_request_id(request))

    return PortfolioSummaryResponse(
        total_lent_cents=portfolio.total_lent_cents,
        total_outstanding_cents=portfolio.total_outstanding_cents,
        total_interest_cents=portfolio.total_interest_cents,
        active_borrowers=portfolio.active_borrowers,
    )


@router.get("/loans/{loan_id}/balance", response_model=LoanBalanceResponse)
def get_loan_balance(
    loan_id: int,
    request: Request,
    db: Session = Depends(get_db),
    now: datetime = Depends(get_now),
):
    """
    Outstanding balance of a loan as of now.

    Interest accrues per whole elapsed day (simple or compound daily rate);
    payments are subtracted without interest of their own.
    """
    loan_repo = LoanRepository(db)

    try:
        loan = loan_repo.get_loan(loan_id)
        if loan is None:
            raise NotFoundError(f"Loan {loan_id} not found")

        payments = [payment_to_domain(p) for p in loan_repo.list_payments(loan_id)]
        balance = compute_balance(loan_to_domain(loan), payments, now)
    except DomainException as e:
        raise to_http_error(e, get_request_id(request))

    return LoanBalanceResponse(
        loan_id=loan_id,
        original_cents=balance.original_cents,
        total_owed_cents=balance.total_owed_cents,
        total_paid_cents=balance.total_paid_cents,
        balance_cents=balance.balance_cents,
        days_elapsed=balance.days_elapsed,
    )


@router.get("/payments/{loan_id}", response_model=List[PaymentSchema])
def list_payments(loan_id: int, db: Session = Depends(get_db)):
    """Payments for a loan, most recent first"""
    return LoanRepository(db).list_payments(loan_id)


@router.post("/payments", response_model=CreatedResponse)
def create_payment(request_body: PaymentCreate, request: Request, db: Session = Depends(get_db)):
    request_id = get_request_id(request)
    loan_repo = LoanRepository(db)

    if loan_repo.get_loan(request_body.loan_id) is None:
        raise to_http_error(NotFoundError(f"Loan {request_body.loan_id} not found"), request_id)

    with committing(db, request_id):
        payment = loan_repo.create_payment(**request_body.model_dump())

    record_created("payment")
    log_record_change(request_id, "payment", "created", payment.id, loan_id=payment.loan_id)
    return CreatedResponse(id=payment.id)
