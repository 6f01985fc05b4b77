"""Informal borrowers and their given/received ledger"""

from datetime import datetime
from typing import List
from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session

from pocketledger.api.v1.schemas import (
    BorrowerCreate,
    BorrowerResponse,
    BorrowerUpdate,
    CreatedResponse,
    DeletedResponse,
    LoanTransactionCreate,
    LoanTransactionSchema,
)
from pocketledger.api.dependencies import get_now, get_request_id
from pocketledger.api.errors import committing, to_http_error
from pocketledger.domain.interest import compute_interest_earned, summarize_borrower
from pocketledger.domain.exceptions import DomainException, NotFoundError
from pocketledger.infrastructure.database.models import Borrower
from pocketledger.infrastructure.database.session import get_db
from pocketledger.infrastructure.database.repositories import BorrowerRepository, loan_transaction_to_domain
from pocketledger.infrastructure.observability.logging import log_record_change
from pocketledger.infrastructure.observability.metrics import record_created

router = APIRouter()


def build_borrower_response(borrower: Borrower, now: datetime) -> BorrowerResponse:
    """Attach per-entry interest and ledger totals to a borrower row"""
    entries = [loan_transaction_to_domain(t) for t in borrower.transactions]
    summary = summarize_borrower(entries, now)

    transactions = [
        LoanTransactionSchema(
            id=t.id,
            borrower_id=t.borrower_id,
            type=t.type,
            amount_cents=t.amount_cents,
            interest_rate=t.interest_rate,
            transaction_date=t.transaction_date,
            due_date=t.due_date,
            description=t.description,
            interest_earned_cents=compute_interest_earned(entry, now),
            created_at=t.created_at,
        )
        for t, entry in zip(borrower.transactions, entries)
    ]

    return BorrowerResponse(
        id=borrower.id,
        name=borrower.name,
        contact=borrower.contact,
        notes=borrower.notes,
        total_lent_cents=summary.total_lent_cents,
        total_received_cents=summary.total_received_cents,
        outstanding_cents=summary.outstanding_cents,
        total_interest_cents=summary.total_interest_cents,
        transactions=transactions,
        created_at=borrower.created_at,
    )


@router.get("/borrowers", response_model=List[BorrowerResponse])
def list_borrowers(
    request: Request,
    db: Session = Depends(get_db),
    now: datetime = Depends(get_now),
):
    """All borrowers with their ledger and totals"""
    try:
        return [build_borrower_response(b, now) for b in BorrowerRepository(db).list_borrowers()]
    except DomainException as e:
        raise to_http_error(e, get_request_id(request))


@router.post("/borrowers", response_model=CreatedResponse)
def create_borrower(request_body: BorrowerCreate, request: Request, db: Session = Depends(get_db)):
    request_id = get_request_id(request)
    with committing(db, request_id):
        borrower = BorrowerRepository(db).create_borrower(**request_body.model_dump())

    record_created("borrower")
    log_record_change(request_id, "borrower", "created", borrower.id)
    return CreatedResponse(id=borrower.id)


@router.get("/borrowers/{borrower_id}", response_model=BorrowerResponse)
def get_borrower(
    borrower_id: int,
    request: Request,
    db: Session = Depends(get_db),
    now: datetime = Depends(get_now),
):
    """
    Single borrower with every ledger entry.

    Each "given" entry carries the simple interest earned so far; outstanding
    is lent minus received and does not include interest.
    """
    try:
        borrower = BorrowerRepository(db).get_borrower(borrower_id)
        if borrower is None:
            raise NotFoundError(f"Borrower {borrower_id} not found")
        return build_borrower_response(borrower, now)
    except DomainException as e:
        raise to_http_error(e, get_request_id(request))


@router.put("/borrowers/{borrower_id}", response_model=BorrowerResponse)
def update_borrower(
    borrower_id: int,
    request_body: BorrowerUpdate,
    request: Request,
    db: Session = Depends(get_db),
    now: datetime = Depends(get_now),
):
    request_id = get_request_id(request)
    repo = BorrowerRepository(db)

    try:
        borrower = repo.get_borrower(borrower_id)
        if borrower is None:
            raise NotFoundError(f"Borrower {borrower_id} not found")

        with committing(db, request_id):
            repo.update_borrower(borrower, request_body.model_dump())

        log_record_change(request_id, "borrower", "updated", borrower_id)
        return build_borrower_response(borrower, now)
    except DomainException as e:
        raise to_http_error(e, request_id)


@router.delete("/borrowers/{borrower_id}", response_model=DeletedResponse)
def delete_borrower(borrower_id: int, request: Request, db: Session = Depends(get_db)):
    """Delete a borrower together with their whole ledger"""
    request_id = get_request_id(request)
    repo = BorrowerRepository(db)

    borrower = repo.get_borrower(borrower_id)
    if borrower is None:
        raise to_http_error(NotFoundError(f"Borrower {borrower_id} not found"), request_id)

    entry_count = len(borrower.transactions)
    with committing(db, request_id):
        repo.delete_borrower(borrower)

    log_record_change(request_id, "borrower", "deleted", borrower_id, entries_deleted=entry_count)
    return DeletedResponse()


@router.post("/loan-transactions", response_model=CreatedResponse)
def create_loan_transaction(request_body: LoanTransactionCreate, request: Request, db: Session = Depends(get_db)):
    request_id = get_request_id(request)
    repo = BorrowerRepository(db)

    if repo.get_borrower(request_body.borrower_id) is None:
        raise to_http_error(NotFoundError(f"Borrower {request_body.borrower_id} not found"), request_id)

    with committing(db, request_id):
        txn = repo.create_loan_transaction(**request_body.model_dump())

    record_created("loan_transaction")
    log_record_change(
        request_id, "loan_transaction", "created", txn.id,
        borrower_id=txn.borrower_id, txn_type=txn.type, amount_cents=txn.amount_cents,
    )
    return CreatedResponse(id=txn.id)


@router.delete("/loan-transactions/{loan_transaction_id}", response_model=DeletedResponse)
def delete_loan_transaction(loan_transaction_id: int, request: Request, db: Session = Depends(get_db)):
    request_id = get_request_id(request)
    repo = BorrowerRepository(db)

    txn = repo.get_loan_transaction(loan_transaction_id)
    if txn is None:
        raise to_http_error(NotFoundError(f"Loan transaction {loan_transaction_id} not found"), request_id)

    with committing(db, request_id):
        repo.delete_loan_transaction(txn)

    log_record_change(request_id, "loan_transaction", "deleted", loan_transaction_id)
    return DeletedResponse()
