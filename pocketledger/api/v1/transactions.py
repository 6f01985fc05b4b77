"""Income/expense transactions CRUD"""

from typing import List
from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session

from pocketledger.api.v1.schemas import (
    CreatedResponse,
    DeletedResponse,
    TransactionCreate,
    TransactionSchema,
    TransactionUpdate,
)
from pocketledger.api.dependencies import get_request_id
from pocketledger.api.errors import committing, to_http_error
from pocketledger.domain.exceptions import NotFoundError
from pocketledger.infrastructure.database.session import get_db
from pocketledger.infrastructure.database.repositories import TransactionRepository
from pocketledger.infrastructure.observability.logging import log_record_change
from pocketledger.infrastructure.observability.metrics import record_created

router = APIRouter()


@router.get("/transactions", response_model=List[TransactionSchema])
def list_transactions(db: Session = Depends(get_db)):
    """All transactions, most recent first"""
    return TransactionRepository(db).list_transactions()


@router.post("/transactions", response_model=CreatedResponse)
def create_transaction(request_body: TransactionCreate, request: Request, db: Session = Depends(get_db)):
    request_id = get_request_id(request)
    with committing(db, request_id):
        txn = TransactionRepository(db).create_transaction(**request_body.model_dump())

    record_created("transaction")
    log_record_change(
        request_id, "transaction", "created", txn.id,
        txn_type=txn.type, amount_cents=txn.amount_cents,
    )
    return CreatedResponse(id=txn.id)


@router.put("/transactions/{transaction_id}", response_model=TransactionSchema)
def update_transaction(
    transaction_id: int,
    request_body: TransactionUpdate,
    request: Request,
    db: Session = Depends(get_db),
):
    """Partial update: fields omitted or null in the body are left unchanged"""
    request_id = get_request_id(request)
    repo = TransactionRepository(db)

    txn = repo.get_transaction(transaction_id)
    if txn is None:
        raise to_http_error(NotFoundError(f"Transaction {transaction_id} not found"), request_id)

    changes = request_body.model_dump(exclude_unset=True, exclude_none=True)
    with committing(db, request_id):
        repo.update_transaction(txn, changes)
    db.refresh(txn)

    log_record_change(request_id, "transaction", "updated", txn.id, fields=sorted(changes))
    return txn


@router.delete("/transactions/{transaction_id}", response_model=DeletedResponse)
def delete_transaction(transaction_id: int, request: Request, db: Session = Depends(get_db)):
    request_id = get_request_id(request)
    repo = TransactionRepository(db)

    txn = repo.get_transaction(transaction_id)
    if txn is None:
        raise to_http_error(NotFoundError(f"Transaction {transaction_id} not found"), request_id)

    with committing(db, request_id):
        repo.delete_transaction(txn)

    log_record_change(request_id, "transaction", "deleted", transaction_id)
    return DeletedResponse()
