"""Categories and category budgets, including budget progress"""

import logging
from datetime import datetime
from typing import List
from fastapi import APIRouter, Depends, HTTPException, Request
from sqlalchemy.orm import Session

from pocketledger.api.v1.schemas import (
    BudgetCreate,
    BudgetProgressItem,
    BudgetSchema,
    CategoryCreate,
    CategorySchema,
    CreatedResponse,
)
from pocketledger.api.dependencies import get_now, get_request_id
from pocketledger.api.errors import committing, to_http_error
from pocketledger.domain.aggregation import budget_progress
from pocketledger.domain.exceptions import DomainException, NotFoundError
from pocketledger.infrastructure.database.session import get_db
from pocketledger.infrastructure.database.repositories import (
    CategoryRepository,
    TransactionRepository,
    budget_to_domain,
    transaction_to_domain,
)
from pocketledger.infrastructure.observability.logging import log_record_change
from pocketledger.infrastructure.observability.metrics import record_budget_statuses, record_created
from pocketledger.utils.date_utils import calendar_date

router = APIRouter()


@router.get("/categories", response_model=List[CategorySchema])
def list_categories(db: Session = Depends(get_db)):
    return CategoryRepository(db).list_categories()


@router.post("/categories", response_model=CreatedResponse)
def create_category(request_body: CategoryCreate, request: Request, db: Session = Depends(get_db)):
    """Create a category; names are unique"""
    request_id = get_request_id(request)
    repo = CategoryRepository(db)

    if repo.get_category_by_name(request_body.name) is not None:
        logging.warning(f"Duplicate category: {request_body.name}", extra={"request_id": request_id})
        raise HTTPException(status_code=409, detail="Category already exists")

    with committing(db, request_id):
        category = repo.create_category(**request_body.model_dump())

    record_created("category")
    log_record_change(request_id, "category", "created", category.id)
    return CreatedResponse(id=category.id)


@router.get("/budgets", response_model=List[BudgetSchema])
def list_budgets(db: Session = Depends(get_db)):
    return [
        BudgetSchema(
            id=b.id,
            category_id=b.category_id,
            category_name=b.category.name,
            name=b.name,
            amount_cents=b.amount_cents,
            period=b.period,
            start_date=b.start_date,
            end_date=b.end_date,
            status=b.status,
            notes=b.notes,
            created_at=b.created_at,
        )
        for b in CategoryRepository(db).list_budgets()
    ]


@router.post("/budgets", response_model=CreatedResponse)
def create_budget(request_body: BudgetCreate, request: Request, db: Session = Depends(get_db)):
    request_id = get_request_id(request)
    repo = CategoryRepository(db)

    if repo.get_category(request_body.category_id) is None:
        raise to_http_error(NotFoundError(f"Category {request_body.category_id} not found"), request_id)

    with committing(db, request_id):
        budget = repo.create_budget(**request_body.model_dump())

    record_created("budget")
    log_record_change(request_id, "budget", "created", budget.id, amount_cents=budget.amount_cents)
    return CreatedResponse(id=budget.id)


@router.get("/budgets/progress", response_model=List[BudgetProgressItem])
def get_budget_progress(
    request: Request,
    db: Session = Depends(get_db),
    now: datetime = Depends(get_now),
):
    """
    Spend against every active budget overlapping the current month.

    Status is "over" above 100%, "warning" above 80%, otherwise "good".
    """
    budgets = [budget_to_domain(b) for b in CategoryRepository(db).list_budgets()]
    transactions = [transaction_to_domain(t) for t in TransactionRepository(db).list_transactions()]

    try:
        progress = budget_progress(budgets, transactions, calendar_date(now))
    except DomainException as e:
        raise to_http_error(e, get_request_id(request))

    record_budget_statuses(p.status for p in progress)

    return [
        BudgetProgressItem(
            budget_id=p.budget_id,
            name=p.name,
            category=p.category,
            spent_cents=p.spent_cents,
            budget_cents=p.budget_cents,
            remaining_cents=p.remaining_cents,
            percentage=p.percentage,
            status=p.status,
        )
        for p in progress
    ]
