"""Data access layer for ledger entities"""

from typing import Any, Dict, List, Optional
from sqlalchemy.orm import Session, joinedload, selectinload
from pocketledger.infrastructure.database import models as orm
from pocketledger.domain import models as domain


def loan_to_domain(loan: orm.Loan) -> domain.Loan:
    return domain.Loan(
        principal_cents=loan.amount_cents,
        annual_rate_percent=loan.interest_rate,
        interest_type=loan.interest_type,
        start_date=loan.start_date,
    )


def payment_to_domain(payment: orm.Payment) -> domain.PaymentRecord:
    return domain.PaymentRecord(amount_cents=payment.amount_cents, date=payment.payment_date)


def loan_transaction_to_domain(txn: orm.LoanTransaction) -> domain.LoanTransaction:
    return domain.LoanTransaction(
        kind=txn.type,
        amount_cents=txn.amount_cents,
        annual_rate_percent=txn.interest_rate,
        date=txn.transaction_date,
    )


def transaction_to_domain(txn: orm.Transaction) -> domain.TransactionRecord:
    return domain.TransactionRecord(
        type=txn.type,
        amount_cents=txn.amount_cents,
        category=txn.category,
        date=txn.transaction_date,
    )


def budget_to_domain(budget: orm.Budget) -> domain.Budget:
    """Budgets match transactions by category name"""
    return domain.Budget(
        category=budget.category.name,
        amount_cents=budget.amount_cents,
        start_date=budget.start_date,
        end_date=budget.end_date,
        status=budget.status,
        name=budget.name,
        period=budget.period,
        budget_id=budget.id,
    )


class ContactRepository:
    """Repository for loan contacts"""

    def __init__(self, db: Session):
        self.db = db

    def create_contact(self, **fields: Any) -> orm.Contact:
        db_contact = orm.Contact(**fields)
        self.db.add(db_contact)
        self.db.flush()  # Get ID without committing
        return db_contact

    def get_contact(self, contact_id: int) -> Optional[orm.Contact]:
        return self.db.get(orm.Contact, contact_id)

    def list_contacts(self) -> List[orm.Contact]:
        return self.db.query(orm.Contact).order_by(orm.Contact.name).all()


class LoanRepository:
    """Repository for formal loans and their payments"""

    def __init__(self, db: Session):
        self.db = db

    def create_loan(self, **fields: Any) -> orm.Loan:
        db_loan = orm.Loan(**fields)
        self.db.add(db_loan)
        self.db.flush()
        return db_loan

    def get_loan(self, loan_id: int) -> Optional[orm.Loan]:
        return self.db.get(orm.Loan, loan_id)

    def list_loans(self) -> List[orm.Loan]:
        """Newest first, with contact eagerly loaded for contact_name"""
        return (
            self.db.query(orm.Loan)
            .options(joinedload(orm.Loan.contact))
            .order_by(orm.Loan.created_at.desc(), orm.Loan.id.desc())
            .all()
        )

    def create_payment(self, **fields: Any) -> orm.Payment:
        db_payment = orm.Payment(**fields)
        self.db.add(db_payment)
        self.db.flush()
        return db_payment

    def list_payments(self, loan_id: int) -> List[orm.Payment]:
        return (
            self.db.query(orm.Payment)
            .filter(orm.Payment.loan_id == loan_id)
            .order_by(orm.Payment.payment_date.desc(), orm.Payment.id.desc())
            .all()
        )


class TransactionRepository:
    """Repository for income/expense transactions"""

    def __init__(self, db: Session):
        self.db = db

    def create_transaction(self, **fields: Any) -> orm.Transaction:
        db_txn = orm.Transaction(**fields)
        self.db.add(db_txn)
        self.db.flush()
        return db_txn

    def get_transaction(self, transaction_id: int) -> Optional[orm.Transaction]:
        return self.db.get(orm.Transaction, transaction_id)

    def update_transaction(self, db_txn: orm.Transaction, fields: Dict[str, Any]) -> orm.Transaction:
        for name, value in fields.items():
            setattr(db_txn, name, value)
        self.db.flush()
        return db_txn

    def delete_transaction(self, db_txn: orm.Transaction) -> None:
        self.db.delete(db_txn)
        self.db.flush()

    def list_transactions(self) -> List[orm.Transaction]:
        """Most recent first"""
        return (
            self.db.query(orm.Transaction)
            .order_by(orm.Transaction.transaction_date.desc(), orm.Transaction.id.desc())
            .all()
        )


class CategoryRepository:
    """Repository for categories and their budgets"""

    def __init__(self, db: Session):
        self.db = db

    def create_category(self, **fields: Any) -> orm.Category:
        db_category = orm.Category(**fields)
        self.db.add(db_category)
        self.db.flush()
        return db_category

    def get_category(self, category_id: int) -> Optional[orm.Category]:
        return self.db.get(orm.Category, category_id)

    def get_category_by_name(self, name: str) -> Optional[orm.Category]:
        return self.db.query(orm.Category).filter(orm.Category.name == name).first()

    def list_categories(self) -> List[orm.Category]:
        return self.db.query(orm.Category).order_by(orm.Category.name).all()

    def create_budget(self, **fields: Any) -> orm.Budget:
        db_budget = orm.Budget(**fields)
        self.db.add(db_budget)
        self.db.flush()
        return db_budget

    def list_budgets(self) -> List[orm.Budget]:
        return (
            self.db.query(orm.Budget)
            .options(joinedload(orm.Budget.category))
            .order_by(orm.Budget.start_date.desc(), orm.Budget.id)
            .all()
        )


class BorrowerRepository:
    """Repository for informal borrowers and their ledger entries"""

    def __init__(self, db: Session):
        self.db = db

    def create_borrower(self, **fields: Any) -> orm.Borrower:
        db_borrower = orm.Borrower(**fields)
        self.db.add(db_borrower)
        self.db.flush()
        return db_borrower

    def get_borrower(self, borrower_id: int) -> Optional[orm.Borrower]:
        return (
            self.db.query(orm.Borrower)
            .options(selectinload(orm.Borrower.transactions))
            .filter(orm.Borrower.id == borrower_id)
            .first()
        )

    def update_borrower(self, db_borrower: orm.Borrower, fields: Dict[str, Any]) -> orm.Borrower:
        for name, value in fields.items():
            setattr(db_borrower, name, value)
        self.db.flush()
        return db_borrower

    def delete_borrower(self, db_borrower: orm.Borrower) -> None:
        """Ledger entries go with the borrower (delete-orphan cascade)"""
        self.db.delete(db_borrower)
        self.db.flush()

    def list_borrowers(self) -> List[orm.Borrower]:
        """All borrowers with their ledger entries loaded in one extra query"""
        return (
            self.db.query(orm.Borrower)
            .options(selectinload(orm.Borrower.transactions))
            .order_by(orm.Borrower.name)
            .all()
        )

    def create_loan_transaction(self, **fields: Any) -> orm.LoanTransaction:
        db_txn = orm.LoanTransaction(**fields)
        self.db.add(db_txn)
        self.db.flush()
        return db_txn

    def get_loan_transaction(self, loan_transaction_id: int) -> Optional[orm.LoanTransaction]:
        return self.db.get(orm.LoanTransaction, loan_transaction_id)

    def delete_loan_transaction(self, db_txn: orm.LoanTransaction) -> None:
        self.db.delete(db_txn)
        self.db.flush()
