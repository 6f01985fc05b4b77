"""SQLAlchemy ORM models for the finance and loan tracking schema"""

from sqlalchemy import BigInteger, Column, Date, DateTime, Float, ForeignKey, Integer, Text
from sqlalchemy.orm import declarative_base, relationship
from sqlalchemy.sql import func

Base = declarative_base()


class Contact(Base):
    """Person a formal loan is made to"""

    __tablename__ = "contacts"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(Text, nullable=False)
    phone = Column(Text, nullable=True)
    email = Column(Text, nullable=True)
    address = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())

    loans = relationship("Loan", back_populates="contact", cascade="all, delete-orphan")


class Loan(Base):
    """Formal loan with simple or compound daily interest"""

    __tablename__ = "loans"

    id = Column(Integer, primary_key=True, autoincrement=True)
    contact_id = Column(Integer, ForeignKey("contacts.id", ondelete="CASCADE"), nullable=False, index=True)
    amount_cents = Column(BigInteger, nullable=False)
    interest_rate = Column(Float, nullable=False, default=0.0)
    interest_type = Column(Text, nullable=False, default="simple")
    start_date = Column(Date, nullable=False)
    due_date = Column(Date, nullable=True)
    status = Column(Text, nullable=False, default="active")
    notes = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())

    contact = relationship("Contact", back_populates="loans")
    payments = relationship("Payment", back_populates="loan", cascade="all, delete-orphan")

    @property
    def contact_name(self):
        return self.contact.name if self.contact else None


class Payment(Base):
    """Repayment against a formal loan"""

    __tablename__ = "payments"

    id = Column(Integer, primary_key=True, autoincrement=True)
    loan_id = Column(Integer, ForeignKey("loans.id", ondelete="CASCADE"), nullable=False, index=True)
    amount_cents = Column(BigInteger, nullable=False)
    payment_date = Column(Date, nullable=False)
    payment_method = Column(Text, nullable=True)
    notes = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())

    loan = relationship("Loan", back_populates="payments")


class Transaction(Base):
    """Income or expense entry"""

    __tablename__ = "transactions"

    id = Column(Integer, primary_key=True, autoincrement=True)
    type = Column(Text, nullable=False)
    amount_cents = Column(BigInteger, nullable=False)
    category = Column(Text, nullable=False, index=True)
    description = Column(Text, nullable=True)
    payment_method = Column(Text, nullable=True)
    transaction_date = Column(Date, nullable=False, index=True)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
    updated_at = Column(DateTime(timezone=True), nullable=True, onupdate=func.now())


class Category(Base):
    """Named income/expense category"""

    __tablename__ = "categories"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(Text, nullable=False, unique=True)
    icon = Column(Text, nullable=True)
    color = Column(Text, nullable=True)
    budget_limit_cents = Column(BigInteger, nullable=False, default=0)
    type = Column(Text, nullable=False, default="expense")
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())

    budgets = relationship("Budget", back_populates="category", cascade="all, delete-orphan")


class Budget(Base):
    """Spending limit for a category over a date window"""

    __tablename__ = "budgets"

    id = Column(Integer, primary_key=True, autoincrement=True)
    category_id = Column(Integer, ForeignKey("categories.id", ondelete="CASCADE"), nullable=False, index=True)
    name = Column(Text, nullable=False)
    amount_cents = Column(BigInteger, nullable=False)
    period = Column(Text, nullable=False, default="monthly")
    start_date = Column(Date, nullable=False)
    end_date = Column(Date, nullable=False)
    status = Column(Text, nullable=False, default="active")
    notes = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
    updated_at = Column(DateTime(timezone=True), nullable=True, onupdate=func.now())

    category = relationship("Category", back_populates="budgets")


class Borrower(Base):
    """Counterparty of an informal lending ledger"""

    __tablename__ = "borrowers"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(Text, nullable=False)
    contact = Column(Text, nullable=True)
    notes = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
    updated_at = Column(DateTime(timezone=True), nullable=True, onupdate=func.now())

    transactions = relationship(
        "LoanTransaction",
        back_populates="borrower",
        cascade="all, delete-orphan",
        order_by="LoanTransaction.transaction_date",
    )


class LoanTransaction(Base):
    """Money given to or received back from a borrower"""

    __tablename__ = "loan_transactions"

    id = Column(Integer, primary_key=True, autoincrement=True)
    borrower_id = Column(Integer, ForeignKey("borrowers.id", ondelete="CASCADE"), nullable=False, index=True)
    type = Column(Text, nullable=False)
    amount_cents = Column(BigInteger, nullable=False)
    interest_rate = Column(Float, nullable=False, default=0.0)
    transaction_date = Column(Date, nullable=False)
    due_date = Column(Date, nullable=True)
    description = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
    updated_at = Column(DateTime(timezone=True), nullable=True, onupdate=func.now())

    borrower = relationship("Borrower", back_populates="transactions")
