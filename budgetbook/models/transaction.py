"""
budgetbook/models/transaction.py

Income and expense records plus the two lookup tables they reference:

1) Transaction (one money movement owned by a User)
2) TransactionCategory (e.g. "Salary", "Groceries")
3) TransactionOccurrenceType (how often it recurs: "Once", "Monthly", ...)

The sign of 'amount' decides the direction: positive is income, negative is expense.
"""

from datetime import datetime
from sqlalchemy import (
    Column,
    Integer,
    String,
    DateTime,
    Numeric,
    ForeignKey
)
from sqlalchemy.orm import relationship

from budgetbook.database import Base


class TransactionCategory(Base):
    __tablename__ = "transaction_categories"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, unique=True, nullable=False)

    transactions = relationship("Transaction", back_populates="category")

    def __repr__(self):
        return f"<TransactionCategory(id={self.id}, name={self.name})>"


class TransactionOccurrenceType(Base):
    __tablename__ = "transaction_occurrence_types"

    id = Column(Integer, primary_key=True, index=True)
    # Column name kept as the legacy schema spelled it
    name = Column("occurence_name", String, unique=True, nullable=False)

    transactions = relationship("Transaction", back_populates="occurrence_type")

    def __repr__(self):
        return f"<TransactionOccurrenceType(id={self.id}, name={self.name})>"


class Transaction(Base):
    """
    A single income (amount > 0) or expense (amount < 0) booked by a user.
    Category and occurrence type are optional lookups.
    """

    __tablename__ = "transactions"

    id = Column(Integer, primary_key=True, index=True)

    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)

    # USD-style amount, 2 decimal places
    amount = Column(Numeric(12, 2), nullable=False)

    description = Column(String, nullable=True)

    timestamp = Column(
        DateTime,
        default=datetime.utcnow,
        nullable=False,
        doc="When the transaction actually occurred (user-facing)."
    )

    category_id = Column(Integer, ForeignKey("transaction_categories.id"), nullable=True)
    occurrence_type_id = Column(Integer, ForeignKey("transaction_occurrence_types.id"), nullable=True)

    user = relationship("User", back_populates="transactions")
    category = relationship("TransactionCategory", back_populates="transactions")
    occurrence_type = relationship("TransactionOccurrenceType", back_populates="transactions")

    def __repr__(self):
        return (
            f"<Transaction(id={self.id}, user_id={self.user_id}, "
            f"amount={self.amount}, category_id={self.category_id})>"
        )
