# budgetbook/models/__init__.py

"""
Centralizes model imports so Base.metadata knows about every table
as soon as the models package is imported.
"""

from budgetbook.database import Base

from .user import User

from .transaction import Transaction, TransactionCategory, TransactionOccurrenceType
