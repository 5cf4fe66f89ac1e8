"""
budgetbook/services/category.py

Read-only access to the fixed lookup tables seeded by database.create_tables().
"""

from typing import List

from sqlalchemy.orm import Session

from budgetbook.exceptions import ResourceNotFoundError
from budgetbook.models import TransactionCategory, TransactionOccurrenceType


def get_all_categories(db: Session) -> List[TransactionCategory]:
    return db.query(TransactionCategory).order_by(TransactionCategory.id).all()


def get_category(category_id: int, db: Session) -> TransactionCategory:
    category = db.get(TransactionCategory, category_id)
    if category is None:
        raise ResourceNotFoundError("No category found")
    return category


def get_all_occurrence_types(db: Session) -> List[TransactionOccurrenceType]:
    return db.query(TransactionOccurrenceType).order_by(TransactionOccurrenceType.id).all()
