"""
budgetbook/services/transaction.py

Manages booking, editing, deleting and listing income/expense Transactions.
The sign of 'amount' decides the direction: > 0 is income, < 0 is expense.

Referenced rows (owner, category, occurrence type) are checked before
a transaction is written, so a dangling id fails with ResourceNotFoundError
instead of surfacing as a foreign-key error from the database.
"""

import logging
from typing import List, Optional

from sqlalchemy.orm import Session

from budgetbook.exceptions import BadParameterError, ResourceNotFoundError
from budgetbook.models import Transaction, TransactionCategory, TransactionOccurrenceType, User
from budgetbook.schemas.transaction import TransactionCreate, TransactionUpdate

logger = logging.getLogger(__name__)


def _ordered(query):
    return query.order_by(Transaction.timestamp.desc(), Transaction.id.desc()).all()


def get_all_transactions(db: Session) -> List[Transaction]:
    """
    Every transaction in the system, newest first.
    """
    return _ordered(db.query(Transaction))


def get_all_transactions_by_user_id(user_id: int, db: Session) -> List[Transaction]:
    return _ordered(db.query(Transaction).filter(Transaction.user_id == user_id))


def get_all_income(db: Session) -> List[Transaction]:
    return _ordered(db.query(Transaction).filter(Transaction.amount > 0))


def get_all_expenses(db: Session) -> List[Transaction]:
    return _ordered(db.query(Transaction).filter(Transaction.amount < 0))


def get_all_user_income(user_id: int, db: Session) -> List[Transaction]:
    return _ordered(
        db.query(Transaction).filter(Transaction.user_id == user_id, Transaction.amount > 0)
    )


def get_all_user_expenses(user_id: int, db: Session) -> List[Transaction]:
    return _ordered(
        db.query(Transaction).filter(Transaction.user_id == user_id, Transaction.amount < 0)
    )


def get_transaction(transaction_id: int, db: Session) -> Transaction:
    """
    Return the Transaction with the specified ID.
    Raises ResourceNotFoundError if it doesn't exist.
    """
    tx = db.get(Transaction, transaction_id)
    if tx is None:
        raise ResourceNotFoundError("No transaction found")
    return tx


def _check_references(
    db: Session,
    user_id: Optional[int] = None,
    category_id: Optional[int] = None,
    occurrence_type_id: Optional[int] = None,
) -> None:
    if user_id is not None and db.get(User, user_id) is None:
        raise ResourceNotFoundError("No user found")
    if category_id is not None and db.get(TransactionCategory, category_id) is None:
        raise ResourceNotFoundError("No category found")
    if occurrence_type_id is not None and db.get(TransactionOccurrenceType, occurrence_type_id) is None:
        raise ResourceNotFoundError("No occurrence type found")


def insert_transaction(tx_data: Optional[TransactionCreate], db: Session) -> Transaction:
    """
    Book a new transaction for an existing user.

    Raises:
        BadParameterError: tx_data is None.
        ResourceNotFoundError: the user, category or occurrence type doesn't exist.
    """
    if tx_data is None:
        raise BadParameterError("The transaction is null")

    _check_references(db, tx_data.user_id, tx_data.category_id, tx_data.occurrence_type_id)

    values = tx_data.model_dump(exclude_none=True)
    new_tx = Transaction(**values)
    db.add(new_tx)
    db.commit()
    db.refresh(new_tx)
    logger.info(f"Booked transaction {new_tx.id} for user {new_tx.user_id}: {new_tx.amount}")
    return new_tx


def update_transaction(transaction_id: int, tx_data: Optional[TransactionUpdate], db: Session) -> Transaction:
    """
    Apply the fields the caller actually sent. Unsent fields stay as they are;
    an explicit null clears 'description', 'category_id' or 'occurrence_type_id'.
    """
    if tx_data is None:
        raise BadParameterError("The transaction is null")

    tx = get_transaction(transaction_id, db)
    changes = tx_data.model_dump(exclude_unset=True)

    # amount and timestamp are NOT NULL; a null for either means "leave as is"
    for required in ("amount", "timestamp"):
        if required in changes and changes[required] is None:
            changes.pop(required)

    _check_references(
        db,
        category_id=changes.get("category_id"),
        occurrence_type_id=changes.get("occurrence_type_id"),
    )

    for field, value in changes.items():
        setattr(tx, field, value)

    db.commit()
    db.refresh(tx)
    logger.info(f"Updated transaction {tx.id}: {sorted(changes)}")
    return tx


def delete_transaction(transaction_id: int, db: Session) -> bool:
    tx = db.get(Transaction, transaction_id)
    if tx is None:
        raise ResourceNotFoundError(
            "Transaction can not be deleted. The given transaction does not exist."
        )
    db.delete(tx)
    db.commit()
    logger.info(f"Deleted transaction {transaction_id}")
    return True
