"""
budgetbook/routers/transaction.py

Router for Transaction endpoints. Every route requires a bearer token.
Positive amounts are income, negative amounts are expenses; the
/income and /expenses routes split the list on that sign.
"""

from fastapi import APIRouter, Depends
from typing import List
from sqlalchemy.orm import Session

from budgetbook.schemas.transaction import (
    TransactionCreate,
    TransactionUpdate,
    TransactionRead
)
from budgetbook.services import transaction as tx_service
from budgetbook.database import get_db
from budgetbook.dependencies import get_current_user

router = APIRouter(tags=["transactions"], dependencies=[Depends(get_current_user)])


@router.get("/", response_model=List[TransactionRead])
def list_transactions(db: Session = Depends(get_db)):
    """
    List all transactions, newest first.
    """
    return tx_service.get_all_transactions(db)


@router.get("/income", response_model=List[TransactionRead])
def list_income(db: Session = Depends(get_db)):
    return tx_service.get_all_income(db)


@router.get("/expenses", response_model=List[TransactionRead])
def list_expenses(db: Session = Depends(get_db)):
    return tx_service.get_all_expenses(db)


@router.get("/user/{user_id}", response_model=List[TransactionRead])
def list_user_transactions(user_id: int, db: Session = Depends(get_db)):
    return tx_service.get_all_transactions_by_user_id(user_id, db)


@router.get("/user/{user_id}/income", response_model=List[TransactionRead])
def list_user_income(user_id: int, db: Session = Depends(get_db)):
    return tx_service.get_all_user_income(user_id, db)


@router.get("/user/{user_id}/expenses", response_model=List[TransactionRead])
def list_user_expenses(user_id: int, db: Session = Depends(get_db)):
    return tx_service.get_all_user_expenses(user_id, db)


@router.get("/{transaction_id}", response_model=TransactionRead)
def get_transaction(transaction_id: int, db: Session = Depends(get_db)):
    return tx_service.get_transaction(transaction_id, db)


@router.post("/", response_model=TransactionRead, status_code=201)
def create_transaction(tx: TransactionCreate, db: Session = Depends(get_db)):
    """
    Book a new transaction. 404 if the user, category or
    occurrence type referenced in the body doesn't exist.
    """
    return tx_service.insert_transaction(tx, db)


@router.put("/{transaction_id}", response_model=TransactionRead)
def update_transaction(transaction_id: int, tx: TransactionUpdate, db: Session = Depends(get_db)):
    """
    Partially update a transaction; only fields present in the body change.
    """
    return tx_service.update_transaction(transaction_id, tx, db)


@router.delete("/{transaction_id}", status_code=204)
def delete_transaction(transaction_id: int, db: Session = Depends(get_db)):
    tx_service.delete_transaction(transaction_id, db)
