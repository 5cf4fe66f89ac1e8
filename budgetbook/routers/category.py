"""
budgetbook/routers/category.py

Read-only endpoints for the transaction lookup tables.
"""

from fastapi import APIRouter, Depends
from typing import List
from sqlalchemy.orm import Session

from budgetbook.database import get_db
from budgetbook.dependencies import get_current_user
from budgetbook.schemas.transaction import CategoryRead, OccurrenceTypeRead
from budgetbook.services import category as category_service

router = APIRouter(tags=["categories"], dependencies=[Depends(get_current_user)])


@router.get("/", response_model=List[CategoryRead])
def list_categories(db: Session = Depends(get_db)):
    return category_service.get_all_categories(db)


@router.get("/occurrence-types", response_model=List[OccurrenceTypeRead])
def list_occurrence_types(db: Session = Depends(get_db)):
    return category_service.get_all_occurrence_types(db)


@router.get("/{category_id}", response_model=CategoryRead)
def get_category(category_id: int, db: Session = Depends(get_db)):
    return category_service.get_category(category_id, db)
