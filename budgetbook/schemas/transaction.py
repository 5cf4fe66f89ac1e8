"""
budgetbook/schemas/transaction.py

Pydantic v2 schemas for income/expense transactions and their lookups.

- TransactionCreate: amount (non-zero, max 2 decimals), owner, optional lookups
- TransactionUpdate: partial update, every field optional
- TransactionRead: output, includes 'id'
- CategoryRead / OccurrenceTypeRead: lookup rows
"""

from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import Optional
from datetime import datetime, timezone
from decimal import Decimal

# -------------------------------------------------
# CUSTOM VALIDATORS
# -------------------------------------------------

def validate_money_decimal(value: Decimal) -> Decimal:
    """
    Enforces max 2 decimal places and max 12 total digits, matching
    the Numeric(12, 2) column. Zero is rejected: every transaction
    is either income or an expense.
    """
    if value == 0:
        raise ValueError("Amount cannot be zero.")
    s = str(value)
    integer_part, _, frac_part = s.partition('.')
    if len(frac_part) > 2:
        raise ValueError("Amount cannot exceed 2 decimal places.")
    if len(integer_part.replace('-', '')) > 10:  # 10 + 2 = 12
        raise ValueError("Amount cannot exceed 12 total digits.")
    return value


def to_naive_utc(v: datetime | None) -> datetime | None:
    """
    Stores timestamps as naive UTC so SQLite round-trips them unchanged.
    """
    if v is None or v.tzinfo is None:
        return v
    return v.astimezone(timezone.utc).replace(tzinfo=None)

# -------------------------------------------------
# TRANSACTION SCHEMAS
# -------------------------------------------------

class TransactionBase(BaseModel):
    amount: Decimal = Field(description="Positive for income, negative for expenses.")
    description: Optional[str] = Field(default=None, max_length=500)
    timestamp: Optional[datetime] = None
    category_id: Optional[int] = None
    occurrence_type_id: Optional[int] = None

    @field_validator("amount")
    @classmethod
    def validate_amount(cls, v: Decimal) -> Decimal:
        return validate_money_decimal(v)

    @field_validator("timestamp")
    @classmethod
    def force_utc_timestamp(cls, v: datetime | None) -> datetime | None:
        return to_naive_utc(v)


class TransactionCreate(TransactionBase):
    """
    Schema for booking a new transaction. 'user_id' names the owner.
    """
    user_id: int


class TransactionUpdate(BaseModel):
    """
    Schema for partial updates. Only fields that were sent are applied.
    """
    amount: Optional[Decimal] = None
    description: Optional[str] = Field(default=None, max_length=500)
    timestamp: Optional[datetime] = None
    category_id: Optional[int] = None
    occurrence_type_id: Optional[int] = None

    @field_validator("amount")
    @classmethod
    def validate_amount(cls, v: Decimal | None) -> Decimal | None:
        if v is not None:
            return validate_money_decimal(v)
        return v

    @field_validator("timestamp")
    @classmethod
    def force_utc_timestamp(cls, v: datetime | None) -> datetime | None:
        return to_naive_utc(v)


class TransactionRead(TransactionBase):
    id: int
    user_id: int
    timestamp: datetime

    @field_validator("amount")
    @classmethod
    def validate_amount(cls, v: Decimal) -> Decimal:
        # Stored rows were validated on the way in
        return v

    model_config = ConfigDict(from_attributes=True)

# -------------------------------------------------
# LOOKUP SCHEMAS
# -------------------------------------------------

class CategoryRead(BaseModel):
    id: int
    name: str

    model_config = ConfigDict(from_attributes=True)


class OccurrenceTypeRead(BaseModel):
    id: int
    name: str

    model_config = ConfigDict(from_attributes=True)
