"""
budgetbook/schemas/user.py

Defines the Pydantic schemas for user registration, update, and read.

The raw 'password' on RegistrationCreate is replaced by its hash inside
AccountDirectory.add_account before the record is built, so plaintext never
reaches the store. UserRead deliberately has no password field at all.
"""

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator
from typing import Optional

from budgetbook.utils.hashing import BCRYPT_MAX_BYTES


def _validate_username(value: str) -> str:
    value = value.strip()
    if not value:
        raise ValueError("username must not be blank")
    return value


def _validate_password(value: str) -> str:
    # bcrypt only reads the first 72 bytes; reject instead of truncating
    if len(value.encode("utf-8")) > BCRYPT_MAX_BYTES:
        raise ValueError(f"password cannot exceed {BCRYPT_MAX_BYTES} bytes")
    return value


class UserBase(BaseModel):
    """
    Shared user fields. Both are unique across all users.
    Emails are lower-cased so uniqueness ignores case.
    """
    username: str = Field(max_length=255)
    email: EmailStr

    @field_validator("username")
    @classmethod
    def username_not_blank(cls, v):
        return _validate_username(v)

    @field_validator("email")
    @classmethod
    def email_lower_case(cls, v):
        return v.lower()


class RegistrationCreate(UserBase):
    """
    For registering a new user. The user supplies a raw 'password'
    which will be hashed by the service layer before storing.
    """
    password: str = Field(min_length=1)

    @field_validator("password")
    @classmethod
    def password_fits_bcrypt(cls, v):
        return _validate_password(v)


class UserUpdate(BaseModel):
    """
    Fields for updating an existing user record. 'id' names the target;
    everything else is optional and only applied when provided.
    If 'password' is provided, it will be hashed before saving.
    """
    id: int
    username: Optional[str] = Field(default=None, max_length=255)
    email: Optional[EmailStr] = None
    password: Optional[str] = Field(default=None, min_length=1)

    @field_validator("username")
    @classmethod
    def username_not_blank(cls, v):
        return v if v is None else _validate_username(v)

    @field_validator("email")
    @classmethod
    def email_lower_case(cls, v):
        return v if v is None else v.lower()

    @field_validator("password")
    @classmethod
    def password_fits_bcrypt(cls, v):
        return v if v is None else _validate_password(v)


class UserRead(UserBase):
    """
    Schema for returning user data to clients.
    Includes the DB 'id' but excludes the hashed password.
    """
    model_config = ConfigDict(from_attributes=True)

    id: int
