# FILE: budgetbook/routers/user.py

from fastapi import APIRouter, Depends, Query
from typing import List, Optional
from sqlalchemy import and_

from budgetbook.dependencies import get_account_directory, get_current_user
from budgetbook.models import User
from budgetbook.schemas.page import DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE, PageRequest
from budgetbook.schemas.user import RegistrationCreate, UserRead, UserUpdate
from budgetbook.services.user import AccountDirectory

router = APIRouter(tags=["users"])


def build_user_filter(username: Optional[str], email: Optional[str]):
    """
    Turn the optional query parameters into one SQL clause, or None when
    neither was given (the directory then matches every user).
    """
    clauses = []
    if username:
        clauses.append(User.username.ilike(f"%{username}%"))
    if email:
        clauses.append(User.email.ilike(f"%{email}%"))
    if not clauses:
        return None
    return and_(*clauses)


@router.post("/register", response_model=UserRead, status_code=201)
def register_user(
    registration: RegistrationCreate,
    directory: AccountDirectory = Depends(get_account_directory),
):
    """
    Register a new user: POST /api/users/register

    - 409 if the username or email is taken (username is checked first).
    - The password is hashed before anything is stored.
    """
    return directory.add_account(registration)


@router.get("/", response_model=List[UserRead])
def list_users(
    username: Optional[str] = Query(default=None, description="Substring match on username"),
    email: Optional[str] = Query(default=None, description="Substring match on email"),
    page: int = Query(default=0, ge=0),
    size: int = Query(default=DEFAULT_PAGE_SIZE, ge=1, le=MAX_PAGE_SIZE),
    directory: AccountDirectory = Depends(get_account_directory),
    current_user: User = Depends(get_current_user),
):
    predicate = build_user_filter(username, email)
    return directory.list_accounts(predicate, PageRequest(page=page, size=size))


@router.get("/{user_id}", response_model=UserRead)
def get_user(
    user_id: int,
    directory: AccountDirectory = Depends(get_account_directory),
    current_user: User = Depends(get_current_user),
):
    """
    Retrieve a specific user by ID, or 404 "No user found".
    """
    return directory.get_account(user_id)


@router.put("/", response_model=UserRead)
def update_user(
    user_data: UserUpdate,
    directory: AccountDirectory = Depends(get_account_directory),
    current_user: User = Depends(get_current_user),
):
    """
    Update an existing user: PUT /api/users/

    The body carries the target 'id' plus any of username/email/password.
    A new password is hashed before it's saved.
    """
    return directory.update_account(user_data)


@router.delete("/{user_id}", status_code=204)
def delete_user(
    user_id: int,
    directory: AccountDirectory = Depends(get_account_directory),
    current_user: User = Depends(get_current_user),
):
    """
    Delete a user by ID: DELETE /api/users/{user_id}

    - Returns 204 No Content on success.
    - 404 if the user doesn't exist.
    """
    directory.delete_account(user_id)
