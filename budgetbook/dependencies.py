"""
budgetbook/dependencies.py

FastAPI dependency providers that wire services to a per-request DB session.
Tests swap any of these out through app.dependency_overrides.
"""

import os

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from budgetbook.database import get_db
from budgetbook.exceptions import UnauthorizedActionError
from budgetbook.models import User
from budgetbook.repositories.user import SqlAlchemyUserStore, UserStore
from budgetbook.services.auth import AuthenticateService
from budgetbook.services.user import AccountDirectory
from budgetbook.utils.hashing import BcryptHasher, CredentialHasher

BCRYPT_ROUNDS = int(os.getenv("BCRYPT_ROUNDS", "12"))

# auto_error=False so a missing header goes through our own 401 handler
bearer_scheme = HTTPBearer(auto_error=False)


def get_hasher() -> CredentialHasher:
    return BcryptHasher(rounds=BCRYPT_ROUNDS)


def get_user_store(db: Session = Depends(get_db)) -> UserStore:
    return SqlAlchemyUserStore(db)


def get_account_directory(
    store: UserStore = Depends(get_user_store),
    hasher: CredentialHasher = Depends(get_hasher),
) -> AccountDirectory:
    return AccountDirectory(store, hasher)


def get_auth_service(
    store: UserStore = Depends(get_user_store),
    hasher: CredentialHasher = Depends(get_hasher),
) -> AuthenticateService:
    return AuthenticateService(store, hasher)


def get_current_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    auth: AuthenticateService = Depends(get_auth_service),
) -> User:
    """
    Resolve the caller from an 'Authorization: Bearer <jwt>' header.
    Raises 401 if the header is missing or the token doesn't check out.
    """
    if credentials is None:
        raise UnauthorizedActionError("Not authenticated")
    return auth.resolve_user(credentials.credentials)
