"""
budgetbook/services/auth.py

Token-based authentication: exchange username/password for a JWT,
and check a JWT that a client presents later.
"""

import logging

from jose import JWTError

from budgetbook.exceptions import BadCredentialsError, ResourceNotFoundError, UnauthorizedActionError
from budgetbook.repositories.user import UserStore
from budgetbook.schemas.auth import CredentialsIn, TokenRead
from budgetbook.utils.auth import create_access_token, verify_access_token
from budgetbook.utils.hashing import CredentialHasher

logger = logging.getLogger(__name__)


class AuthenticateService:
    def __init__(self, store: UserStore, hasher: CredentialHasher):
        self.store = store
        self.hasher = hasher

    def authenticate_user(self, credentials: CredentialsIn) -> TokenRead:
        """
        Authenticate the user and hand back a bearer token whose subject is the username.
        """
        user = self.store.find_by_username(credentials.username)
        if user is None:
            raise ResourceNotFoundError("User not found")
        if not self.hasher.valid(credentials.password, user.password):
            logger.warning(f"Failed login for '{credentials.username}'")
            raise BadCredentialsError("Invalid login information")
        logger.info(f"User '{user.username}' logged in")
        return TokenRead(access_token=create_access_token({"sub": user.username}))

    def authenticate_token(self, token: str) -> bool:
        try:
            verify_access_token(token)
        except JWTError:
            raise UnauthorizedActionError("Token invalid")
        return True

    def resolve_user(self, token: str):
        """
        Return the stored user a valid token belongs to.
        A token for a user that has since been deleted is treated as invalid.
        """
        try:
            username = verify_access_token(token)
        except JWTError:
            raise UnauthorizedActionError("Token invalid")
        user = self.store.find_by_username(username)
        if user is None:
            raise UnauthorizedActionError("Token invalid")
        return user
