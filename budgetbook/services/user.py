"""
budgetbook/services/user.py

Handles user-level operations (list, get, register, update, delete).
AccountDirectory is the one place the account rules are applied before
anything reaches the store:

 - usernames and emails are unique (checked here, backed by UNIQUE constraints)
 - passwords are hashed before a record is built from them
 - get/update/delete of a missing user fail with ResourceNotFoundError

Every failure is raised straight to the caller; nothing is retried or swallowed.
"""

import logging
from typing import List, Optional

from sqlalchemy.sql.elements import ColumnElement

from budgetbook.exceptions import BadParameterError, DuplicateEntryError, ResourceNotFoundError
from budgetbook.models import User
from budgetbook.repositories.user import UserStore
from budgetbook.schemas.page import PageRequest
from budgetbook.schemas.user import RegistrationCreate, UserRead, UserUpdate
from budgetbook.utils.hashing import CredentialHasher

logger = logging.getLogger(__name__)

# No user ever gets this id, so "id != INVALID_USER_ID" matches every row
INVALID_USER_ID = -1


def match_all_users() -> ColumnElement[bool]:
    return User.id != INVALID_USER_ID


class AccountDirectory:
    def __init__(self, store: UserStore, hasher: CredentialHasher):
        self.store = store
        self.hasher = hasher

    def list_accounts(
        self,
        predicate: Optional[ColumnElement[bool]],
        page: PageRequest,
    ) -> List[UserRead]:
        """
        Return one page of users matching 'predicate'.
        A missing predicate means every user; the store always receives a real clause.
        """
        if predicate is None:
            predicate = match_all_users()
        result = self.store.find_all(predicate, page)
        return [UserRead.model_validate(user) for user in result.to_list()]

    def get_account(self, user_id: int) -> UserRead:
        user = self.store.find_by_id(user_id)
        if user is None:
            raise ResourceNotFoundError("No user found")
        return UserRead.model_validate(user)

    def delete_account(self, user_id: int) -> bool:
        """
        Delete a user by ID. The existence check is its own store call so a
        missing user gets a precise message and delete_by_id is never issued.
        """
        if not self.store.exists_by_id(user_id):
            logger.warning(f"Delete rejected: user {user_id} does not exist")
            raise ResourceNotFoundError("User can not be deleted. The given user does not exist.")
        self.store.delete_by_id(user_id)
        logger.info(f"Deleted user {user_id}")
        return True

    def add_account(self, registration: Optional[RegistrationCreate]) -> UserRead:
        """
        Register a new user.

        Checks run in a fixed order, username then email, and both before
        hashing, so a duplicate never costs a bcrypt round or a write.
        The plaintext password on 'registration' is overwritten with its hash.

        Raises:
            BadParameterError: registration is None.
            DuplicateEntryError: username or email is already taken.
        """
        if registration is None:
            raise BadParameterError("The registration is null")

        if self.store.find_by_username(registration.username) is not None:
            logger.warning(f"Registration rejected: username '{registration.username}' taken")
            raise DuplicateEntryError("Username already exists")

        if self.store.find_by_email(registration.email) is not None:
            logger.warning(f"Registration rejected: email '{registration.email}' taken")
            raise DuplicateEntryError("Email already exists")

        registration.password = self.hasher.encode(registration.password)

        saved = self.store.save(self._to_user(registration))
        logger.info(f"Registered user {saved.id} ({saved.username})")
        return UserRead.model_validate(saved)

    def update_account(self, update: Optional[UserUpdate]) -> UserRead:
        """
        Apply the fields set on 'update' to the user it names.
        Uniqueness of a changed username/email is left to the store's constraints.
        """
        if update is None:
            raise BadParameterError("User is null")

        user = self.store.find_by_id(update.id)
        if user is None:
            raise ResourceNotFoundError("No user found")

        if update.username is not None:
            user.username = update.username
        if update.email is not None:
            user.email = update.email
        if update.password is not None:
            user.password = self.hasher.encode(update.password)

        saved = self.store.save(user)
        logger.info(f"Updated user {saved.id}")
        return UserRead.model_validate(saved)

    @staticmethod
    def _to_user(registration: RegistrationCreate) -> User:
        return User(
            username=registration.username,
            email=registration.email,
            password=registration.password,
        )
