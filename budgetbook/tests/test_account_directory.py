"""
budgetbook/tests/test_account_directory.py

Unit tests for AccountDirectory against in-memory doubles of the store
and the hasher. Both doubles record every call so the tests can assert
which store operations ran, and in what order.

Usage:
    pytest budgetbook/tests/test_account_directory.py -v
"""

import pytest

from budgetbook.exceptions import BadParameterError, DuplicateEntryError, ResourceNotFoundError
from budgetbook.models import User
from budgetbook.repositories.user import UserStore
from budgetbook.schemas.page import Page, PageRequest
from budgetbook.schemas.user import RegistrationCreate, UserRead, UserUpdate
from budgetbook.services.user import INVALID_USER_ID, AccountDirectory
from budgetbook.utils.hashing import CredentialHasher

USERNAME = "test"
EMAIL = "test@test.nl"
PASSWORD = "test"
ENCODED_PASSWORD = "encodedPassword"


class RecordingHasher(CredentialHasher):
    def __init__(self):
        self.calls = []

    def encode(self, plaintext: str) -> str:
        self.calls.append(("encode", plaintext))
        return ENCODED_PASSWORD

    def valid(self, plaintext: str, hashed: str) -> bool:
        self.calls.append(("valid", plaintext, hashed))
        return hashed == ENCODED_PASSWORD


class InMemoryUserStore(UserStore):
    def __init__(self):
        self.users = {}
        self.calls = []
        self._next_id = 1

    def add(self, username, email, password=ENCODED_PASSWORD) -> User:
        user = User(id=self._next_id, username=username, email=email, password=password)
        self.users[user.id] = user
        self._next_id += 1
        return user

    def find_by_id(self, user_id):
        self.calls.append(("find_by_id", user_id))
        return self.users.get(user_id)

    def find_by_username(self, username):
        self.calls.append(("find_by_username", username))
        return next((u for u in self.users.values() if u.username == username), None)

    def find_by_email(self, email):
        self.calls.append(("find_by_email", email))
        return next((u for u in self.users.values() if u.email == email), None)

    def exists_by_id(self, user_id):
        self.calls.append(("exists_by_id", user_id))
        return user_id in self.users

    def delete_by_id(self, user_id):
        self.calls.append(("delete_by_id", user_id))
        self.users.pop(user_id, None)

    def save(self, user):
        self.calls.append(("save", user))
        if user.id is None:
            user.id = self._next_id
            self._next_id += 1
        self.users[user.id] = user
        return user

    def find_all(self, predicate, page):
        self.calls.append(("find_all", predicate, page))
        items = sorted(self.users.values(), key=lambda u: u.id)
        return Page(items=items[page.offset:page.offset + page.size], total=len(items),
                    page=page.page, size=page.size)

    def call_names(self):
        return [call[0] for call in self.calls]


@pytest.fixture
def store():
    return InMemoryUserStore()


@pytest.fixture
def hasher():
    return RecordingHasher()


@pytest.fixture
def directory(store, hasher):
    return AccountDirectory(store, hasher)


def registration(username=USERNAME, email=EMAIL, password=PASSWORD):
    return RegistrationCreate(username=username, email=email, password=password)


# =============================================================================
# list_accounts
# =============================================================================

class TestListAccounts:
    def test_missing_predicate_becomes_match_all_clause(self, directory, store):
        directory.list_accounts(None, PageRequest())

        _, predicate, _ = store.calls[0]
        assert predicate is not None
        assert predicate.compare(User.id != INVALID_USER_ID)

    def test_given_predicate_is_passed_through(self, directory, store):
        predicate = User.username == "alice"
        page = PageRequest(page=2, size=5)

        directory.list_accounts(predicate, page)

        assert store.calls == [("find_all", predicate, page)]

    def test_returns_projections_without_password(self, directory, store):
        store.add("alice", "alice@example.com")
        store.add("bob", "bob@example.com")

        result = directory.list_accounts(None, PageRequest())

        assert [u.username for u in result] == ["alice", "bob"]
        assert all(isinstance(u, UserRead) for u in result)
        assert "password" not in result[0].model_dump()

    def test_respects_page(self, directory, store):
        for i in range(5):
            store.add(f"user{i}", f"user{i}@example.com")

        result = directory.list_accounts(None, PageRequest(page=1, size=2))

        assert [u.username for u in result] == ["user2", "user3"]


# =============================================================================
# get_account
# =============================================================================

class TestGetAccount:
    def test_returns_user(self, directory, store):
        user = store.add(USERNAME, EMAIL)

        result = directory.get_account(user.id)

        assert result == UserRead(id=user.id, username=USERNAME, email=EMAIL)
        assert store.calls == [("find_by_id", user.id)]

    def test_missing_user_raises_not_found(self, directory):
        with pytest.raises(ResourceNotFoundError) as exc_info:
            directory.get_account(1)
        assert exc_info.value.message == "No user found"


# =============================================================================
# delete_account
# =============================================================================

class TestDeleteAccount:
    def test_existing_user_checks_then_deletes(self, directory, store):
        user = store.add(USERNAME, EMAIL)

        assert directory.delete_account(user.id) is True
        assert store.calls == [("exists_by_id", user.id), ("delete_by_id", user.id)]
        assert user.id not in store.users

    def test_missing_user_never_calls_delete(self, directory, store):
        with pytest.raises(ResourceNotFoundError) as exc_info:
            directory.delete_account(1)

        assert str(exc_info.value) == "User can not be deleted. The given user does not exist."
        assert store.call_names() == ["exists_by_id"]


# =============================================================================
# add_account
# =============================================================================

class TestAddAccount:
    def test_null_registration_is_bad_parameter(self, directory, store, hasher):
        with pytest.raises(BadParameterError) as exc_info:
            directory.add_account(None)

        assert exc_info.value.message == "The registration is null"
        assert store.calls == []
        assert hasher.calls == []

    def test_duplicate_username(self, directory, store, hasher):
        store.add(USERNAME, "other@test.nl")

        with pytest.raises(DuplicateEntryError) as exc_info:
            directory.add_account(registration())

        assert exc_info.value.message == "Username already exists"
        assert store.call_names() == ["find_by_username"]
        assert hasher.calls == []

    def test_duplicate_username_wins_over_duplicate_email(self, directory, store):
        store.add(USERNAME, EMAIL)

        with pytest.raises(DuplicateEntryError) as exc_info:
            directory.add_account(registration())

        assert exc_info.value.message == "Username already exists"

    def test_duplicate_email(self, directory, store, hasher):
        store.add("someone", EMAIL)

        with pytest.raises(DuplicateEntryError) as exc_info:
            directory.add_account(registration())

        assert exc_info.value.message == "Email already exists"
        assert store.call_names() == ["find_by_username", "find_by_email"]
        assert hasher.calls == []

    def test_hashes_password_before_saving(self, directory, store, hasher):
        request = registration()

        result = directory.add_account(request)

        assert hasher.calls == [("encode", PASSWORD)]
        assert request.password == ENCODED_PASSWORD
        assert store.call_names() == ["find_by_username", "find_by_email", "save"]
        saved = store.users[result.id]
        assert saved.password == ENCODED_PASSWORD
        assert saved.password != PASSWORD

    def test_returns_saved_projection(self, directory):
        result = directory.add_account(registration())

        assert result.id is not None
        assert result.username == USERNAME
        assert result.email == EMAIL


# =============================================================================
# update_account
# =============================================================================

class TestUpdateAccount:
    def test_null_update_is_bad_parameter(self, directory, store):
        with pytest.raises(BadParameterError) as exc_info:
            directory.update_account(None)

        assert exc_info.value.message == "User is null"
        assert store.calls == []

    def test_missing_user_raises_not_found(self, directory, store):
        with pytest.raises(ResourceNotFoundError) as exc_info:
            directory.update_account(UserUpdate(id=-1, username="ghost"))

        assert exc_info.value.message == "No user found"
        assert store.call_names() == ["find_by_id"]

    def test_applies_given_fields_and_saves(self, directory, store, hasher):
        user = store.add(USERNAME, EMAIL)

        result = directory.update_account(UserUpdate(id=user.id, username="renamed"))

        assert result.username == "renamed"
        assert result.email == EMAIL
        assert store.call_names() == ["find_by_id", "save"]
        assert hasher.calls == []

    def test_new_password_is_hashed(self, directory, store, hasher):
        user = store.add(USERNAME, EMAIL, password="old-hash")

        directory.update_account(UserUpdate(id=user.id, password="new-secret"))

        assert hasher.calls == [("encode", "new-secret")]
        assert store.users[user.id].password == ENCODED_PASSWORD

    def test_does_not_recheck_uniqueness(self, directory, store):
        store.add("taken", "taken@example.com")
        user = store.add(USERNAME, EMAIL)

        directory.update_account(UserUpdate(id=user.id, username="taken"))

        assert "find_by_username" not in store.call_names()
