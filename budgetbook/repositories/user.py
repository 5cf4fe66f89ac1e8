"""
budgetbook/repositories/user.py

UserStore is the narrow persistence interface AccountDirectory talks to.
SqlAlchemyUserStore implements it on top of one SQLAlchemy Session.

Each call is a single lookup or a single mutation with its own commit;
combining calls into a larger unit of work is the caller's business.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Optional

from sqlalchemy import exists, func, select
from sqlalchemy.orm import Session
from sqlalchemy.sql.elements import ColumnElement

from budgetbook.models import User
from budgetbook.schemas.page import Page, PageRequest

logger = logging.getLogger(__name__)


class UserStore(ABC):
    @abstractmethod
    def find_by_id(self, user_id: int) -> Optional[User]:
        ...

    @abstractmethod
    def find_by_username(self, username: str) -> Optional[User]:
        ...

    @abstractmethod
    def find_by_email(self, email: str) -> Optional[User]:
        ...

    @abstractmethod
    def exists_by_id(self, user_id: int) -> bool:
        ...

    @abstractmethod
    def delete_by_id(self, user_id: int) -> None:
        ...

    @abstractmethod
    def save(self, user: User) -> User:
        """Insert a new user or write back changes to a loaded one."""

    @abstractmethod
    def find_all(self, predicate: ColumnElement[bool], page: PageRequest) -> Page[User]:
        """Return one page of users matching 'predicate', ordered by id."""


class SqlAlchemyUserStore(UserStore):
    def __init__(self, db: Session):
        self.db = db

    def find_by_id(self, user_id: int) -> Optional[User]:
        return self.db.get(User, user_id)

    def find_by_username(self, username: str) -> Optional[User]:
        return self.db.scalars(select(User).where(User.username == username)).first()

    def find_by_email(self, email: str) -> Optional[User]:
        return self.db.scalars(select(User).where(User.email == email)).first()

    def exists_by_id(self, user_id: int) -> bool:
        return bool(self.db.scalar(select(exists().where(User.id == user_id))))

    def delete_by_id(self, user_id: int) -> None:
        user = self.db.get(User, user_id)
        if user is None:
            return
        # ORM delete rather than a bulk DELETE so the transactions cascade runs
        self.db.delete(user)
        try:
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise

    def save(self, user: User) -> User:
        self.db.add(user)
        try:
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
        self.db.refresh(user)
        return user

    def find_all(self, predicate: ColumnElement[bool], page: PageRequest) -> Page[User]:
        total = self.db.scalar(select(func.count()).select_from(User).where(predicate))
        items = self.db.scalars(
            select(User)
            .where(predicate)
            .order_by(User.id)
            .offset(page.offset)
            .limit(page.size)
        ).all()
        logger.debug(f"find_all matched {total} users, returning page {page.page} ({len(items)} rows)")
        return Page(items=list(items), total=total, page=page.page, size=page.size)
