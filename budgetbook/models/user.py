"""
budgetbook/models/user.py

Represents a registered user of BudgetBook. Each user owns many Transactions.
Username and email are both unique at the storage layer, which is what finally
guarantees uniqueness when two registrations race past the service-level checks.
"""

from __future__ import annotations
from typing import List, TYPE_CHECKING
from sqlalchemy import Integer, String
from sqlalchemy.orm import relationship, Mapped, mapped_column
from budgetbook.database import Base

if TYPE_CHECKING:
    from budgetbook.models.transaction import Transaction

class User(Base):
    """
    The main user table. Each user has:
      - An ID (PK, never reused)
      - A unique username
      - A unique email
      - A bcrypt-hashed password
      - A list of transactions (income and expenses)
    """

    __tablename__ = 'users'
    # AUTOINCREMENT keeps SQLite from handing out the id of a deleted row again
    __table_args__ = {"sqlite_autoincrement": True}

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)

    username: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)

    email: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)

    # Only ever holds a hash produced by CredentialHasher.encode
    password: Mapped[str] = mapped_column(String(255), nullable=False)

    transactions: Mapped[List[Transaction]] = relationship(
        "Transaction",
        back_populates="user",
        cascade="all, delete-orphan",
        doc="All income and expense records owned by this user."
    )

    def __repr__(self) -> str:
        return f"<User(id={self.id}, username={self.username}, email={self.email})>"
