#!/usr/bin/env python
"""
budgetbook/database.py

Sets up the SQLAlchemy database connection, session management, and helper functions for creating tables.
Every model (User, Transaction, TransactionCategory, TransactionOccurrenceType) registers itself
with the shared declarative Base defined here.

Key Features:
- Loads environment variables from .env at project root
- Handles default SQLite or custom DB URLs
- Provides get_db() for FastAPI dependency injection
- Seeds the fixed transaction categories and occurrence types with an idempotent UPSERT approach
- Requires user registration via /api/users/register (no default user created)

Security & Compliance Notes:
- users.username and users.email carry UNIQUE constraints; the account service checks
  them first, but only the store can close the race between two concurrent registrations
- Passwords are hashed with bcrypt before they ever reach this layer
"""

import os
import logging
from dotenv import load_dotenv
from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker
from sqlalchemy.exc import IntegrityError

# ------------------------------------------------------------------
# 0) Logging Setup
# ------------------------------------------------------------------
logging.basicConfig(level=os.getenv("LOG_LEVEL", "INFO"))
logger = logging.getLogger(__name__)

# ------------------------------------------------------------------
# 1) Environment Setup
# ------------------------------------------------------------------
BASE_DIR = os.path.dirname(os.path.abspath(__file__))
PROJECT_ROOT = os.path.dirname(BASE_DIR)

dotenv_path = os.path.join(PROJECT_ROOT, ".env")
load_dotenv(dotenv_path=dotenv_path)
logger.debug(f"Loaded .env from: {dotenv_path}")

DATABASE_FILE_ENV = os.getenv("DATABASE_FILE", "budgetbook/budgetbook.db")
DATABASE_FILE = (
    DATABASE_FILE_ENV if os.path.isabs(DATABASE_FILE_ENV)
    else os.path.join(PROJECT_ROOT, DATABASE_FILE_ENV)
)

DATABASE_URL = os.getenv("DATABASE_URL", f"sqlite:///{DATABASE_FILE}")
logger.debug(f"DATABASE_URL: {DATABASE_URL}")

# ------------------------------------------------------------------
# 2) SQLAlchemy Engine and Session Setup
# ------------------------------------------------------------------
connect_args = {"check_same_thread": False} if DATABASE_URL.startswith("sqlite") else {}
engine = create_engine(DATABASE_URL, connect_args=connect_args)
logger.debug("SQLAlchemy engine created")

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base = declarative_base()

# ------------------------------------------------------------------
# 3) FastAPI Dependency Injection
# ------------------------------------------------------------------
def get_db():
    """
    Provides a DB session for FastAPI routes. Yields a SessionLocal instance
    and closes it after use to prevent leaks.
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()

# ------------------------------------------------------------------
# 4) Table Initialization & Fixed Lookup Seeding
# ------------------------------------------------------------------
FIXED_CATEGORIES = [
    {"id": 1, "name": "Salary"},
    {"id": 2, "name": "Groceries"},
    {"id": 3, "name": "Housing"},
    {"id": 4, "name": "Transport"},
    {"id": 5, "name": "Utilities"},
    {"id": 6, "name": "Leisure"},
    {"id": 7, "name": "Other"},
]

FIXED_OCCURRENCE_TYPES = [
    {"id": 1, "name": "Once"},
    {"id": 2, "name": "Weekly"},
    {"id": 3, "name": "Monthly"},
    {"id": 4, "name": "Yearly"},
]


def _ensure_dir():
    if not DATABASE_URL.startswith("sqlite:///"):
        return
    db_dir = os.path.dirname(DATABASE_URL[len("sqlite:///"):])
    if db_dir and not os.path.exists(db_dir):
        os.makedirs(db_dir)
        logger.debug(f"Created directory for database: {db_dir}")


def seed_lookup_tables(db):
    """
    Insert or rename the fixed categories and occurrence types.
    Safe to call repeatedly; rows are matched on their fixed primary keys.
    """
    from budgetbook.models.transaction import TransactionCategory, TransactionOccurrenceType

    for model, rows in (
        (TransactionCategory, FIXED_CATEGORIES),
        (TransactionOccurrenceType, FIXED_OCCURRENCE_TYPES),
    ):
        for row in rows:
            existing = db.get(model, row["id"])
            if existing:
                existing.name = row["name"]
            else:
                db.add(model(id=row["id"], name=row["name"]))
                db.flush()
                logger.debug(f"Inserted {model.__name__} ID={row['id']} ({row['name']})")


def create_tables(bind=None):
    """
    Initializes all database tables and seeds the fixed lookup rows.
    This won't delete or overwrite user data; it's idempotent.
    """
    logger.debug("Starting create_tables()")
    if bind is None:
        _ensure_dir()
        bind = engine

    # Import models to register with Base.metadata
    from budgetbook.models import transaction, user  # noqa: F401

    Base.metadata.create_all(bind=bind)

    db = sessionmaker(bind=bind)()
    try:
        seed_lookup_tables(db)
        db.commit()
        logger.info("Database tables created or verified.")
    except IntegrityError as e:
        logger.error(f"Seeding lookup tables failed, likely an ID conflict: {e}")
        db.rollback()
        raise
    finally:
        db.close()


if __name__ == "__main__":
    create_tables()
