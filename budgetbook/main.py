#!/usr/bin/env python
"""
budgetbook/main.py

Sets up the FastAPI application for BudgetBook, a personal income/expense tracker.

Key Roles:
 - Loads environment variables & configures CORS for frontend integration
 - Includes 'user', 'auth', 'transaction' and 'category' routers
 - Translates service-layer errors into ExceptionMessage JSON bodies
 - Creates tables and seeds lookup rows at startup
"""

import logging
import os
from contextlib import asynccontextmanager
from datetime import datetime

from dotenv import load_dotenv
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from budgetbook.database import create_tables
from budgetbook.exceptions import BudgetBookError
from budgetbook.routers import auth, category, transaction, user

load_dotenv()

logger = logging.getLogger(__name__)

# Default CORS origins if none specified (dev environment)
default_origins = (
    "http://127.0.0.1:3000,"
    "http://localhost:3000,"
    "http://127.0.0.1:5173,"
    "http://localhost:5173"
)
raw_origins = os.getenv("CORS_ALLOW_ORIGINS", default_origins)
ALLOWED_ORIGINS = [origin.strip() for origin in raw_origins.split(",") if origin.strip()]

TIMESTAMP_FORMAT = "%d-%m-%Y %H:%M:%S"

# ---------------------------------------------------------
# Startup
# ---------------------------------------------------------
@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Ensures tables exist when the app starts. Idempotent; existing data is kept.
    Set BUDGETBOOK_SKIP_CREATE_TABLES=1 when the schema is managed elsewhere (tests).
    """
    if os.getenv("BUDGETBOOK_SKIP_CREATE_TABLES") != "1":
        create_tables()
    yield

# ---------------------------------------------------------
# Initialize the FastAPI application
# ---------------------------------------------------------
app = FastAPI(
    title="BudgetBook API",
    description="API for registering users and tracking their income and expenses. Bearer-token auth.",
    version="1.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# ---------------------------------------------------------
# Error responses
# ---------------------------------------------------------
class ExceptionMessage(BaseModel):
    """
    Body of every error response:
      { "code": 404, "error": "No user found", "timestamp": "19-10-2026 14:03:11" }
    """
    code: int
    error: str
    timestamp: str


def exception_message(code: int, error: str) -> JSONResponse:
    body = ExceptionMessage(code=code, error=error, timestamp=datetime.now().strftime(TIMESTAMP_FORMAT))
    return JSONResponse(status_code=code, content=body.model_dump())


@app.exception_handler(BudgetBookError)
async def budgetbook_error_handler(request: Request, exc: BudgetBookError):
    return exception_message(exc.status_code, exc.message)


@app.exception_handler(IntegrityError)
async def integrity_error_handler(request: Request, exc: IntegrityError):
    # A UNIQUE constraint caught what the service-level check could not (e.g. a race)
    logger.warning(f"Integrity error on {request.url.path}: {exc.orig}")
    return exception_message(409, "The request conflicts with an existing entry")


@app.exception_handler(SQLAlchemyError)
async def store_error_handler(request: Request, exc: SQLAlchemyError):
    logger.error(f"Store failure on {request.url.path}: {exc}")
    return exception_message(500, "Storage failure")

# ---------------------------------------------------------
# Routers
# ---------------------------------------------------------
app.include_router(user.router, prefix="/api/users", tags=["users"])
app.include_router(auth.router, prefix="/api/auth", tags=["auth"])
app.include_router(transaction.router, prefix="/api/transactions", tags=["transactions"])
app.include_router(category.router, prefix="/api/categories", tags=["categories"])

# ---------------------------------------------------------
# Root Route
# ---------------------------------------------------------
@app.get("/")
def read_root():
    """
    Basic root path to confirm the API is running.
    """
    return {"message": "Welcome to BudgetBook"}


def run():
    import uvicorn

    uvicorn.run(
        "budgetbook.main:app",
        host=os.getenv("HOST", "127.0.0.1"),
        port=int(os.getenv("PORT", "8000")),
    )


if __name__ == "__main__":
    run()
