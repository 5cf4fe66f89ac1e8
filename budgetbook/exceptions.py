"""
budgetbook/exceptions.py

Typed failures raised by the service layer. Each one carries a fixed,
human-readable message that the API surfaces verbatim, plus the HTTP status
main.py translates it into. Store failures (SQLAlchemyError) are not wrapped;
they pass through the services unchanged.
"""


class BudgetBookError(Exception):
    """Base class for every failure the services raise on purpose."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class BadParameterError(BudgetBookError):
    """Caller input is missing or malformed."""

    status_code = 400


class ResourceNotFoundError(BudgetBookError):
    """The referenced entity does not exist."""

    status_code = 404


class DuplicateEntryError(BudgetBookError):
    """Storing the entity would violate a uniqueness rule."""

    status_code = 409


class BadCredentialsError(BudgetBookError):
    status_code = 401


class UnauthorizedActionError(BudgetBookError):
    status_code = 401
