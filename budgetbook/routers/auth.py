"""
budgetbook/routers/auth.py

Token endpoints. Clients log in once, then send the returned token as
'Authorization: Bearer <token>' on every protected request.
"""

from fastapi import APIRouter, Depends

from budgetbook.dependencies import get_auth_service, get_current_user
from budgetbook.models import User
from budgetbook.schemas.auth import CredentialsIn, TokenRead, TokenValidation
from budgetbook.schemas.user import UserRead
from budgetbook.services.auth import AuthenticateService

router = APIRouter(tags=["auth"])


@router.post("/login", response_model=TokenRead)
def login(credentials: CredentialsIn, auth: AuthenticateService = Depends(get_auth_service)):
    """
    Exchange { "username": "...", "password": "..." } for a JWT.
    404 for an unknown user, 401 for a wrong password.
    """
    return auth.authenticate_user(credentials)


@router.post("/validate")
def validate_token(body: TokenValidation, auth: AuthenticateService = Depends(get_auth_service)):
    """
    Returns {"valid": true} for a good token, 401 otherwise.
    """
    return {"valid": auth.authenticate_token(body.token)}


@router.get("/me", response_model=UserRead)
def read_current_user(current_user: User = Depends(get_current_user)):
    return current_user
