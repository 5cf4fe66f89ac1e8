"""
budgetbook/schemas/auth.py

Login payload and the token returned for it.
"""

from pydantic import BaseModel


class CredentialsIn(BaseModel):
    """
    Schema for login JSON:
      { "username": "someName", "password": "somePass" }
    """
    username: str
    password: str


class TokenRead(BaseModel):
    access_token: str
    token_type: str = "bearer"


class TokenValidation(BaseModel):
    token: str
