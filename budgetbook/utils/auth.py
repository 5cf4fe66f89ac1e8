from datetime import datetime, timedelta, timezone
from jose import JWTError, jwt
import os

# Load environment variables
SECRET_KEY = os.getenv("SECRET_KEY", "default_secret_key")
ALGORITHM = "HS256"
ACCESS_TOKEN_EXPIRE_MINUTES = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", "30"))

# --- JWT Helper Functions ---

def create_access_token(data: dict, expires_delta: timedelta | None = None) -> str:
    """
    Generate a new JWT access token.

    Args:
        data (dict): Payload data to encode in the token, usually {"sub": username}.
        expires_delta (timedelta, optional): Lifetime override, mostly for tests.

    Returns:
        str: Encoded JWT token.
    """
    to_encode = data.copy()
    lifetime = expires_delta if expires_delta is not None else timedelta(minutes=ACCESS_TOKEN_EXPIRE_MINUTES)
    to_encode.update({"exp": datetime.now(timezone.utc) + lifetime})
    return jwt.encode(to_encode, SECRET_KEY, algorithm=ALGORITHM)

def verify_access_token(token: str) -> str:
    """
    Verify and decode a JWT access token.

    Args:
        token (str): The JWT token to verify.

    Returns:
        str: Username extracted from the token.

    Raises:
        JWTError: If the token is invalid, expired, or carries no subject.
    """
    payload = jwt.decode(token, SECRET_KEY, algorithms=[ALGORITHM])
    username = payload.get("sub")
    if username is None:
        raise JWTError("Token has no subject")
    return username
