"""
budgetbook/utils/hashing.py

One-way password transformation. Uses the bcrypt library directly:
bcrypt only looks at the first 72 bytes of its input, so longer passwords
are rejected instead of being silently truncated.
"""

from abc import ABC, abstractmethod

import bcrypt

BCRYPT_MAX_BYTES = 72


class CredentialHasher(ABC):
    """Hashes plaintext credentials and checks plaintext against a stored hash."""

    @abstractmethod
    def encode(self, plaintext: str) -> str:
        ...

    @abstractmethod
    def valid(self, plaintext: str, hashed: str) -> bool:
        ...


class BcryptHasher(CredentialHasher):
    def __init__(self, rounds: int = 12):
        self.rounds = rounds

    def encode(self, plaintext: str) -> str:
        """
        Hash a password with a fresh salt.

        Raises:
            ValueError: If the password is longer than 72 bytes once UTF-8 encoded.
        """
        raw = plaintext.encode("utf-8")
        if len(raw) > BCRYPT_MAX_BYTES:
            raise ValueError(f"Password cannot exceed {BCRYPT_MAX_BYTES} bytes")
        return bcrypt.hashpw(raw, bcrypt.gensalt(rounds=self.rounds)).decode("utf-8")

    def valid(self, plaintext: str, hashed: str) -> bool:
        raw = plaintext.encode("utf-8")
        if not hashed or len(raw) > BCRYPT_MAX_BYTES:
            return False
        try:
            return bcrypt.checkpw(raw, hashed.encode("utf-8"))
        except ValueError:
            # Stored value is not a bcrypt hash
            return False
