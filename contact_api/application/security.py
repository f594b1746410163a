"""Password hashing and session token generation."""

from __future__ import annotations

import uuid

import bcrypt

# bcrypt only reads the first 72 bytes of a secret; newer releases reject longer input.
_BCRYPT_MAX_BYTES = 72


class PasswordHasher:
    """One-way adaptive password hashing backed by bcrypt."""

    def __init__(self, rounds: int = 10) -> None:
        self._rounds = rounds

    def hash(self, password: str) -> str:
        return bcrypt.hashpw(self._encode(password), bcrypt.gensalt(rounds=self._rounds)).decode("utf-8")

    def verify(self, password: str, password_hash: str) -> bool:
        """Return True when ``password`` matches ``password_hash``; never raises on mismatch."""
        try:
            return bcrypt.checkpw(self._encode(password), password_hash.encode("utf-8"))
        except ValueError:
            # Malformed stored hash.
            return False

    @staticmethod
    def _encode(password: str) -> bytes:
        return password.encode("utf-8")[:_BCRYPT_MAX_BYTES]


class TokenIssuer:
    """Mints opaque session tokens."""

    def issue(self) -> str:
        return str(uuid.uuid4())
