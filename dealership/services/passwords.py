"""Password hashing and verification."""

import logging

from passlib.context import CryptContext

from dealership.exceptions import ValidationError

logger = logging.getLogger(__name__)

DEFAULT_ROUNDS = 10

# bcrypt only reads the first 72 bytes of its input
MAX_PASSWORD_BYTES = 72


def password_too_long(password: str) -> bool:
    return len(password.encode("utf-8")) > MAX_PASSWORD_BYTES


class PasswordHasher:
    """One-way salted bcrypt hashing.

    Every call to ``hash`` draws a fresh salt, so hashing the same password
    twice yields different strings. The salt and cost factor travel inside
    the hash, which is all ``verify`` needs.

    Passwords longer than ``MAX_PASSWORD_BYTES`` UTF-8 bytes are refused
    rather than silently truncated, so two passwords sharing a 72 byte
    prefix never verify against each other's hash.
    """

    def __init__(self, rounds: int = DEFAULT_ROUNDS):
        self.rounds = rounds
        self._context = CryptContext(schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=rounds)

    def hash(self, password: str) -> str:
        """Hash a password."""
        if password_too_long(password):
            raise ValidationError(f"Password must be at most {MAX_PASSWORD_BYTES} bytes")
        return self._context.hash(password)

    def verify(self, password: str, password_hash: str) -> bool:
        """Verify a password against its hash. Corrupt hashes never verify."""
        if not password_hash or password_too_long(password):
            return False
        try:
            return self._context.verify(password, password_hash)
        except (ValueError, TypeError) as e:
            logger.warning(f"Rejected unverifiable password hash: {type(e).__name__}")
            return False
