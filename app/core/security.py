"""
Security utilities - password hashing and verification.
These are the only functions that ever touch a plaintext password.
"""

import logging

from passlib.context import CryptContext  # Password hashing library

from app.core.config import settings  # App configuration
from app.core.errors import InternalError

logger = logging.getLogger("gateway.security")

# ---------------------------------------------------------------------------
# PASSWORD HASHING CONTEXT
# ---------------------------------------------------------------------------
# CryptContext: Passlib's high-level interface for password hashing
# - schemes=["bcrypt"]: salted, slow by design
# - deprecated="auto": hashes from older schemes still verify
# - bcrypt__rounds: work factor, 2^rounds iterations
pwd_context = CryptContext(
    schemes=["bcrypt"],
    deprecated="auto",
    bcrypt__rounds=settings.PASSWORD_HASH_ROUNDS,
)


def hash_password(password: str) -> str:
    """
    Hash a plaintext password using bcrypt.

    Args:
        password: The user's plaintext password

    Returns:
        A bcrypt hash string (e.g., "$2b$10$LQv3c1yqBw...")

    Raises:
        InternalError: If the hashing primitive itself fails. This is
            treated as fatal for the request and never retried.
    """
    try:
        return pwd_context.hash(password)
    except Exception as e:
        logger.error(f"Password hashing failed: {type(e).__name__}")
        raise InternalError("Could not process password") from e


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """
    Verify a plaintext password against a stored hash.

    Returns False (instead of raising) when the stored value is not a hash
    passlib recognizes, so a corrupted row reads as "wrong password".
    """
    try:
        return pwd_context.verify(plain_password, hashed_password)
    except (ValueError, TypeError):
        logger.warning("Stored password hash is malformed")
        return False
