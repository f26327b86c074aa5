"""
Security Service

Handles password hashing and JWT token operations.

Security Features:
==================
1. Password hashing with bcrypt (passlib)
2. JWT token generation and validation (python-jose)
3. Secure password verification

Usage:
    from bookreview.services.security import hash_password, verify_password

    hashed = hash_password("secret123")
    is_valid = verify_password("secret123", hashed)
"""

import logging
from datetime import UTC, datetime, timedelta

from jose import JWTError, jwt
from passlib.context import CryptContext

from bookreview.config import get_settings

logger = logging.getLogger(__name__)
settings = get_settings()

# -------------------------------------------------------------------------
# Password Hashing Configuration
# -------------------------------------------------------------------------
# - schemes: List of hashing algorithms (bcrypt is industry standard)
# - deprecated: "auto" means old hashes are automatically upgraded
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


def hash_password(password: str) -> str:
    """
    Hash a plain text password using bcrypt.

    Example:
        >>> hashed = hash_password("secret123")
        >>> hashed.startswith("$2b$")
        True
    """
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """
    Verify a plain password against a hashed password.

    Uses constant-time comparison to prevent timing attacks.
    """
    return pwd_context.verify(plain_password, hashed_password)


# -------------------------------------------------------------------------
# JWT Token Configuration
# -------------------------------------------------------------------------
ALGORITHM = "HS256"
ACCESS_TOKEN_TYPE = "access"


def create_access_token(
    user_id: int,
    expires_delta: timedelta | None = None,
) -> str:
    """
    Create a bearer token identifying a user.

    The subject claim carries the user id as a string. Tokens expire after
    settings.access_token_expire_days unless expires_delta is given.

    Args:
        user_id: ID of the authenticated user
        expires_delta: Optional custom lifetime

    Returns:
        Encoded JWT token string
    """
    if expires_delta is None:
        expires_delta = timedelta(days=settings.access_token_expire_days)

    to_encode = {
        "sub": str(user_id),
        "exp": datetime.now(UTC) + expires_delta,
        "type": ACCESS_TOKEN_TYPE,
    }

    return jwt.encode(
        to_encode,
        settings.secret_key,
        algorithm=ALGORITHM,
    )


def decode_token(token: str) -> dict | None:
    """
    Decode and validate a JWT token.

    Returns:
        Decoded payload if valid, None if invalid or expired
    """
    try:
        return jwt.decode(
            token,
            settings.secret_key,
            algorithms=[ALGORITHM],
        )
    except JWTError as e:
        logger.warning(f"JWT decode error: {e}")
        return None


def get_token_user_id(token: str) -> int | None:
    """
    Extract the user id from an access token.

    Returns:
        The user id, or None when the token is invalid, expired, of the
        wrong type, or carries a malformed subject
    """
    payload = decode_token(token)
    if payload is None:
        return None

    if payload.get("type") != ACCESS_TOKEN_TYPE:
        logger.warning("Token type mismatch: expected access")
        return None

    try:
        return int(payload.get("sub"))
    except (TypeError, ValueError):
        return None
