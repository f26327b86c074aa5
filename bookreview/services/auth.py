"""
Authentication Service

Account signup and credential checks behind /auth/signup and /auth/login.

Security Features:
=================
1. Passwords are hashed with bcrypt before storage
2. Plain passwords are never logged or stored
3. Login failures don't say whether the email or the password was wrong
"""

import logging

from sqlalchemy import or_, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from bookreview.exceptions import InvalidCredentialsError, UserExistsError
from bookreview.models import User
from bookreview.services.security import hash_password, verify_password

logger = logging.getLogger(__name__)


def register_user(db: Session, username: str, email: str, password: str) -> User:
    """
    Create a new account.

    Args:
        db: Database session
        username: Unique username (already trimmed by the schema)
        email: Unique email address
        password: Plain password, hashed before storage

    Returns:
        The created User

    Raises:
        UserExistsError: If the email or the username is already taken
    """
    stmt = select(User).where(or_(User.email == email, User.username == username))
    if db.execute(stmt).first() is not None:
        raise UserExistsError()

    user = User(
        username=username,
        email=email,
        hashed_password=hash_password(password),
    )
    db.add(user)

    try:
        db.commit()
    except IntegrityError:
        # Concurrent signup with the same email/username won the race
        db.rollback()
        raise UserExistsError() from None

    db.refresh(user)
    logger.info(f"New user registered: {user.email}")
    return user


def authenticate_user(db: Session, email: str, password: str) -> User:
    """
    Check an email/password pair.

    Returns:
        The matching User

    Raises:
        InvalidCredentialsError: If no user has this email or the
            password does not match
    """
    stmt = select(User).where(User.email == email)
    user = db.execute(stmt).scalar_one_or_none()

    if user is None:
        logger.warning(f"Login failed: user not found for {email}")
        raise InvalidCredentialsError()

    if not verify_password(password, user.hashed_password):
        logger.warning(f"Login failed: incorrect password for {email}")
        raise InvalidCredentialsError()

    return user
