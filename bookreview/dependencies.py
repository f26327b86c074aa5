"""
FastAPI Dependencies Module

Dependencies are reusable components injected into route handlers.
FastAPI's Depends() function manages their lifecycle.

Dependencies defined here:
- DbSession: per-request database session
- Pagination: page/limit query parameters with lenient coercion
- CurrentUser: the user identified by the bearer token
"""

from typing import Annotated

from fastapi import Depends, HTTPException, Query, status
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.orm import Session

from bookreview.config import get_settings
from bookreview.database import clamp_offset, get_db
from bookreview.models import User
from bookreview.services.security import get_token_user_id

settings = get_settings()

# =============================================================================
# Type Aliases with Annotated
# =============================================================================
# Instead of writing:
#   def list_books(db: Session = Depends(get_db)):
#
# You can write:
#   def list_books(db: DbSession):

DbSession = Annotated[Session, Depends(get_db)]


# =============================================================================
# Pagination Parameters
# =============================================================================
def coerce_positive_int(raw: str | None, default: int) -> int:
    """
    Parse a query value as a positive integer.

    Anything absent, non-numeric, zero or negative falls back to the
    default instead of producing an error.
    """
    if raw is None:
        return default
    try:
        value = int(raw)
    except ValueError:
        return default
    return value if value > 0 else default


class PaginationParams:
    """
    Common pagination parameters for list endpoints.

    - page: Which page to return (1-indexed), defaults to 1
    - limit: How many items per page, defaults to settings.default_page_size
      and is capped at settings.max_page_size (100). Larger values are
      served as max_page_size rather than rejected, and the capped value
      is what comes back in the pagination block. The cap is intentional
      and also keeps LIMIT inside the SQL integer range.
    - skip: Calculated offset for database query

    Parameters are read as strings so that "abc", "0" or "-2" fall back to
    the defaults rather than being rejected.

    Usage in route:
        @router.get("/books")
        def list_books(db: DbSession, pagination: Pagination):
            ...
    """

    def __init__(
        self,
        page: str | None = Query(
            default=None,
            description="Page number (1-indexed, defaults to 1)",
            examples=["1", "2"],
        ),
        limit: str | None = Query(
            default=None,
            description="Number of items per page (defaults to 10)",
            examples=["10", "25"],
        ),
    ) -> None:
        self.page = coerce_positive_int(page, 1)
        self.limit = min(
            coerce_positive_int(limit, settings.default_page_size),
            settings.max_page_size,
        )

    @property
    def skip(self) -> int:
        """
        Number of records to skip.

        Page 1 → skip 0 items
        Page 2 → skip limit items

        Capped at the largest SQL integer, so an absurd page number reads
        as an empty page rather than overflowing the driver.
        """
        return clamp_offset((self.page - 1) * self.limit)


Pagination = Annotated[PaginationParams, Depends()]


# =============================================================================
# JWT Authentication
# =============================================================================
# OAuth2PasswordBearer extracts the token from the
# "Authorization: Bearer <token>" header and adds the "Authorize" button to
# Swagger UI. auto_error is off so a missing header gets our own message.

oauth2_scheme = OAuth2PasswordBearer(
    tokenUrl="/auth/login",
    auto_error=False,
)


def get_current_user(
    token: str | None = Depends(oauth2_scheme),
    db: Session = Depends(get_db),
) -> User:
    """
    Resolve the user identified by the bearer token.

    Raises:
        HTTPException: 401 if the header is missing, the token is invalid
            or expired, or the user no longer exists
    """
    if not token:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="No token, authorization denied",
            headers={"WWW-Authenticate": "Bearer"},
        )

    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Token is not valid",
        headers={"WWW-Authenticate": "Bearer"},
    )

    user_id = get_token_user_id(token)
    if user_id is None:
        raise credentials_exception

    user = db.get(User, user_id)
    if user is None:
        raise credentials_exception

    return user


CurrentUser = Annotated[User, Depends(get_current_user)]
