"""
Domain Exceptions

Services raise these instead of HTTPException so the business logic stays
free of HTTP concerns. The app factory in main.py registers one handler
that turns any BookReviewError into a JSON response:

    BookReviewError (base)                     → 500
    ├── ValidationError                        → 400 {"errors": [...]}
    ├── ConflictError                          → 400
    │   ├── ReviewConflictError                (one review per user per book)
    │   └── UserExistsError                    (email or username taken)
    ├── InvalidCredentialsError                → 400
    └── NotFoundError                          → 404
        └── ReviewNotFoundOrUnauthorizedError  (missing OR not owned)
"""

from typing import Any


class BookReviewError(Exception):
    """
    Base exception for all application errors.

    Attributes:
        message: Client-safe description returned as {"error": message}
        status_code: HTTP status the boundary handler responds with
    """

    status_code: int = 500
    default_message: str = "Server error"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)

    def to_content(self) -> dict[str, Any]:
        """JSON body for the HTTP response."""
        return {"error": self.message}


class ValidationError(BookReviewError):
    """
    Raised when input fails validation.

    Carries field-level errors in the same shape the request validation
    handler produces, so a service-level failure and a schema-level failure
    look identical to the client.
    """

    status_code = 400
    default_message = "Validation failed"

    def __init__(
        self,
        message: str | None = None,
        errors: list[dict[str, str]] | None = None,
    ) -> None:
        super().__init__(message)
        self.errors = errors or []

    @classmethod
    def for_field(cls, field: str, message: str) -> "ValidationError":
        return cls(message, errors=[{"field": field, "message": message, "location": "body"}])

    def to_content(self) -> dict[str, Any]:
        if self.errors:
            return {"errors": self.errors}
        return {"error": self.message}


class ConflictError(BookReviewError):
    """The write would break a uniqueness rule."""

    status_code = 400
    default_message = "Resource already exists"


class ReviewConflictError(ConflictError):
    """The user already has a review for this book."""

    default_message = "You have already reviewed this book"


class UserExistsError(ConflictError):
    default_message = "User already exists"


class InvalidCredentialsError(BookReviewError):
    status_code = 400
    default_message = "Invalid credentials"


class NotFoundError(BookReviewError):
    status_code = 404
    default_message = "Not found"


class ReviewNotFoundOrUnauthorizedError(NotFoundError):
    """
    The review does not exist or belongs to someone else.

    The two cases share one message so a caller can't probe for the
    existence of other users' reviews.
    """

    default_message = "Review not found or unauthorized"
