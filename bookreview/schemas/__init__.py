"""
Pydantic Schemas Package

This package contains Pydantic models for request/response validation.

WHY Separate Schemas from SQLAlchemy Models?
============================================
1. Security: Control exactly what data is exposed in API responses
2. Validation: Request bodies are checked before any service runs
3. Decoupling: Database schema can evolve independently of API
4. Documentation: Schemas generate OpenAPI documentation
"""

from bookreview.schemas.book import (
    BookCreate,
    BookDetailResponse,
    BookListResponse,
    BookResponse,
    BookSearchResponse,
)
from bookreview.schemas.pagination import PaginationMeta
from bookreview.schemas.review import ReviewAuthor, ReviewResponse, ReviewWrite
from bookreview.schemas.user import (
    AuthResponse,
    LoginRequest,
    SignupRequest,
    UserSummary,
)

__all__ = [
    # Book schemas
    "BookCreate",
    "BookResponse",
    "BookListResponse",
    "BookSearchResponse",
    "BookDetailResponse",
    # Pagination
    "PaginationMeta",
    # Review schemas
    "ReviewWrite",
    "ReviewAuthor",
    "ReviewResponse",
    # User/auth schemas
    "SignupRequest",
    "LoginRequest",
    "UserSummary",
    "AuthResponse",
]
