"""
Books Router

Endpoints:
- POST /books - Add a book (authenticated)
- GET /books - List books, filterable by author and genre
- GET /books/{book_id} - Book detail with average rating and a page of reviews

Review submission (POST /books/{book_id}/reviews) lives in the reviews
router next to the other review writes.
"""

from fastapi import APIRouter, Query, Request, status

from bookreview.config import get_settings
from bookreview.dependencies import CurrentUser, DbSession, Pagination
from bookreview.schemas import (
    BookCreate,
    BookDetailResponse,
    BookListResponse,
    BookResponse,
    PaginationMeta,
    ReviewResponse,
)
from bookreview.services import catalog
from bookreview.services.book_detail import get_book_detail
from bookreview.services.rate_limiter import limiter

settings = get_settings()

# =============================================================================
# Router Configuration
# =============================================================================
router = APIRouter(
    prefix="/books",
    tags=["Books"],
    responses={
        404: {"description": "Book not found"},
    },
)


@router.post(
    "",
    response_model=BookResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Add a book",
    description="Add a book to the catalog. Requires authentication.",
)
@limiter.limit(settings.rate_limit_write)
def create_book(
    request: Request,
    book_data: BookCreate,
    db: DbSession,
    current_user: CurrentUser,
) -> BookResponse:
    """
    Create a new book.

    The response carries the book's fields and timestamps.
    """
    book = catalog.create_book(
        db,
        creator_id=current_user.id,
        title=book_data.title,
        author=book_data.author,
        genre=book_data.genre,
        description=book_data.description,
    )
    return BookResponse.model_validate(book)


@router.get(
    "",
    response_model=BookListResponse,
    summary="List books",
    description="Get a paginated list of books, newest first, optionally filtered by author and genre.",
)
@limiter.limit(settings.rate_limit_default)
def list_books(
    request: Request,
    db: DbSession,
    pagination: Pagination,
    author: str | None = Query(
        default=None,
        description="Filter by author name (partial match, case-insensitive)",
        examples=["herbert"],
    ),
    genre: str | None = Query(
        default=None,
        description="Filter by genre (partial match, case-insensitive)",
        examples=["fiction"],
    ),
) -> BookListResponse:
    """
    List books with pagination and optional filtering.

    Examples:
        GET /books?page=2&limit=5
        GET /books?author=herbert&genre=science
    """
    books, total = catalog.list_books(
        db,
        author=author,
        genre=genre,
        skip=pagination.skip,
        limit=pagination.limit,
    )

    return BookListResponse(
        books=[BookResponse.model_validate(book) for book in books],
        pagination=PaginationMeta.build(pagination.page, pagination.limit, total),
    )


@router.get(
    "/{book_id}",
    response_model=BookDetailResponse,
    summary="Get a book",
    description="Get a book with its average rating and a page of its reviews (page/limit apply to reviews).",
)
@limiter.limit(settings.rate_limit_default)
def get_book(
    request: Request,
    book_id: int,
    db: DbSession,
    pagination: Pagination,
) -> BookDetailResponse:
    """
    Get a book's detail view.

    Raises:
        NotFoundError: 404 if the book does not exist
    """
    detail = get_book_detail(db, book_id, page=pagination.page, limit=pagination.limit)

    return BookDetailResponse(
        book=BookResponse.model_validate(detail.book),
        average_rating=detail.average_rating,
        reviews=[ReviewResponse.model_validate(review) for review in detail.reviews],
        reviews_pagination=PaginationMeta.build(
            detail.page, detail.limit, detail.total_reviews
        ),
    )
