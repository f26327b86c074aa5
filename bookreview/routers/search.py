"""
Search Router

GET /search?q=... matches the query against book titles and author names
(case-insensitive substring, either field). Results are not paginated.
"""

from fastapi import APIRouter, Query, Request

from bookreview.config import get_settings
from bookreview.dependencies import DbSession
from bookreview.schemas import BookResponse, BookSearchResponse
from bookreview.services.catalog import search_books
from bookreview.services.rate_limiter import limiter

settings = get_settings()

router = APIRouter(
    prefix="/search",
    tags=["Search"],
    responses={
        400: {"description": "Search query is required"},
    },
)


@router.get(
    "",
    response_model=BookSearchResponse,
    summary="Search books",
    description="Search books by title or author.",
)
@limiter.limit(settings.rate_limit_default)
def search(
    request: Request,
    db: DbSession,
    q: str | None = Query(
        default=None,
        description="Text to match against title or author",
        examples=["dune", "herbert"],
    ),
) -> BookSearchResponse:
    """
    Search books by title or author.

    Examples:
        GET /search?q=dune
        GET /search?q=Herbert
    """
    books = search_books(db, q)
    return BookSearchResponse(
        books=[BookResponse.model_validate(book) for book in books],
        count=len(books),
    )
