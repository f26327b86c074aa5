"""
Book Detail Service

Builds the book detail view: the book itself, one page of its reviews,
the total review count and the average rating.

Each part is a separate query run in a fixed order (book, reviews page,
count, average). Nothing is cached, so a review written a moment ago
shows up in the next detail read.
"""

from dataclasses import dataclass

from sqlalchemy.orm import Session

from bookreview.database import clamp_offset
from bookreview.models import Book, Review
from bookreview.services.catalog import get_book
from bookreview.services.ratings import compute_average
from bookreview.services.reviews import count_book_reviews, list_book_reviews


@dataclass
class BookDetail:
    """A book with a page of reviews and its aggregate rating."""

    book: Book
    average_rating: float
    reviews: list[Review]
    page: int
    limit: int
    total_reviews: int


def get_book_detail(db: Session, book_id: int, page: int = 1, limit: int = 10) -> BookDetail:
    """
    Compose the detail view of a book.

    Args:
        db: Database session
        book_id: ID of the book
        page: 1-indexed page of reviews
        limit: Reviews per page

    Returns:
        BookDetail; a page past the last one has an empty reviews list

    Raises:
        NotFoundError: If the book does not exist
    """
    book = get_book(db, book_id)

    reviews = list_book_reviews(db, book_id, skip=clamp_offset((page - 1) * limit), limit=limit)
    total_reviews = count_book_reviews(db, book_id)
    rating = compute_average(db, book_id)

    return BookDetail(
        book=book,
        average_rating=rating.average,
        reviews=reviews,
        page=page,
        limit=limit,
        total_reviews=total_reviews,
    )
