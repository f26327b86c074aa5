"""
Review Store Service

Create, update and delete reviews while keeping one review per user per
book.

Duplicate Prevention
====================
Two layers guard the one-review-per-(book, user) rule:

1. An explicit lookup before the insert. This catches the common case and
   produces the friendly "already reviewed" error.
2. The uq_review_book_user constraint on the reviews table. Two concurrent
   submissions can both pass the lookup; the second insert then fails in
   the database, and that failure is mapped to the same conflict error.

The constraint is the authoritative guard. The lookup and insert are not
wrapped in one transaction.

Ownership
=========
Update and delete look the review up by (id, author) in a single query.
A review that doesn't exist and a review that belongs to someone else give
the same ReviewNotFoundOrUnauthorizedError.
"""

import logging
from datetime import UTC, datetime

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, selectinload

from bookreview.database import is_storable_id
from bookreview.exceptions import (
    ReviewConflictError,
    ReviewNotFoundOrUnauthorizedError,
    ValidationError,
)
from bookreview.models import Review
from bookreview.services.catalog import get_book

logger = logging.getLogger(__name__)

MIN_RATING = 1
MAX_RATING = 5


# =============================================================================
# Field Validation
# =============================================================================
# Shared with the request schemas in bookreview.schemas.review.


def clean_rating(rating) -> int:
    """Return the rating if it is an integer 1-5, else raise ValueError."""
    if (
        isinstance(rating, bool)
        or not isinstance(rating, int)
        or not MIN_RATING <= rating <= MAX_RATING
    ):
        raise ValueError(f"Rating must be between {MIN_RATING} and {MAX_RATING}")
    return rating


def clean_comment(comment) -> str:
    """Return the trimmed comment, or raise ValueError if it is blank."""
    if not isinstance(comment, str) or not comment.strip():
        raise ValueError("Comment is required")
    return comment.strip()


def validate_review_input(rating, comment) -> tuple[int, str]:
    """
    Validate rating and comment together.

    Returns:
        Tuple of (rating, trimmed comment)

    Raises:
        ValidationError: With one entry per invalid field
    """
    errors = []
    cleaned = {}
    for field, cleaner, value in (
        ("rating", clean_rating, rating),
        ("comment", clean_comment, comment),
    ):
        try:
            cleaned[field] = cleaner(value)
        except ValueError as exc:
            errors.append({"field": field, "message": str(exc), "location": "body"})

    if errors:
        raise ValidationError(errors[0]["message"], errors=errors)

    return cleaned["rating"], cleaned["comment"]


# =============================================================================
# Queries
# =============================================================================


def get_review_with_author(db: Session, review_id: int) -> Review | None:
    """Get a review with its author eagerly loaded."""
    stmt = (
        select(Review)
        .options(selectinload(Review.user))
        .where(Review.id == review_id)
    )
    return db.execute(stmt).scalar_one_or_none()


def find_user_review_for_book(db: Session, book_id: int, user_id: int) -> Review | None:
    """Get the review a user wrote for a book, if any."""
    stmt = select(Review).where(
        Review.book_id == book_id,
        Review.user_id == user_id,
    )
    return db.execute(stmt).scalar_one_or_none()


def get_owned_review(db: Session, review_id: int, user_id: int) -> Review:
    """
    Get a review only if user_id wrote it.

    Raises:
        ReviewNotFoundOrUnauthorizedError: If the review is missing or
            belongs to another user
    """
    if not is_storable_id(review_id):
        raise ReviewNotFoundOrUnauthorizedError()

    stmt = (
        select(Review)
        .options(selectinload(Review.user))
        .where(Review.id == review_id, Review.user_id == user_id)
    )
    review = db.execute(stmt).scalar_one_or_none()
    if review is None:
        raise ReviewNotFoundOrUnauthorizedError()
    return review


def list_book_reviews(db: Session, book_id: int, skip: int, limit: int) -> list[Review]:
    """
    Get a page of a book's reviews, newest first, authors loaded.
    """
    stmt = (
        select(Review)
        .options(selectinload(Review.user))
        .where(Review.book_id == book_id)
        .order_by(Review.created_at.desc(), Review.id.desc())
        .offset(skip)
        .limit(limit)
    )
    return list(db.execute(stmt).scalars().all())


def count_book_reviews(db: Session, book_id: int) -> int:
    """Total number of reviews for a book."""
    stmt = select(func.count()).select_from(Review).where(Review.book_id == book_id)
    return db.execute(stmt).scalar() or 0


# =============================================================================
# Writes
# =============================================================================


def create_review(
    db: Session,
    book_id: int,
    user_id: int,
    rating: int,
    comment: str,
) -> Review:
    """
    Create a user's review for a book.

    Args:
        db: Database session
        book_id: ID of the book to review
        user_id: ID of the author
        rating: Integer 1-5
        comment: Non-blank text, stored trimmed

    Returns:
        The created review with its author loaded

    Raises:
        ValidationError: If rating or comment is invalid
        NotFoundError: If the book does not exist
        ReviewConflictError: If the user already reviewed this book
    """
    rating, comment = validate_review_input(rating, comment)
    get_book(db, book_id)

    if find_user_review_for_book(db, book_id, user_id) is not None:
        logger.info(f"Duplicate review rejected: book={book_id} user={user_id}")
        raise ReviewConflictError()

    review = Review(
        book_id=book_id,
        user_id=user_id,
        rating=rating,
        comment=comment,
    )
    db.add(review)

    try:
        db.commit()
    except IntegrityError:
        # Another request inserted the same (book, user) after our lookup
        db.rollback()
        logger.warning(
            f"Duplicate review blocked by unique constraint: book={book_id} user={user_id}"
        )
        raise ReviewConflictError() from None

    logger.info(f"Review created: id={review.id} book={book_id} user={user_id} rating={rating}")
    return get_review_with_author(db, review.id)


def update_review(
    db: Session,
    review_id: int,
    user_id: int,
    rating: int,
    comment: str,
) -> Review:
    """
    Replace the rating and comment of the user's own review.

    Returns:
        The updated review with its author loaded

    Raises:
        ValidationError: If rating or comment is invalid
        ReviewNotFoundOrUnauthorizedError: If the review is missing or not
            owned by user_id
    """
    rating, comment = validate_review_input(rating, comment)
    review = get_owned_review(db, review_id, user_id)

    review.rating = rating
    review.comment = comment
    review.updated_at = datetime.now(UTC)
    db.commit()

    logger.info(f"Review updated: id={review_id} user={user_id} rating={rating}")
    return get_review_with_author(db, review_id)


def delete_review(db: Session, review_id: int, user_id: int) -> None:
    """
    Delete the user's own review.

    Raises:
        ReviewNotFoundOrUnauthorizedError: If the review is missing or not
            owned by user_id
    """
    review = get_owned_review(db, review_id, user_id)

    db.delete(review)
    db.commit()

    logger.info(f"Review deleted: id={review_id} user={user_id}")
