"""
Ratings Service

Computes a book's average rating from the reviews table.

Nothing is stored on the Book row: every call runs one AVG/COUNT query,
so the result always reflects the current set of reviews at the cost of
scanning that book's reviews.

Rounding
========
The average is rounded to one decimal place, half away from zero
(4.25 → 4.3, 4.35 → 4.4). Python's round() rounds half to even and works
on binary floats, so Decimal.quantize with ROUND_HALF_UP is used instead.
"""

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from bookreview.models import Review

ONE_DECIMAL = Decimal("0.1")


@dataclass(frozen=True)
class RatingSummary:
    """Average rating and number of reviews for one book."""

    average: float
    count: int


def round_rating(value) -> float:
    """
    Round an average to one decimal, half away from zero.

    Accepts the float SQLite returns and the Decimal PostgreSQL returns.
    """
    return float(Decimal(str(value)).quantize(ONE_DECIMAL, rounding=ROUND_HALF_UP))


def compute_average(db: Session, book_id: int) -> RatingSummary:
    """
    Compute the mean rating of a book's reviews.

    Args:
        db: Database session
        book_id: ID of the book

    Returns:
        RatingSummary; (0.0, 0) when the book has no reviews
    """
    stmt = select(
        func.avg(Review.rating),
        func.count(Review.id),
    ).where(Review.book_id == book_id)

    avg_rating, review_count = db.execute(stmt).one()

    if not review_count:
        return RatingSummary(average=0.0, count=0)

    return RatingSummary(average=round_rating(avg_rating), count=review_count)
