"""
Reviews Router

Write endpoints for book reviews.

Endpoints:
- POST /books/{book_id}/reviews - Create a review (authenticated)
- PUT /reviews/{review_id} - Update your own review
- DELETE /reviews/{review_id} - Delete your own review

Reading reviews happens through GET /books/{book_id}, which embeds a page
of them next to the book and its average rating.

Business Rules:
- One review per user per book (explicit check + database constraint)
- Only the review author can update or delete a review; anyone else gets
  the same 404 as for a review that doesn't exist
"""

from fastapi import APIRouter, Request, status

from bookreview.config import get_settings
from bookreview.dependencies import CurrentUser, DbSession
from bookreview.schemas.review import ReviewResponse, ReviewWrite
from bookreview.services import reviews as review_store
from bookreview.services.rate_limiter import limiter

settings = get_settings()

# =============================================================================
# Router Configuration
# =============================================================================
router = APIRouter(
    tags=["Reviews"],
    responses={
        404: {"description": "Review or book not found"},
    },
)


@router.post(
    "/books/{book_id}/reviews",
    response_model=ReviewResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a review",
    description="Create a review for a book. Requires authentication. One review per book per user.",
)
@limiter.limit(settings.rate_limit_write)
def create_review(
    request: Request,
    book_id: int,
    review_data: ReviewWrite,
    db: DbSession,
    current_user: CurrentUser,
) -> ReviewResponse:
    """
    Create a new review for a book.

    Raises:
        NotFoundError: 404 if the book does not exist
        ReviewConflictError: 400 if the user already reviewed this book
    """
    review = review_store.create_review(
        db,
        book_id=book_id,
        user_id=current_user.id,
        rating=review_data.rating,
        comment=review_data.comment,
    )
    return ReviewResponse.model_validate(review)


@router.put(
    "/reviews/{review_id}",
    response_model=ReviewResponse,
    summary="Update a review",
    description="Update your own review. Only the review author can update.",
)
@limiter.limit(settings.rate_limit_write)
def update_review(
    request: Request,
    review_id: int,
    review_data: ReviewWrite,
    db: DbSession,
    current_user: CurrentUser,
) -> ReviewResponse:
    """
    Replace the rating and comment of your own review.

    Raises:
        ReviewNotFoundOrUnauthorizedError: 404 if the review doesn't exist
            or belongs to another user
    """
    review = review_store.update_review(
        db,
        review_id=review_id,
        user_id=current_user.id,
        rating=review_data.rating,
        comment=review_data.comment,
    )
    return ReviewResponse.model_validate(review)


@router.delete(
    "/reviews/{review_id}",
    summary="Delete a review",
    description="Delete your own review. Only the review author can delete.",
)
@limiter.limit(settings.rate_limit_write)
def delete_review(
    request: Request,
    review_id: int,
    db: DbSession,
    current_user: CurrentUser,
) -> dict:
    """
    Delete your own review.

    Raises:
        ReviewNotFoundOrUnauthorizedError: 404 if the review doesn't exist
            or belongs to another user
    """
    review_store.delete_review(db, review_id=review_id, user_id=current_user.id)
    return {"message": "Review deleted successfully"}
