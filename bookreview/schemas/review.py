"""
Review Pydantic Schemas

Schemas for book reviews with ratings.

Schemas:
- ReviewWrite: Body for creating or replacing a review (rating + comment)
- ReviewAuthor: The only user field exposed on a review (username)
- ReviewResponse: Review data for API responses

Business Rules:
- Rating must be an integer 1-5
- Comment must not be blank; it is stored trimmed
- The same checks run again in services/reviews.py for non-HTTP callers
"""

from datetime import datetime

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

from bookreview.services.reviews import clean_comment, clean_rating


class ReviewWrite(BaseModel):
    """
    Schema for creating or updating a review.

    PUT replaces both fields, so update uses the same schema as create.

    Example request body:
    {
        "rating": 5,
        "comment": "One of the best books I've ever read."
    }
    """

    rating: int = Field(
        ...,
        description="Rating from 1 to 5 stars",
        examples=[4, 5],
    )

    comment: str = Field(
        ...,
        max_length=5000,
        description="Review text content",
        examples=["This book changed my perspective on..."],
    )

    @field_validator("rating", mode="before")
    @classmethod
    def rating_in_range(cls, v) -> int:
        # Runs before int coercion so "abc", 4.5 and true all get the same message
        return clean_rating(v)

    @field_validator("comment", mode="before")
    @classmethod
    def comment_not_blank(cls, v) -> str:
        return clean_comment(v)


class ReviewAuthor(BaseModel):
    """Author of a review, resolved to the username only."""

    username: str

    model_config = ConfigDict(from_attributes=True)


class ReviewResponse(BaseModel):
    """
    Schema for review responses.

    "book" carries the reviewed book's id; "user" is the author reduced
    to a username.
    """

    id: int = Field(..., description="Unique review identifier")
    book_id: int = Field(
        ...,
        validation_alias=AliasChoices("book_id", "book"),
        serialization_alias="book",
        description="ID of the reviewed book",
    )
    user: ReviewAuthor = Field(..., description="User who wrote the review")
    rating: int = Field(..., ge=1, le=5)
    comment: str
    created_at: datetime = Field(
        ...,
        validation_alias=AliasChoices("created_at", "createdAt"),
        serialization_alias="createdAt",
    )
    updated_at: datetime = Field(
        ...,
        validation_alias=AliasChoices("updated_at", "updatedAt"),
        serialization_alias="updatedAt",
    )

    model_config = ConfigDict(
        from_attributes=True,
        json_schema_extra={
            "example": {
                "id": 1,
                "book": 42,
                "user": {"username": "booklover"},
                "rating": 5,
                "comment": "A must-read classic!",
                "createdAt": "2024-01-15T10:30:00Z",
                "updatedAt": "2024-01-15T10:30:00Z",
            }
        },
    )
