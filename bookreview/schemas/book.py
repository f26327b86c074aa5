"""
Book Pydantic Schemas

Schemas:
- BookCreate: Request body for adding a book
- BookResponse: Public book fields (the identifier is not part of this shape)
- BookListResponse: Paginated, filterable listing
- BookSearchResponse: Title/author search results
- BookDetailResponse: A book with its average rating and a page of reviews

JSON keys are camelCase (createdAt, averageRating, ...). Fields keep
snake_case names in Python and declare a serialization_alias; the
validation_alias accepts both spellings because FastAPI re-validates the
dumped response against the response model.
"""

from datetime import datetime

from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    Field,
    ValidationInfo,
    field_validator,
)

from bookreview.schemas.pagination import PaginationMeta
from bookreview.schemas.review import ReviewResponse


class BookCreate(BaseModel):
    """
    Schema for adding a book to the catalog.

    All four fields are required and are trimmed before storage.

    Example request body:
    {
        "title": "Dune",
        "author": "Frank Herbert",
        "genre": "Science Fiction",
        "description": "A desert planet, a messiah, a spice."
    }
    """

    title: str = Field(
        ...,
        max_length=500,
        description="Book title",
        examples=["Dune", "Pride and Prejudice"],
    )

    author: str = Field(
        ...,
        max_length=255,
        description="Author name",
        examples=["Frank Herbert"],
    )

    genre: str = Field(
        ...,
        max_length=100,
        description="Genre name",
        examples=["Science Fiction"],
    )

    description: str = Field(
        ...,
        max_length=5000,
        description="Book description or summary",
    )

    @field_validator("title", "author", "genre", "description")
    @classmethod
    def must_not_be_blank(cls, v: str, info: ValidationInfo) -> str:
        """Trim the value and reject whitespace-only input."""
        v = v.strip()
        if not v:
            raise ValueError(f"{info.field_name.capitalize()} is required")
        return v


class BookResponse(BaseModel):
    """Book fields returned by create, list, search and detail."""

    title: str
    author: str
    genre: str
    description: str
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
                "title": "Dune",
                "author": "Frank Herbert",
                "genre": "Science Fiction",
                "description": "A desert planet, a messiah, a spice.",
                "createdAt": "2024-01-15T10:30:00Z",
                "updatedAt": "2024-01-15T10:30:00Z",
            }
        },
    )


class BookListResponse(BaseModel):
    """Paginated list of books, newest first."""

    books: list[BookResponse]
    pagination: PaginationMeta


class BookSearchResponse(BaseModel):
    """Unpaginated search results with the number of matches."""

    books: list[BookResponse]
    count: int = Field(..., ge=0)


class BookDetailResponse(BaseModel):
    """
    A book joined with its aggregate rating and a page of its reviews.

    average_rating is 0 when the book has no reviews.
    """

    book: BookResponse
    average_rating: float = Field(
        ...,
        ge=0,
        le=5,
        validation_alias=AliasChoices("average_rating", "averageRating"),
        serialization_alias="averageRating",
        description="Mean rating rounded to one decimal (0 means no reviews)",
    )
    reviews: list[ReviewResponse]
    reviews_pagination: PaginationMeta = Field(
        ...,
        validation_alias=AliasChoices("reviews_pagination", "reviewsPagination"),
        serialization_alias="reviewsPagination",
    )
