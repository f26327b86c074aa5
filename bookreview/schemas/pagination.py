"""
Pagination Metadata Schema

Shared by the book listing and by the reviews page embedded in a book's
detail response.
"""

import math

from pydantic import AliasChoices, BaseModel, ConfigDict, Field


class PaginationMeta(BaseModel):
    """
    Pagination metadata returned next to a page of items.

    total_pages is ceil(total / limit), so an empty collection has 0 pages
    and any page past the last one simply comes back empty.
    """

    page: int = Field(..., ge=1, description="Current page number")
    limit: int = Field(..., ge=1, description="Number of items per page")
    total: int = Field(..., ge=0, description="Total number of items")
    total_pages: int = Field(
        ...,
        ge=0,
        validation_alias=AliasChoices("total_pages", "totalPages"),
        serialization_alias="totalPages",
        description="Total number of pages",
    )

    model_config = ConfigDict(
        json_schema_extra={
            "example": {"page": 1, "limit": 10, "total": 42, "totalPages": 5}
        },
    )

    @classmethod
    def build(cls, page: int, limit: int, total: int) -> "PaginationMeta":
        """Create metadata for a page, computing total_pages."""
        return cls(
            page=page,
            limit=limit,
            total=total,
            total_pages=math.ceil(total / limit),
        )
