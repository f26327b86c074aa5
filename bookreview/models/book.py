"""
Book Model

The central model of the Book Review API.

A book is a flat record: title, author, genre and description are plain
text columns so the catalog can filter them with case-insensitive substring
matches. Books are created by authenticated users and are never updated or
deleted through the API.

No rating columns live here. The average rating is computed from the
reviews table on every read (see services/ratings.py).
"""

from datetime import UTC, datetime
from typing import TYPE_CHECKING

from sqlalchemy import DateTime, ForeignKey, Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from bookreview.database import Base

if TYPE_CHECKING:
    from bookreview.models.review import Review
    from bookreview.models.user import User


class Book(Base):
    """
    Book model representing books in the catalog.

    Table: books

    Fields:
    - title: Book title (required)
    - author: Author name (required, filterable)
    - genre: Genre name (required, filterable)
    - description: Book summary (required)
    - created_by_id: User who added the book

    Indexes:
    - title, author, genre: Used by search and listing filters
    - created_at: Listings are newest-first

    Example:
        book = Book(
            title="Dune",
            author="Frank Herbert",
            genre="Science Fiction",
            description="A desert planet, a messiah, a spice.",
            created_by_id=user.id,
        )
    """

    __tablename__ = "books"

    # -------------------------------------------------------------------------
    # Primary Key
    # -------------------------------------------------------------------------
    id: Mapped[int] = mapped_column(primary_key=True)

    # -------------------------------------------------------------------------
    # Basic Fields
    # -------------------------------------------------------------------------
    title: Mapped[str] = mapped_column(
        String(500),
        index=True,
        nullable=False,
        comment="Book title"
    )

    author: Mapped[str] = mapped_column(
        String(255),
        index=True,
        nullable=False,
        comment="Author name"
    )

    genre: Mapped[str] = mapped_column(
        String(100),
        index=True,
        nullable=False,
        comment="Genre name"
    )

    description: Mapped[str] = mapped_column(
        Text,
        nullable=False,
        comment="Book description or summary"
    )

    # Informational only; never used for authorization
    created_by_id: Mapped[int | None] = mapped_column(
        ForeignKey("users.id", ondelete="SET NULL"),
        nullable=True,
        comment="User who added the book"
    )

    # -------------------------------------------------------------------------
    # Timestamps
    # -------------------------------------------------------------------------
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(UTC),
        nullable=False,
    )

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(UTC),
        onupdate=lambda: datetime.now(UTC),
        nullable=False,
    )

    # -------------------------------------------------------------------------
    # Relationships
    # -------------------------------------------------------------------------
    created_by: Mapped["User | None"] = relationship(
        "User",
        back_populates="books",
    )

    reviews: Mapped[list["Review"]] = relationship(
        "Review",
        back_populates="book",
        cascade="all, delete-orphan",
    )

    __table_args__ = (
        Index("ix_books_created_at", "created_at"),
    )

    def __repr__(self) -> str:
        return f"Book(id={self.id}, title='{self.title}', author='{self.author}')"
