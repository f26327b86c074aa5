"""
Book Catalog Service

Creates books and answers the two read paths over them:

- list_books: paginated listing with optional author/genre filters (AND)
- search_books: title OR author match, unpaginated

All text matching is a case-insensitive substring match. Results are
ordered newest first.
"""

import logging

from sqlalchemy import ColumnElement, func, or_, select
from sqlalchemy.orm import Session

from bookreview.database import is_storable_id
from bookreview.exceptions import NotFoundError, ValidationError
from bookreview.models import Book

logger = logging.getLogger(__name__)

LIKE_ESCAPE = "\\"


def contains_ci(column, term: str) -> ColumnElement[bool]:
    """
    Case-insensitive substring match on a text column.

    % and _ in the user's term are escaped so they match literally.
    """
    escaped = (
        term.lower()
        .replace(LIKE_ESCAPE, LIKE_ESCAPE * 2)
        .replace("%", f"{LIKE_ESCAPE}%")
        .replace("_", f"{LIKE_ESCAPE}_")
    )
    return func.lower(column).like(f"%{escaped}%", escape=LIKE_ESCAPE)


def newest_first(stmt):
    # id breaks ties between books created in the same instant
    return stmt.order_by(Book.created_at.desc(), Book.id.desc())


def create_book(
    db: Session,
    creator_id: int,
    title: str,
    author: str,
    genre: str,
    description: str,
) -> Book:
    """
    Add a book to the catalog.

    Args:
        db: Database session
        creator_id: ID of the authenticated user adding the book
        title, author, genre, description: Trimmed, non-empty text

    Returns:
        The created Book
    """
    book = Book(
        title=title,
        author=author,
        genre=genre,
        description=description,
        created_by_id=creator_id,
    )
    db.add(book)
    db.commit()
    db.refresh(book)

    logger.info(f"Book created: id={book.id} title='{book.title}' by user {creator_id}")
    return book


def get_book(db: Session, book_id: int) -> Book:
    """
    Get a book by ID.

    Raises:
        NotFoundError: If the book does not exist
    """
    if not is_storable_id(book_id):
        raise NotFoundError("Book not found")
    book = db.get(Book, book_id)
    if book is None:
        raise NotFoundError("Book not found")
    return book


def list_books(
    db: Session,
    author: str | None = None,
    genre: str | None = None,
    skip: int = 0,
    limit: int = 10,
) -> tuple[list[Book], int]:
    """
    List books with optional filters.

    Filters:
    - author: substring of the author name
    - genre: substring of the genre
    When both are given a book must match both.

    Args:
        db: Database session
        author: Optional author filter
        genre: Optional genre filter
        skip: Number of books to skip
        limit: Maximum number of books to return

    Returns:
        Tuple of (books for this page, total matching books)
    """
    stmt = select(Book)
    if author:
        stmt = stmt.where(contains_ci(Book.author, author))
    if genre:
        stmt = stmt.where(contains_ci(Book.genre, genre))

    count_stmt = select(func.count()).select_from(stmt.subquery())
    total = db.execute(count_stmt).scalar() or 0

    page_stmt = newest_first(stmt).offset(skip).limit(limit)
    books = list(db.execute(page_stmt).scalars().all())

    return books, total


def search_books(db: Session, query: str | None) -> list[Book]:
    """
    Search books by title or author.

    Args:
        db: Database session
        query: Text to look for in the title or the author name

    Returns:
        All matching books, newest first

    Raises:
        ValidationError: If the query is missing or blank
    """
    if query is None or not query.strip():
        raise ValidationError("Search query is required")

    term = query.strip()
    stmt = newest_first(
        select(Book).where(
            or_(
                contains_ci(Book.title, term),
                contains_ci(Book.author, term),
            )
        )
    )
    return list(db.execute(stmt).scalars().all())
