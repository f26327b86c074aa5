"""
SQLAlchemy Models Package

This package contains all database models for the Book Review API.

Model Relationships:
- Book <-> Review: One-to-Many (a book collects many reviews)
- User <-> Review: One-to-Many (at most one review per user per book)
- User <-> Book: One-to-Many through created_by_id (informational only)

Import all models here to:
1. Make them available as: from bookreview.models import Book, Review, User
2. Ensure Alembic discovers them for migrations
"""

from bookreview.models.user import User
from bookreview.models.book import Book
from bookreview.models.review import Review

__all__ = [
    "User",
    "Book",
    "Review",
]
