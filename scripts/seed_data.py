#!/usr/bin/env python3
"""
Database Seed Script

Populates the database with sample users, books and reviews for
development.

USAGE:
    # From the project root with the virtualenv active
    python scripts/seed_data.py

This script:
1. Creates tables if they don't exist
2. Clears existing data (optional)
3. Registers a few users
4. Adds books and reviews through the same services the API uses,
   so the one-review-per-user rule applies to seed data too
"""

import sys
from pathlib import Path

# Add project root to Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from sqlalchemy import delete
from sqlalchemy.orm import Session

from bookreview.database import SessionLocal, create_tables
from bookreview.models import Book, Review, User
from bookreview.services.auth import register_user
from bookreview.services.catalog import create_book
from bookreview.services.ratings import compute_average
from bookreview.services.reviews import create_review

SEED_PASSWORD = "password123"


def clear_data(db: Session) -> None:
    """Clear all existing data from the database."""
    print("Clearing existing data...")
    db.execute(delete(Review))
    db.execute(delete(Book))
    db.execute(delete(User))
    db.commit()
    print("Data cleared.")


def create_users(db: Session) -> dict[str, User]:
    """Register sample users (all share SEED_PASSWORD)."""
    print("Creating users...")
    usernames = ["alice", "bob", "carol"]

    users = {
        name: register_user(db, username=name, email=f"{name}@example.com", password=SEED_PASSWORD)
        for name in usernames
    }

    print(f"Created {len(users)} users.")
    return users


def create_books(db: Session, creator: User) -> dict[str, Book]:
    """Create sample books."""
    print("Creating books...")
    books_data = [
        {
            "title": "Dune",
            "author": "Frank Herbert",
            "genre": "Science Fiction",
            "description": "A noble family is handed control of the desert planet Arrakis.",
        },
        {
            "title": "1984",
            "author": "George Orwell",
            "genre": "Dystopian Fiction",
            "description": "A dystopian novel set in a totalitarian society.",
        },
        {
            "title": "Pride and Prejudice",
            "author": "Jane Austen",
            "genre": "Romance",
            "description": "Elizabeth Bennet and Mr. Darcy misjudge each other.",
        },
        {
            "title": "Foundation",
            "author": "Isaac Asimov",
            "genre": "Science Fiction",
            "description": "A mathematician foresees the fall of the Galactic Empire.",
        },
        {
            "title": "The Hobbit",
            "author": "J.R.R. Tolkien",
            "genre": "Fantasy",
            "description": "Bilbo Baggins embarks on a quest to reclaim the Lonely Mountain.",
        },
        {
            "title": "Murder on the Orient Express",
            "author": "Agatha Christie",
            "genre": "Mystery",
            "description": "Hercule Poirot investigates a murder on a snowbound train.",
        },
    ]

    books = {
        data["title"]: create_book(db, creator_id=creator.id, **data)
        for data in books_data
    }

    print(f"Created {len(books)} books.")
    return books


def create_reviews(db: Session, users: dict[str, User], books: dict[str, Book]) -> int:
    """Create sample reviews, at most one per user per book."""
    print("Creating reviews...")
    reviews_data = [
        ("alice", "Dune", 5, "Sprawling, strange and unforgettable."),
        ("bob", "Dune", 3, "Great world-building, slow middle."),
        ("carol", "Dune", 4, "The ecology alone is worth it."),
        ("alice", "1984", 5, "Chilling and more relevant every year."),
        ("bob", "Pride and Prejudice", 4, "Sharper and funnier than I expected."),
        ("carol", "Foundation", 4, "Ideas first, characters second, still gripping."),
        ("alice", "The Hobbit", 5, "A perfect adventure."),
    ]

    for username, title, rating, comment in reviews_data:
        create_review(
            db,
            book_id=books[title].id,
            user_id=users[username].id,
            rating=rating,
            comment=comment,
        )

    print(f"Created {len(reviews_data)} reviews.")
    return len(reviews_data)


def seed_database(clear_existing: bool = True) -> None:
    """
    Main function to seed the database.

    Args:
        clear_existing: If True, clears existing data before seeding.
    """
    print("=" * 60)
    print("Starting database seed...")
    print("=" * 60)

    create_tables()
    db = SessionLocal()

    try:
        if clear_existing:
            clear_data(db)

        users = create_users(db)
        books = create_books(db, users["alice"])
        review_count = create_reviews(db, users, books)

        print("=" * 60)
        print("Database seeding completed successfully!")
        print("=" * 60)
        print("\nSummary:")
        print(f"  - Users: {len(users)} (password: {SEED_PASSWORD})")
        print(f"  - Books: {len(books)}")
        print(f"  - Reviews: {review_count}")
        print(f"  - Dune average rating: {compute_average(db, books['Dune'].id).average}")

    except Exception as e:
        print(f"Error seeding database: {e}")
        db.rollback()
        raise
    finally:
        db.close()


if __name__ == "__main__":
    seed_database()
