"""
pytest Fixtures for Book Review API Tests

This file contains shared fixtures used across all test files.

FIXTURE SCOPES:
- session scope for the engine (expensive to create)
- function scope for sessions (isolation between tests)
"""

# =============================================================================
# TEST ENVIRONMENT SETUP
# =============================================================================
# IMPORTANT: Set environment variables BEFORE importing the app
# This disables rate limiting, sets a test secret key and points the
# application engine at an in-memory database.
import os

os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ["SECRET_KEY"] = "test-secret-key-for-unit-tests-at-least-32-characters-long"
os.environ["DATABASE_URL"] = "sqlite://"

from collections.abc import Callable, Generator

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from bookreview.database import Base, get_db
from bookreview.main import app
from bookreview.models import Book, Review, User
from bookreview.services.security import create_access_token, hash_password

# Users that never log in skip bcrypt to keep the suite fast
UNUSABLE_PASSWORD_HASH = "!unusable"


# =============================================================================
# DATABASE FIXTURES
# =============================================================================
# SQLite in-memory: fast, isolated, no external database needed.
# The unique and check constraints on reviews are enforced by SQLite too.

@pytest.fixture(scope="session")
def engine():
    """
    Create a SQLite in-memory database engine.

    StaticPool keeps the connection alive for the entire session.
    Without it, SQLite in-memory database would disappear between connections.
    """
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    Base.metadata.create_all(bind=engine)

    yield engine

    Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def db_session(engine) -> Generator[Session, None, None]:
    """
    Create a fresh database session for each test.

    The session is wrapped in a transaction that's rolled back,
    ensuring test isolation without needing to recreate tables.
    """
    TestSessionLocal = sessionmaker(
        autocommit=False,
        autoflush=False,
        bind=engine,
    )

    connection = engine.connect()
    transaction = connection.begin()
    session = TestSessionLocal(bind=connection)

    yield session

    session.close()
    transaction.rollback()
    connection.close()


@pytest.fixture(scope="function")
def client(db_session: Session) -> Generator[TestClient, None, None]:
    """
    Create a test client with the test database.

    We override the get_db dependency to use our test session.
    """

    def override_get_db():
        """Provide test database session instead of real one."""
        try:
            yield db_session
        finally:
            pass  # Session cleanup handled by db_session fixture

    app.dependency_overrides[get_db] = override_get_db

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


# =============================================================================
# USER FIXTURES
# =============================================================================


def get_auth_header(user: User) -> dict:
    """Create an Authorization header for a user."""
    token = create_access_token(user.id)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def make_user(db_session: Session) -> Callable[..., User]:
    """Factory for users that only need a token, not a password."""

    def _make_user(username: str) -> User:
        user = User(
            username=username,
            email=f"{username}@example.com",
            hashed_password=UNUSABLE_PASSWORD_HASH,
        )
        db_session.add(user)
        db_session.commit()
        db_session.refresh(user)
        return user

    return _make_user


@pytest.fixture
def sample_user(db_session: Session) -> User:
    """Create a sample user with a real password for login tests."""
    user = User(
        username="testuser",
        email="testuser@example.com",
        hashed_password=hash_password("secret123"),
    )
    db_session.add(user)
    db_session.commit()
    db_session.refresh(user)
    return user


@pytest.fixture
def second_user(make_user) -> User:
    """Create a second user for testing ownership scenarios."""
    return make_user("seconduser")


@pytest.fixture
def sample_headers(sample_user: User) -> dict:
    return get_auth_header(sample_user)


@pytest.fixture
def second_headers(second_user: User) -> dict:
    return get_auth_header(second_user)


# =============================================================================
# BOOK & REVIEW FIXTURES
# =============================================================================


@pytest.fixture
def make_book(db_session: Session) -> Callable[..., Book]:
    """Factory for books with overridable fields."""

    def _make_book(
        title: str = "Dune",
        author: str = "Frank Herbert",
        genre: str = "Science Fiction",
        description: str = "A desert planet, a messiah, a spice.",
        created_by: User | None = None,
    ) -> Book:
        book = Book(
            title=title,
            author=author,
            genre=genre,
            description=description,
            created_by_id=created_by.id if created_by else None,
        )
        db_session.add(book)
        db_session.commit()
        db_session.refresh(book)
        return book

    return _make_book


@pytest.fixture
def sample_book(make_book, sample_user: User) -> Book:
    """Create the book "Dune"."""
    return make_book(created_by=sample_user)


@pytest.fixture
def multiple_books(make_book) -> list[Book]:
    """Create 15 books (more than the default page size), oldest first."""
    genres = ["Fantasy", "Science Fiction", "Mystery"]
    return [
        make_book(
            title=f"Test Book {i + 1}",
            author="George Orwell" if i % 2 == 0 else "Jane Austen",
            genre=genres[i % 3],
            description=f"Description for book {i + 1}",
        )
        for i in range(15)
    ]


@pytest.fixture
def make_review(db_session: Session) -> Callable[..., Review]:
    """Factory for reviews inserted directly, bypassing the service."""

    def _make_review(book: Book, user: User, rating: int = 4, comment: str = "Good read.") -> Review:
        review = Review(
            book_id=book.id,
            user_id=user.id,
            rating=rating,
            comment=comment,
        )
        db_session.add(review)
        db_session.commit()
        db_session.refresh(review)
        return review

    return _make_review


@pytest.fixture
def sample_review(make_review, sample_book: Book, sample_user: User) -> Review:
    """Create a 4-star review of "Dune" by sample_user."""
    return make_review(sample_book, sample_user, rating=4, comment="I really enjoyed reading this book.")
