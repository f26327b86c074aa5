"""
Test Suite for the Book Review API

Test Organization:
- conftest.py: Shared fixtures (test database, client, sample data)
- test_app.py: Root, health and error response shapes
- test_auth.py: /auth/signup and /auth/login, bearer token checks
- test_books.py: POST /books and GET /books
- test_book_detail.py: GET /books/{book_id}
- test_reviews.py: Review create/update/delete endpoints
- test_review_service.py: Review store rules called directly
- test_ratings.py: Average rating computation and rounding
- test_search.py: GET /search

Running Tests:
    # Run all tests
    pytest

    # Run with coverage
    pytest --cov=bookreview --cov-report=html

    # Run specific file
    pytest tests/test_reviews.py
"""
