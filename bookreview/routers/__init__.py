"""
API Routers Package

This package contains FastAPI routers that handle API endpoints.

Router Structure:
- auth.py: /auth/* endpoints (signup, login)
- books.py: /books and /books/{book_id}
- reviews.py: /books/{book_id}/reviews and /reviews/{review_id}
- search.py: /search

Each router is imported and registered in main.py.
"""

from bookreview.routers.auth import router as auth_router
from bookreview.routers.books import router as books_router
from bookreview.routers.reviews import router as reviews_router
from bookreview.routers.search import router as search_router

__all__ = [
    "auth_router",
    "books_router",
    "reviews_router",
    "search_router",
]
