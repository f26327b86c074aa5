"""
Book Review API Application Package

This is the main application package for the Book Review API.
Books, user accounts and reviews live here, along with the review
aggregation logic that ties them together.

Package Structure:
- config.py: Application configuration using Pydantic Settings
- database.py: SQLAlchemy database connection and session management
- exceptions.py: Domain exceptions mapped to HTTP responses
- main.py: FastAPI application factory and configuration
- dependencies.py: Dependency injection functions
- models/: SQLAlchemy ORM models
- schemas/: Pydantic request/response schemas
- routers/: API route handlers
- services/: Business logic (catalog, reviews, ratings, security)
"""

__version__ = "0.1.0"
