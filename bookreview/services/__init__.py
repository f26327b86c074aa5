"""
Services Package

This package contains business logic services that are:
- Separate from HTTP handling (routers)
- Reusable across different parts of the application
- Easier to test in isolation

Services raise the domain exceptions from bookreview.exceptions; the
app factory maps them to HTTP responses.

Current services:
- auth.py: Account signup and credential checks
- book_detail.py: Book + reviews page + average rating in one read
- catalog.py: Book creation, filtered listing and search
- rate_limiter.py: Rate limiting with slowapi
- ratings.py: Average rating computed from the reviews table
- reviews.py: Review create/update/delete with the one-per-user rule
- security.py: Password hashing and JWT utilities
"""
