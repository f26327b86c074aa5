"""
FastAPI Application Entry Point

This module creates and configures the FastAPI application.

Key Concepts:
=============

1. Application Factory Pattern
   - create_app() function returns configured app
   - Easier to test (can create multiple instances)

2. Lifespan Events
   - startup: Verify the database is reachable; abort if it isn't
   - shutdown: Dispose of the connection pool

3. Middleware Stack
   - Rate limiting (slowapi)
   - Request body size limit (413 over settings.max_body_size)
   - CORS: Allow cross-origin requests

4. Exception Handlers
   - Domain errors → their status code with {"error": ...}
   - Request validation errors → 400 with {"errors": [...]}
   - Database and unexpected errors → 500 without internal detail
"""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from bookreview import __version__
from bookreview.config import get_settings
from bookreview.database import engine
from bookreview.exceptions import BookReviewError
from bookreview.middleware import BodySizeLimitMiddleware
from bookreview.routers import (
    auth_router,
    books_router,
    reviews_router,
    search_router,
)
from bookreview.services.rate_limiter import limiter, rate_limit_exceeded_handler

# =============================================================================
# Logging Configuration
# =============================================================================
settings = get_settings()

logging.basicConfig(
    level=getattr(logging, settings.log_level),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

SERVER_ERROR_MESSAGE = "Server error"


def check_database_connection() -> None:
    """Run a trivial query so an unreachable database fails fast."""
    with engine.connect() as connection:
        connection.execute(text("SELECT 1"))


def format_validation_errors(errors) -> list[dict[str, str]]:
    """
    Flatten Pydantic/FastAPI validation errors into field-level messages.

    Each entry has the field path, a human-readable message and where the
    value came from (body, query, path).
    """
    formatted = []
    for error in errors:
        loc = error.get("loc", ())
        location = str(loc[0]) if loc else "body"
        field = ".".join(str(part) for part in loc[1:]) or location
        message = error.get("msg", "Invalid value")
        # Messages raised from our own validators carry Pydantic's prefix
        if message.startswith("Value error, "):
            message = message[len("Value error, "):]
        formatted.append({"field": field, "message": message, "location": location})
    return formatted


# =============================================================================
# Lifespan Events
# =============================================================================
@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Application lifespan context manager.

    Code before yield: Runs on startup
    Code after yield: Runs on shutdown
    """
    # ----- STARTUP -----
    logger.info(f"Starting {settings.app_name}...")
    logger.info(f"Debug mode: {settings.debug}")

    try:
        check_database_connection()
    except SQLAlchemyError:
        logger.critical("Database connection error", exc_info=True)
        raise
    logger.info("Connected to database")

    yield

    # ----- SHUTDOWN -----
    logger.info(f"Shutting down {settings.app_name}...")
    engine.dispose()


# =============================================================================
# Application Factory
# =============================================================================
def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.

    Returns:
        Configured FastAPI application instance
    """
    app = FastAPI(
        title=settings.app_name,
        description="""
## Book Review API

Books, user accounts and reviews.

### Features
- **Books**: Add books, list them with author/genre filters, search by title or author
- **Reviews**: One review per user per book, editable and deletable by its author
- **Ratings**: Average rating computed live from the reviews

### Authentication
Sign up or log in under `/auth` and send `Authorization: Bearer <token>`
to create books and write reviews.
        """,
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    # -------------------------------------------------------------------------
    # Rate Limiting
    # -------------------------------------------------------------------------
    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)
    app.add_middleware(SlowAPIMiddleware)

    # -------------------------------------------------------------------------
    # Request Body Size
    # -------------------------------------------------------------------------
    app.add_middleware(BodySizeLimitMiddleware, max_body_size=settings.max_body_size)

    # -------------------------------------------------------------------------
    # CORS Middleware
    # -------------------------------------------------------------------------
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # -------------------------------------------------------------------------
    # Exception Handlers
    # -------------------------------------------------------------------------
    @app.exception_handler(BookReviewError)
    async def domain_exception_handler(
        request: Request,
        exc: BookReviewError,
    ) -> JSONResponse:
        """Map a domain error to its status code and JSON body."""
        logger.info(
            f"{request.method} {request.url.path} -> {exc.status_code}: {exc.message}"
        )
        return JSONResponse(status_code=exc.status_code, content=exc.to_content())

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(
        request: Request,
        exc: RequestValidationError,
    ) -> JSONResponse:
        """Report invalid request input as 400 with field-level errors."""
        return JSONResponse(
            status_code=400,
            content={"errors": format_validation_errors(exc.errors())},
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(
        request: Request,
        exc: StarletteHTTPException,
    ) -> JSONResponse:
        """Reshape HTTPException (auth, routing) into {"error": ...}."""
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": exc.detail},
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(SQLAlchemyError)
    async def sqlalchemy_exception_handler(
        request: Request,
        exc: SQLAlchemyError,
    ) -> JSONResponse:
        """
        Handle SQLAlchemy database errors.

        Logs the actual error for debugging while hiding details from users.
        """
        logger.error(f"Database error: {exc}")
        return JSONResponse(
            status_code=500,
            content={"error": SERVER_ERROR_MESSAGE},
        )

    @app.exception_handler(Exception)
    async def general_exception_handler(
        request: Request,
        exc: Exception,
    ) -> JSONResponse:
        """
        Catch-all exception handler.

        In debug mode the exception text is returned; otherwise a generic
        message.
        """
        logger.error(f"Unhandled error: {exc}", exc_info=True)

        if settings.debug:
            return JSONResponse(status_code=500, content={"error": str(exc)})

        return JSONResponse(status_code=500, content={"error": SERVER_ERROR_MESSAGE})

    # -------------------------------------------------------------------------
    # Register Routers
    # -------------------------------------------------------------------------
    app.include_router(auth_router)
    app.include_router(books_router)
    app.include_router(reviews_router)
    app.include_router(search_router)

    # -------------------------------------------------------------------------
    # Root & Health
    # -------------------------------------------------------------------------
    @app.get(
        "/",
        tags=["Root"],
        summary="API root",
    )
    async def root() -> dict:
        """Root endpoint confirming the service is up."""
        return {"message": "Book Review API is running!"}

    @app.get(
        "/health",
        tags=["Health"],
        summary="Health check",
        description="Check if the API and its database are reachable.",
    )
    def health_check() -> JSONResponse:
        """
        Health check endpoint for load balancers and monitoring.

        Returns 503 when the database can't be reached.
        """
        try:
            check_database_connection()
            database_ok = True
        except SQLAlchemyError as exc:
            logger.error(f"Health check database error: {exc}")
            database_ok = False

        return JSONResponse(
            status_code=200 if database_ok else 503,
            content={
                "status": "healthy" if database_ok else "unhealthy",
                "app": settings.app_name,
                "version": __version__,
                "database": "ok" if database_ok else "unreachable",
                "rate_limiting": {
                    "enabled": settings.rate_limit_enabled,
                    "default_limit": settings.rate_limit_default,
                },
            },
        )

    return app


# =============================================================================
# Application Instance
# =============================================================================
# This is what uvicorn imports: uvicorn bookreview.main:app

app = create_app()


# =============================================================================
# Development Server
# =============================================================================
# python -m bookreview.main

if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "bookreview.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
    )
