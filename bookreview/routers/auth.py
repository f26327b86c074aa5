"""
Authentication Router

Handles user authentication endpoints:
- Signup (username/email/password → bearer token)
- Login (email/password → bearer token)

Security:
=========
- Passwords are hashed with bcrypt before storage
- Plain text passwords are never logged or stored
- Tokens are JWTs valid for settings.access_token_expire_days
"""

from fastapi import APIRouter, Request, status

from bookreview.config import get_settings
from bookreview.dependencies import DbSession
from bookreview.schemas.user import AuthResponse, LoginRequest, SignupRequest, UserSummary
from bookreview.services.auth import authenticate_user, register_user
from bookreview.services.rate_limiter import limiter
from bookreview.services.security import create_access_token

settings = get_settings()

router = APIRouter(
    prefix="/auth",
    tags=["Authentication"],
    responses={
        400: {"description": "Invalid input, user exists, or bad credentials"},
    },
)


@router.post(
    "/signup",
    response_model=AuthResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Register a new user",
    description="""
    Create a new account and receive a bearer token.

    **Requirements:**
    - username: at least 3 characters
    - email: a valid address
    - password: at least 6 characters
    """,
)
@limiter.limit(settings.rate_limit_auth)
def signup(
    request: Request,
    user_data: SignupRequest,
    db: DbSession,
) -> AuthResponse:
    """
    Register a user with username, email and password.

    Returns 400 if the email or username is already taken.
    """
    user = register_user(
        db,
        username=user_data.username,
        email=user_data.email,
        password=user_data.password,
    )

    return AuthResponse(
        message="User created successfully",
        token=create_access_token(user.id),
        user=UserSummary.model_validate(user),
    )


@router.post(
    "/login",
    response_model=AuthResponse,
    summary="Login with email and password",
    description="""
    Authenticate with email and password to receive a bearer token.

    **Usage:**
    Include the token in the Authorization header:
    ```
    Authorization: Bearer <token>
    ```
    """,
)
@limiter.limit(settings.rate_limit_auth)
def login(
    request: Request,
    credentials: LoginRequest,
    db: DbSession,
) -> AuthResponse:
    """Authenticate a user and return a bearer token."""
    user = authenticate_user(db, email=credentials.email, password=credentials.password)

    return AuthResponse(
        message="Login successful",
        token=create_access_token(user.id),
        user=UserSummary.model_validate(user),
    )
