"""
User Pydantic Schemas

These schemas define the shape of data for signup and login.

Schemas:
- SignupRequest: Registration data (username, email, password)
- LoginRequest: Email/password credentials
- UserSummary: Public account fields (never exposes the password)
- AuthResponse: Message, bearer token and account summary

Pydantic v2 Features Used:
- Field(): Define constraints and metadata
- field_validator: Validate and transform field values
- EmailStr: Built-in email validation
"""

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator

MIN_USERNAME_LENGTH = 3
MIN_PASSWORD_LENGTH = 6


class SignupRequest(BaseModel):
    """
    Schema for user registration.

    Example request body:
    {
        "username": "booklover",
        "email": "booklover@example.com",
        "password": "secret123"
    }
    """

    username: str = Field(
        ...,
        max_length=50,
        description=f"Unique username (at least {MIN_USERNAME_LENGTH} characters)",
        examples=["booklover"],
    )

    email: EmailStr = Field(
        ...,
        description="User's email address",
        examples=["booklover@example.com"],
    )

    password: str = Field(
        ...,
        max_length=72,  # bcrypt ignores anything past 72 bytes
        description=f"Password (at least {MIN_PASSWORD_LENGTH} characters)",
    )

    @field_validator("username")
    @classmethod
    def username_long_enough(cls, v: str) -> str:
        v = v.strip()
        if len(v) < MIN_USERNAME_LENGTH:
            raise ValueError(
                f"Username must be at least {MIN_USERNAME_LENGTH} characters"
            )
        return v

    @field_validator("password")
    @classmethod
    def password_long_enough(cls, v: str) -> str:
        if len(v) < MIN_PASSWORD_LENGTH:
            raise ValueError(
                f"Password must be at least {MIN_PASSWORD_LENGTH} characters"
            )
        return v


class LoginRequest(BaseModel):
    """Schema for email/password login."""

    email: EmailStr = Field(..., description="Registered email address")
    password: str = Field(..., description="Account password")

    @field_validator("password")
    @classmethod
    def password_required(cls, v: str) -> str:
        if not v:
            raise ValueError("Password is required")
        return v


class UserSummary(BaseModel):
    """
    Account fields returned after signup or login.

    SECURITY: Never includes the password hash or internal ids.
    """

    username: str
    email: str

    model_config = ConfigDict(from_attributes=True)


class AuthResponse(BaseModel):
    """Bearer token issued on signup or login."""

    message: str
    token: str = Field(..., description="Bearer token, send as 'Authorization: Bearer <token>'")
    user: UserSummary
