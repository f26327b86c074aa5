"""
Tests for Authentication Endpoints

Covers signup, login and the bearer-token check that protects write
endpoints.
"""

from datetime import timedelta

from fastapi import status

from bookreview.models import User
from bookreview.services.security import create_access_token, get_token_user_id


def get_auth_header(user: User) -> dict:
    """Create authorization header for a user."""
    token = create_access_token(user.id)
    return {"Authorization": f"Bearer {token}"}


class TestSignup:
    """Tests for POST /auth/signup"""

    def test_signup_success(self, client):
        """Signup returns a token and the account summary."""
        response = client.post(
            "/auth/signup",
            json={
                "username": "newuser",
                "email": "newuser@example.com",
                "password": "secret123",
            },
        )

        assert response.status_code == status.HTTP_201_CREATED
        data = response.json()
        assert data["message"] == "User created successfully"
        assert data["user"] == {"username": "newuser", "email": "newuser@example.com"}
        assert get_token_user_id(data["token"]) is not None

    def test_signup_never_returns_password(self, client):
        response = client.post(
            "/auth/signup",
            json={"username": "newuser", "email": "new@example.com", "password": "secret123"},
        )

        body = response.text
        assert "secret123" not in body
        assert "hashed_password" not in body

    def test_signup_trims_username(self, client):
        response = client.post(
            "/auth/signup",
            json={"username": "  spaced  ", "email": "spaced@example.com", "password": "secret123"},
        )

        assert response.status_code == status.HTTP_201_CREATED
        assert response.json()["user"]["username"] == "spaced"

    def test_signup_duplicate_email(self, client, sample_user):
        response = client.post(
            "/auth/signup",
            json={"username": "different", "email": sample_user.email, "password": "secret123"},
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json() == {"error": "User already exists"}

    def test_signup_duplicate_username(self, client, sample_user):
        response = client.post(
            "/auth/signup",
            json={"username": sample_user.username, "email": "other@example.com", "password": "secret123"},
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json() == {"error": "User already exists"}

    def test_signup_short_username(self, client):
        response = client.post(
            "/auth/signup",
            json={"username": "ab", "email": "ab@example.com", "password": "secret123"},
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        errors = response.json()["errors"]
        assert errors[0]["field"] == "username"
        assert errors[0]["message"] == "Username must be at least 3 characters"

    def test_signup_invalid_email(self, client):
        response = client.post(
            "/auth/signup",
            json={"username": "newuser", "email": "not-an-email", "password": "secret123"},
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        fields = [error["field"] for error in response.json()["errors"]]
        assert fields == ["email"]

    def test_signup_short_password(self, client):
        response = client.post(
            "/auth/signup",
            json={"username": "newuser", "email": "new@example.com", "password": "12345"},
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        errors = response.json()["errors"]
        assert errors[0]["field"] == "password"
        assert errors[0]["message"] == "Password must be at least 6 characters"

    def test_signup_reports_every_invalid_field(self, client):
        response = client.post(
            "/auth/signup",
            json={"username": "ab", "email": "nope", "password": "123"},
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        fields = {error["field"] for error in response.json()["errors"]}
        assert fields == {"username", "email", "password"}


class TestLogin:
    """Tests for POST /auth/login"""

    def test_login_success(self, client, sample_user):
        response = client.post(
            "/auth/login",
            json={"email": "testuser@example.com", "password": "secret123"},
        )

        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["message"] == "Login successful"
        assert data["user"]["username"] == "testuser"
        assert get_token_user_id(data["token"]) == sample_user.id

    def test_login_wrong_password(self, client, sample_user):
        response = client.post(
            "/auth/login",
            json={"email": "testuser@example.com", "password": "wrongpassword"},
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json() == {"error": "Invalid credentials"}

    def test_login_unknown_email(self, client):
        """Unknown email and wrong password look the same to the client."""
        response = client.post(
            "/auth/login",
            json={"email": "nobody@example.com", "password": "secret123"},
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json() == {"error": "Invalid credentials"}

    def test_login_empty_password(self, client, sample_user):
        response = client.post(
            "/auth/login",
            json={"email": "testuser@example.com", "password": ""},
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json()["errors"][0]["message"] == "Password is required"

    def test_signup_then_login(self, client):
        client.post(
            "/auth/signup",
            json={"username": "roundtrip", "email": "roundtrip@example.com", "password": "secret123"},
        )

        response = client.post(
            "/auth/login",
            json={"email": "roundtrip@example.com", "password": "secret123"},
        )

        assert response.status_code == status.HTTP_200_OK


class TestBearerToken:
    """Tests for the Authorization header on protected endpoints"""

    book_payload = {
        "title": "Dune",
        "author": "Frank Herbert",
        "genre": "Science Fiction",
        "description": "A desert planet.",
    }

    def test_missing_token(self, client):
        response = client.post("/books", json=self.book_payload)

        assert response.status_code == status.HTTP_401_UNAUTHORIZED
        assert response.json() == {"error": "No token, authorization denied"}

    def test_malformed_token(self, client):
        response = client.post(
            "/books",
            json=self.book_payload,
            headers={"Authorization": "Bearer not-a-jwt"},
        )

        assert response.status_code == status.HTTP_401_UNAUTHORIZED
        assert response.json() == {"error": "Token is not valid"}

    def test_expired_token(self, client, sample_user):
        token = create_access_token(sample_user.id, expires_delta=timedelta(seconds=-1))

        response = client.post(
            "/books",
            json=self.book_payload,
            headers={"Authorization": f"Bearer {token}"},
        )

        assert response.status_code == status.HTTP_401_UNAUTHORIZED
        assert response.json() == {"error": "Token is not valid"}

    def test_token_for_deleted_user(self, client, db_session, make_user):
        user = make_user("ghost")
        headers = get_auth_header(user)
        db_session.delete(user)
        db_session.commit()

        response = client.post("/books", json=self.book_payload, headers=headers)

        assert response.status_code == status.HTTP_401_UNAUTHORIZED
        assert response.json() == {"error": "Token is not valid"}

    def test_valid_token(self, client, sample_headers):
        response = client.post("/books", json=self.book_payload, headers=sample_headers)

        assert response.status_code == status.HTTP_201_CREATED
