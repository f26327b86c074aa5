"""
Tests for Application-Level Behaviour

Root and health endpoints, plus the exception handlers that give every
error the same JSON shape.
"""

import pytest
from fastapi import status
from fastapi.testclient import TestClient
from sqlalchemy.exc import OperationalError

from bookreview.config import get_settings
from bookreview.exceptions import ConflictError, NotFoundError, ValidationError
from bookreview.main import app, format_validation_errors


class TestRootAndHealth:
    """Tests for GET / and GET /health"""

    def test_root(self, client):
        response = client.get("/")

        assert response.status_code == status.HTTP_200_OK
        assert response.json() == {"message": "Book Review API is running!"}

    def test_health(self, client):
        response = client.get("/health")

        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["status"] == "healthy"
        assert data["database"] == "ok"
        assert data["rate_limiting"]["enabled"] is False

    def test_health_database_down(self, client, monkeypatch):
        def fail():
            raise OperationalError("SELECT 1", {}, Exception("connection refused"))

        monkeypatch.setattr("bookreview.main.check_database_connection", fail)

        response = client.get("/health")

        assert response.status_code == status.HTTP_503_SERVICE_UNAVAILABLE
        assert response.json()["status"] == "unhealthy"


class TestErrorHandlers:
    """Every error body is {"error": ...} or {"errors": [...]}"""

    def test_unknown_route(self, client):
        response = client.get("/no-such-route")

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.json() == {"error": "Not Found"}

    def test_method_not_allowed(self, client):
        response = client.patch("/books")

        assert response.status_code == status.HTTP_405_METHOD_NOT_ALLOWED
        assert "error" in response.json()

    def test_malformed_json_body(self, client, sample_headers):
        response = client.post(
            "/books",
            content="{not json",
            headers={**sample_headers, "Content-Type": "application/json"},
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert "errors" in response.json()

    def test_database_error_hidden(self, client, monkeypatch):
        def broken_search(db, query):
            raise OperationalError("SELECT", {}, Exception("disk I/O error"))

        monkeypatch.setattr("bookreview.routers.search.search_books", broken_search)

        response = client.get("/search", params={"q": "dune"})

        assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
        assert response.json() == {"error": "Server error"}

    def test_unexpected_error_hidden(self, client, monkeypatch):
        def broken_search(db, query):
            raise RuntimeError("secret internals")

        monkeypatch.setattr("bookreview.routers.search.search_books", broken_search)

        with TestClient(app, raise_server_exceptions=False) as safe_client:
            response = safe_client.get("/search", params={"q": "dune"})

        assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
        assert response.json() == {"error": "Server error"}


class TestBodySizeLimit:
    """Requests over settings.max_body_size are refused before parsing"""

    def test_oversized_body_rejected(self, client, sample_headers):
        oversized = b"x" * (get_settings().max_body_size + 1)

        response = client.post(
            "/books",
            content=oversized,
            headers={**sample_headers, "Content-Type": "application/json"},
        )

        assert response.status_code == status.HTTP_413_REQUEST_ENTITY_TOO_LARGE
        assert response.json() == {"error": "Request body too large"}

    def test_body_under_limit_accepted(self, client, sample_headers):
        response = client.post(
            "/books",
            json={
                "title": "Dune",
                "author": "Frank Herbert",
                "genre": "Science Fiction",
                "description": "x" * 4000,
            },
            headers=sample_headers,
        )

        assert response.status_code == status.HTTP_201_CREATED


class TestDomainExceptions:
    """Tests for the exception hierarchy in bookreview.exceptions"""

    def test_default_messages(self):
        assert NotFoundError().message == "Not found"
        assert ConflictError().status_code == 400

    def test_validation_error_without_fields(self):
        assert ValidationError("Search query is required").to_content() == {
            "error": "Search query is required"
        }

    def test_validation_error_for_field(self):
        error = ValidationError.for_field("comment", "Comment is required")

        assert error.to_content() == {
            "errors": [{"field": "comment", "message": "Comment is required", "location": "body"}]
        }


class TestFormatValidationErrors:
    """Tests for format_validation_errors()"""

    @pytest.mark.parametrize(
        "raw, expected",
        [
            (
                {"loc": ("body", "rating"), "msg": "Value error, Rating must be between 1 and 5"},
                {"field": "rating", "message": "Rating must be between 1 and 5", "location": "body"},
            ),
            (
                {"loc": ("path", "book_id"), "msg": "Input should be a valid integer"},
                {"field": "book_id", "message": "Input should be a valid integer", "location": "path"},
            ),
            (
                {"loc": ("body",), "msg": "Field required"},
                {"field": "body", "message": "Field required", "location": "body"},
            ),
        ],
    )
    def test_flattens_errors(self, raw, expected):
        assert format_validation_errors([raw]) == [expected]
