"""
Tests for Search Endpoint

GET /search?q= matches title OR author, case-insensitively, and returns
every match with a count.
"""

import pytest
from fastapi import status


@pytest.fixture
def catalog_books(make_book):
    """Books created oldest to newest."""
    return [
        make_book(title="Dune", author="Frank Herbert", genre="Science Fiction"),
        make_book(title="Dune Messiah", author="Frank Herbert", genre="Science Fiction"),
        make_book(title="Emma", author="Jane Austen", genre="Romance"),
        make_book(title="100% Pure", author="Ann Dunham", genre="Memoir"),
        make_book(title="The Hobbit", author="J.R.R. Tolkien", genre="Fantasy"),
    ]


class TestSearch:
    """Tests for GET /search"""

    def test_search_by_title_fragment(self, client, catalog_books):
        response = client.get("/search", params={"q": "messiah"})

        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["count"] == 1
        assert data["books"][0]["title"] == "Dune Messiah"

    def test_search_by_author(self, client, catalog_books):
        response = client.get("/search", params={"q": "Austen"})

        data = response.json()
        assert [book["title"] for book in data["books"]] == ["Emma"]

    def test_search_matches_title_or_author(self, client, catalog_books):
        """'dun' is in two titles and in one author's name."""
        response = client.get("/search", params={"q": "dun"})

        data = response.json()
        assert data["count"] == 3
        assert [book["title"] for book in data["books"]] == ["100% Pure", "Dune Messiah", "Dune"]

    def test_search_is_case_insensitive(self, client, catalog_books):
        lower = client.get("/search", params={"q": "hobbit"}).json()
        upper = client.get("/search", params={"q": "HOBBIT"}).json()

        assert lower == upper
        assert lower["count"] == 1

    def test_search_does_not_match_genre(self, client, catalog_books):
        response = client.get("/search", params={"q": "Romance"})

        assert response.json() == {"books": [], "count": 0}

    def test_search_no_matches(self, client, catalog_books):
        response = client.get("/search", params={"q": "Zanzibar"})

        assert response.status_code == status.HTTP_200_OK
        assert response.json() == {"books": [], "count": 0}

    def test_search_wildcards_match_literally(self, client, catalog_books):
        percent = client.get("/search", params={"q": "100%"}).json()
        underscore = client.get("/search", params={"q": "_"}).json()

        assert [book["title"] for book in percent["books"]] == ["100% Pure"]
        assert underscore["count"] == 0

    def test_search_trims_query(self, client, catalog_books):
        response = client.get("/search", params={"q": "  emma  "})

        assert response.json()["count"] == 1

    def test_search_results_have_no_ids(self, client, catalog_books):
        response = client.get("/search", params={"q": "emma"})

        assert "id" not in response.json()["books"][0]

    def test_search_missing_query(self, client):
        response = client.get("/search")

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json() == {"error": "Search query is required"}

    @pytest.mark.parametrize("q", ["", "   "])
    def test_search_blank_query(self, client, q):
        response = client.get("/search", params={"q": q})

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json() == {"error": "Search query is required"}

    def test_search_not_paginated(self, client, make_book):
        for i in range(25):
            make_book(title=f"Saga Volume {i}", author="Anon", genre="Epic")

        response = client.get("/search", params={"q": "saga"})

        data = response.json()
        assert data["count"] == 25
        assert len(data["books"]) == 25
