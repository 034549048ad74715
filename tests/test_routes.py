"""Tests for the page routes"""
import json
from unittest.mock import patch

import mysql.connector
import pytest
from fastapi.testclient import TestClient

from bookbrowser.catalog import nyt_service, store
from bookbrowser.catalog.schemas import BookPage, BookSummary
from bookbrowser.main import create_app

ROW = {
    "book_id": 42,
    "title": "Foo",
    "authors": "A|B",
    "description": "d",
    "pages": 100,
    "rating": 4.2,
    "rating_count": 10,
    "genres": "G1|G2",
}


@pytest.fixture
def client():
    return TestClient(create_app())


class TestLandingPage:
    @pytest.mark.parametrize("path", ["/", "/index.html"])
    def test_landing_page(self, client, path):
        response = client.get(path)

        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/html")
        assert 'href="/search/A"' in response.text
        assert 'href="/search/9"' in response.text

    def test_static_assets(self, client):
        response = client.get("/style.css")

        assert response.status_code == 200
        assert "text/css" in response.headers["content-type"]


class TestSearch:
    def test_no_books(self, client):
        with patch.object(store, "search_books", return_value=BookPage(letter="Q")) as search:
            response = client.get("/search/q")

        assert response.status_code == 200
        assert "Titles starting with Q" in response.text
        assert "No books found." in response.text
        search.assert_called_once_with("q", 0)

    def test_page_of_books(self, client):
        page = BookPage(
            letter="A",
            total=25,
            offset=10,
            max_page=3,
            books=[BookSummary(book_id=i, title=f"A title {i}") for i in range(10)],
        )
        with patch.object(store, "search_books", return_value=page) as search:
            response = client.get("/search/a", params={"offset": 10})

        assert response.status_code == 200
        assert 'href="/book/3"' in response.text
        assert "A title 9" in response.text
        assert "Page 2 of 3" in response.text
        assert "offset=0" in response.text
        assert "offset=20" in response.text
        search.assert_called_once_with("a", 10)

    def test_negative_offset_rejected(self, client):
        with patch.object(store, "search_books") as search:
            response = client.get("/search/a", params={"offset": -1})

        assert response.status_code == 422
        search.assert_not_called()

    def test_database_error(self, client):
        error = mysql.connector.Error(msg="Too many connections", errno=1040)
        with patch.object(store, "search_books", side_effect=error):
            response = client.get("/search/a")

        assert response.status_code == 500
        assert response.headers["content-type"].startswith("text/html")
        body = json.loads(response.text)
        assert body["errno"] == 1040
        assert "Too many connections" in body["message"]


class TestBookDetail:
    def test_html(self, client):
        with patch.object(store, "get_book", return_value=ROW):
            response = client.get("/book/42", headers={"Accept": "text/html"})

        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/html")
        assert response.headers["vary"] == "Accept"
        assert "A, B" in response.text
        assert "G1, G2" in response.text

    def test_html_is_the_default(self, client):
        with patch.object(store, "get_book", return_value=ROW):
            response = client.get("/book/42", headers={"Accept": "*/*"})

        assert response.headers["content-type"].startswith("text/html")

    def test_html_review_link_without_authors(self, client):
        row = dict(ROW, authors=None)
        with patch.object(store, "get_book", return_value=row):
            response = client.get("/book/42", headers={"Accept": "text/html"})

        assert response.status_code == 200
        assert "author=None" not in response.text
        assert 'author="' in response.text

    def test_html_not_found(self, client):
        with patch.object(store, "get_book", return_value=None) as get_book:
            response = client.get("/book/missing", headers={"Accept": "text/html"})

        assert response.status_code == 200
        assert "No info found" in response.text
        get_book.assert_called_once_with("missing")

    def test_json(self, client):
        with patch.object(store, "get_book", return_value=ROW):
            response = client.get("/book/42", headers={"Accept": "application/json"})

        assert response.status_code == 200
        assert response.headers["content-type"].startswith("application/json")
        assert response.json() == {
            "bookId": 42,
            "title": "Foo",
            "authors": "A|B",
            "summary": "d",
            "pages": 100,
            "rating": 4.2,
            "ratingCount": 10,
            "genre": "G1|G2",
        }

    def test_json_not_found_is_200(self, client):
        with patch.object(store, "get_book", return_value=None):
            response = client.get("/book/missing", headers={"Accept": "application/json"})

        assert response.status_code == 200
        assert response.json() == {
            "404 Not Found": "Sorry! No info found for the requested book id."
        }

    def test_unsupported_type(self, client):
        with patch.object(store, "get_book", return_value=ROW):
            response = client.get("/book/42", headers={"Accept": "application/xml"})

        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/plain")
        assert response.text == (
            "Sorry! The requested data type is not supported by the endpoint."
        )

    def test_database_error(self, client):
        with patch.object(store, "get_book", side_effect=RuntimeError("connection lost")):
            response = client.get("/book/42")

        assert response.status_code == 500
        assert response.text.startswith("Error: ")
        assert "connection lost" in response.text


class TestReviews:
    def test_reviews(self, client):
        review = {
            "book_title": "1Q84",
            "book_author": "Haruki Murakami",
            "summary": "A novel about two Tokyo residents.",
            "url": "http://www.nytimes.com/review.html",
        }
        with patch.object(nyt_service, "fetch_reviews", return_value=[review]) as fetch:
            response = client.get(
                "/review", params={"title": "1Q84", "author": "Haruki Murakami"}
            )

        assert response.status_code == 200
        assert "A novel about two Tokyo residents." in response.text
        assert 'href="http://www.nytimes.com/review.html"' in response.text
        fetch.assert_called_once_with("1Q84", "Haruki Murakami")

    def test_no_reviews(self, client):
        with patch.object(nyt_service, "fetch_reviews", return_value=[]):
            response = client.get("/review", params={"title": "x", "author": "y"})

        assert response.status_code == 200
        assert "No reviews found." in response.text

    def test_missing_author_is_a_server_error(self, client):
        with patch("urllib.request.urlopen") as urlopen:
            response = client.get("/review", params={"title": "1Q84"})

        assert response.status_code == 500
        assert json.loads(response.text)["type"] == "TypeError"
        urlopen.assert_not_called()

    def test_upstream_failure(self, client):
        error = nyt_service.ReviewServiceError("Review API unreachable: timed out")
        with patch.object(nyt_service, "fetch_reviews", side_effect=error):
            response = client.get("/review", params={"title": "x", "author": "y"})

        assert response.status_code == 500
        assert "Review API unreachable" in response.text
