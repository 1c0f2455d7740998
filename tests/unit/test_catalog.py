"""Tests for the Gutendex catalog client."""

import httpx
import pytest

from gutenreader.catalog import (
    Author,
    Book,
    GutendexClient,
    deduplicate,
    filter_results,
)
from gutenreader.exceptions import (
    BookNotFoundError,
    CatalogError,
    NetworkError,
    NoReadableFormatError,
    RateLimitError,
)

BASE_URL = "https://gutendex.test/books/"


def make_book(book_id, title, author="Austen, Jane", downloads=100, formats=None):
    return {
        "id": book_id,
        "title": title,
        "authors": [{"name": author, "birth_year": 1775, "death_year": 1817}],
        "subjects": ["England -- Fiction", "Love stories"],
        "languages": ["en"],
        "download_count": downloads,
        "formats": formats if formats is not None else {"text/plain; charset=us-ascii": f"https://gutenberg.test/{book_id}.txt"},
    }


SEARCH_PAGE = {
    "count": 5,
    "next": None,
    "previous": None,
    "results": [
        make_book(1342, "Pride and Prejudice", downloads=50_000),
        make_book(42671, "Pride and Prejudice", downloads=90_000, formats={"image/jpeg": "https://gutenberg.test/cover.jpg"}),
        make_book(37431, "Pride and Prejudice", downloads=60_000, formats={"text/html": "https://gutenberg.test/37431.html"}),
        make_book(161, "Sense and Sensibility", downloads=20_000),
        make_book(20686, "Pride and Prejudice", author="Bennet, Elizabeth", downloads=10),
    ],
}


def catalog_client(handler) -> GutendexClient:
    """GutendexClient backed by a mock transport."""
    http = httpx.Client(transport=httpx.MockTransport(handler))
    return GutendexClient(base_url=BASE_URL, client=http, timeout=5.0)


class TestBookModel:
    """Tests for catalog record helpers."""

    def test_author_display_name(self):
        assert Author(name="Austen, Jane", birth_year=1775, death_year=1817).display_name() == (
            "Austen, Jane (1775-1817)"
        )
        assert Author(name="Homer", death_year=-750).display_name() == "Homer (?--750)"
        assert Author(name="Anonymous").display_name() == "Anonymous"

    def test_prefers_ascii_text_over_html(self):
        book = Book.model_validate(
            make_book(
                1,
                "Emma",
                formats={
                    "text/html": "https://gutenberg.test/1.html",
                    "text/plain; charset=us-ascii": "https://gutenberg.test/1.txt",
                },
            )
        )
        edition = book.readable_format()
        assert edition.url == "https://gutenberg.test/1.txt"
        assert not edition.is_html

    def test_html_only(self):
        book = Book.model_validate(make_book(1, "Emma", formats={"text/html": "https://gutenberg.test/1.html"}))
        assert book.readable_format().is_html

    def test_no_readable_format(self):
        book = Book.model_validate(make_book(1, "Emma", formats={"application/epub+zip": "x"}))
        assert book.readable_format() is None
        assert not book.has_readable_format

    def test_short_subjects(self):
        book = Book.model_validate(make_book(1, "Emma"))
        assert book.short_subjects() == ["England", "Love stories"]


class TestFilterAndDeduplicate:
    """Tests for narrowing and folding search results."""

    def books(self):
        return [Book.model_validate(b) for b in SEARCH_PAGE["results"]]

    def test_title_filter(self):
        result = filter_results(self.books(), "pride", "title")
        assert {b.id for b in result} == {1342, 42671, 37431, 20686}

    def test_author_filter(self):
        result = filter_results(self.books(), "bennet", "author")
        assert [b.id for b in result] == [20686]

    def test_author_filter_falls_back_to_all(self):
        result = filter_results(self.books(), "dickens", "author")
        assert len(result) == len(SEARCH_PAGE["results"])

    def test_deduplicate_prefers_readable_then_popular(self):
        result = deduplicate(filter_results(self.books(), "pride", "title"))
        assert [b.id for b in result] == [37431, 20686]

    def test_readable_beats_more_downloaded_unreadable(self):
        books = [Book.model_validate(b) for b in SEARCH_PAGE["results"][:2]]
        assert [b.id for b in deduplicate(books)] == [1342]

    def test_readable_edition_replaces_earlier_unreadable(self):
        books = [Book.model_validate(b) for b in reversed(SEARCH_PAGE["results"][:2])]
        assert [b.id for b in deduplicate(books)] == [1342]


class TestSearch:
    """Tests for GutendexClient.search."""

    def test_search_sends_term_and_filters(self):
        seen = {}

        def handler(request):
            seen["search"] = request.url.params.get("search")
            return httpx.Response(200, json=SEARCH_PAGE)

        with catalog_client(handler) as client:
            page = client.search("  Pride  ")

        assert seen["search"] == "Pride"
        assert [b.id for b in page.results] == [37431, 20686]
        assert page.count == 5

    def test_search_by_author(self):
        def handler(request):
            return httpx.Response(200, json=SEARCH_PAGE)

        with catalog_client(handler) as client:
            page = client.search("austen", by="author")

        assert {b.id for b in page.results} == {37431, 161}

    def test_blank_term_is_rejected(self):
        def handler(request):
            raise AssertionError("no request expected")

        with catalog_client(handler) as client:
            with pytest.raises(CatalogError):
                client.search("   ")

    def test_unknown_search_type(self):
        with catalog_client(lambda request: httpx.Response(200, json=SEARCH_PAGE)) as client:
            with pytest.raises(CatalogError):
                client.search("emma", by="subject")

    def test_rate_limited(self):
        with catalog_client(lambda request: httpx.Response(429)) as client:
            with pytest.raises(RateLimitError) as exc_info:
                client.search("emma")
        assert exc_info.value.exit_code == 12

    def test_server_error(self):
        with catalog_client(lambda request: httpx.Response(503)) as client:
            with pytest.raises(NetworkError) as exc_info:
                client.search("emma")
        assert "unavailable" in exc_info.value.message

    def test_connection_error(self):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        with catalog_client(handler) as client:
            with pytest.raises(NetworkError):
                client.search("emma")

    def test_malformed_response(self):
        with catalog_client(lambda request: httpx.Response(200, text="<html>oops</html>")) as client:
            with pytest.raises(CatalogError):
                client.search("emma")


class TestGetBook:
    """Tests for GutendexClient.get_book."""

    def test_get_book(self):
        def handler(request):
            assert request.url.path == "/books/1342/"
            return httpx.Response(200, json=make_book(1342, "Pride and Prejudice"))

        with catalog_client(handler) as client:
            book = client.get_book(1342)

        assert book.title == "Pride and Prejudice"
        assert book.author_line() == "Austen, Jane (1775-1817)"

    def test_missing_book(self):
        with catalog_client(lambda request: httpx.Response(404, json={"detail": "Not found."})) as client:
            with pytest.raises(BookNotFoundError) as exc_info:
                client.get_book(999999)
        assert exc_info.value.exit_code == 11


class TestFetchContent:
    """Tests for downloading a book's readable edition."""

    def test_fetch_plain_text(self):
        def handler(request):
            assert str(request.url) == "https://gutenberg.test/1342.txt"
            return httpx.Response(200, text="CHAPTER I\n\nIt is a truth...")

        book = Book.model_validate(make_book(1342, "Pride and Prejudice"))
        with catalog_client(handler) as client:
            text, is_html = client.fetch_content(book)

        assert text.startswith("CHAPTER I")
        assert is_html is False

    def test_fetch_html(self):
        book = Book.model_validate(make_book(1, "Emma", formats={"text/html": "https://gutenberg.test/1.html"}))
        with catalog_client(lambda request: httpx.Response(200, text="<p>Emma</p>")) as client:
            text, is_html = client.fetch_content(book)

        assert text == "<p>Emma</p>"
        assert is_html is True

    def test_no_readable_edition(self):
        book = Book.model_validate(make_book(1, "Emma", formats={}))
        with catalog_client(lambda request: httpx.Response(200)) as client:
            with pytest.raises(NoReadableFormatError):
                client.fetch_content(book)
