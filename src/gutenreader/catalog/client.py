"""Client for the Gutendex catalog of Project Gutenberg books."""

import logging
from typing import Literal

import httpx

from gutenreader.catalog.models import Book, SearchResults
from gutenreader.exceptions import (
    BookNotFoundError,
    CatalogError,
    NetworkError,
    NoReadableFormatError,
)
from gutenreader.utils.http import get_client, request

logger = logging.getLogger(__name__)

SearchType = Literal["title", "author"]

DEFAULT_BASE_URL = "https://gutendex.com/books/"


class GutendexClient:
    """Search the catalog and download book content."""

    def __init__(
        self,
        base_url: str | None = None,
        client: httpx.Client | None = None,
        timeout: float | None = None,
    ):
        """Initialize the catalog client.

        Args:
            base_url: Catalog endpoint (defaults to configured Gutendex URL).
            client: Optional httpx client to reuse.
            timeout: Request timeout in seconds.
        """
        if base_url is None or timeout is None:
            from gutenreader.config.settings import get_settings

            settings = get_settings()
            base_url = base_url or settings.catalog.base_url
            timeout = timeout if timeout is not None else settings.catalog.timeout

        self.base_url = base_url.rstrip("/") + "/"
        self._owns_client = client is None
        self._client = client or get_client(timeout=timeout)

    def close(self) -> None:
        if self._owns_client:
            self._client.close()

    def __enter__(self) -> "GutendexClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def search(self, term: str, by: SearchType = "title") -> SearchResults:
        """Search the catalog.

        Gutendex matches the term against titles and author names alike, so
        results are narrowed to the requested field here and duplicate
        editions are folded together.

        Args:
            term: Title or author search term.
            by: Which field the term should match.

        Returns:
            SearchResults with filtered, de-duplicated books.

        Raises:
            CatalogError: If the term is blank or the type is unknown.
            NetworkError: If the catalog cannot be reached.
        """
        term = (term or "").strip()
        if not term:
            raise CatalogError(
                "Search term is required",
                hint="Enter a book title or author name to search",
            )
        if by not in ("title", "author"):
            raise CatalogError(f"Unknown search type: {by}", hint="Use 'title' or 'author'")

        logger.info(f"Searching for {term!r} by {by}")
        response = request(self._client, self.base_url, params={"search": term})
        page = self._parse_results(response)
        logger.info(f"Catalog returned {len(page.results)} book(s)")

        books = filter_results(page.results, term, by)
        return page.model_copy(update={"results": deduplicate(books)})

    def get_book(self, book_id: int) -> Book:
        """Fetch a single catalog record.

        Raises:
            BookNotFoundError: If the catalog has no such book.
        """
        try:
            response = request(self._client, f"{self.base_url}{int(book_id)}/")
        except NetworkError as e:
            cause = e.__cause__
            if isinstance(cause, httpx.HTTPStatusError) and cause.response.status_code == 404:
                raise BookNotFoundError(f"Book not found: {book_id}") from e
            raise

        try:
            return Book.model_validate(response.json())
        except ValueError as e:
            raise CatalogError("Unexpected catalog response", details=str(e)) from e

    def fetch_content(self, book: Book) -> tuple[str, bool]:
        """Download the best readable edition of a book.

        Returns:
            Tuple of (raw content, whether it is HTML).

        Raises:
            NoReadableFormatError: If the book has no text or HTML edition.
        """
        edition = book.readable_format()
        if edition is None:
            raise NoReadableFormatError(f"'{book.title}' has no readable text edition")

        logger.info(f"Downloading {edition.name} edition of book {book.id}")
        response = request(self._client, edition.url)
        return response.text, edition.is_html

    def _parse_results(self, response: httpx.Response) -> SearchResults:
        try:
            return SearchResults.model_validate(response.json())
        except ValueError as e:
            raise CatalogError("Unexpected catalog response", details=str(e)) from e


def filter_results(books: list[Book], term: str, by: SearchType) -> list[Book]:
    """Keep the books whose title (or author) actually contains the term.

    An author search that matches nobody falls back to the unfiltered list.
    """
    needle = term.lower()
    if by == "title":
        return [b for b in books if needle in b.title.lower()]

    matched = [b for b in books if any(needle in a.name.lower() for a in b.authors)]
    return matched or list(books)


def deduplicate(books: list[Book]) -> list[Book]:
    """Fold editions sharing title and authors into one entry.

    A readable edition beats one without text; among readable editions the
    more downloaded one wins. First-seen order is kept.
    """
    unique: dict[str, Book] = {}
    for book in books:
        key = f"{book.title.lower().strip()}|||{book.author_names().lower()}"
        existing = unique.get(key)
        if existing is None:
            unique[key] = book
        elif book.has_readable_format and not existing.has_readable_format:
            unique[key] = book
        elif (
            book.has_readable_format
            and existing.has_readable_format
            and book.download_count > existing.download_count
        ):
            unique[key] = book
    return list(unique.values())
