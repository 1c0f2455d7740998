"""Load book text from the catalog (through the cache) or from disk."""

import logging
from pathlib import Path

from gutenreader.cache.store import BookCache
from gutenreader.catalog.client import GutendexClient
from gutenreader.catalog.models import Book
from gutenreader.exceptions import EmptyContentError
from gutenreader.reader.document import prepare_document

logger = logging.getLogger(__name__)

HTML_SUFFIXES = {".html", ".htm", ".xhtml"}


def load_book_text(
    book: Book,
    client: GutendexClient,
    cache: BookCache | None = None,
) -> str:
    """Get the prepared text of a catalog book.

    Args:
        book: Catalog record.
        client: Catalog client used to download the edition.
        cache: Optional cache; a hit skips the download.

    Returns:
        Document text ready for the chapter locator.

    Raises:
        NoReadableFormatError: If the book has no readable edition.
        EmptyContentError: If nothing is left after cleaning.
    """
    if cache is not None:
        cached = cache.get_text(book.id)
        if cached:
            return cached

    raw, is_html = client.fetch_content(book)
    text = prepare_document(raw, is_html=is_html)
    if not text:
        raise EmptyContentError(f"No readable text in '{book.title}'")

    if cache is not None:
        cache.set_text(book.id, text)
        cache.set_book(book.id, book.model_dump())
    logger.info(f"Loaded book {book.id}: {len(text)} characters")
    return text


def load_local_text(path: Path) -> str:
    """Read a downloaded Gutenberg file from disk and prepare it.

    HTML editions are detected by file extension.

    Raises:
        FileNotFoundError: If the file does not exist.
        EmptyContentError: If nothing is left after cleaning.
    """
    path = Path(path)
    raw = path.read_text(encoding="utf-8", errors="replace")
    text = prepare_document(raw, is_html=path.suffix.lower() in HTML_SUFFIXES)
    if not text:
        raise EmptyContentError(f"No readable text in {path.name}")
    return text
