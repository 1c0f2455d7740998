"""Gutenreader: find and read public-domain books from Project Gutenberg.

This module provides a Python API for:
- Searching the Gutendex catalog by title or author
- Downloading and cleaning book text (HTML stripping, license boilerplate)
- Jumping to a chapter inside raw book text
- AI-generated synopses

Simple usage:
    >>> from gutenreader import prepare_document, read_chapter
    >>>
    >>> text = prepare_document(open("pg1342.txt").read())
    >>> chapter = read_chapter(text, "Chapter III")
    >>> print(chapter.text[:200])

With the catalog:
    >>> from gutenreader import GutendexClient, load_book_text
    >>>
    >>> with GutendexClient() as client:
    ...     book = client.get_book(1342)
    ...     text = load_book_text(book, client)
"""

__version__ = "0.3.0"

# Cache
from gutenreader.cache import BookCache, get_cache

# Catalog
from gutenreader.catalog import Author, Book, GutendexClient, ReadableFormat, SearchResults

# Configuration
from gutenreader.config.settings import Settings, get_settings

# Exceptions
from gutenreader.exceptions import (
    BookNotFoundError,
    CatalogError,
    ChapterNotFoundError,
    ConfigError,
    ContentError,
    EmptyContentError,
    GutenreaderError,
    InvalidChapterIdentifierError,
    LLMError,
    LLMNotAvailableError,
    NetworkError,
    NoReadableFormatError,
    RateLimitError,
)

# Reader
from gutenreader.reader import (
    Candidate,
    ChapterQuery,
    ChapterSlice,
    load_book_text,
    load_local_text,
    locate_chapter,
    locate_default_chapter,
    parse_chapter_identifier,
    prepare_document,
    rank_candidates,
    read_chapter,
)

# Synopsis
from gutenreader.synopsis import Synopsis, generate_synopsis

__all__ = [
    # Version
    "__version__",
    # Exceptions
    "GutenreaderError",
    "CatalogError",
    "BookNotFoundError",
    "RateLimitError",
    "NetworkError",
    "NoReadableFormatError",
    "ContentError",
    "EmptyContentError",
    "InvalidChapterIdentifierError",
    "ChapterNotFoundError",
    "ConfigError",
    "LLMError",
    "LLMNotAvailableError",
    # Catalog
    "GutendexClient",
    "Author",
    "Book",
    "ReadableFormat",
    "SearchResults",
    # Reader
    "Candidate",
    "ChapterQuery",
    "ChapterSlice",
    "parse_chapter_identifier",
    "rank_candidates",
    "locate_chapter",
    "locate_default_chapter",
    "read_chapter",
    "prepare_document",
    "load_book_text",
    "load_local_text",
    # Cache
    "BookCache",
    "get_cache",
    # Configuration
    "Settings",
    "get_settings",
    # Synopsis
    "Synopsis",
    "generate_synopsis",
]
