"""Project Gutenberg catalog access."""

from gutenreader.catalog.client import GutendexClient, deduplicate, filter_results
from gutenreader.catalog.models import Author, Book, ReadableFormat, SearchResults

__all__ = [
    "GutendexClient",
    "filter_results",
    "deduplicate",
    "Author",
    "Book",
    "ReadableFormat",
    "SearchResults",
]
