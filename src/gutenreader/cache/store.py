"""File-based cache store for downloaded book text."""

import json
import logging
import shutil
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)


class BookCache:
    """File-based cache for prepared book text and catalog records.

    Cache structure:
        ~/.cache/gutenreader/
        ├── <gutenberg_id>/
        │   ├── text.txt    # Prepared document (markup and boilerplate removed)
        │   └── book.json   # Catalog record
    """

    TEXT_FILE = "text.txt"
    BOOK_FILE = "book.json"

    def __init__(self, cache_dir: Path | None = None):
        """Initialize the cache store.

        Args:
            cache_dir: Cache directory path. Defaults to ~/.cache/gutenreader/
        """
        if cache_dir is None:
            cache_dir = Path.home() / ".cache" / "gutenreader"
        self.cache_dir = Path(cache_dir)
        self.cache_dir.mkdir(parents=True, exist_ok=True)

    def _atomic_write(self, path: Path, content: str) -> None:
        """Write text atomically using temp file + rename.

        Args:
            path: Target file path.
            content: Text to write.
        """
        tmp_path = path.with_suffix(".tmp")
        tmp_path.write_text(content, encoding="utf-8")
        tmp_path.replace(path)

    def get_cache_path(self, book_id: int) -> Path:
        """Get the cache directory for a book."""
        return self.cache_dir / str(int(book_id))

    def has_text(self, book_id: int) -> bool:
        """Check if prepared text is cached for a book."""
        return (self.get_cache_path(book_id) / self.TEXT_FILE).exists()

    def get_text(self, book_id: int) -> str | None:
        """Get cached text for a book.

        Args:
            book_id: Gutenberg book ID.

        Returns:
            Cached text or None if not cached.
        """
        text_path = self.get_cache_path(book_id) / self.TEXT_FILE
        if not text_path.exists():
            return None

        logger.debug(f"Cache hit for book {book_id}")
        return text_path.read_text(encoding="utf-8")

    def set_text(self, book_id: int, text: str) -> None:
        """Cache prepared text for a book."""
        cache_path = self.get_cache_path(book_id)
        cache_path.mkdir(parents=True, exist_ok=True)
        self._atomic_write(cache_path / self.TEXT_FILE, text)

    def get_book(self, book_id: int) -> dict[str, Any] | None:
        """Get the cached catalog record for a book, if any."""
        book_path = self.get_cache_path(book_id) / self.BOOK_FILE
        if not book_path.exists():
            return None

        with open(book_path, encoding="utf-8") as f:
            return json.load(f)

    def set_book(self, book_id: int, record: dict[str, Any]) -> None:
        """Cache the catalog record for a book."""
        cache_path = self.get_cache_path(book_id)
        cache_path.mkdir(parents=True, exist_ok=True)
        self._atomic_write(cache_path / self.BOOK_FILE, json.dumps(record, indent=2))

    def clear(self, book_id: int | None = None) -> None:
        """Clear cache.

        Args:
            book_id: If provided, clear cache for this book only.
                     If None, clear entire cache.
        """
        if book_id is not None:
            cache_path = self.get_cache_path(book_id)
            if cache_path.exists():
                shutil.rmtree(cache_path)
        else:
            if self.cache_dir.exists():
                shutil.rmtree(self.cache_dir)
                self.cache_dir.mkdir(parents=True, exist_ok=True)

    def get_stats(self) -> dict[str, Any]:
        """Get overall cache statistics.

        Returns:
            Dict with cache directory, cached book IDs and total size in bytes.
        """
        books = []
        total_size = 0
        for entry in sorted(self.cache_dir.iterdir()):
            if not entry.is_dir() or not entry.name.isdigit():
                continue
            books.append(int(entry.name))
            for file in entry.iterdir():
                if file.is_file():
                    total_size += file.stat().st_size

        return {
            "cache_dir": str(self.cache_dir),
            "book_count": len(books),
            "books": sorted(books),
            "total_size": total_size,
        }


def get_cache(cache_dir: str | Path | None = None) -> BookCache:
    """Get a cache store, defaulting to the configured directory.

    Args:
        cache_dir: Optional cache directory path.

    Returns:
        BookCache instance.
    """
    if cache_dir is None:
        from gutenreader.config.settings import get_settings

        cache_dir = get_settings().cache.directory
    return BookCache(Path(cache_dir))
