"""Caching layer for downloaded books."""

from gutenreader.cache.store import BookCache, get_cache

__all__ = ["BookCache", "get_cache"]
