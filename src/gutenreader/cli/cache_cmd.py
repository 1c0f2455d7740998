"""Cache management commands."""

import typer

from gutenreader.output import get_formatter


def clear_cache(
    book_id: int | None = typer.Argument(
        None,
        help="Gutenberg book ID to clear (omit to clear all)",
    ),
):
    """Clear downloaded book text.

    Examples:

        gutenreader clear-cache

        gutenreader clear-cache 1342
    """
    from gutenreader.cache import get_cache

    cache = get_cache()

    if book_id is not None:
        if cache.has_text(book_id) or cache.get_book(book_id) is not None:
            cache.clear(book_id)
            result = {"success": True, "cleared": book_id}
        else:
            result = {
                "success": True,
                "cleared": None,
                "message": f"No cache found for book {book_id}",
            }
    else:
        cache.clear()
        result = {"success": True, "cleared": "all", "cache_dir": str(cache.cache_dir)}

    get_formatter(json_flag=True).output(result)


def cache_info(
    use_json: bool = typer.Option(
        False,
        "--json",
        help="Force JSON output",
    ),
):
    """Show which books are cached and how much space they use."""
    from gutenreader.cache import get_cache

    stats = get_cache().get_stats()
    get_formatter(json_flag=use_json).output(stats)
