"""Search command for the Project Gutenberg catalog."""

import typer

from gutenreader.cli.utils import get_console
from gutenreader.output import get_formatter


def search(
    term: str = typer.Argument(..., help="Book title or author name"),
    by: str = typer.Option(
        "title",
        "--by",
        "-b",
        help="Match the term against 'title' or 'author'",
    ),
    limit: int = typer.Option(
        20,
        "--limit",
        "-n",
        help="Maximum results to show",
    ),
    use_json: bool = typer.Option(
        False,
        "--json",
        help="Force JSON output",
    ),
    pretty: bool = typer.Option(
        False,
        "--pretty",
        help="Force pretty output",
    ),
):
    """Search Project Gutenberg by title or author.

    Examples:

        gutenreader search "pride and prejudice"

        gutenreader search austen --by author
    """
    from gutenreader.catalog import GutendexClient

    formatter = get_formatter(json_flag=use_json, pretty_flag=pretty)

    with GutendexClient() as client:
        with get_console().status(f"Searching for \"{term}\"..."):
            page = client.search(term, by=by)  # type: ignore[arg-type]

    books = page.results[:limit]
    formatter.output(
        {
            "success": True,
            "query": {"term": term, "by": by},
            "count": len(page.results),
            "results": [
                {
                    "id": book.id,
                    "title": book.title,
                    "authors": book.author_line(),
                    "subjects": book.short_subjects(),
                    "download_count": book.download_count,
                    "readable": book.has_readable_format,
                }
                for book in books
            ],
        }
    )


def info(
    book_id: int = typer.Argument(..., help="Gutenberg book ID"),
    use_json: bool = typer.Option(
        False,
        "--json",
        help="Force JSON output",
    ),
    pretty: bool = typer.Option(
        False,
        "--pretty",
        help="Force pretty output",
    ),
):
    """Show a book's catalog record and readable edition.

    Example:

        gutenreader info 1342
    """
    from gutenreader.catalog import GutendexClient

    formatter = get_formatter(json_flag=use_json, pretty_flag=pretty)

    with GutendexClient() as client:
        with get_console().status(f"Looking up book {book_id}..."):
            book = client.get_book(book_id)

    edition = book.readable_format()
    formatter.output(
        {
            "success": True,
            "book": {
                "id": book.id,
                "title": book.title,
                "authors": book.author_line(),
                "subjects": book.short_subjects(),
                "languages": book.languages,
                "download_count": book.download_count,
                "edition": edition.model_dump() if edition else None,
            },
        }
    )
