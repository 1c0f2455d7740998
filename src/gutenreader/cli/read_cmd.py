"""Read command: show a chapter (or the opening) of a book."""

import typer

from gutenreader.cli.utils import load_source
from gutenreader.output import get_formatter


def read(
    source: str = typer.Argument(
        ...,
        help="Gutenberg book ID, or path to a downloaded .txt/.html file",
    ),
    chapter: str | None = typer.Option(
        None,
        "--chapter",
        "-c",
        help="Chapter number or Roman numeral: '3', 'III' or 'Chapter 3'",
    ),
    full: bool = typer.Option(
        False,
        "--full",
        "-f",
        help="Show the whole book instead of one chapter",
    ),
    no_cache: bool = typer.Option(
        False,
        "--no-cache",
        help="Download the book even if it is cached",
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
    """Read a book, jumping to a chapter.

    Without --chapter the book opens at its first chapter, or at the start
    of the text when it has no chapter headings.

    Examples:

        gutenreader read 1342

        gutenreader read 1342 --chapter XII

        gutenreader read pg84.txt -c "Chapter 5"
    """
    from gutenreader.config.settings import get_settings
    from gutenreader.reader.chapters import (
        locate_chapter,
        locate_default_chapter,
        parse_chapter_identifier,
    )

    formatter = get_formatter(json_flag=use_json, pretty_flag=pretty)
    loaded = load_source(source, use_cache=not no_cache)
    document = loaded.text

    query: dict = {"chapter": chapter, "full": full}
    if full:
        text, start, end = document, 0, len(document)
    else:
        if chapter:
            parsed = parse_chapter_identifier(chapter)
            found = locate_chapter(document, parsed.number, parsed.roman)
        else:
            found = locate_default_chapter(
                document, fallback_chars=get_settings().reader.default_chapter_chars
            )
        text, start, end = found.text, found.start, found.end
        query.update(
            {
                "number": found.number,
                "heading": found.heading,
                "score": found.score,
                "fallback": found.fallback,
            }
        )

    formatter.output(
        {
            "success": True,
            "title": loaded.title,
            "book_id": loaded.book.id if loaded.book else None,
            "query": query,
            "content": {
                "text": text,
                "start": start,
                "end": end,
                "word_count": len(text.split()),
                "char_count": len(text),
            },
        }
    )


def candidates(
    source: str = typer.Argument(
        ...,
        help="Gutenberg book ID, or path to a downloaded .txt/.html file",
    ),
    chapter: str = typer.Argument(..., help="Chapter number or Roman numeral"),
    limit: int = typer.Option(
        10,
        "--limit",
        "-n",
        help="Maximum candidates to show",
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
    """Show every heading that could start a chapter, best first.

    Useful when 'read --chapter' lands in the table of contents: the
    ranking shows how each occurrence was scored.

    Example:

        gutenreader candidates 1342 III
    """
    from gutenreader.reader.chapters import parse_chapter_identifier, rank_candidates

    formatter = get_formatter(json_flag=use_json, pretty_flag=pretty)
    loaded = load_source(source)
    document = loaded.text

    parsed = parse_chapter_identifier(chapter)
    ranked = rank_candidates(document, parsed.number, parsed.roman)

    formatter.output(
        {
            "success": True,
            "title": loaded.title,
            "query": {"chapter": chapter, "number": parsed.number, "roman": parsed.roman},
            "total": len(ranked),
            "candidates": [
                {
                    "offset": c.offset,
                    "text": c.text,
                    "score": c.score,
                    "preview": " ".join(document[c.end : c.end + 200].split())[:60],
                }
                for c in ranked[:limit]
            ],
        }
    )
