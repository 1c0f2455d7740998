"""Render command results as JSON or as rich terminal output."""

import io
import json
import sys
from dataclasses import dataclass, field
from typing import Any

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

# Characters of book text shown in pretty mode before truncating
PRETTY_TEXT_LIMIT = 4000

# Result key -> renderer method, first match wins
_PRETTY_RENDERERS = (
    ("results", "_output_search"),
    ("candidates", "_output_candidates"),
    ("synopsis", "_output_synopsis"),
    ("content", "_output_text"),
    ("book", "_output_book"),
    ("cache_dir", "_output_cache"),
)


@dataclass
class OutputFormatter:
    """Writes one result dict per command to stdout.

    Piped output is JSON so it can be fed to ``jq`` or another program;
    a terminal gets tables, panels and the chapter text. ``--json`` and
    ``--pretty`` override the detection.
    """

    force_json: bool = False
    force_pretty: bool = False
    quiet: bool = False
    _console: Console = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._console = Console(file=io.StringIO()) if self.quiet else Console()

    @property
    def console(self) -> Console:
        return self._console

    @property
    def use_json(self) -> bool:
        """JSON unless pretty output was forced or stdout is a terminal."""
        if self.force_json or self.force_pretty:
            return self.force_json
        return not sys.stdout.isatty()

    def output(self, data: dict[str, Any]) -> None:
        """Write a command result in the selected format."""
        if self.quiet:
            return
        if self.use_json:
            self._output_json(data)
        else:
            self._output_pretty(data)

    def _output_json(self, data: dict[str, Any]) -> None:
        print(json.dumps(data, indent=2, ensure_ascii=False))

    def _output_pretty(self, data: dict[str, Any]) -> None:
        if data.get("success") is False:
            self._output_error(data)
            return
        for key, method in _PRETTY_RENDERERS:
            if data.get(key) is not None:
                getattr(self, method)(data)
                return
        # Nothing to tabulate
        self._output_json(data)

    def _output_error(self, data: dict[str, Any]) -> None:
        """Output error message."""
        self.console.print(f"[red]Error:[/red] {data.get('error', 'Unknown error')}")
        if data.get("hint"):
            self.console.print(f"[dim]Hint: {data['hint']}[/dim]")

    def _output_search(self, data: dict[str, Any]) -> None:
        """Output catalog search results."""
        results = data.get("results", [])
        query = data.get("query", {})
        self.console.print(
            f"\n[bold]Results for \"{query.get('term', '')}\"[/bold] "
            f"[dim](by {query.get('by', 'title')})[/dim]"
        )

        if not results:
            self.console.print("[yellow]No books found. Try a different search term.[/yellow]")
            return

        table = Table(show_header=True, header_style="bold")
        table.add_column("ID", style="cyan", justify="right")
        table.add_column("Title")
        table.add_column("Author(s)")
        table.add_column("Downloads", justify="right")
        table.add_column("Readable", justify="center")

        for book in results:
            table.add_row(
                str(book.get("id", "")),
                book.get("title", ""),
                book.get("authors", ""),
                f"{book.get('download_count', 0):,}",
                "[green]yes[/green]" if book.get("readable") else "[dim]no[/dim]",
            )

        self.console.print(table)
        self.console.print(f"[dim]{len(results)} of {data.get('count', len(results))} result(s)[/dim]")

    def _output_book(self, data: dict[str, Any]) -> None:
        """Output a book's catalog record."""
        book = data.get("book", {})
        self.console.print(f"\n[bold]{book.get('title', 'Untitled')}[/bold]")
        if book.get("authors"):
            self.console.print(f"by {book['authors']}")
        if book.get("subjects"):
            self.console.print(f"[dim]Subjects: {', '.join(book['subjects'])}[/dim]")
        self.console.print(
            f"[dim]Downloaded {book.get('download_count', 0):,} times from Project Gutenberg[/dim]"
        )

        edition = book.get("edition")
        if edition:
            self.console.print(f"[green]Readable edition:[/green] {edition['name']} ({edition['url']})")
        else:
            self.console.print("[yellow]This book doesn't have readable text formats available.[/yellow]")

    def _output_text(self, data: dict[str, Any]) -> None:
        """Output chapter or book text."""
        content = data.get("content", {})
        query = data.get("query", {})

        self.console.print(f"\n[bold]Reading: {data.get('title', 'Document')}[/bold]")

        if query.get("full"):
            self.console.print("[dim]Full document[/dim]")
        elif query.get("heading"):
            self.console.print(f"[dim]Chapter: {query['heading']}[/dim]")
        elif query.get("fallback"):
            self.console.print("[dim]No chapter headings found; showing the opening of the book[/dim]")

        self.console.print(
            f"[dim]Words: {content.get('word_count', 0)} | Chars: {content.get('char_count', 0)}[/dim]\n"
        )

        text = content.get("text", "")
        if len(text) > PRETTY_TEXT_LIMIT:
            self.console.print(text[:PRETTY_TEXT_LIMIT], markup=False, highlight=False)
            self.console.print(
                f"\n[dim]... truncated ({len(text) - PRETTY_TEXT_LIMIT} more characters, use --json for all)[/dim]"
            )
        else:
            self.console.print(text, markup=False, highlight=False)

    def _output_candidates(self, data: dict[str, Any]) -> None:
        """Output ranked chapter heading candidates."""
        query = data.get("query", {})
        candidates = data.get("candidates", [])
        self.console.print(
            f"\n[bold]Heading candidates for chapter {query.get('chapter', '?')}[/bold] "
            f"[dim]in {data.get('title', 'document')}[/dim]"
        )

        if not candidates:
            self.console.print("[yellow]No matching headings[/yellow]")
            return

        table = Table(show_header=True, header_style="bold")
        table.add_column("#", style="cyan", justify="right", width=4)
        table.add_column("Offset", justify="right")
        table.add_column("Score", justify="right")
        table.add_column("Heading")
        table.add_column("Followed by")

        for rank, cand in enumerate(candidates, 1):
            table.add_row(
                str(rank),
                str(cand.get("offset")),
                str(cand.get("score")),
                cand.get("text", "").strip(),
                cand.get("preview", ""),
            )

        self.console.print(table)

    def _output_synopsis(self, data: dict[str, Any]) -> None:
        """Output a generated synopsis."""
        synopsis = data.get("synopsis", {})
        self.console.print(
            Panel(
                synopsis.get("text", ""),
                title=f"AI-Generated Synopsis: {data.get('title', '')}",
                subtitle=f"[dim]{synopsis.get('model', '')}[/dim]",
            )
        )

    def _output_cache(self, data: dict[str, Any]) -> None:
        """Output cache statistics."""
        self.console.print(f"\n[bold]Cache:[/bold] {data['cache_dir']}")
        self.console.print(f"Books cached: {data.get('book_count', 0)}")
        size_kb = data.get("total_size", 0) / 1024
        self.console.print(f"Total size: {size_kb:.1f} KB")
        if data.get("books"):
            self.console.print(f"[dim]IDs: {', '.join(str(b) for b in data['books'])}[/dim]")


def get_formatter(
    json_flag: bool = False,
    pretty_flag: bool = False,
    quiet: bool = False,
) -> OutputFormatter:
    """Get an output formatter with the specified flags.

    Args:
        json_flag: Force JSON output.
        pretty_flag: Force pretty output.
        quiet: Suppress all output.

    Returns:
        Configured OutputFormatter instance.
    """
    return OutputFormatter(
        force_json=json_flag,
        force_pretty=pretty_flag,
        quiet=quiet,
    )
