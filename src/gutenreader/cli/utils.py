"""Shared utilities for CLI commands."""

import functools
import io
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Any, TypeVar

import typer
from rich.console import Console

from gutenreader.exceptions import GutenreaderError

if TYPE_CHECKING:
    from gutenreader.catalog.models import Book

# Type variable for decorators
F = TypeVar("F", bound=Callable[..., Any])

# Context storage for flags
_context: dict[str, Any] = {"verbose": False, "quiet": 0}


def set_context(verbose: bool = False, quiet: int = 0) -> None:
    """Set global context values."""
    _context["verbose"] = verbose
    _context["quiet"] = quiet


def get_context_value(key: str, default: Any = None) -> Any:
    """Get a value from the context."""
    return _context.get(key, default)


def get_console() -> Console:
    """Get a stderr Console instance respecting quiet mode.

    Returns a null console when quiet mode is enabled.
    """
    if is_quiet():
        return Console(file=io.StringIO(), stderr=True)
    return Console(stderr=True)


def is_quiet() -> bool:
    """Check if quiet mode is enabled (-q or --silent)."""
    quiet_val = get_context_value("quiet", 0)
    if isinstance(quiet_val, bool):
        return quiet_val
    return bool(quiet_val >= 1)


def is_silent() -> bool:
    """Check if silent mode is enabled.

    In silent mode, even errors are suppressed (exit code only).
    """
    quiet_val = get_context_value("quiet", 0)
    if isinstance(quiet_val, bool):
        return False
    return bool(quiet_val >= 2)


def is_verbose() -> bool:
    """Check if verbose mode is enabled (-v)."""
    return bool(get_context_value("verbose", False))


def _report(console: Console, message: str, details: str | None = None, hint: str | None = None) -> None:
    console.print(message)
    if details:
        console.print(f"[dim]{details}[/dim]")
    if hint:
        console.print(f"[dim]Hint: {hint}[/dim]")


def handle_errors(func: F) -> F:
    """Turn exceptions raised by a command into a message and an exit code.

    Gutenreader errors exit with their own ``exit_code``; an unknown
    chapter or a missing book is an ordinary outcome, not a crash. With
    --verbose the traceback is shown instead, and --silent prints nothing.
    """

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return func(*args, **kwargs)
        except (typer.Exit, typer.BadParameter):
            raise
        except KeyboardInterrupt:
            if not is_silent():
                get_console().print("\n[yellow]Interrupted[/yellow]")
            raise typer.Exit(130)
        except Exception as e:
            exit_code = e.exit_code if isinstance(e, GutenreaderError) else 1
            if is_silent():
                raise typer.Exit(exit_code)

            console = get_console()
            if is_verbose():
                console.print_exception()
            elif isinstance(e, GutenreaderError):
                _report(console, f"[red]Error:[/red] {e.message}", e.details, e.hint)
            elif isinstance(e, IsADirectoryError):
                _report(console, f"[red]Expected a file, got a directory:[/red] {e.filename or e}")
            elif isinstance(e, FileNotFoundError):
                _report(
                    console,
                    f"[red]File not found:[/red] {e.filename or e}",
                    hint="Pass a Gutenberg book ID or the path to a downloaded .txt/.html file",
                )
            else:
                _report(console, f"[red]Unexpected error:[/red] {type(e).__name__}: {e}")
            raise typer.Exit(exit_code)

    return wrapper  # type: ignore[return-value]


@dataclass
class LoadedSource:
    """Book text loaded for a command, with where it came from."""

    title: str
    text: str
    book: "Book | None" = None

    @property
    def author(self) -> str:
        return self.book.author_line() if self.book else ""


def load_source(source: str, use_cache: bool = True) -> LoadedSource:
    """Load a book by Gutenberg ID, or a downloaded file by path.

    Args:
        source: Numeric Gutenberg ID or path to a .txt/.html file.
        use_cache: Read and write the local book cache.

    Returns:
        LoadedSource with the prepared document text.
    """
    from gutenreader.reader.loader import load_local_text

    path = Path(source)
    if path.is_file() or not source.strip().isdigit():
        return LoadedSource(title=path.name, text=load_local_text(path))

    from gutenreader.cache import get_cache
    from gutenreader.catalog import Book, GutendexClient
    from gutenreader.config.settings import get_settings
    from gutenreader.reader.loader import load_book_text

    book_id = int(source)
    cache = get_cache() if use_cache and get_settings().cache.enabled else None

    with GutendexClient() as client:
        with get_console().status(f"Loading book {book_id}..."):
            record = cache.get_book(book_id) if cache else None
            book = Book.model_validate(record) if record else client.get_book(book_id)
            text = load_book_text(book, client, cache)

    return LoadedSource(title=book.title, text=text, book=book)
