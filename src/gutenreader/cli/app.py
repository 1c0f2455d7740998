"""Main Typer application for Gutenreader CLI."""

import logging

import typer
from rich.console import Console

from gutenreader import __version__
from gutenreader.cli.utils import handle_errors, set_context

# Status and version output goes to stderr; stdout carries command results
console = Console(stderr=True)

app = typer.Typer(
    name="gutenreader",
    help="""Gutenreader: find and read public-domain books from Project Gutenberg.

    [bold]Commands:[/bold]
    search      Search the catalog by title or author
    info        Show a book's catalog record
    read        Read a book, jumping to a chapter
    candidates  Show how chapter headings were ranked
    synopsis    AI-generated synopsis
    """,
    no_args_is_help=True,
    rich_markup_mode="rich",
)


def version_callback(value: bool):
    """Print version and exit."""
    if value:
        console.print(f"gutenreader version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    ctx: typer.Context,
    version: bool | None = typer.Option(
        None,
        "--version",
        "-V",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Show debug logging and full tracebacks.",
    ),
    quiet: bool = typer.Option(
        False,
        "--quiet",
        "-q",
        help="Suppress status output; still shows errors.",
    ),
    silent: bool = typer.Option(
        False,
        "--silent",
        help="Completely silent (exit code only).",
    ),
):
    """Gutenreader: find and read public-domain books."""
    ctx.ensure_object(dict)
    quiet_level = 2 if silent else 1 if quiet else 0
    ctx.obj["verbose"] = verbose
    ctx.obj["quiet"] = quiet_level

    # Commands read these flags through cli.utils, not the typer context
    set_context(verbose=verbose, quiet=quiet_level)

    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(asctime)s %(name)s %(levelname)s: %(message)s",
        )


def _wrap_command(func):
    """Route a command's Gutenreader errors to exit codes."""
    return handle_errors(func)


def _setup_commands():
    """Register the commands on the app."""
    # Command modules import from gutenreader.cli; load them after app exists
    from gutenreader.cli import cache_cmd, read_cmd, search_cmd, synopsis_cmd

    app.command("search")(_wrap_command(search_cmd.search))
    app.command("info")(_wrap_command(search_cmd.info))
    app.command("read")(_wrap_command(read_cmd.read))
    app.command("candidates")(_wrap_command(read_cmd.candidates))
    app.command("synopsis")(_wrap_command(synopsis_cmd.synopsis))
    app.command("clear-cache")(_wrap_command(cache_cmd.clear_cache))
    app.command("cache-info")(_wrap_command(cache_cmd.cache_info))


_setup_commands()


if __name__ == "__main__":
    app()
