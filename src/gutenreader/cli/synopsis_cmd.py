"""Synopsis command: AI-generated summary of a book."""

import typer

from gutenreader.cli.utils import get_console, load_source
from gutenreader.output import get_formatter


def synopsis(
    source: str = typer.Argument(
        ...,
        help="Gutenberg book ID, or path to a downloaded .txt/.html file",
    ),
    chapter: str | None = typer.Option(
        None,
        "--chapter",
        "-c",
        help="Summarize from this chapter instead of the start of the book",
    ),
    title: str | None = typer.Option(
        None,
        "--title",
        "-t",
        help="Title to use in the prompt (defaults to the catalog title or file name)",
    ),
    author: str | None = typer.Option(
        None,
        "--author",
        "-a",
        help="Author to use in the prompt",
    ),
    model: str | None = typer.Option(
        None,
        "--model",
        "-m",
        help="LLM model (litellm name)",
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
    """Generate a short synopsis from the opening of a book or chapter.

    Requires the 'llm' extra and an API key.

    Examples:

        gutenreader synopsis 1342

        gutenreader synopsis 84 --chapter 5 --model gpt-4o-mini
    """
    from gutenreader.config.settings import get_settings
    from gutenreader.llm import get_client
    from gutenreader.reader.chapters import read_chapter
    from gutenreader.synopsis import generate_synopsis

    formatter = get_formatter(json_flag=use_json, pretty_flag=pretty)
    loaded = load_source(source)
    text = read_chapter(loaded.text, chapter).text if chapter else loaded.text
    book_title = title or loaded.title

    with get_console().status("Generating AI synopsis..."):
        result = generate_synopsis(
            book_title,
            author or loaded.author,
            text,
            client=get_client(model=model),
            excerpt_chars=get_settings().reader.synopsis_excerpt_chars,
        )

    formatter.output(
        {
            "success": True,
            "title": book_title,
            "synopsis": {
                "text": result.text,
                "model": result.model,
                "input_tokens": result.input_tokens,
                "output_tokens": result.output_tokens,
            },
        }
    )
