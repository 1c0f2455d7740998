"""AI-generated synopses of classic books."""

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from gutenreader.exceptions import EmptyContentError, LLMError

if TYPE_CHECKING:
    from gutenreader.llm.client import LLMClient

logger = logging.getLogger(__name__)

DEFAULT_EXCERPT_CHARS = 5000

SYNOPSIS_SYSTEM_PROMPT = (
    "You are a literary expert who creates concise, engaging synopses of classic "
    "literature. Focus on main themes, characters, and plot."
)

SYNOPSIS_PROMPT = """Generate a concise synopsis (1-2 paragraphs) of the following book excerpt. Focus on the main themes, characters, and plot.

Title: {title}
Author: {author}

Excerpt:
{excerpt}

Synopsis:"""


@dataclass
class Synopsis:
    """A generated synopsis."""

    text: str
    model: str
    input_tokens: int = 0
    output_tokens: int = 0


def generate_synopsis(
    title: str,
    author: str,
    text: str,
    client: "LLMClient | None" = None,
    excerpt_chars: int = DEFAULT_EXCERPT_CHARS,
) -> Synopsis:
    """Summarize a book from the opening of its text.

    Args:
        title: Book title.
        author: Author line for the prompt.
        text: Book (or chapter) text; only the first ``excerpt_chars``
            characters are sent.
        client: LLM client (defaults to the shared client).
        excerpt_chars: Excerpt length.

    Returns:
        Synopsis with the model's answer.

    Raises:
        EmptyContentError: If there is no text to summarize.
        LLMError: If the model returns nothing.
    """
    excerpt = text[:excerpt_chars].strip()
    if not excerpt:
        raise EmptyContentError("Load the book before generating a synopsis")

    if client is None:
        from gutenreader.llm.client import get_client

        client = get_client()

    logger.info(f"Generating synopsis for {title!r} by {author or 'unknown author'}")
    response = client.complete(
        SYNOPSIS_PROMPT.format(title=title, author=author or "Unknown", excerpt=excerpt),
        system=SYNOPSIS_SYSTEM_PROMPT,
    )

    content = response.content.strip()
    if not content:
        raise LLMError("No synopsis generated", details=f"Model: {response.model}")

    return Synopsis(
        text=content,
        model=response.model,
        input_tokens=response.input_tokens,
        output_tokens=response.output_tokens,
    )
