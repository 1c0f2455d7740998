"""Turn downloaded Gutenberg files into plain reading text."""

import re

from bs4 import BeautifulSoup, Comment

_WHITESPACE = re.compile(r"\s+")

# "*** START OF THE PROJECT GUTENBERG EBOOK PRIDE AND PREJUDICE ***"
START_MARKER = re.compile(
    r"\*\*\*\s*START OF (?:THE |THIS )?PROJECT GUTENBERG E-?BOOK[^*\n]*(?:\*\*\*)?",
    re.IGNORECASE,
)
END_MARKER = re.compile(
    r"\*\*\*\s*END OF (?:THE |THIS )?PROJECT GUTENBERG E-?BOOK",
    re.IGNORECASE,
)


def normalize_newlines(text: str) -> str:
    """Convert CRLF and bare CR line endings to LF."""
    return text.replace("\r\n", "\n").replace("\r", "\n")


def strip_html(markup: str) -> str:
    """Reduce an HTML edition to a single run of text.

    Style and script blocks and comments are dropped, the remaining text
    nodes are joined with spaces and whitespace is collapsed.
    """
    soup = BeautifulSoup(markup, "html.parser")
    for tag in soup.find_all(["style", "script"]):
        tag.decompose()
    for comment in soup.find_all(string=lambda node: isinstance(node, Comment)):
        comment.extract()
    return _WHITESPACE.sub(" ", soup.get_text(" ")).strip()


def trim_boilerplate(text: str) -> str:
    """Remove the Project Gutenberg header and license footer.

    Everything up to and including the START marker line is cut, as is
    everything from the END marker onwards. Text without markers is
    returned unchanged.
    """
    start = START_MARKER.search(text)
    if start:
        text = text[start.end() :]

    end = END_MARKER.search(text)
    if end:
        text = text[: end.start()]

    return text


def prepare_document(raw: str, is_html: bool = False) -> str:
    """Prepare downloaded content for the reader.

    Args:
        raw: File content as downloaded.
        is_html: Whether the content is an HTML edition.

    Returns:
        Plain text with markup and boilerplate removed.
    """
    text = normalize_newlines(raw)
    if is_html:
        text = strip_html(text)
    return trim_boilerplate(text).strip()
