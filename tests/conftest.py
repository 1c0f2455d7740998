"""Pytest fixtures for Gutenreader tests."""

from pathlib import Path

import pytest
from typer.testing import CliRunner

from gutenreader.cli.utils import set_context
from gutenreader.config.settings import get_settings
from gutenreader.reader.chapters import int_to_roman

# Every line is longer than 60 characters, like a wrapped Gutenberg paragraph
PARAGRAPH = (
    "It is a truth universally acknowledged, that a single man in possession\n"
    "of a good fortune, must be in want of a wife. However little known the\n"
    "feelings or views of such a man may be on his first entering a new town,\n"
    "this truth is so well fixed in the minds of the surrounding families,\n"
    "that he is considered the rightful property of some one or other of\n"
    "their daughters, and nobody in the village would think otherwise."
)

GUTENBERG_HEADER = (
    "The Project Gutenberg eBook of Sample Novel\n"
    "\n"
    "This eBook is for the use of anyone anywhere in the United States.\n"
    "\n"
    "*** START OF THE PROJECT GUTENBERG EBOOK SAMPLE NOVEL ***\n"
)

GUTENBERG_FOOTER = (
    "*** END OF THE PROJECT GUTENBERG EBOOK SAMPLE NOVEL ***\n"
    "\n"
    "Updated editions will replace the previous one.\n"
)


class SampleNovel:
    """A small novel with a table of contents and prose chapters."""

    def __init__(
        self,
        chapters: int = 12,
        toc: bool = True,
        word: str = "CHAPTER",
        roman: bool = True,
        paragraphs: int = 3,
    ):
        self.chapters = chapters
        self.toc = toc
        self.word = word
        self.roman = roman
        self.paragraphs = paragraphs

    def heading(self, number: int) -> str:
        numeral = int_to_roman(number) if self.roman else str(number)
        return f"{self.word} {numeral}"

    def opening(self, number: int) -> str:
        return f"This is where part {number} of the story begins, and the reader settles in."

    def body(self, number: int) -> str:
        return "\n\n".join([self.opening(number)] + [PARAGRAPH] * self.paragraphs)

    @property
    def text(self) -> str:
        parts = ["SAMPLE NOVEL\n\nBy A. Writer\n"]
        if self.toc:
            entries = "\n".join(self.heading(n) for n in range(1, self.chapters + 1))
            parts.append(f"CONTENTS\n\n{entries}\n")
        for number in range(1, self.chapters + 1):
            parts.append(f"{self.heading(number)}\n\n{self.body(number)}\n")
        return "\n\n".join(parts)

    def as_gutenberg_file(self) -> str:
        """The novel wrapped in Project Gutenberg header and license footer."""
        return f"{GUTENBERG_HEADER}\n{self.text}\n\n{GUTENBERG_FOOTER}"


@pytest.fixture(autouse=True)
def isolated_home(tmp_path, monkeypatch) -> Path:
    """Point HOME at a temp directory so config and cache never touch the real one."""
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    for var in ("GUTENREADER_API_KEY", "GUTENREADER_MODEL"):
        monkeypatch.delenv(var, raising=False)

    get_settings.cache_clear()
    set_context()
    yield home
    get_settings.cache_clear()


@pytest.fixture
def cli_runner():
    """Typer CLI test runner."""
    return CliRunner()


@pytest.fixture
def novel_factory():
    """Build sample novels with custom structure."""
    return SampleNovel


@pytest.fixture
def novel() -> SampleNovel:
    """A twelve-chapter novel with a table of contents."""
    return SampleNovel()


@pytest.fixture
def novel_file(tmp_path, novel) -> Path:
    """The sample novel saved as a downloaded Gutenberg text file."""
    path = tmp_path / "pg0001.txt"
    path.write_text(novel.as_gutenberg_file(), encoding="utf-8")
    return path


@pytest.fixture
def headingless_file(tmp_path) -> Path:
    """A text with no chapter headings at all."""
    path = tmp_path / "essay.txt"
    path.write_text(" ".join(["words"] * 3000), encoding="utf-8")
    return path
