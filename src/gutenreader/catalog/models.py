"""Data models for Gutendex catalog records."""

from pydantic import BaseModel, Field

# Editions the reader can display, best first
READABLE_FORMATS = [
    ("text/plain; charset=us-ascii", "Plain Text", "txt-ascii"),
    ("text/plain", "Plain Text", "txt"),
    ("text/plain; charset=utf-8", "Plain Text (UTF-8)", "txt-utf8"),
    ("text/html", "HTML", "html"),
]


class Author(BaseModel):
    """A book author (or translator)."""

    name: str
    birth_year: int | None = None
    death_year: int | None = None

    def display_name(self) -> str:
        """Name with life span, e.g. ``Austen, Jane (1775-1817)``."""
        if self.birth_year or self.death_year:
            return f"{self.name} ({self.birth_year or '?'}-{self.death_year or '?'})"
        return self.name


class ReadableFormat(BaseModel):
    """The edition of a book chosen for reading."""

    name: str
    url: str
    key: str

    @property
    def is_html(self) -> bool:
        return self.key == "html"


class Book(BaseModel):
    """A Project Gutenberg book as described by Gutendex."""

    id: int
    title: str
    authors: list[Author] = Field(default_factory=list)
    subjects: list[str] = Field(default_factory=list)
    languages: list[str] = Field(default_factory=list)
    download_count: int = 0
    formats: dict[str, str] = Field(default_factory=dict)

    def author_line(self) -> str:
        """All authors joined for display."""
        return ", ".join(a.display_name() for a in self.authors)

    def author_names(self) -> str:
        """All author names joined, without life spans."""
        return ", ".join(a.name for a in self.authors)

    def readable_format(self) -> ReadableFormat | None:
        """Pick the best readable edition (plain text preferred over HTML)."""
        for mime, name, key in READABLE_FORMATS:
            url = self.formats.get(mime)
            if url:
                return ReadableFormat(name=name, url=url, key=key)
        return None

    @property
    def has_readable_format(self) -> bool:
        return self.readable_format() is not None

    def short_subjects(self, limit: int = 5) -> list[str]:
        """Top-level subject headings ("Fiction -- Romance" becomes "Fiction")."""
        return [s.split("--")[0].strip() for s in self.subjects[:limit]]


class SearchResults(BaseModel):
    """One page of catalog search results."""

    count: int = 0
    next: str | None = None
    previous: str | None = None
    results: list[Book] = Field(default_factory=list)
