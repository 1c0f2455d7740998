"""Custom exceptions for Gutenreader."""


class GutenreaderError(Exception):
    """Base exception for all Gutenreader errors."""

    exit_code: int = 1
    default_hint: str | None = None

    def __init__(
        self,
        message: str,
        details: str | None = None,
        hint: str | None = None,
    ):
        self.message = message
        self.details = details
        self.hint = hint or self.default_hint
        super().__init__(message)


# Catalog errors (10-19)
class CatalogError(GutenreaderError):
    """Error while talking to the book catalog."""

    exit_code = 10


class BookNotFoundError(CatalogError):
    """Book not found in the catalog."""

    exit_code = 11
    default_hint = "Use 'gutenreader search' to look up a valid Gutenberg ID"


class RateLimitError(CatalogError):
    """Rate limited by the catalog or content host."""

    exit_code = 12
    default_hint = "Wait a few minutes and try again"


class NetworkError(CatalogError):
    """Network connectivity issue."""

    exit_code = 13
    default_hint = "Check your internet connection"


class NoReadableFormatError(CatalogError):
    """Book has no plain-text or HTML edition."""

    exit_code = 14
    default_hint = "Only plain text and HTML editions can be read"


# Content errors (20-29)
class ContentError(GutenreaderError):
    """Error while preparing or slicing book content."""

    exit_code = 20


class EmptyContentError(ContentError):
    """No readable text left after cleaning."""

    exit_code = 21
    default_hint = "Try a different edition of the book"


class InvalidChapterIdentifierError(ContentError):
    """Chapter identifier is neither a number nor a Roman numeral."""

    exit_code = 22
    default_hint = "Use a number or Roman numeral, e.g. 3, III or 'Chapter III'"


class ChapterNotFoundError(ContentError):
    """No heading for the requested chapter exists in the text."""

    exit_code = 23
    default_hint = "Try a different chapter, or read without --chapter"


# Configuration errors (30-39)
class ConfigError(GutenreaderError):
    """Configuration error."""

    exit_code = 30


# LLM errors (40-49)
class LLMError(GutenreaderError):
    """LLM processing error."""

    exit_code = 40


class LLMNotAvailableError(LLMError):
    """LLM not available or not configured."""

    exit_code = 41
    default_hint = (
        "Set one of GUTENREADER_API_KEY, GEMINI_API_KEY, ANTHROPIC_API_KEY or OPENAI_API_KEY "
        "and install: pip install gutenreader[llm]"
    )
