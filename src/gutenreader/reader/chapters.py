"""Chapter location inside raw Project Gutenberg text.

A heading such as ``CHAPTER III`` usually occurs more than once in a book:
in the table of contents and where the chapter really begins. Every
occurrence is collected and scored by how much the text after it reads like
running prose, and the best one is used as the chapter start.
"""

import logging
import re
from dataclasses import dataclass
from functools import lru_cache

from gutenreader.exceptions import ChapterNotFoundError, InvalidChapterIdentifierError

logger = logging.getLogger(__name__)

ROMAN_VALUES = {"I": 1, "V": 5, "X": 10, "L": 50, "C": 100, "D": 500, "M": 1000}

# Largest number with a standard Roman spelling
MAX_ROMAN = 3999

_ROMAN_TABLE = [
    (1000, "M"),
    (900, "CM"),
    (500, "D"),
    (400, "CD"),
    (100, "C"),
    (90, "XC"),
    (50, "L"),
    (40, "XL"),
    (10, "X"),
    (9, "IX"),
    (5, "V"),
    (4, "IV"),
    (1, "I"),
]

# Words that introduce a chapter heading
CHAPTER_WORDS = ("Chapter", "CHAPTER")

# Forms of "1" accepted when opening a book at its first chapter
FIRST_CHAPTER_FORMS = ("1", "I", "One", "ONE", "First", "FIRST")
FIRST_CHAPTER_BARE_FORMS = ("1", "I")

# Prose-likelihood scoring
PROBE_CHARS = 1000
PROBE_LINES = 15
LONG_LINE_CHARS = 60
MEDIUM_LINE_CHARS = 30
LONG_LINE_POINTS = 2
MEDIUM_LINE_POINTS = 1
PARAGRAPH_POINTS = 5
SENTENCE_POINTS = 3

# A "next chapter" heading closer than this to the chosen heading is noise
MIN_NEXT_HEADING_GAP = 300

DEFAULT_FALLBACK_CHARS = 10_000

_CHAPTER_TOKEN = re.compile(r"^\s*chapter(?![a-z])\.?\s*", re.IGNORECASE)
_DIGITS = re.compile(r"^\d+$")
_PARAGRAPH_BREAK = re.compile(r"\n[^\S\n]*(?:\n[^\S\n]*)+")
_SENTENCE_BREAK = re.compile(r"[.!?]\s+[A-Z]")

_ANY_NUMERAL = r"(?:[IVXLCDM]+|\d+)"
NEXT_HEADING_PATTERNS = (
    re.compile(rf"(?:{'|'.join(CHAPTER_WORDS)})\s+{_ANY_NUMERAL}(?![A-Za-z0-9])"),
    re.compile(rf"^[^\S\n]*{_ANY_NUMERAL}\.?[^\S\n]*$", re.MULTILINE),
)


@dataclass(frozen=True)
class ChapterQuery:
    """A parsed chapter identifier."""

    number: int
    roman: str | None = None


@dataclass(frozen=True)
class Candidate:
    """A place in the document where a chapter heading pattern matched."""

    offset: int
    text: str
    score: int

    @property
    def end(self) -> int:
        """Offset just past the matched heading."""
        return self.offset + len(self.text)


@dataclass(frozen=True)
class ChapterSlice:
    """The text of one chapter, cut out of a document."""

    text: str
    start: int
    end: int
    heading: str | None = None
    number: int | None = None
    score: int = 0
    fallback: bool = False

    @property
    def char_count(self) -> int:
        return len(self.text)

    @property
    def word_count(self) -> int:
        return len(self.text.split())


def roman_to_int(value: str) -> int:
    """Convert a Roman numeral to an integer.

    Scans left to right, subtracting a symbol whose value is smaller than
    the next one and adding it otherwise. Case-insensitive.

    Raises:
        InvalidChapterIdentifierError: If a character is not a Roman symbol.
    """
    numeral = value.strip().upper()
    if not numeral:
        raise InvalidChapterIdentifierError("Empty Roman numeral")

    total = 0
    for i, symbol in enumerate(numeral):
        current = ROMAN_VALUES.get(symbol)
        if current is None:
            raise InvalidChapterIdentifierError(
                f"Invalid Roman numeral: {value}",
                details=f"Unexpected character {symbol!r}",
            )
        following = ROMAN_VALUES.get(numeral[i + 1]) if i + 1 < len(numeral) else None
        if following is not None and current < following:
            total -= current
        else:
            total += current
    return total


def int_to_roman(number: int) -> str:
    """Convert a positive integer to its canonical Roman numeral."""
    if number < 1:
        raise ValueError(f"Roman numerals start at 1, got {number}")
    if number > MAX_ROMAN:
        raise ValueError(f"No canonical Roman numeral above {MAX_ROMAN}, got {number}")

    parts = []
    for value, symbol in _ROMAN_TABLE:
        count, number = divmod(number, value)
        parts.append(symbol * count)
    return "".join(parts)


def parse_chapter_identifier(value: str) -> ChapterQuery:
    """Parse user input such as ``3``, ``iv`` or ``Chapter XII``.

    Args:
        value: Raw chapter identifier.

    Returns:
        ChapterQuery with the chapter number, and the upper-cased Roman form
        when the input was a numeral.

    Raises:
        InvalidChapterIdentifierError: If the input cannot be parsed.
    """
    token = _CHAPTER_TOKEN.sub("", value or "", count=1).strip().rstrip(".").strip()
    if not token:
        raise InvalidChapterIdentifierError(f"Invalid chapter identifier: {value!r}")

    if _DIGITS.match(token):
        number = int(token)
        roman = None
    else:
        roman = token.upper()
        try:
            number = roman_to_int(roman)
        except InvalidChapterIdentifierError as e:
            raise InvalidChapterIdentifierError(
                f"Invalid chapter identifier: {value!r}",
                details=e.details,
            ) from e

    if number < 1:
        raise InvalidChapterIdentifierError(
            f"Invalid chapter identifier: {value!r}",
            details="Chapter numbers start at 1",
        )
    return ChapterQuery(number=number, roman=roman)


@lru_cache(maxsize=256)
def _heading_patterns(forms: tuple[str, ...], bare_forms: tuple[str, ...]) -> tuple[re.Pattern, ...]:
    """Compile heading patterns for the given number/numeral spellings.

    One pattern per chapter word ("Chapter 3", "CHAPTER III"), plus one for
    the number standing alone on its own line ("III." or "3").
    """
    alternation = "|".join(re.escape(f) for f in sorted(set(forms), key=len, reverse=True))
    patterns = [
        re.compile(rf"{word}\s+(?:{alternation})(?![A-Za-z0-9])") for word in CHAPTER_WORDS
    ]
    if bare_forms:
        bare = "|".join(re.escape(f) for f in sorted(set(bare_forms), key=len, reverse=True))
        patterns.append(re.compile(rf"^[^\S\n]*(?:{bare})\.?[^\S\n]*$", re.MULTILINE))
    return tuple(patterns)


def _chapter_forms(chapter_number: int, roman_form: str | None) -> tuple[str, ...]:
    forms = {str(chapter_number)}
    if chapter_number <= MAX_ROMAN:
        forms.add(int_to_roman(chapter_number))
    if roman_form:
        forms.add(roman_form.strip().upper())
    return tuple(sorted(forms))


def score_probe(probe: str) -> int:
    """Score how much a window of text looks like continuous prose.

    Table-of-contents entries are short lines followed by more short lines;
    a real chapter opening is followed by long lines grouped in paragraphs.

    Args:
        probe: Text immediately following a candidate heading.

    Returns:
        Prose-likelihood score; higher means more prose-like.
    """
    score = 0
    for line in probe.split("\n")[:PROBE_LINES]:
        length = len(line.strip())
        if length > LONG_LINE_CHARS:
            score += LONG_LINE_POINTS
        elif length > MEDIUM_LINE_CHARS:
            score += MEDIUM_LINE_POINTS

    if len(_PARAGRAPH_BREAK.findall(probe)) > 1:
        score += PARAGRAPH_POINTS
    if _SENTENCE_BREAK.search(probe):
        score += SENTENCE_POINTS
    return score


def _rank(document: str, patterns: tuple[re.Pattern, ...]) -> list[Candidate]:
    """Collect every match of every pattern, best-scoring first."""
    matches: dict[int, str] = {}
    for pattern in patterns:
        for match in pattern.finditer(document):
            matches.setdefault(match.start(), match.group(0))

    candidates = []
    for offset, text in matches.items():
        probe_start = offset + len(text)
        probe = document[probe_start : probe_start + PROBE_CHARS]
        candidates.append(Candidate(offset=offset, text=text, score=score_probe(probe)))

    # Highest score first; earlier occurrence wins a tie
    candidates.sort(key=lambda c: (-c.score, c.offset))
    return candidates


def rank_candidates(
    document: str,
    chapter_number: int,
    roman_form: str | None = None,
) -> list[Candidate]:
    """Find and rank every heading that could start the requested chapter.

    Args:
        document: Full book text.
        chapter_number: Chapter to look for.
        roman_form: Roman spelling supplied by the user, if any. The canonical
            Roman and decimal spellings are always searched as well.

    Returns:
        Candidates ordered by score (descending), ties in document order.
    """
    if chapter_number < 1:
        raise InvalidChapterIdentifierError(
            f"Invalid chapter number: {chapter_number}",
            details="Chapter numbers start at 1",
        )

    forms = _chapter_forms(chapter_number, roman_form)
    candidates = _rank(document, _heading_patterns(forms, forms))
    logger.debug(f"Found {len(candidates)} candidate heading(s) for chapter {chapter_number}")
    return candidates


def find_next_heading(
    document: str,
    start: int,
    min_gap: int = MIN_NEXT_HEADING_GAP,
) -> int | None:
    """Find where the next chapter begins.

    Args:
        document: Full book text.
        start: Offset just past the current chapter's heading.
        min_gap: Headings starting closer than this to ``start`` are ignored.

    Returns:
        Offset of the nearest following chapter heading, or None.
    """
    search_from = start + min_gap
    if search_from > len(document):
        return None

    found = None
    for pattern in NEXT_HEADING_PATTERNS:
        match = pattern.search(document, search_from)
        if match and (found is None or match.start() < found):
            found = match.start()
    return found


def _slice_from(document: str, candidate: Candidate, number: int | None) -> ChapterSlice:
    end = find_next_heading(document, candidate.end)
    if end is None:
        end = len(document)

    logger.debug(
        f"Chapter heading {candidate.text.strip()!r} at {candidate.offset} "
        f"(score {candidate.score}), ends at {end}"
    )
    return ChapterSlice(
        text=document[candidate.end : end].strip(),
        start=candidate.end,
        end=end,
        heading=candidate.text.strip(),
        number=number,
        score=candidate.score,
    )


def locate_chapter(
    document: str,
    chapter_number: int,
    roman_form: str | None = None,
) -> ChapterSlice:
    """Cut the requested chapter out of a book.

    Args:
        document: Full book text.
        chapter_number: Chapter to extract.
        roman_form: Optional Roman spelling of the chapter number.

    Returns:
        ChapterSlice from just after the heading to the next chapter heading
        (or the end of the document).

    Raises:
        ChapterNotFoundError: If no heading for the chapter exists.
    """
    candidates = rank_candidates(document, chapter_number, roman_form)
    if not candidates:
        label = roman_form.upper() if roman_form else str(chapter_number)
        raise ChapterNotFoundError(f"Could not find chapter {label} in the book")

    return _slice_from(document, candidates[0], chapter_number)


def locate_default_chapter(
    document: str,
    fallback_chars: int = DEFAULT_FALLBACK_CHARS,
) -> ChapterSlice:
    """Open a book at its first chapter.

    Many texts have no explicit headings, so instead of failing this
    returns the first ``fallback_chars`` characters when no first-chapter
    heading is found.
    """
    patterns = _heading_patterns(FIRST_CHAPTER_FORMS, FIRST_CHAPTER_BARE_FORMS)
    candidates = _rank(document, patterns)
    if candidates:
        return _slice_from(document, candidates[0], 1)

    logger.info(f"No first-chapter heading found, showing first {fallback_chars} characters")
    prefix = document[:fallback_chars]
    return ChapterSlice(text=prefix, start=0, end=len(prefix), fallback=True)


def read_chapter(document: str, identifier: str | None = None) -> ChapterSlice:
    """Parse a user-supplied identifier and locate that chapter.

    With no identifier the book opens at its first chapter.
    """
    if identifier is None or not identifier.strip():
        return locate_default_chapter(document)

    query = parse_chapter_identifier(identifier)
    return locate_chapter(document, query.number, query.roman)
