"""Reader: document preparation and chapter location."""

from gutenreader.reader.chapters import (
    Candidate,
    ChapterQuery,
    ChapterSlice,
    find_next_heading,
    int_to_roman,
    locate_chapter,
    locate_default_chapter,
    parse_chapter_identifier,
    rank_candidates,
    read_chapter,
    roman_to_int,
    score_probe,
)
from gutenreader.reader.document import prepare_document, strip_html, trim_boilerplate
from gutenreader.reader.loader import load_book_text, load_local_text

__all__ = [
    "Candidate",
    "ChapterQuery",
    "ChapterSlice",
    "find_next_heading",
    "int_to_roman",
    "locate_chapter",
    "locate_default_chapter",
    "parse_chapter_identifier",
    "rank_candidates",
    "read_chapter",
    "roman_to_int",
    "score_probe",
    "prepare_document",
    "strip_html",
    "trim_boilerplate",
    "load_book_text",
    "load_local_text",
]
