"""Read verses and chapter structure from Bible modules."""

import logging

from mysword_reader.errors import QueryError
from mysword_reader.ingest.engine import ModuleDatabase
from mysword_reader.models.verse import Verse
from mysword_reader.query.markup import normalize

logger = logging.getLogger(__name__)

VERSES_SQL = "SELECT verse, scripture FROM Bible WHERE book = ? AND chapter = ? ORDER BY verse"
CHAPTER_COUNT_SQL = "SELECT MAX(chapter) FROM Bible WHERE book = ?"
VERSE_COUNT_SQL = "SELECT MAX(verse) FROM Bible WHERE book = ? AND chapter = ?"


def get_verses(handle: ModuleDatabase, book_id: int, chapter: int) -> list[Verse]:
    """
    Get the normalized verses of one chapter, ordered by verse number.

    Returns an empty list when the chapter is missing or the module
    cannot be read.
    """
    try:
        rows = handle.query(VERSES_SQL, (int(book_id), int(chapter)))
    except QueryError as e:
        logger.warning("Could not read verses for book %s chapter %s: %s", book_id, chapter, e)
        return []

    verses: list[Verse] = []
    for number, scripture in rows:
        if number is None:
            continue
        try:
            verse_number = int(number)
        except (TypeError, ValueError):
            logger.warning("Skipping non-numeric verse %r in book %s chapter %s", number, book_id, chapter)
            continue
        normalized = normalize(None if scripture is None else str(scripture))
        verses.append(Verse(number=verse_number, text=normalized.text, title=normalized.title))

    return verses


def get_chapter_count(handle: ModuleDatabase, book_id: int) -> int:
    """Highest chapter number in a book, or 0 if the book is absent."""
    return _max_or_zero(handle, CHAPTER_COUNT_SQL, (int(book_id),))


def get_verse_count(handle: ModuleDatabase, book_id: int, chapter: int) -> int:
    """Highest verse number in a chapter, or 0 if the chapter is absent."""
    return _max_or_zero(handle, VERSE_COUNT_SQL, (int(book_id), int(chapter)))


def _max_or_zero(handle: ModuleDatabase, sql: str, params: tuple) -> int:
    try:
        row = handle.query_one(sql, params)
    except QueryError as e:
        logger.warning("Count query failed: %s", e)
        return 0

    if row is None or row[0] is None:
        return 0
    try:
        return max(int(row[0]), 0)
    except (TypeError, ValueError):
        logger.warning("Non-numeric count %r", row[0])
        return 0
