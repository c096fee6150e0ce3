"""Find annotation tables and columns across inconsistent module schemas.

Vendors name the same concepts differently. Annotation rows live in one of
several tables, and verse coverage is either a single ``verse`` column or a
begin/end pair. Columns are looked up from the table catalog before any
query is built. SQLite identifiers are case-insensitive, so the lower-case
(``book``, ``versebegin``) and capitalized (``Book``, ``VerseBegin``)
conventions resolve to the same catalog entry.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum

from mysword_reader.errors import QueryError
from mysword_reader.ingest.engine import ModuleDatabase, quote_identifier

logger = logging.getLogger(__name__)

# Priority order matters: the first table holding a match wins
ANNOTATION_TABLES = ("Commentary", "Comments", "Details", "CrossReference")

BOOK_COLUMN = "book"
CHAPTER_COLUMN = "chapter"
VERSE_COLUMN = "verse"
RANGE_COLUMNS = (("versebegin", "verseend"), ("fromverse", "toverse"))
CONTENT_COLUMNS = ("content", "data")


class NoMatch(Enum):
    """Sentinel for a table that cannot answer annotation lookups."""

    NO_MATCH = "no match"


NO_MATCH = NoMatch.NO_MATCH


@dataclass
class AnnotationQuery:
    """A lookup built against the columns one table actually has."""

    table: str
    content_column: str
    book_column: str
    chapter_column: str
    verse_column: str | None = None
    range_columns: list[tuple[str, str]] = field(default_factory=list)

    @property
    def sql(self) -> str:
        conditions = []
        if self.verse_column:
            conditions.append(f"{quote_identifier(self.verse_column)} = ?")
        for begin, end in self.range_columns:
            conditions.append(
                f"({quote_identifier(begin)} <= ? AND {quote_identifier(end)} >= ?)"
            )

        return (
            f"SELECT {quote_identifier(self.content_column)} "
            f"FROM {quote_identifier(self.table)} "
            f"WHERE {quote_identifier(self.book_column)} = ? "
            f"AND {quote_identifier(self.chapter_column)} = ? "
            f"AND ({' OR '.join(conditions)}) "
            "LIMIT 1"
        )

    def params(self, book_id: int, chapter: int, verse: int) -> list[int]:
        verse = int(verse)
        values = [int(book_id), int(chapter)]
        if self.verse_column:
            values.append(verse)
        for _ in self.range_columns:
            values.extend([verse, verse])
        return values


def find_annotation_table(handle: ModuleDatabase) -> str | None:
    """Return the highest-priority annotation table present, if any."""
    tables = find_annotation_tables(handle)
    return tables[0] if tables else None


def find_annotation_tables(handle: ModuleDatabase) -> list[str]:
    """
    Return every annotation table present, in priority order.

    Names are returned as stored in the database, whatever their casing.
    """
    try:
        existing = {name.lower(): name for name in handle.table_names()}
    except QueryError as e:
        logger.warning("Could not read table catalog: %s", e)
        return []

    return [
        existing[candidate.lower()]
        for candidate in ANNOTATION_TABLES
        if candidate.lower() in existing
    ]


def build_annotation_query(
    handle: ModuleDatabase, table: str
) -> AnnotationQuery | NoMatch:
    """
    Plan a verse lookup for a table from its column catalog.

    Returns NO_MATCH when the table lacks book/chapter/content columns or
    has no way to express verse coverage.
    """
    columns = {name.lower(): name for name in handle.column_names(table)}

    content = next((columns[c] for c in CONTENT_COLUMNS if c in columns), None)
    if content is None or BOOK_COLUMN not in columns or CHAPTER_COLUMN not in columns:
        return NO_MATCH

    ranges = [
        (columns[begin], columns[end])
        for begin, end in RANGE_COLUMNS
        if begin in columns and end in columns
    ]
    verse = columns.get(VERSE_COLUMN)
    if verse is None and not ranges:
        return NO_MATCH

    return AnnotationQuery(
        table=table,
        content_column=content,
        book_column=columns[BOOK_COLUMN],
        chapter_column=columns[CHAPTER_COLUMN],
        verse_column=verse,
        range_columns=ranges,
    )


def query_annotation(
    handle: ModuleDatabase, table: str, book_id: int, chapter: int, verse: int
) -> str | None:
    """
    Return raw content of the first row in ``table`` covering the verse.

    A row covers the verse when book and chapter match and the verse either
    equals the row's verse or falls inside its inclusive begin/end range.
    Engine errors are logged and reported as no match.
    """
    try:
        plan = build_annotation_query(handle, table)
        if plan is NO_MATCH:
            logger.debug("Table %s has no usable annotation columns", table)
            return None
        row = handle.query_one(plan.sql, plan.params(book_id, chapter, verse))
    except QueryError as e:
        logger.warning("Annotation lookup failed on table %s: %s", table, e)
        return None

    if row is None or row[0] is None:
        return None

    content = str(row[0])
    return content if content.strip() else None
