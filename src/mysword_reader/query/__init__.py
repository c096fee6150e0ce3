"""Queries against opened modules."""

from mysword_reader.query.annotations import get_annotation_text
from mysword_reader.query.markup import NormalizedText, normalize, strip_markup
from mysword_reader.query.schema import (
    ANNOTATION_TABLES,
    find_annotation_table,
    find_annotation_tables,
    query_annotation,
)
from mysword_reader.query.verses import get_chapter_count, get_verse_count, get_verses

__all__ = [
    "NormalizedText",
    "normalize",
    "strip_markup",
    "ANNOTATION_TABLES",
    "find_annotation_table",
    "find_annotation_tables",
    "query_annotation",
    "get_verses",
    "get_chapter_count",
    "get_verse_count",
    "get_annotation_text",
]
