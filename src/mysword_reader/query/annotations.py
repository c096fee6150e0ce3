"""Look up commentary and cross-reference text for a verse."""

import logging

from mysword_reader.ingest.engine import ModuleDatabase
from mysword_reader.query.markup import strip_markup
from mysword_reader.query.schema import find_annotation_tables, query_annotation

logger = logging.getLogger(__name__)


def get_annotation_text(
    handle: ModuleDatabase, book_id: int, chapter: int, verse: int
) -> str | None:
    """
    Get the plain-text annotation covering a verse.

    Candidate tables are tried in priority order and the first one with a
    matching row wins, even if a later table would also match. Returns
    None when nothing covers the verse.
    """
    for table in find_annotation_tables(handle):
        content = query_annotation(handle, table, book_id, chapter, verse)
        if content is None:
            continue

        text = strip_markup(content)
        if text:
            return text
        logger.debug("Annotation in %s for %s:%s:%s is empty after cleanup", table, book_id, chapter, verse)

    return None
