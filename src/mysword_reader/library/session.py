"""Reading position, navigation history and chapter views."""

import logging
from dataclasses import dataclass, replace
from typing import Optional

from mysword_reader.books import book_name as canonical_book_name
from mysword_reader.books import resolve_book_id
from mysword_reader.config import get_settings
from mysword_reader.errors import MySwordError
from mysword_reader.library.registry import Module, ModuleLibrary
from mysword_reader.models.module import ModuleType
from mysword_reader.models.verse import ChapterView, Verse
from mysword_reader.query.annotations import get_annotation_text
from mysword_reader.query.verses import get_chapter_count, get_verse_count, get_verses

logger = logging.getLogger(__name__)

ANNOTATION_TYPES = (ModuleType.COMMENTARY, ModuleType.CROSS_REFERENCE)


@dataclass(frozen=True)
class Position:
    """Where the reader is: a book name as shown to the user, chapter and verse."""
    book_name: str = "Genesis"
    chapter: int = 1
    verse: int = 1


class ReadingSession:
    """
    Drives the verse and annotation readers from the reading position.

    Every call to view() re-queries the selected modules; nothing is cached.
    Book or chapter changes are recorded in a back/forward history.
    """

    def __init__(
        self,
        library: ModuleLibrary,
        bible_id: Optional[str] = None,
        commentary_id: Optional[str] = None,
        position: Optional[Position] = None,
    ):
        self.library = library
        self.position = position or Position()

        bibles = library.modules(ModuleType.BIBLE)
        # Commentaries are preferred over cross-references
        annotations = [m for t in ANNOTATION_TYPES for m in library.modules(t)]
        self.bible_id = bible_id or (bibles[0].id if bibles else None)
        self.commentary_id = commentary_id or (annotations[0].id if annotations else None)

        self._history: list[Position] = [self.position]
        self._history_index = 0

    @property
    def book_id(self) -> int:
        """Canonical id of the current book; unknown names fall back to Genesis."""
        book_id = resolve_book_id(self.position.book_name)
        if book_id is None:
            logger.debug("Unknown book %r, using book 1", self.position.book_name)
            return 1
        return book_id

    @property
    def can_go_back(self) -> bool:
        return self._history_index > 0

    @property
    def can_go_forward(self) -> bool:
        return self._history_index < len(self._history) - 1

    def select_bible(self, module_id: str) -> None:
        self.bible_id = self._checked(module_id, (ModuleType.BIBLE,)).id

    def select_commentary(self, module_id: Optional[str]) -> None:
        """Select the annotation source, or None for no commentary."""
        self.commentary_id = (
            self._checked(module_id, ANNOTATION_TYPES).id if module_id else None
        )

    def go_to(
        self,
        book_name: Optional[str] = None,
        chapter: Optional[int] = None,
        verse: Optional[int] = None,
    ) -> Position:
        """
        Move the reading position.

        Changing book without a chapter starts at chapter 1, and changing
        book or chapter without a verse starts at verse 1.
        """
        current = self.position
        book_changed = book_name is not None and book_name != current.book_name

        if chapter is None:
            chapter = 1 if book_changed else current.chapter
        if verse is None:
            verse = 1 if book_changed or chapter != current.chapter else current.verse

        updated = replace(
            current,
            book_name=book_name if book_name is not None else current.book_name,
            chapter=max(int(chapter), 1),
            verse=max(int(verse), 1),
        )

        if (updated.book_name, updated.chapter) != (current.book_name, current.chapter):
            del self._history[self._history_index + 1:]
            self._history.append(updated)
            self._history_index = len(self._history) - 1
        else:
            self._history[self._history_index] = updated

        self.position = updated
        return updated

    def back(self) -> bool:
        """Return to the previous book/chapter. False if there is none."""
        if not self.can_go_back:
            return False
        self._history_index -= 1
        self.position = self._history[self._history_index]
        return True

    def forward(self) -> bool:
        """Redo a step undone by back(). False if there is none."""
        if not self.can_go_forward:
            return False
        self._history_index += 1
        self.position = self._history[self._history_index]
        return True

    def view(self) -> ChapterView:
        """Query the selected modules for the current position."""
        book_id = self.book_id
        chapter = self.position.chapter
        verse = self.position.verse

        verses: list[Verse] = []
        chapters: list[int] = []
        verse_numbers: list[int] = []

        bible = self._selected(self.bible_id)
        if bible is not None:
            chapters = list(range(1, get_chapter_count(bible.handle, book_id) + 1))
            verse_numbers = list(range(1, get_verse_count(bible.handle, book_id, chapter) + 1))
            verses = get_verses(bible.handle, book_id, chapter)

        annotation = None
        commentary = self._selected(self.commentary_id)
        if commentary is not None:
            annotation = (
                get_annotation_text(commentary.handle, book_id, chapter, verse)
                or get_settings().no_annotation_message
            )

        return ChapterView(
            book_id=book_id,
            book_name=canonical_book_name(book_id),
            chapter=chapter,
            verse=verse,
            verses=verses,
            chapters=chapters,
            verse_numbers=verse_numbers,
            annotation=annotation,
        )

    def _selected(self, module_id: Optional[str]) -> Module | None:
        if module_id is None or module_id not in self.library:
            return None
        return self.library.get(module_id)

    def _checked(self, module_id: str, allowed: tuple[ModuleType, ...]) -> Module:
        module = self.library.get(module_id)
        if module.type not in allowed:
            names = ", ".join(t.label for t in allowed)
            raise MySwordError(f"Module {module.name} is a {module.type.label}, expected {names}")
        return module
