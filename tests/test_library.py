"""Tests for module persistence, the module library and reading sessions."""

import pytest

from mysword_reader.config import get_settings
from mysword_reader.errors import LoadError, MySwordError, UnknownModuleError
from mysword_reader.library.registry import ModuleLibrary
from mysword_reader.library.session import Position, ReadingSession
from mysword_reader.library.store import DirectoryModuleStore
from mysword_reader.models.module import ModuleInfo, ModuleType
from mysword_reader.query.verses import get_verses


class TestDirectoryModuleStore:
    """Byte-level persistence."""

    @pytest.fixture
    def store(self, tmp_path):
        return DirectoryModuleStore(tmp_path / "store")

    def test_bytes_round_trip(self, store, bible_bytes):
        info = ModuleInfo(id="bbl-KJV.BBL-1", name="KJV.BBL", type=ModuleType.BIBLE)
        store.save(info, bible_bytes)

        stored = store.load_all()
        assert len(stored) == 1
        assert stored[0].info == info
        assert stored[0].data == bible_bytes

    def test_save_replaces_same_id(self, store):
        info = ModuleInfo(id="cmt-A-1", name="A", type=ModuleType.COMMENTARY)
        store.save(info, b"first")
        store.save(info, b"second")

        stored = store.load_all()
        assert [s.data for s in stored] == [b"second"]

    def test_ids_with_unsafe_characters(self, store):
        one = ModuleInfo(id="bbl-A/B-1", name="A/B", type=ModuleType.BIBLE)
        two = ModuleInfo(id="bbl-A:B-1", name="A:B", type=ModuleType.BIBLE)
        store.save(one, b"one")
        store.save(two, b"two")

        assert {s.info.id: s.data for s in store.load_all()} == {
            "bbl-A/B-1": b"one",
            "bbl-A:B-1": b"two",
        }

    def test_delete(self, store):
        info = ModuleInfo(id="jor-NOTES-1", name="NOTES", type=ModuleType.JOURNAL)
        store.save(info, b"data")

        assert store.delete("jor-NOTES-1")
        assert store.load_all() == []
        assert not store.delete("jor-NOTES-1")

    def test_missing_file_skipped(self, store):
        info = ModuleInfo(id="dct-X-1", name="X", type=ModuleType.DICTIONARY)
        store.save(info, b"data")
        for path in store.root.glob("*.mybible"):
            path.unlink()

        assert store.load_all() == []


class TestModuleLibrary:
    """Registering, listing and removing modules."""

    def test_import_assigns_metadata(self, bible_bytes):
        library = ModuleLibrary()
        module = library.import_bytes(bible_bytes, "kjv.bbl.mybible")

        assert module.name == "KJV.BBL"
        assert module.type == ModuleType.BIBLE
        assert module.id.startswith("bbl-KJV.BBL-")
        assert library.get(module.id) is module

    def test_ids_unique_per_import(self, bible_bytes):
        library = ModuleLibrary()
        first = library.import_bytes(bible_bytes, "kjv.bbl.mybible")
        second = library.import_bytes(bible_bytes, "kjv.bbl.mybible")

        assert first.id != second.id
        assert len(library) == 2

    def test_failed_import_registers_nothing(self, tmp_path):
        store = DirectoryModuleStore(tmp_path / "store")
        library = ModuleLibrary(store=store)

        with pytest.raises(LoadError):
            library.import_bytes(b"garbage bytes, not sqlite " * 50, "bad.bbl.mybible")

        assert len(library) == 0
        assert store.load_all() == []

    def test_modules_by_type(self, bible_bytes, commentary_bytes):
        library = ModuleLibrary()
        bible = library.import_bytes(bible_bytes, "kjv.bbl.mybible")
        commentary = library.import_bytes(commentary_bytes, "notes.cmt.mybible")

        assert library.modules() == [bible, commentary]
        assert library.modules(ModuleType.COMMENTARY) == [commentary]
        assert library.modules(ModuleType.DICTIONARY) == []

    def test_find_by_name_or_id(self, bible_bytes):
        library = ModuleLibrary()
        bible = library.import_bytes(bible_bytes, "kjv.bbl.mybible")

        assert library.find("kjv.bbl") is bible
        assert library.find(bible.id) is bible
        assert library.find("kjv.bbl", ModuleType.COMMENTARY) is None
        assert library.find("nope") is None

    def test_unknown_id(self):
        with pytest.raises(UnknownModuleError):
            ModuleLibrary().get("bbl-NONE-0")

    def test_remove_closes_and_unstores(self, tmp_path, bible_bytes):
        store = DirectoryModuleStore(tmp_path / "store")
        library = ModuleLibrary(store=store)
        module = library.import_bytes(bible_bytes, "kjv.bbl.mybible")

        library.remove(module.id)

        assert module.id not in library
        assert module.handle.closed
        assert store.load_all() == []

    def test_restore_round_trip(self, tmp_path, bible_bytes):
        store = DirectoryModuleStore(tmp_path / "store")
        first = ModuleLibrary(store=store)
        original = first.import_bytes(bible_bytes, "kjv.bbl.mybible")
        expected = get_verses(original.handle, 1, 1)
        first.close()

        second = ModuleLibrary(store=store)
        restored = second.restore()

        assert [m.info for m in restored] == [original.info]
        assert get_verses(second.get(original.id).handle, 1, 1) == expected

    def test_restore_skips_unreadable(self, tmp_path, bible_bytes):
        store = DirectoryModuleStore(tmp_path / "store")
        store.save(ModuleInfo(id="bbl-BAD-1", name="BAD", type=ModuleType.BIBLE), b"not a database " * 50)
        store.save(ModuleInfo(id="bbl-KJV-1", name="KJV", type=ModuleType.BIBLE), bible_bytes)

        library = ModuleLibrary(store=store)
        restored = library.restore()

        assert [m.id for m in restored] == ["bbl-KJV-1"]

    def test_restore_without_store(self):
        assert ModuleLibrary().restore() == []


class TestReadingSession:
    """Reading position, history and chapter views."""

    @pytest.fixture
    def library(self, bible_bytes, commentary_bytes):
        library = ModuleLibrary()
        library.import_bytes(bible_bytes, "kjv.bbl.mybible")
        library.import_bytes(commentary_bytes, "notes.cmt.mybible")
        yield library
        library.close()

    def test_first_modules_selected(self, library):
        session = ReadingSession(library)
        assert session.bible_id == library.modules(ModuleType.BIBLE)[0].id
        assert session.commentary_id == library.modules(ModuleType.COMMENTARY)[0].id

    def test_cross_reference_selected_without_commentary(self, bible_bytes, commentary_bytes):
        library = ModuleLibrary()
        library.import_bytes(bible_bytes, "kjv.bbl.mybible")
        xref = library.import_bytes(commentary_bytes, "tsk.xref.mybible")
        try:
            session = ReadingSession(library)
            assert session.commentary_id == xref.id
            assert session.view().annotation == "God is the Creator."
        finally:
            library.close()

    def test_commentary_preferred_over_cross_reference(self, bible_bytes, commentary_bytes):
        library = ModuleLibrary()
        library.import_bytes(commentary_bytes, "tsk.xref.mybible")
        notes = library.import_bytes(commentary_bytes, "notes.cmt.mybible")
        try:
            assert ReadingSession(library).commentary_id == notes.id
        finally:
            library.close()

    def test_view(self, library):
        session = ReadingSession(library)
        view = session.view()

        assert view.book_id == 1
        assert view.book_name == "Genesis"
        assert [v.number for v in view.verses] == [1, 2, 3]
        assert view.chapters == [1, 2]
        assert view.verse_numbers == [1, 2, 3]
        assert view.annotation == "God is the Creator."

    def test_annotation_placeholder(self, library):
        session = ReadingSession(library)
        session.go_to(verse=2)
        assert session.view().annotation == get_settings().no_annotation_message

    def test_no_commentary_selected(self, library):
        session = ReadingSession(library)
        session.select_commentary(None)
        assert session.view().annotation is None

    def test_portuguese_book_name(self, library):
        session = ReadingSession(library, position=Position("João", 3, 16))
        view = session.view()
        assert view.book_id == 43
        assert view.verses[0].text == "For God so loved the world"

    def test_unknown_book_falls_back_to_genesis(self, library):
        session = ReadingSession(library, position=Position("Not A Book"))
        assert session.book_id == 1

    def test_select_wrong_type(self, library):
        session = ReadingSession(library)
        commentary_id = library.modules(ModuleType.COMMENTARY)[0].id
        with pytest.raises(MySwordError):
            session.select_bible(commentary_id)

    def test_go_to_resets_chapter_and_verse(self, library):
        session = ReadingSession(library)
        session.go_to(chapter=2, verse=3)
        position = session.go_to(book_name="Exodus")
        assert position == Position("Exodus", 1, 1)

    def test_history(self, library):
        session = ReadingSession(library)
        assert not session.can_go_back

        session.go_to(chapter=2)
        session.go_to(verse=3)  # same chapter, not recorded
        session.go_to(book_name="John", chapter=3)

        assert session.back()
        assert session.position == Position("Genesis", 2, 3)
        assert session.back()
        assert session.position == Position("Genesis", 1, 1)
        assert not session.back()

        assert session.forward()
        assert session.position.chapter == 2

    def test_new_move_drops_forward_history(self, library):
        session = ReadingSession(library)
        session.go_to(chapter=2)
        session.back()
        session.go_to(book_name="Exodus")

        assert not session.can_go_forward
        assert session.back()
        assert session.position == Position("Genesis", 1, 1)

    def test_removed_module_is_ignored(self, library):
        session = ReadingSession(library)
        library.remove(session.bible_id)
        assert session.view().verses == []
