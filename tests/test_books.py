"""Tests for the canonical book table."""

import pytest

from mysword_reader.books import CANON, book_name, resolve_book_id


class TestResolveBookId:
    """Book name lookup."""

    def test_table_size(self):
        assert len(CANON) == 66

    @pytest.mark.parametrize(
        "name, expected",
        [("Genesis", 1), ("Gênesis", 1), ("Malachi", 39), ("Matthew", 40), ("Apocalipse", 66), ("3 João", 64)],
    )
    def test_exact(self, name, expected):
        assert resolve_book_id(name) == expected

    def test_case_and_accents_ignored(self):
        assert resolve_book_id("genesis") == 1
        assert resolve_book_id("GENESIS") == 1
        assert resolve_book_id("exodo") == 2
        assert resolve_book_id("  song of   solomon ") == 22

    def test_fuzzy_match(self):
        assert resolve_book_id("Deuteronomi") == 5
        assert resolve_book_id("Revelations") == 66

    def test_unknown(self):
        assert resolve_book_id("Hezekiah's Diary of Things") is None
        assert resolve_book_id("") is None


class TestBookName:
    """Display names."""

    def test_names(self):
        assert book_name(1) == "Genesis"
        assert book_name(43) == "John"
        assert book_name(43, portuguese=True) == "João"

    @pytest.mark.parametrize("book_id", [0, 67])
    def test_out_of_range(self, book_id):
        with pytest.raises(ValueError):
            book_name(book_id)
