"""Canonical book table: 66 books in Protestant canon order, ids 1-66.

Names are matched exactly, then ignoring case and accents, then fuzzily.
"""

import unicodedata

from rapidfuzz import fuzz, process

from mysword_reader.config import get_settings

# (English name, Portuguese name), index + 1 is the MySword book id
CANON: list[tuple[str, str]] = [
    ("Genesis", "Gênesis"), ("Exodus", "Êxodo"), ("Leviticus", "Levítico"),
    ("Numbers", "Números"), ("Deuteronomy", "Deuteronômio"), ("Joshua", "Josué"),
    ("Judges", "Juízes"), ("Ruth", "Rute"), ("1 Samuel", "1 Samuel"),
    ("2 Samuel", "2 Samuel"), ("1 Kings", "1 Reis"), ("2 Kings", "2 Reis"),
    ("1 Chronicles", "1 Crônicas"), ("2 Chronicles", "2 Crônicas"), ("Ezra", "Esdras"),
    ("Nehemiah", "Neemias"), ("Esther", "Ester"), ("Job", "Jó"),
    ("Psalms", "Salmos"), ("Proverbs", "Provérbios"), ("Ecclesiastes", "Eclesiastes"),
    ("Song of Solomon", "Cantares"), ("Isaiah", "Isaías"), ("Jeremiah", "Jeremias"),
    ("Lamentations", "Lamentações"), ("Ezekiel", "Ezequiel"), ("Daniel", "Daniel"),
    ("Hosea", "Oseias"), ("Joel", "Joel"), ("Amos", "Amós"),
    ("Obadiah", "Obadias"), ("Jonah", "Jonas"), ("Micah", "Miqueias"),
    ("Nahum", "Naum"), ("Habakkuk", "Habacuque"), ("Zephaniah", "Sofonias"),
    ("Haggai", "Ageu"), ("Zechariah", "Zacarias"), ("Malachi", "Malaquias"),
    ("Matthew", "Mateus"), ("Mark", "Marcos"), ("Luke", "Lucas"),
    ("John", "João"), ("Acts", "Atos"), ("Romans", "Romanos"),
    ("1 Corinthians", "1 Coríntios"), ("2 Corinthians", "2 Coríntios"), ("Galatians", "Gálatas"),
    ("Ephesians", "Efésios"), ("Philippians", "Filipenses"), ("Colossians", "Colossenses"),
    ("1 Thessalonians", "1 Tessalonicenses"), ("2 Thessalonians", "2 Tessalonicenses"),
    ("1 Timothy", "1 Timóteo"), ("2 Timothy", "2 Timóteo"), ("Titus", "Tito"),
    ("Philemon", "Filemom"), ("Hebrews", "Hebreus"), ("James", "Tiago"),
    ("1 Peter", "1 Pedro"), ("2 Peter", "2 Pedro"), ("1 John", "1 João"),
    ("2 John", "2 João"), ("3 John", "3 João"), ("Jude", "Judas"),
    ("Revelation", "Apocalipse"),
]

BOOK_IDS: dict[str, int] = {}
for _book_id, _names in enumerate(CANON, start=1):
    for _name in _names:
        BOOK_IDS.setdefault(_name, _book_id)


def _fold(text: str) -> str:
    """Lower-case, strip accents and squeeze whitespace."""
    decomposed = unicodedata.normalize("NFKD", text)
    stripped = "".join(c for c in decomposed if not unicodedata.combining(c))
    return " ".join(stripped.lower().split())


_FOLDED_IDS: dict[str, int] = {}
for _name, _book_id in BOOK_IDS.items():
    _FOLDED_IDS.setdefault(_fold(_name), _book_id)


def resolve_book_id(name: str) -> int | None:
    """
    Look up the canonical id (1-66) for a book name.

    Returns None if no name is close enough.
    """
    if name in BOOK_IDS:
        return BOOK_IDS[name]

    folded = _fold(name)
    if not folded:
        return None
    if folded in _FOLDED_IDS:
        return _FOLDED_IDS[folded]

    result = process.extractOne(folded, _FOLDED_IDS.keys(), scorer=fuzz.ratio)
    if result and result[1] >= get_settings().book_match_threshold:
        return _FOLDED_IDS[result[0]]

    return None


def book_name(book_id: int, portuguese: bool = False) -> str:
    """Display name for a book id."""
    if not 1 <= book_id <= len(CANON):
        raise ValueError(f"Book id must be between 1 and {len(CANON)}, got {book_id}")
    english, pt = CANON[book_id - 1]
    return pt if portuguese else english
