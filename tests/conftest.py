"""Shared fixtures: small MySword-style module databases built on the fly."""

import sqlite3
from pathlib import Path

import pytest


def build_module(path: Path, script: str, rows: dict[str, list[tuple]] | None = None) -> bytes:
    """Create a SQLite file from a schema script and table rows, return its bytes."""
    conn = sqlite3.connect(path)
    conn.executescript(script)
    for table, values in (rows or {}).items():
        placeholders = ", ".join("?" * len(values[0]))
        conn.executemany(f"INSERT INTO {table} VALUES ({placeholders})", values)
    conn.commit()
    conn.close()
    return path.read_bytes()


BIBLE_SCHEMA = """
CREATE TABLE Details (Title TEXT, Abbreviation TEXT, Version TEXT);
CREATE TABLE Bible (Book INT, Chapter INT, Verse INT, Scripture TEXT);
"""

BIBLE_ROWS = [
    (1, 1, 1, "<TS>The Creation<Ts>In the beginning God created the heaven and the earth."),
    (1, 1, 2, "And the earth was without form<RF>Or, waste<Rf>, and void."),
    (1, 1, 3, "And God said, Let there be light: and there was light."),
    (1, 2, 1, "Thus the heavens and the earth were finished."),
    (1, 2, 3, "And God blessed the seventh day."),
    (43, 3, 16, "<title>God's Love</title>For God so loved&nbsp;the <i>world</i>"),
]


@pytest.fixture
def bible_bytes(tmp_path) -> bytes:
    return build_module(
        tmp_path / "kjv.bbl.mybible",
        BIBLE_SCHEMA,
        {"Details": [("King James Version", "KJV", "1")], "Bible": BIBLE_ROWS},
    )


@pytest.fixture
def commentary_bytes(tmp_path) -> bytes:
    """Range-based commentary using the lower-case column convention."""
    return build_module(
        tmp_path / "notes.cmt.mybible",
        """
        CREATE TABLE commentary (
            id INTEGER PRIMARY KEY, book INT, chapter INT,
            versebegin INT, verseend INT, content TEXT
        );
        """,
        {
            "commentary": [
                (1, 1, 1, 1, 1, "<p>God is the <i>Creator</i>.</p>"),
                (2, 1, 1, 3, 5, "Light, then [[separation]] of day and night."),
            ],
        },
    )
