"""Verse and chapter view models."""

from pydantic import BaseModel, Field


class Verse(BaseModel):
    """One verse of scripture with markup already removed."""

    number: int
    text: str
    title: str | None = None  # section heading carried by the source row

    def __str__(self) -> str:
        return f"{self.number} {self.text}"


class ChapterView(BaseModel):
    """Everything needed to render the current reading position."""

    book_id: int
    book_name: str
    chapter: int
    verse: int
    verses: list[Verse] = Field(default_factory=list)
    chapters: list[int] = Field(default_factory=list)
    verse_numbers: list[int] = Field(default_factory=list)
    annotation: str | None = None
