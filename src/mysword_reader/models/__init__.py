"""Data models for modules, verses and chapter views."""

from mysword_reader.models.module import ModuleInfo, ModuleType
from mysword_reader.models.verse import ChapterView, Verse

__all__ = ["ModuleInfo", "ModuleType", "Verse", "ChapterView"]
