"""Module file ingestion."""

from mysword_reader.ingest.engine import (
    ModuleDatabase,
    init_engine,
    is_engine_initialized,
)
from mysword_reader.ingest.loader import LoadedModule, classify, display_name, load, load_file

__all__ = [
    "ModuleDatabase",
    "init_engine",
    "is_engine_initialized",
    "LoadedModule",
    "classify",
    "display_name",
    "load",
    "load_file",
]
