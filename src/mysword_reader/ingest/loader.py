"""Classify and open MySword module files."""

import logging
from dataclasses import dataclass
from pathlib import Path

from mysword_reader.ingest.engine import ModuleDatabase
from mysword_reader.models.module import ModuleType

logger = logging.getLogger(__name__)

# Checked in order; the first token found in the filename wins
TYPE_TOKENS = [
    (".bbl.", ModuleType.BIBLE),
    (".cmt.", ModuleType.COMMENTARY),
    (".dct.", ModuleType.DICTIONARY),
    (".bok.", ModuleType.BOOK),
    (".jor.", ModuleType.JOURNAL),
]

# Any of these anywhere in the filename makes it a cross-reference module
CROSS_REFERENCE_TOKENS = ("xref", "tsk")


@dataclass
class LoadedModule:
    """An opened module before it is registered under an id."""

    handle: ModuleDatabase
    type: ModuleType
    name: str


def classify(filename: str) -> ModuleType:
    """
    Infer the module type from filename tokens.

    Examples:
        kjv.bbl.mybible          -> BIBLE
        matthewhenry.cmt.mybible -> COMMENTARY
        something.xref.mybible   -> CROSS_REFERENCE
    """
    lowered = filename.lower()

    module_type = ModuleType.BIBLE
    for token, token_type in TYPE_TOKENS:
        if token in lowered:
            module_type = token_type
            break

    if any(token in lowered for token in CROSS_REFERENCE_TOKENS):
        module_type = ModuleType.CROSS_REFERENCE

    return module_type


def display_name(filename: str) -> str:
    """Filename without its final extension, upper-cased."""
    base = Path(filename).name
    stem, dot, _extension = base.rpartition(".")
    return (stem if dot and stem else base).upper()


def open_database(raw: bytes) -> ModuleDatabase:
    """Open raw module bytes. Raises LoadError for non-database input."""
    return ModuleDatabase.from_bytes(raw)


def load(raw: bytes, filename: str) -> LoadedModule:
    """
    Open a module file and work out what it is.

    Raises:
        LoadError: if the bytes are not a SQLite database
    """
    handle = open_database(raw)
    module_type = classify(filename)
    name = display_name(filename)

    logger.info("Loaded %s as %s module %s", filename, module_type.label, name)
    return LoadedModule(handle=handle, type=module_type, name=name)


def load_file(path: Path) -> LoadedModule:
    """Load a module straight from disk."""
    return load(path.read_bytes(), path.name)
