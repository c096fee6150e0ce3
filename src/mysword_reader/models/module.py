"""Module type and metadata models."""

from enum import Enum

from pydantic import BaseModel


class ModuleType(str, Enum):
    """Kinds of MySword module, keyed by their filename token."""

    BIBLE = "bbl"
    COMMENTARY = "cmt"
    DICTIONARY = "dct"
    BOOK = "bok"
    JOURNAL = "jor"
    CROSS_REFERENCE = "xref"

    @property
    def label(self) -> str:
        return self.name.replace("_", " ").title()


class ModuleInfo(BaseModel):
    """Listing metadata for a module, without its database handle."""

    id: str
    name: str
    type: ModuleType
