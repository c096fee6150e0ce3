"""
Module Library

Registering, persisting and reading imported modules across sessions.
"""

from .registry import Module, ModuleLibrary
from .session import Position, ReadingSession
from .store import DirectoryModuleStore, ModuleStore, StoredModule

__all__ = [
    "Module",
    "ModuleLibrary",
    "Position",
    "ReadingSession",
    "DirectoryModuleStore",
    "ModuleStore",
    "StoredModule",
]
