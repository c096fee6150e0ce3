"""
Module Library

Registers opened modules under session ids, persists their bytes through a
ModuleStore and re-opens them on the next run.
"""

import logging
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator, Optional

from mysword_reader.errors import LoadError, UnknownModuleError
from mysword_reader.ingest.engine import ModuleDatabase
from mysword_reader.ingest.loader import load, open_database
from mysword_reader.library.store import ModuleStore
from mysword_reader.models.module import ModuleInfo, ModuleType

logger = logging.getLogger(__name__)


@dataclass
class Module:
    """An opened module. The handle belongs to this module alone."""
    id: str
    name: str
    type: ModuleType
    handle: ModuleDatabase

    @property
    def info(self) -> ModuleInfo:
        return ModuleInfo(id=self.id, name=self.name, type=self.type)

    def close(self) -> None:
        self.handle.close()


class ModuleLibrary:
    """
    The set of modules available in a session.

    Usage:
        library = ModuleLibrary(store=DirectoryModuleStore())
        library.restore()
        module = library.import_file(Path("kjv.bbl.mybible"))
        for bible in library.modules(ModuleType.BIBLE):
            ...
    """

    def __init__(self, store: Optional[ModuleStore] = None):
        """
        Initialize the library.

        Args:
            store: Where module bytes are persisted (None keeps them in memory only)
        """
        self.store = store
        self._modules: dict[str, Module] = {}

    def __len__(self) -> int:
        return len(self._modules)

    def __contains__(self, module_id: object) -> bool:
        return module_id in self._modules

    def __iter__(self) -> Iterator[Module]:
        return iter(list(self._modules.values()))

    def _new_id(self, module_type: ModuleType, name: str) -> str:
        """Build an id from type, name and import time, unique in this library."""
        base = f"{module_type.value}-{name}-{int(time.time() * 1000)}"
        module_id = base
        counter = 2
        while module_id in self._modules:
            module_id = f"{base}-{counter}"
            counter += 1
        return module_id

    def import_bytes(self, data: bytes, filename: str) -> Module:
        """
        Open, persist and register a module file.

        Raises:
            LoadError: if the bytes are not a module database; nothing is registered
        """
        loaded = load(data, filename)
        module = Module(
            id=self._new_id(loaded.type, loaded.name),
            name=loaded.name,
            type=loaded.type,
            handle=loaded.handle,
        )

        if self.store is not None:
            try:
                self.store.save(module.info, data)
            except OSError:
                module.close()
                raise

        self._modules[module.id] = module
        logger.info("Imported %s as %s", filename, module.id)
        return module

    def import_file(self, path: Path) -> Module:
        """Import a module file from disk."""
        path = Path(path)
        return self.import_bytes(path.read_bytes(), path.name)

    def restore(self) -> list[Module]:
        """
        Re-open every module held by the store.

        Stored modules that no longer open are logged and skipped.
        """
        if self.store is None:
            return []

        restored: list[Module] = []
        for stored in self.store.load_all():
            if stored.info.id in self._modules:
                continue
            try:
                handle = open_database(stored.data)
            except LoadError as e:
                logger.warning("Skipping stored module %s: %s", stored.info.id, e)
                continue

            module = Module(
                id=stored.info.id,
                name=stored.info.name,
                type=stored.info.type,
                handle=handle,
            )
            self._modules[module.id] = module
            restored.append(module)

        logger.info("Restored %d modules", len(restored))
        return restored

    def get(self, module_id: str) -> Module:
        """Get a module by id. Raises UnknownModuleError if absent."""
        try:
            return self._modules[module_id]
        except KeyError:
            raise UnknownModuleError(module_id) from None

    def find(self, key: str, module_type: Optional[ModuleType] = None) -> Module | None:
        """Find a module by id, or else by display name (case-insensitive)."""
        candidates = self.modules(module_type)
        for module in candidates:
            if module.id == key:
                return module
        for module in candidates:
            if module.name.lower() == key.lower():
                return module
        return None

    def modules(self, module_type: Optional[ModuleType] = None) -> list[Module]:
        """List modules in import order, optionally of one type."""
        return [
            m for m in self._modules.values()
            if module_type is None or m.type == module_type
        ]

    def remove(self, module_id: str) -> None:
        """Close a module and drop it from the library and the store."""
        module = self.get(module_id)
        del self._modules[module_id]
        module.close()

        if self.store is not None:
            self.store.delete(module_id)

    def close(self) -> None:
        """Close every module handle. Stored bytes are kept."""
        for module in self._modules.values():
            module.close()
        self._modules.clear()
