"""
Module Store

Keeps the raw bytes of imported modules so they can be re-opened exactly
on the next run. Metadata lives in a JSON index beside the module files.
"""

import json
import logging
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Protocol

from mysword_reader.config import get_settings
from mysword_reader.models.module import ModuleInfo

logger = logging.getLogger(__name__)


@dataclass
class StoredModule:
    """A persisted module: its metadata and untouched file bytes."""
    info: ModuleInfo
    data: bytes


class ModuleStore(Protocol):
    """Byte-level persistence for imported modules."""

    def save(self, info: ModuleInfo, data: bytes) -> None: ...

    def load_all(self) -> list[StoredModule]: ...

    def delete(self, module_id: str) -> bool: ...


class DirectoryModuleStore:
    """
    Stores modules as files in a directory.

    Usage:
        store = DirectoryModuleStore(Path("data/modules"))
        store.save(info, raw_bytes)
        for stored in store.load_all():
            ...
    """

    INDEX_NAME = "index.json"

    def __init__(self, root: Optional[Path] = None):
        """
        Initialize the store.

        Args:
            root: Directory for module files (default from config)
        """
        self.root = Path(root) if root is not None else get_settings().modules_dir
        self.root.mkdir(parents=True, exist_ok=True)
        self.index_file = self.root / self.INDEX_NAME

    def _load_index(self) -> list[dict]:
        """Load the metadata index, or an empty one."""
        if not self.index_file.exists():
            return []
        with open(self.index_file, 'r', encoding='utf-8') as f:
            return json.load(f)

    def _save_index(self, entries: list[dict]) -> None:
        with open(self.index_file, 'w', encoding='utf-8') as f:
            json.dump(entries, f, indent=2, ensure_ascii=False)

    def _file_name(self, module_id: str, entries: list[dict]) -> str:
        """Pick a file name for a module id that no other entry uses."""
        slug = re.sub(r"[^A-Za-z0-9_.-]+", "_", module_id).strip("._") or "module"
        taken = {e["file"] for e in entries if e["id"] != module_id}

        candidate = f"{slug}.mybible"
        counter = 2
        while candidate in taken:
            candidate = f"{slug}_{counter}.mybible"
            counter += 1
        return candidate

    def save(self, info: ModuleInfo, data: bytes) -> None:
        """Persist a module, replacing any earlier copy with the same id."""
        entries = self._load_index()
        file_name = self._file_name(info.id, entries)

        (self.root / file_name).write_bytes(data)

        entries = [e for e in entries if e["id"] != info.id]
        entries.append({**info.model_dump(mode="json"), "file": file_name})
        self._save_index(entries)

        logger.info("Stored module %s (%d bytes)", info.id, len(data))

    def load_all(self) -> list[StoredModule]:
        """Read every stored module in import order. Missing files are skipped."""
        stored: list[StoredModule] = []

        for entry in self._load_index():
            path = self.root / entry["file"]
            if not path.exists():
                logger.warning("Module file %s for %s is missing", path, entry["id"])
                continue

            info = ModuleInfo(id=entry["id"], name=entry["name"], type=entry["type"])
            stored.append(StoredModule(info=info, data=path.read_bytes()))

        return stored

    def delete(self, module_id: str) -> bool:
        """Remove a stored module. Returns False if it was not stored."""
        entries = self._load_index()
        remaining = [e for e in entries if e["id"] != module_id]
        if len(remaining) == len(entries):
            return False

        for entry in entries:
            if entry["id"] == module_id:
                (self.root / entry["file"]).unlink(missing_ok=True)

        self._save_index(remaining)
        logger.info("Deleted stored module %s", module_id)
        return True
