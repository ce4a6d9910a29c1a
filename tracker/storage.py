"""
Durable key-value slots backing the Store.

A slot maps string keys to string values, the way browser local storage
does. The Store keeps two keys in it: the serialized transaction list and
the budget.

JsonFileSlot keeps every key in one JSON object on disk and replaces the
file on each write, so a crash mid-write leaves the previous contents in
place. MemorySlot keeps the keys in a dict and is used by tests and
throwaway sessions.
"""

import json
import logging
import os
from pathlib import Path
from typing import Optional, Protocol

logger = logging.getLogger(__name__)


class Slot(Protocol):
    def get(self, key: str) -> Optional[str]:
        ...

    def set(self, key: str, value: str) -> None:
        ...


class MemorySlot:
    def __init__(self, initial: Optional[dict[str, str]] = None) -> None:
        self._data: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value


class JsonFileSlot:
    """
    Slot stored as a single JSON object file.

    Parameters
    ----------
    path : Path
        Location of the JSON file. Missing parent directories are created
        on the first write.
    """

    def __init__(self, path: Path) -> None:
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def _read_all(self) -> dict[str, str]:
        """
        Read every key from disk.

        A missing file yields an empty mapping. An unreadable or corrupt
        file is logged and also yields an empty mapping.
        """
        if not self._path.exists():
            return {}
        try:
            data = json.loads(self._path.read_text(encoding="utf-8"))
        except (OSError, ValueError, RecursionError) as e:
            logger.warning("Ignoring unreadable slot file %s: %s", self._path, e)
            return {}
        if not isinstance(data, dict):
            logger.warning("Ignoring slot file %s: top level is not an object", self._path)
            return {}
        return {k: v for k, v in data.items() if isinstance(v, str)}

    def get(self, key: str) -> Optional[str]:
        return self._read_all().get(key)

    def set(self, key: str, value: str) -> None:
        data = self._read_all()
        data[key] = value
        self._path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self._path.with_name(self._path.name + ".tmp")
        tmp_path.write_text(json.dumps(data, indent=2), encoding="utf-8")
        os.replace(tmp_path, self._path)
