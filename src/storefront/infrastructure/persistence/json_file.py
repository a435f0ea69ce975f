"""A JSON array on disk, guarded by a process-wide lock per file.

Every repository instance opened on the same path shares one lock, so
a read-modify-write done inside ``locked()`` is serialized against all
other writers in this process.  Writes go to a temporary sibling and
are moved into place, so readers never see a half-written file.
"""

from __future__ import annotations

import json
import os
import threading
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator

_registry_lock = threading.Lock()
_file_locks: dict[Path, threading.RLock] = {}


def _lock_for(path: Path) -> threading.RLock:
    with _registry_lock:
        return _file_locks.setdefault(path, threading.RLock())


class JsonFile:

    def __init__(self, file_path: Path) -> None:
        self.path = Path(file_path).resolve()
        self._lock = _lock_for(self.path)
        self._ensure_file()

    @contextmanager
    def locked(self) -> Iterator[None]:
        with self._lock:
            yield

    def load(self) -> list[dict]:
        with self._lock:
            return json.loads(self.path.read_text(encoding="utf-8"))

    def persist(self, records: list[dict]) -> None:
        tmp = self.path.with_name(f".{self.path.name}.{threading.get_ident()}.tmp")
        with self._lock:
            tmp.write_text(json.dumps(records, indent=2) + "\n", encoding="utf-8")
            os.replace(tmp, self.path)

    def _ensure_file(self) -> None:
        with self._lock:
            if not self.path.exists():
                self.path.parent.mkdir(parents=True, exist_ok=True)
                self.path.write_text("[]\n", encoding="utf-8")
