"""Shared file helpers for the JSON-backed repositories.

Each repository keeps a list of records in one JSON file. Every
read-modify-write happens under ``lock`` so concurrent callers in the same
process cannot interleave between the read and the write.
"""

from __future__ import annotations

import json
import os
import threading
from pathlib import Path

# One lock for all stores: a delivery write and its stock adjustment touch
# different files, and the ledger service expects neither to interleave.
_LOCK = threading.RLock()


class JsonFile:

    def __init__(self, file_path: Path) -> None:
        self.path = file_path
        self.lock = _LOCK
        self._ensure_file()

    def load(self) -> list[dict]:
        return json.loads(self.path.read_text(encoding="utf-8"))

    def persist(self, records: list[dict]) -> None:
        tmp = self.path.with_suffix(self.path.suffix + ".tmp")
        tmp.write_text(json.dumps(records, indent=2) + "\n", encoding="utf-8")
        os.replace(tmp, self.path)

    def _ensure_file(self) -> None:
        with self.lock:
            if not self.path.exists():
                self.path.parent.mkdir(parents=True, exist_ok=True)
                self.path.write_text("[]", encoding="utf-8")
