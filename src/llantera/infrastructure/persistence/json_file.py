"""Shared file handling for the JSON-file-backed repositories.

Each repository owns one JSON array on disk.  Every public repository
method takes the store's lock around its read-modify-write, so two
threads of one process never interleave writes to the same file.
"""

from __future__ import annotations

import json
import threading
from datetime import datetime
from pathlib import Path


class JsonFileStore:

    def __init__(self, file_path: Path) -> None:
        self._file_path = file_path
        self._lock = threading.Lock()
        self._ensure_file()

    # --- File helpers (call with the lock held) -------------------------------

    def _load_raw(self) -> list[dict]:
        return json.loads(self._file_path.read_text(encoding="utf-8"))

    def _persist_raw(self, records: list[dict]) -> None:
        self._file_path.write_text(
            json.dumps(records, indent=2, ensure_ascii=False) + "\n", encoding="utf-8"
        )

    def _ensure_file(self) -> None:
        if not self._file_path.exists():
            self._file_path.parent.mkdir(parents=True, exist_ok=True)
            self._file_path.write_text("[]", encoding="utf-8")

    @staticmethod
    def _next_id(records: list[dict]) -> int:
        if not records:
            return 1
        return max(r["id"] for r in records) + 1


def dump_datetime(value: datetime | None) -> str | None:
    return value.isoformat() if value is not None else None


def load_datetime(raw: str | None) -> datetime | None:
    return datetime.fromisoformat(raw) if raw else None
