"""Shared file handling for the JSON-backed repositories.

Each repository keeps one JSON array in one file, reading the whole file
per call and rewriting it on save.  Fine for a single CLI process; there
is no locking.
"""

from __future__ import annotations

import json
from pathlib import Path


class JsonFileStore:

    def __init__(self, file_path: Path) -> None:
        self._file_path = file_path
        self._ensure_file()

    @property
    def file_path(self) -> Path:
        return self._file_path

    def _load_raw(self) -> list[dict]:
        return json.loads(self._file_path.read_text(encoding="utf-8"))

    def _persist_raw(self, records: list[dict]) -> None:
        self._file_path.write_text(
            json.dumps(records, indent=2) + "\n", encoding="utf-8"
        )

    def _ensure_file(self) -> None:
        if not self._file_path.exists():
            self._file_path.parent.mkdir(parents=True, exist_ok=True)
            self._file_path.write_text("[]", encoding="utf-8")

    def _next_numeric_id(self) -> int:
        records = self._load_raw()
        if not records:
            return 1
        return max(r["id"] for r in records) + 1

    def _upsert(self, record: dict, key: str = "id") -> None:
        records = self._load_raw()
        for i, raw in enumerate(records):
            if raw[key] == record[key]:
                records[i] = record
                break
        else:
            records.append(record)
        self._persist_raw(records)
