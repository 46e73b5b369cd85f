"""A JSON array stored in a single file, shared by the JSON repositories."""

from __future__ import annotations

import json
from pathlib import Path

from stockroom.domain.exceptions import PersistenceError


class JsonFile:

    def __init__(self, file_path: Path) -> None:
        self.path = file_path
        self._ensure_file()

    def load(self) -> list[dict]:
        try:
            records = json.loads(self.path.read_text(encoding="utf-8"))
        except OSError as exc:
            raise PersistenceError(f"Cannot read {self.path}: {exc}") from exc
        except json.JSONDecodeError as exc:
            raise PersistenceError(f"Corrupt data file {self.path}: {exc}") from exc
        if not isinstance(records, list):
            raise PersistenceError(f"Corrupt data file {self.path}: expected a list")
        return records

    def persist(self, records: list[dict]) -> None:
        try:
            self.path.write_text(json.dumps(records, indent=2) + "\n", encoding="utf-8")
        except OSError as exc:
            raise PersistenceError(f"Cannot write {self.path}: {exc}") from exc

    def next_id(self, records: list[dict]) -> int:
        if not records:
            return 1
        return max(r["id"] for r in records) + 1

    def _ensure_file(self) -> None:
        if not self.path.exists():
            try:
                self.path.parent.mkdir(parents=True, exist_ok=True)
                self.path.write_text("[]", encoding="utf-8")
            except OSError as exc:
                raise PersistenceError(f"Cannot create {self.path}: {exc}") from exc
