"""
JSON File Storage Implementation

DESIGN DECISION: A single human-readable JSON file is the whole database:
1. Users can open and read their data in any editor
2. No database setup required
3. Trivial to back up or move

TRADEOFFS:
- The whole file is read and rewritten on every operation
  (we're fine for personal use)
- No locking: two processes saving at once means last writer wins

Saves go to a temporary file in the same directory which is then
renamed over the real one, so a crash mid-write never leaves a
truncated expenses file behind.
"""

import json
import os
import shutil
import tempfile
from pathlib import Path
from typing import Optional, Sequence

from pydantic import TypeAdapter, ValidationError

from expense_tracker.config import get_settings
from expense_tracker.models.expense import ExpenseRecord
from expense_tracker.services.storage.interface import (
    ExpenseStoreInterface,
    MalformedStoreError,
    StorageError,
    StoreWriteError,
)


_RECORDS_ADAPTER = TypeAdapter(list[ExpenseRecord])


class JsonFileExpenseStore(ExpenseStoreInterface):
    """
    Expense store backed by one JSON array on disk.

    A missing file is an empty store. A file that exists but does not
    hold a valid array of expenses is an error, never an empty store.
    """

    def __init__(self, path: Optional[Path] = None):
        self._path = Path(path) if path is not None else get_settings().storage.data_file

    @property
    def path(self) -> Path:
        return self._path

    def load(self) -> list[ExpenseRecord]:
        """Load all expenses from the backing file."""
        try:
            raw = self._path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return []
        except OSError as e:
            raise StorageError(f"Failed to read {self._path}: {e}") from e
        except UnicodeDecodeError as e:
            raise MalformedStoreError(
                f"{self._path} is not valid UTF-8 text (byte {e.start})"
            ) from e

        try:
            data = json.loads(raw)
        except json.JSONDecodeError as e:
            raise MalformedStoreError(
                f"{self._path} is not valid JSON (line {e.lineno}, column {e.colno})"
            ) from e

        if not isinstance(data, list):
            raise MalformedStoreError(
                f"{self._path} must hold a JSON array, found {type(data).__name__}"
            )

        try:
            return _RECORDS_ADAPTER.validate_python(data)
        except ValidationError as e:
            raise MalformedStoreError(
                f"{self._path} holds {e.error_count()} invalid expense field(s): {e}"
            ) from e

    def save(self, records: Sequence[ExpenseRecord]) -> None:
        """Atomically replace the backing file with ``records``."""
        payload = _RECORDS_ADAPTER.dump_json(list(records), indent=2)

        directory = self._path.parent
        tmp_name = None
        try:
            directory.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                prefix=f".{self._path.name}.",
                suffix=".tmp",
                dir=directory,
            )
            with os.fdopen(fd, "wb") as fh:
                fh.write(payload)
                fh.flush()
                os.fsync(fh.fileno())
            if self._path.exists():
                # mkstemp creates 0600; keep the permissions the user gave the file
                shutil.copymode(self._path, tmp_name)
            os.replace(tmp_name, self._path)
        except OSError as e:
            if tmp_name is not None and os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise StoreWriteError(f"Failed to save expenses to {self._path}: {e}") from e
