# SPDX-License-Identifier: BSL-1.1
# Copyright (c) 2026 MuVeraAI Corporation

"""
Single-document JSON file storage backend.

All keys live in one JSON object on disk. Every save rewrites the whole
document through a temporary file in the same directory followed by
``os.replace``, so readers never observe a half-written file.

An unreadable or corrupt document is treated as empty on load; the next
save replaces it.
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any, TypeVar

from envelope_budget.errors import PersistenceError
from envelope_budget.storage.interface import KeyValueStorage

T = TypeVar("T")

logger = logging.getLogger("envelope_budget")


class JsonFileStorage(KeyValueStorage):
    """
    Persistent key-value storage in a single JSON file.

    Parameters
    ----------
    file_path:
        Path to the JSON document. Parent directories are created on the
        first save.
    """

    def __init__(self, file_path: str | Path) -> None:
        self._file_path = Path(file_path).expanduser()

    @property
    def file_path(self) -> Path:
        return self._file_path

    def load(self, key: str, default: T) -> Any | T:
        document = self._read_document()
        if key not in document:
            return default
        return document[key]

    def save(self, key: str, value: Any) -> None:
        document = self._read_document()
        document[key] = value
        try:
            payload = json.dumps(document, indent=2, sort_keys=True)
        except (TypeError, ValueError) as error:
            raise PersistenceError(key, f"value is not JSON-serialisable ({error})") from error

        try:
            self._file_path.parent.mkdir(parents=True, exist_ok=True)
            handle, temp_name = tempfile.mkstemp(
                dir=self._file_path.parent,
                prefix=f".{self._file_path.name}.",
                suffix=".tmp",
            )
            try:
                with os.fdopen(handle, "w", encoding="utf-8") as temp_file:
                    temp_file.write(payload + "\n")
                os.replace(temp_name, self._file_path)
            except OSError:
                Path(temp_name).unlink(missing_ok=True)
                raise
        except OSError as error:
            raise PersistenceError(key, f"cannot write {self._file_path}: {error}") from error

    def _read_document(self) -> dict[str, Any]:
        if not self._file_path.exists():
            return {}
        try:
            with self._file_path.open("r", encoding="utf-8") as file_handle:
                data = json.load(file_handle)
        except (json.JSONDecodeError, UnicodeDecodeError, OSError) as error:
            logger.warning(
                "storage_unreadable",
                extra={"path": str(self._file_path), "error": str(error)},
            )
            return {}
        if not isinstance(data, dict):
            logger.warning(
                "storage_unreadable",
                extra={"path": str(self._file_path), "error": "top-level value is not an object"},
            )
            return {}
        return data
