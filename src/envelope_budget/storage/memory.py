# SPDX-License-Identifier: BSL-1.1
# Copyright (c) 2026 MuVeraAI Corporation

from __future__ import annotations

import copy
from typing import Any, TypeVar

from envelope_budget.storage.interface import KeyValueStorage

T = TypeVar("T")


class MemoryStorage(KeyValueStorage):
    """
    In-process key-value store, suitable for tests and embedding.

    All state is lost when the process exits. Values are deep-copied on the
    way in and out so callers cannot mutate stored state by accident.
    """

    def __init__(self, initial: dict[str, Any] | None = None) -> None:
        self._values: dict[str, Any] = copy.deepcopy(initial) if initial else {}

    def load(self, key: str, default: T) -> Any | T:
        if key not in self._values:
            return default
        return copy.deepcopy(self._values[key])

    def save(self, key: str, value: Any) -> None:
        self._values[key] = copy.deepcopy(value)

    def keys(self) -> list[str]:
        return list(self._values)
