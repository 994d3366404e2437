# SPDX-License-Identifier: BSL-1.1
# Copyright (c) 2026 MuVeraAI Corporation

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, TypeVar

T = TypeVar("T")


class KeyValueStorage(ABC):
    """
    Minimal persistence contract for envelope-budget session state.

    Values are JSON-compatible Python objects (dicts, lists, strings,
    numbers, booleans, None). Implementors may back this with a file, a
    browser-style local store, or any key-value database. The core
    transition functions never touch storage; only BudgetSession does.
    """

    @abstractmethod
    def load(self, key: str, default: T) -> Any | T:
        """
        Return the value stored under ``key``, or ``default`` when the key is
        absent or the backing data cannot be read or parsed.
        """
        ...

    @abstractmethod
    def save(self, key: str, value: Any) -> None:
        """
        Store ``value`` under ``key``.
        Raises PersistenceError if the value cannot be written.
        """
        ...
