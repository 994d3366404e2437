# SPDX-License-Identifier: BSL-1.1
# Copyright (c) 2026 MuVeraAI Corporation

from envelope_budget.storage.file import JsonFileStorage
from envelope_budget.storage.interface import KeyValueStorage
from envelope_budget.storage.memory import MemoryStorage

__all__ = ["KeyValueStorage", "MemoryStorage", "JsonFileStorage"]
