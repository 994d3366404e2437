# SPDX-License-Identifier: BSL-1.1
# Copyright (c) 2026 MuVeraAI Corporation
from __future__ import annotations

from typing import Annotated

from pydantic import BaseModel, Field

from envelope_budget.types import ViewMode

DEFAULT_PALETTE: tuple[str, ...] = (
    "#3b82f6", "#10b981", "#ef4444", "#f97316", "#8b5cf6", "#ec4899",
    "#6366f1", "#f59e0b", "#06b6d4", "#d946ef", "#22c55e", "#e11d48",
)

UNALLOCATED_COLOR = "#9ca3af"

UNALLOCATED_LABEL = "Unallocated"


class StorageKeys(BaseModel, frozen=True):
    """
    Keys under which session state is persisted.

    Attributes:
        envelopes: JSON array of envelope records.
        view_mode: ``"card"`` or ``"list"``.
        monthly_goal: Monthly budget goal (number) or null.
    """

    envelopes: str = "envelopes"
    view_mode: str = "viewMode"
    monthly_goal: str = "monthlyBudget"


class EnvelopeBudgetConfig(BaseModel, frozen=True):
    """
    Top-level configuration for a BudgetSession.

    All fields are optional; the defaults match the stored data layout.

    Example::

        config = EnvelopeBudgetConfig(
            keys=StorageKeys(envelopes="household-envelopes"),
            default_view_mode="list",
        )
        session = BudgetSession(storage=JsonFileStorage("budget.json"), config=config)
    """

    keys: StorageKeys = Field(default_factory=StorageKeys)
    default_view_mode: ViewMode = "card"
    palette: Annotated[tuple[str, ...], Field(min_length=1)] = DEFAULT_PALETTE
    unallocated_color: str = UNALLOCATED_COLOR
