# SPDX-License-Identifier: BSL-1.1
# Copyright (c) 2026 MuVeraAI Corporation

from __future__ import annotations

import math
from typing import Any, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

# ─── Literals ─────────────────────────────────────────────────────────────────

TransactionType = Literal["fund", "spend"]

ViewMode = Literal["card", "list"]

BalanceHealth = Literal["healthy", "low", "critical"]

VIEW_MODES: tuple[str, ...] = ("card", "list")

# Persisted records use the camelCase keys of the stored JSON format;
# Python code uses the snake_case field names.
_RECORD_CONFIG = ConfigDict(
    frozen=True,
    alias_generator=to_camel,
    populate_by_name=True,
)

# ─── Envelope ─────────────────────────────────────────────────────────────────


MIN_DAY_OF_MONTH = 1
MAX_DAY_OF_MONTH = 31


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


class RecurringTransaction(BaseModel):
    """A fixed bill debited from its envelope once per period."""

    model_config = _RECORD_CONFIG

    id: str
    name: str
    amount: float
    day_of_month: int = Field(
        ...,
        ge=MIN_DAY_OF_MONTH,
        le=MAX_DAY_OF_MONTH,
        description="Informational only; does not drive processing",
    )

    @field_validator("amount", mode="before")
    @classmethod
    def malformed_amount_is_zero(cls, value: Any) -> float:
        # A bad stored amount must not make the whole envelope unreadable.
        if _is_number(value) and math.isfinite(value):
            return value
        return 0.0


class Envelope(BaseModel):
    """A named budget category with a target budget and an available balance."""

    model_config = _RECORD_CONFIG

    id: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1)
    budget: float = Field(..., ge=0)
    balance: float = Field(..., ge=0)
    is_favorite: bool = False
    recurring_transactions: tuple[RecurringTransaction, ...] = ()
    last_processed: Optional[str] = Field(
        default=None,
        description="YYYY-MM of the last period whose recurring bills were deducted",
    )

    @field_validator("budget", "balance", mode="before")
    @classmethod
    def clamp_to_zero(cls, value: Any) -> Any:
        if _is_number(value) and not value >= 0:
            return 0.0
        return value


class EnvelopeStore(BaseModel):
    """
    Immutable snapshot of every envelope, in insertion order.

    Transition functions never mutate a store; they return a new one.
    """

    model_config = ConfigDict(frozen=True)

    envelopes: tuple[Envelope, ...] = ()

    def to_records(self) -> list[dict[str, Any]]:
        """Serialise to the persisted JSON array format."""
        return [
            envelope.model_dump(mode="json", by_alias=True, exclude_none=True)
            for envelope in self.envelopes
        ]

    def find(self, envelope_id: str) -> Envelope | None:
        for envelope in self.envelopes:
            if envelope.id == envelope_id:
                return envelope
        return None

    def names(self) -> list[str]:
        return [envelope.name for envelope in self.envelopes]


# ─── Derived views ────────────────────────────────────────────────────────────


class BudgetTotals(BaseModel, frozen=True):
    """Aggregate totals across all envelopes."""

    total_budget: float
    total_balance: float
    total_spent: float


class AllocationSlice(BaseModel, frozen=True):
    """One slice of the budget allocation breakdown."""

    name: str
    value: float
    color: str


class EnvelopeTemplate(BaseModel, frozen=True):
    """A suggested envelope with a typical monthly budget."""

    name: str
    budget: float
