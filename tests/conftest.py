# SPDX-License-Identifier: BSL-1.1
# Copyright (c) 2026 MuVeraAI Corporation
"""Shared fixtures for envelope-budget tests."""

from __future__ import annotations

from datetime import date
from typing import Any, Callable

import pytest

from envelope_budget.storage.memory import MemoryStorage
from envelope_budget.types import Envelope, EnvelopeStore, RecurringTransaction

JULY_2024 = date(2024, 7, 15)


def make_envelope(
    envelope_id: str,
    name: str,
    budget: float = 100.0,
    balance: float | None = None,
    is_favorite: bool = False,
    bills: tuple[float, ...] = (),
    last_processed: str | None = None,
) -> Envelope:
    """Build an envelope with deterministic ids, including one bill per amount."""
    return Envelope(
        id=envelope_id,
        name=name,
        budget=budget,
        balance=budget if balance is None else balance,
        is_favorite=is_favorite,
        recurring_transactions=tuple(
            RecurringTransaction(
                id=f"{envelope_id}-bill-{index}",
                name=f"Bill {index}",
                amount=amount,
                day_of_month=1,
            )
            for index, amount in enumerate(bills)
        ),
        last_processed=last_processed,
    )


@pytest.fixture
def empty_store() -> EnvelopeStore:
    return EnvelopeStore()


@pytest.fixture
def store() -> EnvelopeStore:
    """Three envelopes: groceries (half spent), rent (full, favorite), fun (empty)."""
    return EnvelopeStore(
        envelopes=(
            make_envelope("env-groceries", "Groceries", budget=100.0, balance=50.0),
            make_envelope("env-rent", "Rent", budget=1500.0, is_favorite=True),
            make_envelope("env-fun", "Fun", budget=40.0, balance=0.0),
        )
    )


@pytest.fixture
def seeded_storage() -> Callable[..., MemoryStorage]:
    """Build a MemoryStorage whose envelopes key holds the given records."""

    def _build(records: list[dict[str, Any]], **extra: Any) -> MemoryStorage:
        return MemoryStorage({"envelopes": records, **extra})

    return _build
