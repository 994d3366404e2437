# SPDX-License-Identifier: BSL-1.1
# Copyright (c) 2026 MuVeraAI Corporation

"""
Pure state transitions over an EnvelopeStore.

Every function takes a store snapshot plus arguments and returns a new
snapshot. Inputs are validated before the new store is built, so a rejected
call never produces a partial update. Operations that name a missing
envelope id are no-ops and return the input store.
"""

from __future__ import annotations

import math
from typing import Any, Callable
from uuid import uuid4

from envelope_budget.errors import (
    DuplicateNameError,
    EnvelopeNotFoundError,
    InvalidAmountError,
    InvalidNameError,
    InvalidRecurringTransactionError,
)
from envelope_budget.types import (
    MAX_DAY_OF_MONTH,
    MIN_DAY_OF_MONTH,
    Envelope,
    EnvelopeStore,
    RecurringTransaction,
)

# "add" is the vocabulary of the stored UI state; it means the same as "fund".
_TRANSACTION_TYPES: dict[str, str] = {"fund": "fund", "add": "fund", "spend": "spend"}


def round2(value: float) -> float:
    """Round to cents, halves away from zero."""
    scaled = math.floor(abs(value) * 100 + 0.5) / 100
    return math.copysign(scaled, value) if scaled else 0.0


def is_finite_number(value: Any) -> bool:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return math.isfinite(value)


def require_envelope(store: EnvelopeStore, envelope_id: str) -> Envelope:
    """Strict lookup. Raises EnvelopeNotFoundError if the id is absent."""
    envelope = store.find(envelope_id)
    if envelope is None:
        raise EnvelopeNotFoundError(envelope_id)
    return envelope


# ─── Envelopes ────────────────────────────────────────────────────────────────


def create_envelope(store: EnvelopeStore, name: str, budget: float) -> EnvelopeStore:
    """
    Append a new envelope whose balance starts equal to its budget.

    Raises InvalidNameError, InvalidAmountError (budget must be > 0) or
    DuplicateNameError when another envelope already uses the name,
    compared case-insensitively after trimming.
    """
    clean_name = _clean_name(name)
    if not is_finite_number(budget) or budget <= 0:
        raise InvalidAmountError("budget", budget, "> 0")
    if _name_taken(store, clean_name):
        raise DuplicateNameError(clean_name)

    envelope = Envelope(
        id=str(uuid4()),
        name=clean_name,
        budget=float(budget),
        balance=float(budget),
    )
    return EnvelopeStore(envelopes=(*store.envelopes, envelope))


def edit_envelope(
    store: EnvelopeStore,
    envelope_id: str,
    name: str,
    budget: float,
) -> EnvelopeStore:
    """
    Rename an envelope and change its budget.

    The balance keeps the same fraction of the budget it had before the edit,
    rounded to cents and capped at the new budget. An envelope whose old
    budget was 0 is treated as full.
    """
    clean_name = _clean_name(name)
    if not is_finite_number(budget) or budget < 0:
        raise InvalidAmountError("budget", budget, ">= 0")
    if _name_taken(store, clean_name, exclude_id=envelope_id):
        raise DuplicateNameError(clean_name)

    def _edit(envelope: Envelope) -> Envelope:
        ratio = envelope.balance / envelope.budget if envelope.budget > 0 else 1.0
        new_budget = float(budget)
        return envelope.model_copy(
            update={
                "name": clean_name,
                "budget": new_budget,
                "balance": min(round2(new_budget * ratio), new_budget),
            }
        )

    return _update(store, envelope_id, _edit)


def delete_envelope(store: EnvelopeStore, envelope_id: str) -> EnvelopeStore:
    """Remove an envelope together with its recurring bills."""
    remaining = tuple(e for e in store.envelopes if e.id != envelope_id)
    if len(remaining) == len(store.envelopes):
        return store
    return EnvelopeStore(envelopes=remaining)


def apply_transaction(
    store: EnvelopeStore,
    envelope_id: str,
    transaction_type: str,
    amount: float,
) -> EnvelopeStore:
    """
    Fund or spend against an envelope.

    Spending more than the balance floors it at zero; there is no overdraft.
    Raises ValueError for an unknown transaction type and InvalidAmountError
    unless amount is a finite number > 0.
    """
    kind = _TRANSACTION_TYPES.get(transaction_type)
    if kind is None:
        raise ValueError(
            f"transaction_type must be 'fund' or 'spend'; got {transaction_type!r}."
        )
    if not is_finite_number(amount) or amount <= 0:
        raise InvalidAmountError("amount", amount, "> 0")

    delta = amount if kind == "fund" else -amount
    return _update(
        store,
        envelope_id,
        lambda envelope: envelope.model_copy(
            update={"balance": max(0.0, envelope.balance + delta)}
        ),
    )


def toggle_favorite(store: EnvelopeStore, envelope_id: str) -> EnvelopeStore:
    return _update(
        store,
        envelope_id,
        lambda envelope: envelope.model_copy(update={"is_favorite": not envelope.is_favorite}),
    )


def start_new_month(store: EnvelopeStore) -> EnvelopeStore:
    """Refill every envelope to its full budget. last_processed is left alone."""
    return EnvelopeStore(
        envelopes=tuple(
            envelope.model_copy(update={"balance": envelope.budget})
            for envelope in store.envelopes
        )
    )


# ─── Recurring bills ──────────────────────────────────────────────────────────


def add_recurring_transaction(
    store: EnvelopeStore,
    envelope_id: str,
    name: str,
    amount: float,
    day_of_month: int,
) -> EnvelopeStore:
    """
    Attach a recurring bill to an envelope.

    Raises InvalidRecurringTransactionError for an empty name, an amount
    that is not a finite number > 0, or a day outside 1..31.
    """
    clean_name = name.strip() if isinstance(name, str) else ""
    if not clean_name:
        raise InvalidRecurringTransactionError("name", name, "must be non-empty")
    if not is_finite_number(amount) or amount <= 0:
        raise InvalidRecurringTransactionError("amount", amount, "must be a finite number > 0")
    if (
        isinstance(day_of_month, bool)
        or not isinstance(day_of_month, int)
        or not MIN_DAY_OF_MONTH <= day_of_month <= MAX_DAY_OF_MONTH
    ):
        raise InvalidRecurringTransactionError(
            "day_of_month",
            day_of_month,
            f"must be an integer between {MIN_DAY_OF_MONTH} and {MAX_DAY_OF_MONTH}",
        )

    bill = RecurringTransaction(
        id=str(uuid4()),
        name=clean_name,
        amount=float(amount),
        day_of_month=day_of_month,
    )
    return _update(
        store,
        envelope_id,
        lambda envelope: envelope.model_copy(
            update={"recurring_transactions": (*envelope.recurring_transactions, bill)}
        ),
    )


def delete_recurring_transaction(
    store: EnvelopeStore,
    envelope_id: str,
    transaction_id: str,
) -> EnvelopeStore:
    envelope = store.find(envelope_id)
    if envelope is None:
        return store
    kept = tuple(tx for tx in envelope.recurring_transactions if tx.id != transaction_id)
    if len(kept) == len(envelope.recurring_transactions):
        return store
    return _update(
        store,
        envelope_id,
        lambda current: current.model_copy(update={"recurring_transactions": kept}),
    )


# ─── Private helpers ──────────────────────────────────────────────────────────


def _clean_name(name: str) -> str:
    clean = name.strip() if isinstance(name, str) else ""
    if not clean:
        raise InvalidNameError(name)
    return clean


def _name_taken(store: EnvelopeStore, name: str, exclude_id: str | None = None) -> bool:
    wanted = name.strip().lower()
    return any(
        envelope.id != exclude_id and envelope.name.strip().lower() == wanted
        for envelope in store.envelopes
    )


def _update(
    store: EnvelopeStore,
    envelope_id: str,
    change: Callable[[Envelope], Envelope],
) -> EnvelopeStore:
    if store.find(envelope_id) is None:
        return store
    return EnvelopeStore(
        envelopes=tuple(
            change(envelope) if envelope.id == envelope_id else envelope
            for envelope in store.envelopes
        )
    )
