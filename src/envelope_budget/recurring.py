# SPDX-License-Identifier: BSL-1.1
# Copyright (c) 2026 MuVeraAI Corporation

"""
Monthly recurring-bill sweep.

The sweep runs once per session against a period marker (``YYYY-MM``). Each
envelope that has bills and has not yet been stamped with the period is
debited by the sum of its bills and stamped. Running it again for the same
period changes nothing.

``day_of_month`` on a bill is informational: every bill due in a period is
deducted as one lump sum on the first sweep of that period. Bills added or
removed after an envelope has been stamped only take effect from the next
period.
"""

from __future__ import annotations

import math
import re
from datetime import date

from envelope_budget.types import Envelope, EnvelopeStore

_PERIOD_RE = re.compile(r"^\d{4}-(0[1-9]|1[0-2])$")


def current_period(today: date | None = None) -> str:
    """Return the ``YYYY-MM`` marker for the given date (default: local today)."""
    if today is None:
        today = date.today()
    return f"{today.year:04d}-{today.month:02d}"


def is_valid_period(value: object) -> bool:
    return isinstance(value, str) and _PERIOD_RE.match(value) is not None


def total_due(envelope: Envelope) -> float:
    """
    Sum the envelope's bill amounts. Amounts that are not finite positive
    numbers count as zero.
    """
    total = 0.0
    for bill in envelope.recurring_transactions:
        amount = bill.amount
        if isinstance(amount, (int, float)) and math.isfinite(amount) and amount > 0:
            total += amount
    return total


def envelopes_due(store: EnvelopeStore, period: str) -> list[Envelope]:
    """Envelopes with at least one bill that have not been processed for ``period``."""
    return [
        envelope
        for envelope in store.envelopes
        if envelope.recurring_transactions and envelope.last_processed != period
    ]


def process_recurring_bills(store: EnvelopeStore, period: str) -> EnvelopeStore:
    """
    Deduct each due envelope's bills once for ``period``.

    Balances floor at zero. Envelopes without bills are never stamped.
    Raises ValueError if ``period`` is not a ``YYYY-MM`` string.
    """
    if not is_valid_period(period):
        raise ValueError(f"period must be a 'YYYY-MM' string; got {period!r}.")

    due_ids = {envelope.id for envelope in envelopes_due(store, period)}
    if not due_ids:
        return store

    return EnvelopeStore(
        envelopes=tuple(
            envelope.model_copy(
                update={
                    "balance": max(0.0, envelope.balance - total_due(envelope)),
                    "last_processed": period,
                }
            )
            if envelope.id in due_ids
            else envelope
            for envelope in store.envelopes
        )
    )
