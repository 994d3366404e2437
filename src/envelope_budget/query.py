# SPDX-License-Identifier: BSL-1.1
# Copyright (c) 2026 MuVeraAI Corporation

from __future__ import annotations

from collections.abc import Sequence

from envelope_budget.config import DEFAULT_PALETTE, UNALLOCATED_COLOR, UNALLOCATED_LABEL
from envelope_budget.templates import DEFAULT_TEMPLATES
from envelope_budget.types import (
    AllocationSlice,
    BalanceHealth,
    BudgetTotals,
    Envelope,
    EnvelopeStore,
    EnvelopeTemplate,
)


def existing_name_set(store: EnvelopeStore) -> set[str]:
    """Lower-cased names of every envelope, for duplicate checks."""
    return {envelope.name.lower() for envelope in store.envelopes}


def filter_and_sort(
    store: EnvelopeStore,
    query: str = "",
    favorites_only: bool = False,
) -> list[Envelope]:
    """
    Envelopes whose name contains ``query`` (case-insensitive), optionally
    restricted to favorites, ordered favorites first and then by name.

    The sort is stable, so envelopes that compare equal keep store order.
    """
    needle = query.lower()
    matches = [
        envelope
        for envelope in store.envelopes
        if needle in envelope.name.lower() and (not favorites_only or envelope.is_favorite)
    ]
    return sorted(
        matches,
        key=lambda envelope: (not envelope.is_favorite, envelope.name.casefold()),
    )


def budget_totals(store: EnvelopeStore) -> BudgetTotals:
    total_budget = sum(envelope.budget for envelope in store.envelopes)
    total_balance = sum(envelope.balance for envelope in store.envelopes)
    return BudgetTotals(
        total_budget=total_budget,
        total_balance=total_balance,
        total_spent=total_budget - total_balance,
    )


def remaining_to_budget(store: EnvelopeStore, monthly_goal: float | None) -> float | None:
    """
    How much of the monthly goal is not yet allocated to envelopes.
    Negative when envelopes are over-budgeted; None when no goal is set.
    """
    if monthly_goal is None:
        return None
    return monthly_goal - budget_totals(store).total_budget


def allocation_breakdown(
    store: EnvelopeStore,
    monthly_goal: float | None,
    palette: Sequence[str] = DEFAULT_PALETTE,
    unallocated_color: str = UNALLOCATED_COLOR,
) -> list[AllocationSlice]:
    """
    Per-envelope budget slices for a chart, plus an "Unallocated" slice when
    the monthly goal exceeds the total budget.

    Colours cycle through ``palette`` by each envelope's position in the
    store, so an envelope keeps its colour when others are filtered out.
    Envelopes with a zero budget get no slice.
    """
    slices = [
        AllocationSlice(
            name=envelope.name,
            value=envelope.budget,
            color=palette[index % len(palette)],
        )
        for index, envelope in enumerate(store.envelopes)
        if envelope.budget > 0
    ]

    unallocated = remaining_to_budget(store, monthly_goal)
    if unallocated is not None and unallocated > 0:
        slices.append(
            AllocationSlice(name=UNALLOCATED_LABEL, value=unallocated, color=unallocated_color)
        )
    return slices


def remaining_percent(envelope: Envelope) -> float:
    """Balance as a percentage of budget; 0 for a zero budget."""
    if envelope.budget <= 0:
        return 0.0
    return envelope.balance / envelope.budget * 100.0


def balance_health(envelope: Envelope) -> BalanceHealth:
    percent = remaining_percent(envelope)
    if percent > 50:
        return "healthy"
    if percent > 25:
        return "low"
    return "critical"


def suggest_envelopes(
    store: EnvelopeStore,
    text: str = "",
    templates: Sequence[EnvelopeTemplate] = DEFAULT_TEMPLATES,
) -> list[EnvelopeTemplate]:
    """Catalogue entries matching ``text`` that are not already envelopes."""
    taken = existing_name_set(store)
    needle = text.lower()
    return [
        template
        for template in templates
        if template.name.lower() not in taken and needle in template.name.lower()
    ]


def format_currency(amount: float) -> str:
    """Format as US dollars, e.g. ``$1,234.50`` or ``-$12.00``."""
    sign = "-" if round(amount, 2) < 0 else ""
    return f"{sign}${abs(amount):,.2f}"
