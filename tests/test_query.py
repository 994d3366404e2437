# SPDX-License-Identifier: BSL-1.1
# Copyright (c) 2026 MuVeraAI Corporation
"""Tests for derived views: filtering, totals, allocation and suggestions."""

from __future__ import annotations

import pytest

from envelope_budget.config import DEFAULT_PALETTE, UNALLOCATED_COLOR
from envelope_budget.query import (
    allocation_breakdown,
    balance_health,
    budget_totals,
    existing_name_set,
    filter_and_sort,
    format_currency,
    remaining_percent,
    remaining_to_budget,
    suggest_envelopes,
)
from envelope_budget.templates import DEFAULT_TEMPLATES
from envelope_budget.types import EnvelopeStore

from conftest import make_envelope


# ---------------------------------------------------------------------------
# TestFilterAndSort
# ---------------------------------------------------------------------------


class TestFilterAndSort:
    def test_favorites_first_then_alphabetical(self) -> None:
        store = EnvelopeStore(
            envelopes=(
                make_envelope("z", "Zebra"),
                make_envelope("a", "Apple", is_favorite=True),
                make_envelope("m", "Mango"),
            )
        )
        assert [e.name for e in filter_and_sort(store)] == ["Apple", "Mango", "Zebra"]

    def test_alphabetical_order_ignores_case(self) -> None:
        store = EnvelopeStore(
            envelopes=(
                make_envelope("1", "banana"),
                make_envelope("2", "Cherry"),
                make_envelope("3", "apple"),
            )
        )
        assert [e.name for e in filter_and_sort(store)] == ["apple", "banana", "Cherry"]

    def test_query_matches_substring_case_insensitively(self, store: EnvelopeStore) -> None:
        assert [e.name for e in filter_and_sort(store, "RO")] == ["Groceries"]

    def test_favorites_only(self, store: EnvelopeStore) -> None:
        assert [e.name for e in filter_and_sort(store, favorites_only=True)] == ["Rent"]

    def test_query_and_favorites_combine(self, store: EnvelopeStore) -> None:
        assert filter_and_sort(store, "gro", favorites_only=True) == []

    def test_does_not_reorder_store(self, store: EnvelopeStore) -> None:
        filter_and_sort(store)
        assert [e.id for e in store.envelopes] == ["env-groceries", "env-rent", "env-fun"]


# ---------------------------------------------------------------------------
# TestTotals
# ---------------------------------------------------------------------------


class TestTotals:
    def test_budget_totals(self, store: EnvelopeStore) -> None:
        totals = budget_totals(store)
        assert totals.total_budget == 1640.0
        assert totals.total_balance == 1550.0
        assert totals.total_spent == 90.0

    def test_empty_store_totals_are_zero(self, empty_store: EnvelopeStore) -> None:
        totals = budget_totals(empty_store)
        assert (totals.total_budget, totals.total_balance, totals.total_spent) == (0, 0, 0)

    def test_existing_name_set_is_lower_case(self, store: EnvelopeStore) -> None:
        assert existing_name_set(store) == {"groceries", "rent", "fun"}

    def test_remaining_to_budget(self, store: EnvelopeStore) -> None:
        assert remaining_to_budget(store, None) is None
        assert remaining_to_budget(store, 2000.0) == 360.0
        assert remaining_to_budget(store, 1000.0) == -640.0


# ---------------------------------------------------------------------------
# TestAllocationBreakdown
# ---------------------------------------------------------------------------


class TestAllocationBreakdown:
    def test_one_slice_per_funded_envelope_without_goal(self, store: EnvelopeStore) -> None:
        slices = allocation_breakdown(store, None)
        assert [(s.name, s.value) for s in slices] == [
            ("Groceries", 100.0),
            ("Rent", 1500.0),
            ("Fun", 40.0),
        ]
        assert [s.color for s in slices] == list(DEFAULT_PALETTE[:3])

    def test_unallocated_slice_when_goal_exceeds_budget(self, store: EnvelopeStore) -> None:
        slices = allocation_breakdown(store, 2000.0)
        assert slices[-1].name == "Unallocated"
        assert slices[-1].value == 360.0
        assert slices[-1].color == UNALLOCATED_COLOR

    @pytest.mark.parametrize("goal", [1640.0, 1000.0])
    def test_no_unallocated_slice_when_goal_is_met(
        self, store: EnvelopeStore, goal: float
    ) -> None:
        assert all(s.name != "Unallocated" for s in allocation_breakdown(store, goal))

    def test_zero_budget_envelopes_are_skipped_but_keep_colour_positions(self) -> None:
        store = EnvelopeStore(
            envelopes=(
                make_envelope("1", "A", budget=10.0),
                make_envelope("2", "B", budget=0.0),
                make_envelope("3", "C", budget=10.0),
            )
        )
        slices = allocation_breakdown(store, None)
        assert [s.name for s in slices] == ["A", "C"]
        assert slices[1].color == DEFAULT_PALETTE[2]

    def test_colours_cycle_through_palette(self) -> None:
        store = EnvelopeStore(
            envelopes=tuple(make_envelope(str(i), f"E{i}", budget=1.0) for i in range(3))
        )
        slices = allocation_breakdown(store, None, palette=("#000", "#fff"))
        assert [s.color for s in slices] == ["#000", "#fff", "#000"]


# ---------------------------------------------------------------------------
# TestEnvelopeHealth
# ---------------------------------------------------------------------------


class TestEnvelopeHealth:
    @pytest.mark.parametrize(
        ("balance", "expected"),
        [(100.0, "healthy"), (51.0, "healthy"), (50.0, "low"), (26.0, "low"), (25.0, "critical"), (0.0, "critical")],
    )
    def test_balance_health_thresholds(self, balance: float, expected: str) -> None:
        assert balance_health(make_envelope("1", "A", budget=100.0, balance=balance)) == expected

    def test_remaining_percent_with_zero_budget(self) -> None:
        assert remaining_percent(make_envelope("1", "A", budget=0.0, balance=5.0)) == 0.0


# ---------------------------------------------------------------------------
# TestSuggestions
# ---------------------------------------------------------------------------


class TestSuggestions:
    def test_catalogue_is_sorted_by_name(self) -> None:
        names = [template.name for template in DEFAULT_TEMPLATES]
        assert names == sorted(names, key=str.casefold)

    def test_existing_envelopes_are_excluded(self, store: EnvelopeStore) -> None:
        names = {template.name for template in suggest_envelopes(store)}
        assert "Groceries" not in names
        assert "Utilities" in names

    def test_text_filters_case_insensitively(self, empty_store: EnvelopeStore) -> None:
        names = [template.name for template in suggest_envelopes(empty_store, "INSUR")]
        assert names == ["Car Insurance", "Health Insurance"]


# ---------------------------------------------------------------------------
# TestFormatCurrency
# ---------------------------------------------------------------------------


class TestFormatCurrency:
    @pytest.mark.parametrize(
        ("amount", "expected"),
        [(0.0, "$0.00"), (1234.5, "$1,234.50"), (-12.0, "-$12.00"), (-0.001, "$0.00")],
    )
    def test_formats_dollars(self, amount: float, expected: str) -> None:
        assert format_currency(amount) == expected
