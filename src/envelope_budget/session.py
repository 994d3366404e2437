# SPDX-License-Identifier: BSL-1.1
# Copyright (c) 2026 MuVeraAI Corporation

from __future__ import annotations

import logging
from datetime import date
from typing import Any, Callable

from pydantic import ValidationError

from envelope_budget import envelope as transitions
from envelope_budget.config import EnvelopeBudgetConfig
from envelope_budget.errors import InvalidAmountError
from envelope_budget.query import (
    allocation_breakdown,
    budget_totals,
    filter_and_sort,
    remaining_to_budget,
    suggest_envelopes,
)
from envelope_budget.recurring import current_period, envelopes_due, process_recurring_bills
from envelope_budget.storage.interface import KeyValueStorage
from envelope_budget.storage.memory import MemoryStorage
from envelope_budget.types import (
    VIEW_MODES,
    AllocationSlice,
    BudgetTotals,
    Envelope,
    EnvelopeStore,
    EnvelopeTemplate,
    ViewMode,
)

logger = logging.getLogger("envelope_budget")


class BudgetSession:
    """
    Owns the persistence lifecycle around the pure envelope transitions.

    Design contract
    ---------------
    - Construction loads persisted state and runs the recurring-bill sweep
      exactly once for the session's period, before any other operation.
    - Every mutating method validates, computes a new snapshot, saves it, and
      only then replaces the in-memory snapshot. If the save raises
      ``PersistenceError`` the session keeps its previous snapshot.
    - Operations on a missing envelope id are no-ops and do not write.
    - The search query and favorites filter live only for the session.

    Usage
    -----
    ::

        session = BudgetSession(storage=JsonFileStorage("~/.envelope-budget.json"))
        session.create_envelope("Groceries", 400)
        groceries = session.displayed_envelopes[0]
        session.spend(groceries.id, 62.18)
        print(session.totals.total_spent)
    """

    def __init__(
        self,
        storage: KeyValueStorage | None = None,
        config: EnvelopeBudgetConfig | None = None,
        today: date | None = None,
    ) -> None:
        self._config = config or EnvelopeBudgetConfig()
        self._storage: KeyValueStorage = storage if storage is not None else MemoryStorage()
        self._keys = self._config.keys

        self._store = self._load_store()
        self._view_mode: ViewMode = self._load_view_mode()
        self._monthly_goal: float | None = self._load_monthly_goal()

        self._search_query = ""
        self._favorites_only = False

        self._period = current_period(today)
        self._run_recurring_sweep()

    # ─── Read side ────────────────────────────────────────────────────────────

    @property
    def period(self) -> str:
        """The ``YYYY-MM`` period this session processed recurring bills for."""
        return self._period

    @property
    def store(self) -> EnvelopeStore:
        return self._store

    @property
    def envelopes(self) -> list[Envelope]:
        """All envelopes in insertion order."""
        return list(self._store.envelopes)

    @property
    def displayed_envelopes(self) -> list[Envelope]:
        """Envelopes after applying the current search query and favorites filter."""
        return filter_and_sort(self._store, self._search_query, self._favorites_only)

    @property
    def search_query(self) -> str:
        return self._search_query

    @property
    def favorites_only(self) -> bool:
        return self._favorites_only

    @property
    def has_filters(self) -> bool:
        return bool(self._search_query) or self._favorites_only

    @property
    def view_mode(self) -> ViewMode:
        return self._view_mode

    @property
    def monthly_goal(self) -> float | None:
        return self._monthly_goal

    @property
    def totals(self) -> BudgetTotals:
        return budget_totals(self._store)

    @property
    def remaining_to_budget(self) -> float | None:
        return remaining_to_budget(self._store, self._monthly_goal)

    @property
    def allocation(self) -> list[AllocationSlice]:
        return allocation_breakdown(
            self._store,
            self._monthly_goal,
            palette=self._config.palette,
            unallocated_color=self._config.unallocated_color,
        )

    def envelope(self, envelope_id: str) -> Envelope:
        """Raises EnvelopeNotFoundError if the id does not exist."""
        return transitions.require_envelope(self._store, envelope_id)

    def suggestions(self, text: str = "") -> list[EnvelopeTemplate]:
        return suggest_envelopes(self._store, text)

    # ─── Envelope operations ──────────────────────────────────────────────────

    def create_envelope(self, name: str, budget: float) -> Envelope:
        """
        Create an envelope and return it.

        Raises InvalidNameError, InvalidAmountError or DuplicateNameError;
        the session is unchanged when any of them is raised.
        """
        new_store = transitions.create_envelope(self._store, name, budget)
        self._commit("create_envelope", new_store)
        created = new_store.envelopes[-1]
        logger.info(
            "envelope_created",
            extra={
                "envelope_id": created.id,
                "envelope_name": created.name,
                "budget": created.budget,
            },
        )
        return created

    def edit_envelope(self, envelope_id: str, name: str, budget: float) -> None:
        self._apply(
            "edit_envelope",
            lambda store: transitions.edit_envelope(store, envelope_id, name, budget),
            envelope_id=envelope_id,
        )

    def delete_envelope(self, envelope_id: str) -> None:
        self._apply(
            "delete_envelope",
            lambda store: transitions.delete_envelope(store, envelope_id),
            envelope_id=envelope_id,
        )

    def apply_transaction(self, envelope_id: str, transaction_type: str, amount: float) -> None:
        self._apply(
            "apply_transaction",
            lambda store: transitions.apply_transaction(
                store, envelope_id, transaction_type, amount
            ),
            envelope_id=envelope_id,
            transaction_type=transaction_type,
            amount=amount,
        )

    def fund(self, envelope_id: str, amount: float) -> None:
        self.apply_transaction(envelope_id, "fund", amount)

    def spend(self, envelope_id: str, amount: float) -> None:
        self.apply_transaction(envelope_id, "spend", amount)

    def toggle_favorite(self, envelope_id: str) -> None:
        self._apply(
            "toggle_favorite",
            lambda store: transitions.toggle_favorite(store, envelope_id),
            envelope_id=envelope_id,
        )

    def start_new_month(self) -> None:
        """Refill every envelope to its budget."""
        self._apply("start_new_month", transitions.start_new_month)

    # ─── Recurring bills ──────────────────────────────────────────────────────

    def add_recurring_transaction(
        self,
        envelope_id: str,
        name: str,
        amount: float,
        day_of_month: int,
    ) -> None:
        """
        Attach a recurring bill. On an envelope already processed for this
        period the bill is first deducted next period.
        """
        self._apply(
            "add_recurring_transaction",
            lambda store: transitions.add_recurring_transaction(
                store, envelope_id, name, amount, day_of_month
            ),
            envelope_id=envelope_id,
        )

    def delete_recurring_transaction(self, envelope_id: str, transaction_id: str) -> None:
        self._apply(
            "delete_recurring_transaction",
            lambda store: transitions.delete_recurring_transaction(
                store, envelope_id, transaction_id
            ),
            envelope_id=envelope_id,
            transaction_id=transaction_id,
        )

    # ─── Preferences ──────────────────────────────────────────────────────────

    def set_monthly_goal(self, amount: float | None) -> None:
        """
        Set or clear (``None``) the monthly budget goal.
        Raises InvalidAmountError unless amount is a finite number >= 0.
        """
        if amount is not None and (not transitions.is_finite_number(amount) or amount < 0):
            raise InvalidAmountError("monthly goal", amount, ">= 0")
        goal = None if amount is None else float(amount)
        self._storage.save(self._keys.monthly_goal, goal)
        self._monthly_goal = goal
        logger.info("monthly_goal_set", extra={"monthly_goal": goal})

    def set_view_mode(self, view_mode: str) -> None:
        if view_mode not in VIEW_MODES:
            raise ValueError(f"view_mode must be one of {list(VIEW_MODES)}; got {view_mode!r}.")
        self._storage.save(self._keys.view_mode, view_mode)
        self._view_mode = view_mode  # type: ignore[assignment]

    def set_search_query(self, query: str) -> None:
        self._search_query = query

    def set_favorites_only(self, favorites_only: bool) -> None:
        self._favorites_only = favorites_only

    def clear_filters(self) -> None:
        self._search_query = ""
        self._favorites_only = False

    # ─── Private helpers ──────────────────────────────────────────────────────

    def _apply(
        self,
        operation: str,
        transition: Callable[[EnvelopeStore], EnvelopeStore],
        **fields: Any,
    ) -> None:
        new_store = transition(self._store)
        if new_store is self._store:
            logger.debug("transition_noop", extra={"operation": operation, **fields})
            return
        self._commit(operation, new_store, **fields)

    def _commit(self, operation: str, new_store: EnvelopeStore, **fields: Any) -> None:
        # Save first: a failed write must leave the session on its old snapshot.
        self._storage.save(self._keys.envelopes, new_store.to_records())
        self._store = new_store
        logger.info("transition_committed", extra={"operation": operation, **fields})

    def _run_recurring_sweep(self) -> None:
        due = envelopes_due(self._store, self._period)
        if not due:
            return
        new_store = process_recurring_bills(self._store, self._period)
        self._commit(
            "process_recurring_bills",
            new_store,
            period=self._period,
            envelope_ids=[envelope.id for envelope in due],
        )

    def _load_store(self) -> EnvelopeStore:
        records = self._storage.load(self._keys.envelopes, [])
        if not isinstance(records, list):
            logger.warning(
                "persisted_envelopes_invalid",
                extra={"key": self._keys.envelopes, "value_type": type(records).__name__},
            )
            return EnvelopeStore()

        # Validate record by record so one bad envelope does not cost the rest.
        envelopes: list[Envelope] = []
        for index, record in enumerate(records):
            try:
                envelopes.append(Envelope.model_validate(record))
            except ValidationError as error:
                logger.warning(
                    "persisted_envelope_skipped",
                    extra={
                        "key": self._keys.envelopes,
                        "index": index,
                        "errors": error.error_count(),
                    },
                )
        return EnvelopeStore(envelopes=tuple(envelopes))

    def _load_view_mode(self) -> ViewMode:
        value = self._storage.load(self._keys.view_mode, self._config.default_view_mode)
        if value not in VIEW_MODES:
            logger.warning(
                "persisted_view_mode_invalid",
                extra={"key": self._keys.view_mode, "value": repr(value)},
            )
            return self._config.default_view_mode
        return value

    def _load_monthly_goal(self) -> float | None:
        value = self._storage.load(self._keys.monthly_goal, None)
        if value is None:
            return None
        if not transitions.is_finite_number(value) or value < 0:
            logger.warning(
                "persisted_monthly_goal_invalid",
                extra={"key": self._keys.monthly_goal, "value": repr(value)},
            )
            return None
        return float(value)
