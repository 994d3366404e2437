# SPDX-License-Identifier: BSL-1.1
# Copyright (c) 2026 MuVeraAI Corporation

"""
envelope-budget: envelope budgeting with recurring bills.

Quick start::

    from envelope_budget import BudgetSession, JsonFileStorage

    session = BudgetSession(storage=JsonFileStorage("budget.json"))
    groceries = session.create_envelope("Groceries", 400)
    session.spend(groceries.id, 62.18)
    session.add_recurring_transaction(groceries.id, "Meal kit", 45, day_of_month=3)

The transition functions are also usable directly on immutable snapshots::

    from envelope_budget import EnvelopeStore, create_envelope, process_recurring_bills

    store = create_envelope(EnvelopeStore(), "Rent", 1500)
    store = process_recurring_bills(store, "2024-07")
"""

from envelope_budget.config import EnvelopeBudgetConfig, StorageKeys
from envelope_budget.envelope import (
    add_recurring_transaction,
    apply_transaction,
    create_envelope,
    delete_envelope,
    delete_recurring_transaction,
    edit_envelope,
    require_envelope,
    round2,
    start_new_month,
    toggle_favorite,
)
from envelope_budget.errors import (
    DuplicateNameError,
    EnvelopeBudgetError,
    EnvelopeNotFoundError,
    InvalidAmountError,
    InvalidNameError,
    InvalidRecurringTransactionError,
    PersistenceError,
)
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
from envelope_budget.recurring import (
    current_period,
    envelopes_due,
    is_valid_period,
    process_recurring_bills,
    total_due,
)
from envelope_budget.session import BudgetSession
from envelope_budget.storage import JsonFileStorage, KeyValueStorage, MemoryStorage
from envelope_budget.templates import DEFAULT_TEMPLATES
from envelope_budget.types import (
    AllocationSlice,
    BalanceHealth,
    BudgetTotals,
    Envelope,
    EnvelopeStore,
    EnvelopeTemplate,
    RecurringTransaction,
    TransactionType,
    ViewMode,
)

__all__ = [
    # Session
    "BudgetSession",
    # Config
    "EnvelopeBudgetConfig",
    "StorageKeys",
    # Types
    "Envelope",
    "RecurringTransaction",
    "EnvelopeStore",
    "TransactionType",
    "ViewMode",
    "BalanceHealth",
    "BudgetTotals",
    "AllocationSlice",
    "EnvelopeTemplate",
    # Errors
    "EnvelopeBudgetError",
    "DuplicateNameError",
    "InvalidNameError",
    "InvalidAmountError",
    "InvalidRecurringTransactionError",
    "EnvelopeNotFoundError",
    "PersistenceError",
    # Storage
    "KeyValueStorage",
    "MemoryStorage",
    "JsonFileStorage",
    # Transitions
    "create_envelope",
    "edit_envelope",
    "delete_envelope",
    "apply_transaction",
    "toggle_favorite",
    "start_new_month",
    "add_recurring_transaction",
    "delete_recurring_transaction",
    "require_envelope",
    "round2",
    # Recurring bills
    "current_period",
    "is_valid_period",
    "total_due",
    "envelopes_due",
    "process_recurring_bills",
    # Derived views
    "existing_name_set",
    "filter_and_sort",
    "budget_totals",
    "remaining_to_budget",
    "allocation_breakdown",
    "remaining_percent",
    "balance_health",
    "suggest_envelopes",
    "format_currency",
    "DEFAULT_TEMPLATES",
]
