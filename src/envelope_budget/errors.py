# SPDX-License-Identifier: BSL-1.1
# Copyright (c) 2026 MuVeraAI Corporation
from __future__ import annotations

from typing import Any


class EnvelopeBudgetError(Exception):
    """Base class for all envelope-budget errors."""

    def __init__(self, message: str, code: str = "ENVELOPE_BUDGET_ERROR") -> None:
        super().__init__(message)
        self.code = code
        self.message = message

    def __repr__(self) -> str:
        return f"{type(self).__name__}(code={self.code!r}, message={self.message!r})"


class DuplicateNameError(EnvelopeBudgetError):
    """
    Raised when an envelope name collides case-insensitively with an
    existing envelope.

    Attributes:
        name: The rejected name, as supplied.
    """

    def __init__(self, name: str) -> None:
        super().__init__(
            f"An envelope named '{name}' already exists.",
            code="DUPLICATE_NAME",
        )
        self.name = name


class InvalidNameError(EnvelopeBudgetError):
    """Raised when an envelope name is empty after trimming."""

    def __init__(self, name: str) -> None:
        super().__init__(
            "Envelope name must be a non-empty string.",
            code="INVALID_NAME",
        )
        self.name = name


class InvalidAmountError(EnvelopeBudgetError):
    """
    Raised when a monetary input is non-finite or outside its allowed range.

    Attributes:
        field: Which input was rejected (e.g. ``'budget'``, ``'amount'``).
        value: The rejected value.
        requirement: Human-readable constraint, e.g. ``'> 0'``.
    """

    def __init__(self, field: str, value: Any, requirement: str) -> None:
        super().__init__(
            f"{field} must be a finite number {requirement}; got {value!r}.",
            code="INVALID_AMOUNT",
        )
        self.field = field
        self.value = value
        self.requirement = requirement


class InvalidRecurringTransactionError(EnvelopeBudgetError):
    """
    Raised when a recurring bill has a bad name, amount or day of month.

    Attributes:
        field: The offending field (``'name'``, ``'amount'`` or ``'day_of_month'``).
        value: The rejected value.
    """

    def __init__(self, field: str, value: Any, reason: str) -> None:
        super().__init__(
            f"Invalid recurring transaction {field} {value!r}: {reason}.",
            code="INVALID_RECURRING_TRANSACTION",
        )
        self.field = field
        self.value = value


class EnvelopeNotFoundError(EnvelopeBudgetError):
    """Raised by strict lookups when an envelope id does not exist."""

    def __init__(self, envelope_id: str) -> None:
        super().__init__(
            f"Envelope '{envelope_id}' does not exist.",
            code="ENVELOPE_NOT_FOUND",
        )
        self.envelope_id = envelope_id


class PersistenceError(EnvelopeBudgetError):
    """Raised when the storage backend fails to write a value."""

    def __init__(self, key: str, reason: str) -> None:
        super().__init__(
            f"Failed to persist '{key}': {reason}",
            code="PERSISTENCE_ERROR",
        )
        self.key = key
