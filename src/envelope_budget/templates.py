# SPDX-License-Identifier: BSL-1.1
# Copyright (c) 2026 MuVeraAI Corporation

"""Catalogue of common envelope categories offered as suggestions."""

from __future__ import annotations

from envelope_budget.types import EnvelopeTemplate

_CATALOGUE: list[tuple[str, float]] = [
    ("Car Insurance", 120),
    ("Car Maintenance", 50),
    ("Coffee Shops", 40),
    ("Credit Card Payment", 150),
    ("Dining Out", 200),
    ("Emergency Fund", 100),
    ("Entertainment", 100),
    ("Fitness/Gym", 40),
    ("Gas/Fuel", 150),
    ("Gifts", 50),
    ("Groceries", 400),
    ("Health Insurance", 300),
    ("Hobbies", 50),
    ("Home Maintenance", 100),
    ("Internet", 60),
    ("Investments", 200),
    ("Medication/Pharmacy", 50),
    ("Personal Care", 50),
    ("Pet Care", 75),
    ("Phone Bill", 80),
    ("Public Transit", 50),
    ("Rent/Mortgage", 1500),
    ("Savings", 250),
    ("Shopping (Clothing, etc)", 150),
    ("Student Loans", 200),
    ("Subscriptions", 30),
    ("Utilities", 200),
]

DEFAULT_TEMPLATES: tuple[EnvelopeTemplate, ...] = tuple(
    sorted(
        (EnvelopeTemplate(name=name, budget=float(budget)) for name, budget in _CATALOGUE),
        key=lambda template: template.name.casefold(),
    )
)
