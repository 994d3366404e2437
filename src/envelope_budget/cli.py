# SPDX-License-Identifier: BSL-1.1
# Copyright (c) 2026 MuVeraAI Corporation

"""
Command-line front end for envelope-budget.

Each invocation opens a BudgetSession on a JSON data file, which runs the
recurring-bill sweep for the current month before the command executes.

Usage::

    envelope-budget create Groceries 400
    envelope-budget spend Groceries 62.18
    envelope-budget add-bill Groceries "Meal kit" 45 3
    envelope-budget list --favorites
    envelope-budget summary
    envelope-budget new-month --yes
"""

from __future__ import annotations

import argparse
import logging
import os
import sys
from pathlib import Path
from typing import Callable

from envelope_budget.errors import EnvelopeBudgetError, EnvelopeNotFoundError
from envelope_budget.query import balance_health, format_currency, remaining_percent
from envelope_budget.session import BudgetSession
from envelope_budget.storage.file import JsonFileStorage
from envelope_budget.types import VIEW_MODES, Envelope

DATA_ENV_VAR = "ENVELOPE_BUDGET_DATA"
DEFAULT_DATA_PATH = "~/.envelope-budget.json"


def default_data_path() -> Path:
    return Path(os.environ.get(DATA_ENV_VAR, DEFAULT_DATA_PATH)).expanduser()


def resolve_envelope(session: BudgetSession, reference: str) -> Envelope:
    """Look an envelope up by id, falling back to a case-insensitive name match."""
    try:
        return session.envelope(reference)
    except EnvelopeNotFoundError:
        wanted = reference.strip().lower()
        for envelope in session.envelopes:
            if envelope.name.lower() == wanted:
                return envelope
        raise


def _confirm(prompt: str, assume_yes: bool) -> bool:
    if assume_yes:
        return True
    try:
        answer = input(f"{prompt} [y/N] ")
    except EOFError:
        return False
    return answer.strip().lower() in {"y", "yes"}


# ─── Rendering ────────────────────────────────────────────────────────────────


def _render_envelope(envelope: Envelope, view_mode: str) -> str:
    star = "*" if envelope.is_favorite else " "
    percent = remaining_percent(envelope)
    amounts = f"{format_currency(envelope.balance)} / {format_currency(envelope.budget)}"
    if view_mode == "list":
        return f"{star} {envelope.name:<28} {amounts:>24} {percent:5.0f}%  {envelope.id}"

    lines = [
        f"{star} {envelope.name}",
        f"    balance  {amounts} ({percent:.0f}% left, {balance_health(envelope)})",
        f"    id       {envelope.id}",
    ]
    for bill in envelope.recurring_transactions:
        lines.append(
            f"    bill     {bill.name}: {format_currency(bill.amount)} on day {bill.day_of_month}"
        )
    return "\n".join(lines)


# ─── Commands ─────────────────────────────────────────────────────────────────


def _cmd_list(session: BudgetSession, arguments: argparse.Namespace) -> int:
    session.set_search_query(arguments.search)
    session.set_favorites_only(arguments.favorites)
    envelopes = session.displayed_envelopes
    if not envelopes:
        if not session.envelopes:
            print("No envelopes yet. Create one with 'envelope-budget create NAME BUDGET'.")
        else:
            print("No envelopes match the current filters.")
        return 0
    for envelope in envelopes:
        print(_render_envelope(envelope, session.view_mode))
    return 0


def _cmd_summary(session: BudgetSession, arguments: argparse.Namespace) -> int:
    totals = session.totals
    print(f"Total budget:  {format_currency(totals.total_budget)}")
    print(f"Total balance: {format_currency(totals.total_balance)}")
    print(f"Total spent:   {format_currency(totals.total_spent)}")

    goal = session.monthly_goal
    if goal is None:
        print("Monthly goal:  not set")
    else:
        print(f"Monthly goal:  {format_currency(goal)}")
        remaining = session.remaining_to_budget
        if remaining is not None and remaining > 0:
            print(f"{format_currency(remaining)} left to budget.")
        elif remaining is not None and remaining < 0:
            print(f"{format_currency(abs(remaining))} over-budgeted.")

    slices = session.allocation
    if slices:
        print("Allocation:")
        for allocation_slice in slices:
            print(
                f"  {allocation_slice.color}  {allocation_slice.name:<28} "
                f"{format_currency(allocation_slice.value):>12}"
            )
    return 0


def _cmd_create(session: BudgetSession, arguments: argparse.Namespace) -> int:
    envelope = session.create_envelope(arguments.name, arguments.budget)
    print(f"Created envelope {envelope.name!r} ({envelope.id}).")
    return 0


def _cmd_edit(session: BudgetSession, arguments: argparse.Namespace) -> int:
    envelope = resolve_envelope(session, arguments.envelope)
    session.edit_envelope(envelope.id, arguments.name, arguments.budget)
    updated = session.envelope(envelope.id)
    print(
        f"Updated {updated.name!r}: balance {format_currency(updated.balance)} "
        f"of {format_currency(updated.budget)}."
    )
    return 0


def _cmd_delete(session: BudgetSession, arguments: argparse.Namespace) -> int:
    envelope = resolve_envelope(session, arguments.envelope)
    if not _confirm(f"Permanently delete envelope {envelope.name!r}?", arguments.yes):
        print("Cancelled.")
        return 0
    session.delete_envelope(envelope.id)
    print(f"Deleted envelope {envelope.name!r}.")
    return 0


def _transaction_command(transaction_type: str) -> Callable[[BudgetSession, argparse.Namespace], int]:
    def _run(session: BudgetSession, arguments: argparse.Namespace) -> int:
        envelope = resolve_envelope(session, arguments.envelope)
        session.apply_transaction(envelope.id, transaction_type, arguments.amount)
        updated = session.envelope(envelope.id)
        print(f"{updated.name}: balance {format_currency(updated.balance)}.")
        return 0

    return _run


def _cmd_favorite(session: BudgetSession, arguments: argparse.Namespace) -> int:
    envelope = resolve_envelope(session, arguments.envelope)
    session.toggle_favorite(envelope.id)
    state = "added to" if session.envelope(envelope.id).is_favorite else "removed from"
    print(f"{envelope.name} {state} favorites.")
    return 0


def _cmd_new_month(session: BudgetSession, arguments: argparse.Namespace) -> int:
    prompt = "Reset the balance of every envelope to its budget?"
    if not _confirm(prompt, arguments.yes):
        print("Cancelled.")
        return 0
    session.start_new_month()
    print(f"Reset {len(session.envelopes)} envelope(s) to their budgets.")
    return 0


def _cmd_add_bill(session: BudgetSession, arguments: argparse.Namespace) -> int:
    envelope = resolve_envelope(session, arguments.envelope)
    session.add_recurring_transaction(envelope.id, arguments.name, arguments.amount, arguments.day)
    bill = session.envelope(envelope.id).recurring_transactions[-1]
    print(f"Added bill {bill.name!r} ({bill.id}) to {envelope.name}.")
    return 0


def _cmd_delete_bill(session: BudgetSession, arguments: argparse.Namespace) -> int:
    envelope = resolve_envelope(session, arguments.envelope)
    before = len(envelope.recurring_transactions)
    session.delete_recurring_transaction(envelope.id, arguments.bill)
    if len(session.envelope(envelope.id).recurring_transactions) == before:
        print(f"No bill {arguments.bill!r} on {envelope.name}.", file=sys.stderr)
        return 1
    print(f"Removed bill from {envelope.name}.")
    return 0


def _cmd_goal(session: BudgetSession, arguments: argparse.Namespace) -> int:
    if arguments.clear:
        session.set_monthly_goal(None)
        print("Monthly goal cleared.")
        return 0
    if arguments.amount is None:
        goal = session.monthly_goal
        print("Monthly goal: not set" if goal is None else f"Monthly goal: {format_currency(goal)}")
        return 0
    session.set_monthly_goal(arguments.amount)
    print(f"Monthly goal set to {format_currency(arguments.amount)}.")
    return 0


def _cmd_view(session: BudgetSession, arguments: argparse.Namespace) -> int:
    session.set_view_mode(arguments.mode)
    print(f"View mode set to {arguments.mode}.")
    return 0


def _cmd_suggest(session: BudgetSession, arguments: argparse.Namespace) -> int:
    for template in session.suggestions(arguments.text):
        print(f"{template.name:<28} {format_currency(template.budget):>10}")
    return 0


# ─── Entry point ──────────────────────────────────────────────────────────────


def _build_argument_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="envelope-budget",
        description="Envelope budgeting with monthly recurring bills.",
    )
    parser.add_argument(
        "--data",
        type=Path,
        default=None,
        help=f"JSON data file (default: ${DATA_ENV_VAR} or {DEFAULT_DATA_PATH}).",
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Log every state change.")
    commands = parser.add_subparsers(dest="command", required=True)

    list_parser = commands.add_parser("list", help="Show envelopes, favorites first.")
    list_parser.add_argument("--search", default="", help="Case-insensitive name filter.")
    list_parser.add_argument("--favorites", action="store_true", help="Only favorites.")
    list_parser.set_defaults(handler=_cmd_list)

    commands.add_parser("summary", help="Totals, goal and allocation.").set_defaults(
        handler=_cmd_summary
    )

    create_parser = commands.add_parser("create", help="Create an envelope.")
    create_parser.add_argument("name")
    create_parser.add_argument("budget", type=float)
    create_parser.set_defaults(handler=_cmd_create)

    edit_parser = commands.add_parser("edit", help="Rename an envelope and change its budget.")
    edit_parser.add_argument("envelope", help="Envelope id or name.")
    edit_parser.add_argument("name")
    edit_parser.add_argument("budget", type=float)
    edit_parser.set_defaults(handler=_cmd_edit)

    delete_parser = commands.add_parser("delete", help="Delete an envelope and its bills.")
    delete_parser.add_argument("envelope", help="Envelope id or name.")
    delete_parser.add_argument("--yes", "-y", action="store_true", help="Skip confirmation.")
    delete_parser.set_defaults(handler=_cmd_delete)

    for name, transaction_type, help_text in (
        ("fund", "fund", "Add money to an envelope."),
        ("spend", "spend", "Spend from an envelope."),
    ):
        transaction_parser = commands.add_parser(name, help=help_text)
        transaction_parser.add_argument("envelope", help="Envelope id or name.")
        transaction_parser.add_argument("amount", type=float)
        transaction_parser.set_defaults(handler=_transaction_command(transaction_type))

    favorite_parser = commands.add_parser("favorite", help="Toggle favorite.")
    favorite_parser.add_argument("envelope", help="Envelope id or name.")
    favorite_parser.set_defaults(handler=_cmd_favorite)

    new_month_parser = commands.add_parser("new-month", help="Refill every envelope.")
    new_month_parser.add_argument("--yes", "-y", action="store_true", help="Skip confirmation.")
    new_month_parser.set_defaults(handler=_cmd_new_month)

    add_bill_parser = commands.add_parser("add-bill", help="Attach a monthly recurring bill.")
    add_bill_parser.add_argument("envelope", help="Envelope id or name.")
    add_bill_parser.add_argument("name")
    add_bill_parser.add_argument("amount", type=float)
    add_bill_parser.add_argument("day", type=int, help="Day of month (1-31), informational.")
    add_bill_parser.set_defaults(handler=_cmd_add_bill)

    delete_bill_parser = commands.add_parser("delete-bill", help="Remove a recurring bill.")
    delete_bill_parser.add_argument("envelope", help="Envelope id or name.")
    delete_bill_parser.add_argument("bill", help="Bill id.")
    delete_bill_parser.set_defaults(handler=_cmd_delete_bill)

    goal_parser = commands.add_parser("goal", help="Show, set or clear the monthly goal.")
    goal_parser.add_argument("amount", type=float, nargs="?", default=None)
    goal_parser.add_argument("--clear", action="store_true")
    goal_parser.set_defaults(handler=_cmd_goal)

    view_parser = commands.add_parser("view", help="Set the listing layout.")
    view_parser.add_argument("mode", choices=VIEW_MODES)
    view_parser.set_defaults(handler=_cmd_view)

    suggest_parser = commands.add_parser("suggest", help="Suggest common envelopes.")
    suggest_parser.add_argument("text", nargs="?", default="")
    suggest_parser.set_defaults(handler=_cmd_suggest)

    return parser


def main(argv: list[str] | None = None) -> int:
    arguments = _build_argument_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.INFO if arguments.verbose else logging.WARNING,
        format="%(levelname)s %(name)s %(message)s",
    )

    data_path = arguments.data if arguments.data is not None else default_data_path()
    try:
        session = BudgetSession(storage=JsonFileStorage(data_path))
        return arguments.handler(session, arguments)
    except EnvelopeBudgetError as error:
        print(f"error: {error.message}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
