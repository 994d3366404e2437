# SPDX-License-Identifier: BSL-1.1
# Copyright (c) 2026 MuVeraAI Corporation
"""End-to-end tests for the envelope-budget command line."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from envelope_budget.cli import main


@pytest.fixture
def data_file(tmp_path: Path) -> Path:
    return tmp_path / "budget.json"


def run(data_file: Path, *args: str) -> int:
    return main(["--data", str(data_file), *args])


def stored_envelopes(data_file: Path) -> list[dict]:
    return json.loads(data_file.read_text(encoding="utf-8"))["envelopes"]


class TestCli:
    def test_create_and_list(self, data_file: Path, capsys: pytest.CaptureFixture[str]) -> None:
        assert run(data_file, "create", "Groceries", "400") == 0
        assert run(data_file, "list") == 0
        output = capsys.readouterr().out
        assert "Groceries" in output
        assert "$400.00 / $400.00" in output

    def test_spend_and_fund_by_name(self, data_file: Path) -> None:
        run(data_file, "create", "Groceries", "400")
        assert run(data_file, "spend", "groceries", "62.5") == 0
        assert run(data_file, "fund", "Groceries", "12.5") == 0
        assert stored_envelopes(data_file)[0]["balance"] == 350.0

    def test_duplicate_name_exits_non_zero(
        self, data_file: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        run(data_file, "create", "Rent", "1500")
        assert run(data_file, "create", "rent", "10") == 1
        assert "already exists" in capsys.readouterr().err

    def test_invalid_amount_exits_non_zero(self, data_file: Path) -> None:
        run(data_file, "create", "Rent", "1500")
        assert run(data_file, "spend", "Rent", "-5") == 1

    def test_unknown_envelope_exits_non_zero(
        self, data_file: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        assert run(data_file, "spend", "Nope", "5") == 1
        assert "does not exist" in capsys.readouterr().err

    def test_new_month_requires_confirmation(
        self, data_file: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        run(data_file, "create", "Fun", "40")
        run(data_file, "spend", "Fun", "40")

        monkeypatch.setattr("builtins.input", lambda prompt: "n")
        assert run(data_file, "new-month") == 0
        assert stored_envelopes(data_file)[0]["balance"] == 0.0

        assert run(data_file, "new-month", "--yes") == 0
        assert stored_envelopes(data_file)[0]["balance"] == 40.0

    def test_delete_with_yes(self, data_file: Path) -> None:
        run(data_file, "create", "Fun", "40")
        assert run(data_file, "delete", "Fun", "--yes") == 0
        assert stored_envelopes(data_file) == []

    def test_bills_are_added_and_removed(self, data_file: Path) -> None:
        run(data_file, "create", "Phone", "80")
        assert run(data_file, "add-bill", "Phone", "Carrier", "60", "12") == 0
        bill = stored_envelopes(data_file)[0]["recurringTransactions"][0]
        assert bill["dayOfMonth"] == 12

        assert run(data_file, "delete-bill", "Phone", bill["id"]) == 0
        assert stored_envelopes(data_file)[0]["recurringTransactions"] == []
        assert run(data_file, "delete-bill", "Phone", bill["id"]) == 1

    def test_invalid_bill_day_exits_non_zero(self, data_file: Path) -> None:
        run(data_file, "create", "Phone", "80")
        assert run(data_file, "add-bill", "Phone", "Carrier", "60", "40") == 1

    def test_summary_reports_goal(
        self, data_file: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        run(data_file, "create", "Rent", "1500")
        run(data_file, "goal", "2000")
        capsys.readouterr()
        assert run(data_file, "summary") == 0
        output = capsys.readouterr().out
        assert "$500.00 left to budget." in output
        assert "Unallocated" in output

    def test_goal_clear(self, data_file: Path) -> None:
        run(data_file, "goal", "2000")
        assert run(data_file, "goal", "--clear") == 0
        assert json.loads(data_file.read_text(encoding="utf-8"))["monthlyBudget"] is None

    def test_view_mode_changes_listing(
        self, data_file: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        run(data_file, "create", "Rent", "1500")
        run(data_file, "view", "list")
        capsys.readouterr()
        run(data_file, "list")
        assert len(capsys.readouterr().out.strip().splitlines()) == 1

    def test_favorite_filter(self, data_file: Path, capsys: pytest.CaptureFixture[str]) -> None:
        run(data_file, "create", "Rent", "1500")
        run(data_file, "create", "Fun", "40")
        run(data_file, "favorite", "Fun")
        capsys.readouterr()
        run(data_file, "list", "--favorites")
        output = capsys.readouterr().out
        assert "Fun" in output
        assert "Rent" not in output

    def test_suggest(self, data_file: Path, capsys: pytest.CaptureFixture[str]) -> None:
        run(data_file, "create", "Car Insurance", "120")
        capsys.readouterr()
        run(data_file, "suggest", "insur")
        output = capsys.readouterr().out
        assert "Health Insurance" in output
        assert "Car Insurance" not in output

    def test_data_path_from_environment(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        path = tmp_path / "env.json"
        monkeypatch.setenv("ENVELOPE_BUDGET_DATA", str(path))
        assert main(["create", "Rent", "1500"]) == 0
        assert path.exists()
